"""
Ошибки приложения и их HTTP-коды
"""


class AppError(Exception):
    status_code = 500
    message = "Внутренняя ошибка сервера"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthenticationError(AppError):
    status_code = 401
    message = "Неверный токен авторизации"


class NotFoundError(AppError):
    status_code = 404
    message = "Не найдено"


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Пользователь {user_id} не найден")


class TopicNotFoundError(NotFoundError):
    def __init__(self, topic_id: int):
        self.topic_id = topic_id
        super().__init__(f"Топик {topic_id} не найден")


class ConflictError(AppError):
    status_code = 409
    message = "Конфликт данных"


class StoreError(AppError):
    status_code = 500
    message = "Ошибка хранилища данных"


class ProgressStoreError(StoreError):
    """Чтение прогресса или запись уровня не удались"""
