from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import AuthenticationError
from app.models.user import User
from app.services import auth_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Пользователь из заголовка Authorization: Bearer <token>"""
    if credentials is None:
        raise AuthenticationError("Токен авторизации не предоставлен")

    user = await auth_service.get_current_user_from_token(credentials.credentials, db)
    if not user:
        raise AuthenticationError("Неверный токен авторизации")
    return user
