from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.exceptions import AuthenticationError
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.schemas.progress import LevelInfo, LevelThresholdResponse
from app.services import auth_service, progress_service
from app.services.level_calculator import LEVEL_THRESHOLDS

router = APIRouter(prefix="/api/users", tags=["users"])


def _user_payload(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_create: UserCreate, db: AsyncSession = Depends(get_db)):
    """Регистрация нового пользователя"""
    user = await auth_service.create_user(db, user_create)
    return {
        "success": True,
        "message": "Пользователь успешно зарегистрирован",
        "data": {
            "user": _user_payload(user),
            "token": auth_service.create_user_token(user)
        }
    }


@router.post("/login")
async def login(user_login: UserLogin, db: AsyncSession = Depends(get_db)):
    """Вход пользователя"""
    user = await auth_service.authenticate_user(db, user_login.email, user_login.password)
    if not user:
        raise AuthenticationError("Неверный email или пароль")

    return {
        "success": True,
        "data": {
            "user": _user_payload(user),
            "token": auth_service.create_user_token(user)
        }
    }


@router.get("/levels")
async def levels():
    """Таблица уровней"""
    return {
        "success": True,
        "data": {
            "levels": [
                LevelThresholdResponse(name=t.name, min_topics=t.min_topics).model_dump(by_alias=True)
                for t in LEVEL_THRESHOLDS
            ]
        }
    }


@router.get("/progress-stats")
async def progress_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Статистика прогресса (уровень в профиле не меняется)"""
    stats = await progress_service.get_progress_stats(db, user.id)
    return {
        "success": True,
        "data": {"progressStats": stats.model_dump(by_alias=True)}
    }


@router.post("/recalculate-level")
async def recalculate_level(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Пересчитать и сохранить уровень пользователя"""
    stats = await progress_service.recalculate_and_persist(db, user.id)
    level_info = LevelInfo(level=stats.current_level, completed_topics=stats.completed_topics)
    return {
        "success": True,
        "message": "Уровень пересчитан",
        "data": {"levelInfo": level_info.model_dump(by_alias=True)}
    }
