from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime
from datetime import datetime
from typing import Optional
from app.database import Base
from app.services.level_calculator import DEFAULT_LEVEL


class User(Base):
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    avatar: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    level: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_LEVEL)  # Snapshot of the last recalculation
    registration_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
