from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Float, ForeignKey, CheckConstraint
from typing import Optional
from app.database import Base


class TopicStatus(Base):
    __tablename__ = 'topic_status'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)


class Topic(Base):
    __tablename__ = 'topics'
    __table_args__ = (
        CheckConstraint('progress >= 0 AND progress <= 100', name='ck_topic_progress_range'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    skill_id: Mapped[int] = mapped_column(Integer, ForeignKey('skills.id', ondelete='CASCADE'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    status_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey('topic_status.id', ondelete='RESTRICT'), nullable=True)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 0-100 %
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
