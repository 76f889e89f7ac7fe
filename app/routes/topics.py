from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.topic import TopicProgressUpdate, TopicProgressResponse
from app.services import progress_service, topic_service

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.patch("/{topic_id}/progress")
async def update_progress(
    topic_id: int,
    payload: TopicProgressUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновить прогресс топика"""
    topic = await topic_service.update_topic_progress(db, user.id, topic_id, payload.progress)
    is_completed = await progress_service.is_topic_completed(db, topic)

    topic_out = TopicProgressResponse(
        id=topic.id,
        name=topic.name,
        progress=topic.progress,
        is_completed=is_completed
    )
    return {
        "success": True,
        "data": {"topic": topic_out.model_dump(by_alias=True)}
    }
