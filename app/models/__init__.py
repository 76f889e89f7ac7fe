from app.models.user import User
from app.models.skill import Skill, SkillCategory
from app.models.topic import Topic, TopicStatus

__all__ = [
    'User',
    'Skill',
    'SkillCategory',
    'Topic',
    'TopicStatus'
]
