"""Pytest configuration and shared fixtures for the progress tracker tests."""

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.models  # noqa: F401
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models import Skill, SkillCategory, Topic, TopicStatus, User


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create a throwaway SQLite database for one test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def statuses(db_session):
    """Topic statuses keyed by name."""
    rows = {name: TopicStatus(name=name) for name in ("Не начато", "В процессе", "Завершено")}
    db_session.add_all(rows.values())
    await db_session.commit()
    return rows


@pytest_asyncio.fixture
async def category(db_session):
    category = SkillCategory(name="Программирование")
    db_session.add(category)
    await db_session.commit()
    return category


# ============================================================================
# Data Factories
# ============================================================================


@pytest.fixture
def create_user(db_session):
    counter = {"n": 0}

    async def _create_user(level: str = "Новичок") -> User:
        counter["n"] += 1
        user = User(
            name=f"Learner {counter['n']}",
            email=f"learner{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            level=level,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create_user


@pytest.fixture
def create_skill(db_session, category):
    async def _create_skill(user_id: int, name: str = "Python") -> Skill:
        skill = Skill(name=name, category_id=category.id, user_id=user_id)
        db_session.add(skill)
        await db_session.commit()
        return skill

    return _create_skill


@pytest.fixture
def add_topics(db_session):
    async def _add_topics(
        skill: Skill,
        count: int,
        progress: int = 100,
        status_id: Optional[int] = None,
    ) -> list[Topic]:
        topics = [
            Topic(skill_id=skill.id, name=f"Topic {i}", progress=progress, status_id=status_id)
            for i in range(count)
        ]
        db_session.add_all(topics)
        await db_session.commit()
        return topics

    return _add_topics


# ============================================================================
# HTTP Client
# ============================================================================


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with get_db pointing at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registered(client):
    """Register a user through the API and return (user_id, auth headers)."""
    response = await client.post(
        "/api/users/register",
        json={"name": "API Learner", "email": "api.learner@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    data = response.json()["data"]
    return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}
