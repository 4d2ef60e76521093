"""Shared fixtures for kube-suitability-assessment tests.

API and repository tests run against a fresh in-memory sqlite+aiosqlite
database per test; service tests use AsyncMock repositories instead.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from kube_suitability.adapters.database import Database
from kube_suitability.core.models.domain import Option, Question
from kube_suitability.main import create_app
from kube_suitability.settings import Settings

IN_MEMORY_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Domain factories
# ---------------------------------------------------------------------------


def _make_question(
    question_id: str = "q1",
    category: str = "Architecture",
    weight: int = 5,
    points: tuple[int, ...] = (10, 7, 4, 1),
) -> Question:
    """Build a question whose options are named ``{question_id}_a1..aN``."""
    return Question(
        question_id=question_id,
        text=f"Question {question_id}?",
        category=category,
        weight=weight,
        options=tuple(
            Option(option_id=f"{question_id}_a{index}", text=f"Option {index}", points=value)
            for index, value in enumerate(points, start=1)
        ),
    )


@pytest.fixture()
def make_question() -> Callable[..., Question]:
    """Factory fixture for catalog questions."""
    return _make_question


# ---------------------------------------------------------------------------
# Settings and app
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> Settings:
    """Settings pointing at a private in-memory database."""
    return Settings(
        database_url=IN_MEMORY_URL,
        create_schema_on_startup=True,
        seed_sample_data=True,
        log_json=False,
        log_level="INFO",
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the app, with its lifespan running.

    ASGITransport does not emit lifespan events, so the lifespan context is
    entered explicitly to open, create, and seed the database.
    """
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with the schema created and no data."""
    db = Database(IN_MEMORY_URL)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture()
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as db_session:
        yield db_session
