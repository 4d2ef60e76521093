"""Async database engine, session handling, and sample-data seeding.

The Database object is created once by the app lifespan and stored on
``app.state.database``; request handlers obtain sessions through the
``get_db_session`` dependency, which commits on success and rolls back on
error.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Request
from sqlalchemy import func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from kube_suitability.adapters.repositories import (
    ApplicationRepository,
    QuestionRepository,
)
from kube_suitability.core.models.orm import Base, QuestionRecord
from kube_suitability.core.questions import SAMPLE_APPLICATION, SAMPLE_QUESTIONS
from kube_suitability.errors import StorageUnavailableError
from kube_suitability.observability import get_logger

logger = get_logger(__name__)


def _engine_options(database_url: str) -> dict[str, object]:
    """Return create_async_engine keyword arguments suited to the URL's backend."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

    if url.database in (None, "", ":memory:"):
        # One shared connection so every session sees the same in-memory database
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return {"connect_args": {"timeout": 30}}


class Database:
    """Owns the async engine and session factory for one database URL."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        """Create the engine and session factory.

        Args:
            database_url: SQLAlchemy async URL (sqlite+aiosqlite or postgresql+asyncpg).
            echo: Log emitted SQL statements.
        """
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            **_engine_options(database_url),
        )
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await commit_session(session)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


async def commit_session(session: AsyncSession) -> None:
    """Commit the session, translating driver failures into StorageUnavailableError.

    The session is rolled back before the error propagates, so nothing from the
    failed transaction is persisted.

    Raises:
        StorageUnavailableError: If the commit fails.
    """
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Storage operation failed", operation="commit", error=str(exc))
        raise StorageUnavailableError(
            "Storage unavailable during commit.",
            operation="commit",
        ) from exc


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a unit-of-work session from app.state.database.

    Routes that write call ``commit_session`` before returning so a failed
    commit reaches the client; the commit on exit only covers reads.
    """
    database: Database = request.app.state.database
    async with database.unit_of_work() as session:
        yield session


async def seed_sample_data(database: Database) -> bool:
    """Insert the sample catalog and application when the catalog is empty.

    Args:
        database: Target database.

    Returns:
        True if sample data was inserted, False if questions already existed.
    """
    async with database.unit_of_work() as session:
        result = await session.execute(select(func.count(QuestionRecord.id)))
        if int(result.scalar_one()) > 0:
            return False

        question_repo = QuestionRepository(session)
        for position, question in enumerate(SAMPLE_QUESTIONS):
            await question_repo.save_question(question, position=position)
        await ApplicationRepository(session).save_application(SAMPLE_APPLICATION)

    logger.info(
        "Sample data seeded",
        question_count=len(SAMPLE_QUESTIONS),
        application_id=SAMPLE_APPLICATION.application_id,
    )
    return True
