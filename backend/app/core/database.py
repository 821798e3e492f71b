import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from backend.app.core.config import DATABASE_URL


def get_database_url():
    """Helper to retrieve DB URL in scripts context"""
    return DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases only exist on a single shared connection
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            options["poolclass"] = StaticPool
        return options
    return {"pool_size": 20, "max_overflow": 20}


engine = create_async_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()

# JSONB on Postgres, plain JSON elsewhere (SQLite in dev and tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


# Dependency for API routes
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def init_models(drop: bool = False):
    """Create all tables. Pass drop=True to wipe the schema first (DELETES DATA)."""
    from backend.app.models import all_models  # noqa: F401

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
