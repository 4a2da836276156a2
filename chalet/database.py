from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from chalet.core.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str):
    # In-memory SQLite lives in a single connection; share it across sessions
    if ":memory:" in database_url:
        return create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(database_url)


def make_session_factory(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


engine = make_engine(settings.database_url)
AsyncSessionLocal = make_session_factory(engine)


async def init_db(bind=None) -> None:
    # Register tables on Base.metadata
    import chalet.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
