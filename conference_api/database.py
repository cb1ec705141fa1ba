# conference_api/database.py

from asyncio import current_task

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_scoped_session,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from conference_api.config import get_settings

settings = get_settings()
DATABASE_URL = settings.DATABASE_URL

engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections are bound to the loop that opened them
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(DATABASE_URL, echo=settings.SQL_ECHO, **engine_kwargs)
async_session = async_sessionmaker(bind=engine, expire_on_commit=False,)


def get_scoped_session():
    session = async_scoped_session(
        session_factory=async_session,
        scopefunc=current_task,
    )
    return session


async def scoped_session_dependency() -> AsyncSession:
    session = get_scoped_session()
    try:
        yield session
    finally:
        await session.remove()


async def init_db():
    async with engine.begin() as conn:
        from conference_api.models import Base
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    async with engine.begin() as conn:
        from conference_api.models import Base
        await conn.run_sync(Base.metadata.drop_all)
