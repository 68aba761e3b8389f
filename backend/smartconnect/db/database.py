"""
Database engine, session factory and declarative base

get_db wraps one request in one transaction: committed when the handler
returns, rolled back when it raises.
"""
from typing import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from smartconnect.core.config import settings


def database_url_and_connect_args(url: str):
    """
    Split a DATABASE_URL into the engine URL and driver connect_args.

    Only asyncpg URLs are rewritten: asyncpg rejects libpq-style ssl query
    parameters, so they are stripped and turned into connect_args. Other
    URLs (the aiosqlite test database) pass through untouched.
    """
    if not url.startswith("postgresql+asyncpg"):
        return url, {}

    use_ssl = "ssl=require" in url or "sslmode=require" in url
    # Strip ssl params so they are not passed to asyncpg.connect() (causes TypeError)
    parsed = urlparse(url)
    if parsed.query:
        qs = parse_qs(parsed.query, keep_blank_values=True)
        qs.pop("ssl", None)
        qs.pop("sslmode", None)
        qs.pop("channel_binding", None)
        new_query = urlencode([(k, v[0]) for k, v in qs.items()])
        url = urlunparse(parsed._replace(query=new_query))
    connect_args = {
        "command_timeout": 30,
        "timeout": 15,
    }
    if use_ssl:
        connect_args["ssl"] = True
    return url, connect_args


_engine_url, _connect_args = database_url_and_connect_args(settings.database_url)

engine = create_async_engine(
    _engine_url,
    echo=False,
    future=True,
    poolclass=NullPool,
    connect_args=_connect_args,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session"""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables():
    """Create all tables without migrations (seed script and local runs)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
