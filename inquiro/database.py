"""Database connection and session management."""
import logging
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.engine.url import make_url
from inquiro.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection,
    so survey deletes would otherwise leave orphaned questions and responses.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


parsed_url = make_url(settings.database_url)
is_sqlite = parsed_url.drivername.startswith("sqlite")

# Determine if we need SSL (for managed cloud databases)
connect_args = {}
if not is_sqlite and settings.environment == "production":
    connect_args["ssl"] = "require"
    logger.debug("SSL connection enabled (ssl=require)")

# Configure pool sizing to avoid exhausting limited database connections
pool_size = max(1, settings.db_pool_size)
max_overflow = max(0, settings.db_max_overflow)

engine_kwargs = {
    "echo": settings.environment == "development",
    "future": True,
    "connect_args": connect_args,
    "pool_pre_ping": True,  # Verify connections before use
}
if not is_sqlite:
    engine_kwargs.update(
        pool_recycle=3600,  # Recycle connections every hour
        pool_size=pool_size,
        max_overflow=max_overflow,
    )

try:
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    enable_sqlite_foreign_keys(engine)
    logger.debug("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for models
Base = declarative_base()


# Dependency for FastAPI
async def get_db():
    """FastAPI dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
