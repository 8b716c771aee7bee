# app/database.py
from datetime import timezone
from fastapi import Request
from sqlalchemy import DateTime
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator
from app.config import settings

engine = create_async_engine(settings.effective_database_url, echo=settings.SQL_ECHO)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """Stores UTC and always hands back aware datetimes (SQLite drops the offset)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


async def get_storage(request: Request):
    """Request-scoped storage: the app's in-memory store, or a SQL store on a fresh session."""
    if settings.STORAGE_BACKEND == "memory":
        yield request.app.state.storage
        return

    from app.storage.sql import SqlStorage

    async with AsyncSessionLocal() as session:
        yield SqlStorage(session)
