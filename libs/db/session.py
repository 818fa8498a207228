from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from libs.db.config import AsyncSessionLocal


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an async database session.

    The session is rolled back if the request fails before committing.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
