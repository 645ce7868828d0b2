"""
Transaction helpers shared by services that own their commit boundary.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the block as one transaction on ``session``.

    Commits when the block exits normally. On any exception the session is
    rolled back and the exception re-raised, so no partial state survives.
    """
    try:
        yield session
        await session.commit()
    except Exception as e:
        logger.debug(f"Rolling back transaction: {type(e).__name__}: {e}")
        await session.rollback()
        raise
