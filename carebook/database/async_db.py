"""
Motor asíncrono de PostgreSQL (asyncpg) y fábrica de sesiones.

Una sesión por request vía ``get_async_db``. Las notificaciones usan
``AsyncSessionLocal`` directamente, fuera de la transacción del request.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from carebook.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_async_database_engine(settings: Settings) -> AsyncEngine:
    """
    En DEBUG no hay pool (NullPool); en producción se aplican los límites DB_POOL_*.
    """
    options: dict = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if settings.DEBUG:
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    logger.info(
        f"Async engine for {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME} "
        f"({'NullPool' if settings.DEBUG else f'pool_size={settings.DB_POOL_SIZE}'})"
    )
    return create_async_engine(settings.async_database_url, **options)


async_engine = create_async_database_engine(get_settings())

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia FastAPI: sesión del request.

    Las operaciones de escritura confirman con ``atomic``; el commit final
    cubre lo que haya quedado pendiente.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database_connection() -> bool:
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
    return True


async def dispose_engine() -> None:
    await async_engine.dispose()
    logger.info("Async database engine disposed")
