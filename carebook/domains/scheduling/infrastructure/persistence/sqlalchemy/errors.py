"""
Helpers to classify PostgreSQL errors raised through SQLAlchemy.
"""

from sqlalchemy.exc import DBAPIError

LOCK_NOT_AVAILABLE = "55P03"
UNIQUE_VIOLATION = "23505"
EXCLUSION_VIOLATION = "23P01"


def sqlstate_of(exc: DBAPIError) -> str | None:
    """SQLSTATE of the driver error wrapped by ``exc``, if the driver exposes one."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None:
        # asyncpg keeps the native exception as the cause of the adapted one
        code = getattr(getattr(orig, "__cause__", None), "sqlstate", None)
    return code


def is_lock_not_available(exc: DBAPIError) -> bool:
    if sqlstate_of(exc) == LOCK_NOT_AVAILABLE:
        return True
    return "could not obtain lock" in str(exc).lower()
