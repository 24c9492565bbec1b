"""Issue store backends, models, and the store dependency."""

from tracker.config import Settings
from tracker.database.config import Base
from tracker.database.memory_store import MemoryIssueStore
from tracker.database.sql_store import SQLIssueStore
from tracker.database.store import IssueStore, get_store


def create_store(settings: Settings) -> IssueStore:
    """Build the issue store selected by STORE_BACKEND."""
    if settings.STORE_BACKEND == "memory":
        return MemoryIssueStore()
    if settings.STORE_BACKEND == "sql":
        return SQLIssueStore(settings.DATABASE_URL, echo=settings.DB_ECHO)
    raise ValueError(f"Unknown STORE_BACKEND {settings.STORE_BACKEND!r}")


__all__ = [
    "Base",
    "IssueStore",
    "MemoryIssueStore",
    "SQLIssueStore",
    "create_store",
    "get_store",
]
