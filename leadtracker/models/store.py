"""
Store entry model - one row per key of the key-value store.
"""
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoreEntry(SQLModel, table=True):
    """Opaque serialized value kept under a string key."""
    __tablename__ = "store_entry"

    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=utcnow)
