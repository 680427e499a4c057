"""
Key-value store adapters - the only place the serialized collections touch storage.
"""
import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from leadtracker.models.store import StoreEntry, utcnow

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Opaque string store: get/set by key."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SQLModelStore:
    """Store backed by the store_entry table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            entry = session.get(StoreEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            entry = session.get(StoreEntry, key)
            if entry:
                entry.value = value
                entry.updated_at = utcnow()
            else:
                entry = StoreEntry(key=key, value=value)
            session.add(entry)
            session.commit()
        logger.debug(f"Stored {len(value)} bytes under '{key}'")
