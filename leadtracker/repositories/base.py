"""
Base repository - an ordered in-memory collection written through to a key-value store.
"""
import logging
from typing import TypeVar, Generic, Type, Optional, List, Any, Iterable

from pydantic import BaseModel, TypeAdapter, ValidationError

from leadtracker.repositories.store import KeyValueStore

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class CollectionRepository(Generic[ModelType]):
    """
    Generic repository over a list of records serialized under one store key.
    Every mutation is a single step followed by a synchronous write-through.
    """

    def __init__(self, model: Type[ModelType], store: KeyValueStore, key: str):
        self.model = model
        self.store = store
        self.key = key
        self._adapter = TypeAdapter(List[model])
        self._items: List[ModelType] = self._load()

    def _load(self) -> List[ModelType]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Stored collection '{self.key}' is unreadable: {e}")
            raise

    def _save(self) -> None:
        payload = self._adapter.dump_json(self._items, by_alias=True)
        self.store.set(self.key, payload.decode("utf-8"))

    def list(self) -> List[ModelType]:
        """All records in insertion order."""
        return list(self._items)

    def get(self, id: str) -> Optional[ModelType]:
        """Get a record by ID."""
        for item in self._items:
            if item.id == id:
                return item
        return None

    def append(self, obj: ModelType) -> ModelType:
        """Append a new record."""
        self._items.append(obj)
        self._save()
        return obj

    def extend(self, objs: Iterable[ModelType]) -> List[ModelType]:
        """Append several records in one write."""
        objs = list(objs)
        if objs:
            self._items.extend(objs)
            self._save()
        return objs

    def update(self, id: str, obj_in: dict) -> Optional[ModelType]:
        """Update a record in place. None values are ignored."""
        db_obj = self.get(id)
        if not db_obj:
            return None

        for field, value in obj_in.items():
            if hasattr(db_obj, field) and value is not None:
                setattr(db_obj, field, value)

        self._save()
        return db_obj

    def save(self, obj: ModelType) -> ModelType:
        """Persist changes made directly on a record held by this repository."""
        if self.get(obj.id) is not obj:
            raise ValueError(f"{self.model.__name__} '{obj.id}' is not part of this collection")
        self._save()
        return obj

    def remove(self, id: str) -> bool:
        """Remove a record permanently."""
        return self.remove_many([id]) == 1

    def remove_many(self, ids: Iterable[Any]) -> int:
        wanted = set(ids)
        kept = [item for item in self._items if item.id not in wanted]
        removed = len(self._items) - len(kept)
        if removed:
            self._items = kept
            self._save()
        return removed

    def count(self) -> int:
        return len(self._items)
