"""
Resource Store - in-memory record cache in front of a persistence adapter.

Records are created unsaved, edited in place, and persisted through the
store's adapter. Rolling back a record that was never saved discards it from
the cache, so it never shows up in a later listing.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import FieldError, ValidationError

CONFIG_RELATION = "auth_configs"


class ResourceAdapter(ABC):
    """Abstract persistence backend for records."""

    @abstractmethod
    async def save_record(self, record: "Record") -> Dict[str, Any]:
        """Persist a record. Returns the saved payload, which must contain 'id'."""
        pass

    @abstractmethod
    async def list_records(self, model_name: str) -> List[Dict[str, Any]]:
        """List persisted payloads for a model."""
        pass


class HasManyReference:
    """Read-only view over a record relation."""

    def __init__(self, record: "Record", name: str):
        self._record = record
        self._name = name

    def value(self) -> List["Record"]:
        config = self._record.config
        return [config] if config is not None else []


class Record:
    """
    A single addressable resource.

    Tracks its last-saved attributes so callers can ask what changed, roll
    local edits back, or drop the record from the store entirely.
    """

    def __init__(self, store: "ResourceStore", model_name: str, attributes: Dict[str, Any]):
        self._store = store
        self.model_name = model_name
        self.id: Optional[str] = None
        self._saved: Dict[str, Any] = {}
        self._attributes: Dict[str, Any] = dict(attributes)
        self.is_new = True
        self.is_saving = False
        self.is_unloaded = False
        self.errors: List[FieldError] = []
        self.backend: Optional["Record"] = None
        self.config: Optional["Record"] = None

    def __repr__(self) -> str:
        state = "new" if self.is_new else f"id={self.id}"
        return f"<Record {self.model_name} {state}>"

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def update(self, **attributes: Any) -> None:
        self._attributes.update(attributes)

    def changed_attributes(self) -> Dict[str, Tuple[Any, Any]]:
        """Map of attribute -> (saved value, current value) for every changed attribute."""
        return {
            key: (self._saved.get(key), value)
            for key, value in self._attributes.items()
            if key not in self._saved or self._saved[key] != value
        }

    def has_dirty_attributes(self) -> bool:
        return bool(self.changed_attributes())

    def has_many(self, name: str) -> HasManyReference:
        if name != CONFIG_RELATION:
            raise ValueError(f"{self.model_name} has no relation named '{name}'")
        return HasManyReference(self, name)

    def rollback_attributes(self) -> None:
        """Discard unsaved edits. A record that was never saved leaves the store."""
        self._attributes = dict(self._saved)
        self.errors = []
        if self.is_new:
            self._store._discard(self)

    def unload_record(self) -> None:
        self._store._discard(self)

    async def save(self) -> None:
        """
        Persist through the store adapter.

        Raises:
            ValidationError: field errors are also kept on ``self.errors``.
        """
        self.errors = []
        self.is_saving = True
        try:
            payload = await self._store._persist(self)
        except ValidationError as e:
            self.errors = list(e.errors)
            raise
        finally:
            self.is_saving = False

        self.id = str(payload.get("id", self.id))
        for key, value in payload.items():
            if key != "id":
                self._attributes[key] = value
        self._saved = dict(self._attributes)
        self.is_new = False


class ResourceStore:
    """Identity map of live records, keyed by model name."""

    def __init__(self, adapter: ResourceAdapter):
        self._adapter = adapter
        self._records: Dict[str, List[Record]] = defaultdict(list)
        logging.info(f"ResourceStore initialized with {type(adapter).__name__}")

    @property
    def adapter(self) -> ResourceAdapter:
        return self._adapter

    def create_record(self, model_name: str, backend: Optional[Record] = None, **attributes: Any) -> Record:
        """
        Create an unsaved record.

        Passing ``backend`` attaches the new record as that record's single
        config; any config already attached is unloaded first.
        """
        record = Record(self, model_name, attributes)
        self._records[model_name].append(record)

        if backend is not None:
            previous = backend.config
            if previous is not None:
                logging.warning(f"Replacing attached config {previous!r} on {backend!r}")
                previous.rollback_attributes()
                previous.unload_record()
            record.backend = backend
            backend.config = record

        logging.debug(f"Created record {model_name}")
        return record

    def peek_all(self, model_name: str) -> List[Record]:
        """Live records currently held in the cache."""
        return list(self._records.get(model_name, []))

    async def find_all(self, model_name: str) -> List[Dict[str, Any]]:
        """Records the adapter has persisted."""
        return await self._adapter.list_records(model_name)

    async def _persist(self, record: Record) -> Dict[str, Any]:
        return await self._adapter.save_record(record)

    def _discard(self, record: Record) -> None:
        records = self._records.get(record.model_name, [])
        if record in records:
            records.remove(record)
            logging.debug(f"Discarded {record!r} from store")

        backend = record.backend
        if backend is not None and backend.config is record:
            backend.config = None
        record.backend = None
        record.is_unloaded = True
