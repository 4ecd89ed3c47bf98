"""In-memory persistence adapter with mount validation."""

import asyncio
import logging
import uuid
from collections import defaultdict
from copy import deepcopy
from typing import Any, Callable, Dict, List

from .exceptions import FieldError, ValidationError
from .resource_store import Record, ResourceAdapter

MOUNT_MODELS = ("secret-engine", "auth-method")

# Mounts every platform instance starts with
DEFAULT_MOUNTS = {
    "secret-engine": [
        {"type": "cubbyhole", "path": "cubbyhole/"},
        {"type": "identity", "path": "identity/"},
        {"type": "system", "path": "sys/"},
    ],
    "auth-method": [
        {"type": "token", "path": "token/"},
    ],
}

ValidationRule = Callable[[Dict[str, Any]], List[FieldError]]


def mount_id_for_path(path: str) -> str:
    return path.strip().strip("/")


class InMemoryAdapter(ResourceAdapter):
    """
    Keeps persisted payloads in process memory.

    Mount records need a type and a unique path per category. Extra
    per-model rules can be registered with ``add_rule``.
    """

    def __init__(self, seed_default_mounts: bool = False):
        self._persisted: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self._rules: Dict[str, List[ValidationRule]] = defaultdict(list)
        self._lock = asyncio.Lock()

        if seed_default_mounts:
            for model_name, mounts in DEFAULT_MOUNTS.items():
                for mount in mounts:
                    mount_id = mount_id_for_path(mount["path"])
                    self._persisted[model_name][mount_id] = {**mount, "id": mount_id}
            logging.info("InMemoryAdapter seeded with default mounts")

    def add_rule(self, model_name: str, rule: ValidationRule) -> None:
        self._rules[model_name].append(rule)

    async def save_record(self, record: Record) -> Dict[str, Any]:
        attributes = record.attributes
        errors = self._validate(record, attributes)
        if errors:
            logging.info(
                f"Validation failed for {record.model_name}: {[e.message for e in errors]}",
                extra={"operation": "adapter_save", "model": record.model_name},
            )
            raise ValidationError(errors)

        async with self._lock:
            record_id = self._record_id(record, attributes)
            payload = {**attributes, "id": record_id}
            self._persisted[record.model_name][record_id] = deepcopy(payload)

        logging.debug(f"Persisted {record.model_name} {record_id}")
        return payload

    async def list_records(self, model_name: str) -> List[Dict[str, Any]]:
        async with self._lock:
            return [deepcopy(p) for p in self._persisted.get(model_name, {}).values()]

    def _validate(self, record: Record, attributes: Dict[str, Any]) -> List[FieldError]:
        errors: List[FieldError] = []
        if record.model_name in MOUNT_MODELS:
            if not attributes.get("type"):
                errors.append(FieldError("type", "type can't be blank"))
            path = attributes.get("path") or ""
            if not mount_id_for_path(path):
                errors.append(FieldError("path", "path can't be blank"))
            else:
                mount_id = mount_id_for_path(path)
                existing = self._persisted.get(record.model_name, {})
                if mount_id in existing and (record.is_new or record.id != mount_id):
                    errors.append(FieldError("path", f"path is already in use at {mount_id}/"))

        for rule in self._rules.get(record.model_name, []):
            errors.extend(rule(attributes))
        return errors

    def _record_id(self, record: Record, attributes: Dict[str, Any]) -> str:
        if not record.is_new and record.id:
            return record.id
        if record.model_name in MOUNT_MODELS:
            return mount_id_for_path(attributes["path"])
        if record.backend is not None and record.backend.id:
            return record.backend.id
        return str(uuid.uuid4())
