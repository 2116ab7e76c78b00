from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Dict, List

from entitykit.core.base_entity import BaseEntity


class MappingEntity(BaseEntity):
    """Entity backed by an ordered key-to-value mapping.

    Example:
        >>> entity = MappingEntity({"age": "42", "active": 1})
        >>> entity.required_int("age")
        42
        >>> entity.required_bool("active")
        True
    """

    store_label = "mapping"

    def get(self, name: str) -> Any:
        if not self._is_store(self._data):
            return None
        return self._data.get(name)

    def set(self, name: str, value: Any) -> None:
        self._ensure_store()[name] = value

    def has(self, name: str) -> bool:
        return self._is_store(self._data) and name in self._data

    def unset(self, name: str) -> None:
        if not self.has(name):
            return
        del self._data[name]

    def _is_store(self, store: Any) -> bool:
        return isinstance(store, MutableMapping)

    def _new_store(self) -> Dict[str, Any]:
        return {}

    def _stored_names(self) -> List[str]:
        if not self._is_store(self._data):
            return []
        return [k for k in self._data if isinstance(k, str)]
