from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List

from entitykit.core.base_entity import BaseEntity


class RecordEntity(BaseEntity):
    """Entity backed by a record whose members are assigned dynamically.

    The store is a ``types.SimpleNamespace``, read and written through its
    ``vars()`` dict so names like ``__dict__`` are ordinary fields. JSON decoded with
    ``entitykit.core.coercion.parse_record`` can be installed directly.
    """

    store_label = "SimpleNamespace record"

    def get(self, name: str) -> Any:
        if not self.has(name):
            return None
        return vars(self._data)[name]

    def set(self, name: str, value: Any) -> None:
        vars(self._ensure_store())[name] = value

    def has(self, name: str) -> bool:
        return self._is_store(self._data) and name in vars(self._data)

    def unset(self, name: str) -> None:
        if not self.has(name):
            return
        del vars(self._data)[name]

    def _is_store(self, store: Any) -> bool:
        return isinstance(store, SimpleNamespace)

    def _new_store(self) -> SimpleNamespace:
        return SimpleNamespace()

    def _stored_names(self) -> List[str]:
        if not self._is_store(self._data):
            return []
        return list(vars(self._data))
