from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Set, Tuple, Union

from entitykit.core import coercion
from entitykit.core.coercion import DecoderSpec
from entitykit.core.exceptions import BackingStoreTypeError, RequiredFieldMissingError
from entitykit.core.logger import get_logger
from entitykit.decoders.registry import resolve_decoder

KeySpec = Union[str, Iterable[str]]


class BaseEntity(ABC):
    """Typed accessor layer over a semi-structured backing store.

    Subclasses choose the store representation and implement raw field
    access; everything else (typed reads, enumeration, lifecycle) lives here.

    A subclass may declare ``fields`` to fix which names ``list_all`` exposes
    and in which order. Only a declaration on the concrete class itself
    counts; without one every stored field is listed in insertion order.
    """

    fields: ClassVar[Tuple[str, ...]] = ()

    # Human-readable name of the store representation, used in errors.
    store_label: ClassVar[str] = "store"

    def __init__(self, data: Any = None):
        self._data: Any = None
        self.log = get_logger(f"entitykit.{self.__class__.__name__}")
        if data is not None:
            self.replace_all(data)

    # --- Raw access (per representation) ---
    @abstractmethod
    def get(self, name: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def has(self, name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def unset(self, name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _is_store(self, store: Any) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _new_store(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _stored_names(self) -> List[str]:
        raise NotImplementedError

    # --- Lifecycle ---
    def _ensure_store(self) -> Any:
        if not self._is_store(self._data):
            self._data = self._new_store()
            self.log.debug("Allocated empty backing store")
        return self._data

    def replace_all(self, store: Any) -> None:
        """Install ``store`` as the backing store; the entity takes ownership of it."""
        if not self._is_store(store):
            raise BackingStoreTypeError(self.__class__.__name__, self.store_label, store)
        self._data = store
        self.log.debug("Replaced backing store")

    def clear(self) -> None:
        self._data = None
        self.log.debug("Cleared backing store")

    flush = clear

    @property
    def is_initialized(self) -> bool:
        return self._is_store(self._data)

    # --- Enumeration ---
    def list_all(self) -> Dict[str, Any]:
        """Fresh dict of every visible field that currently has a value slot."""
        cls = type(self)
        if "fields" in cls.__dict__:
            names = list(cls.__dict__["fields"])
        else:
            names = self._stored_names()
        return {name: self.get(name) for name in names if self.has(name)}

    def to_dict(self) -> Dict[str, Any]:
        return self.list_all()

    def pick(self, *keys: KeySpec) -> Dict[str, Any]:
        wanted = self._merge_keys(*keys)
        return {k: v for k, v in self.list_all().items() if k in wanted}

    def omit(self, *keys: KeySpec) -> Dict[str, Any]:
        unwanted = self._merge_keys(*keys)
        return {k: v for k, v in self.list_all().items() if k not in unwanted}

    @staticmethod
    def _merge_keys(*args: KeySpec) -> Set[str]:
        keys: Set[str] = set()
        for key in args:
            if isinstance(key, str):
                keys.add(key)
            else:
                keys.update(key)
        return keys

    # --- Typed reads ---
    def nullable_string(self, name: str) -> Optional[str]:
        return coercion.coerce_string(self.get(name))

    def required_string(self, name: str) -> str:
        return self._require(name, self.nullable_string(name))

    def nullable_int(self, name: str) -> Optional[int]:
        return coercion.coerce_int(self.get(name))

    def required_int(self, name: str) -> int:
        return self._require(name, self.nullable_int(name))

    def nullable_float(self, name: str) -> Optional[float]:
        return coercion.coerce_float(self.get(name))

    def required_float(self, name: str) -> float:
        return self._require(name, self.nullable_float(name))

    def nullable_bool(self, name: str) -> Optional[bool]:
        return coercion.coerce_bool(self.get(name))

    def required_bool(self, name: str) -> bool:
        return self._require(name, self.nullable_bool(name))

    def nullable_array(self, name: str) -> Any:
        """Mapping, list or tuple value as stored, else None."""
        return coercion.coerce_array(self.get(name))

    def required_array(self, name: str) -> Any:
        return self._require(name, self.nullable_array(name))

    def nullable_object(self, name: str) -> Any:
        """Record value; JSON text is parsed first (objects become SimpleNamespace)."""
        return coercion.coerce_object(self.get(name))

    def required_object(self, name: str) -> Any:
        return self._require(name, self.nullable_object(name))

    def nullable_enum(self, name: str, decoder: DecoderSpec) -> Any:
        """Decode the raw value with an Enum subclass, a callable or a registered decoder name."""
        return coercion.coerce_enum(self.get(name), resolve_decoder(decoder))

    def required_enum(self, name: str, decoder: DecoderSpec) -> Any:
        return self._require(name, self.nullable_enum(name, decoder))

    def _require(self, name: str, value: Any) -> Any:
        if value is None:
            self.log.debug(f"Required field {name!r} has no value")
            raise RequiredFieldMissingError(name)
        return value

    # --- Item access sugar ---
    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.unset(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __repr__(self) -> str:
        if not self.is_initialized:
            return f"{self.__class__.__name__}(<empty>)"
        return f"{self.__class__.__name__}({self.list_all()!r})"
