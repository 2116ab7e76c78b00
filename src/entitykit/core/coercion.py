"""Coercion rules shared by every entity's typed accessors.

Each ``coerce_*`` function takes a raw field value and returns the coerced
value, or ``None`` when the value does not belong to the requested type
family. None of them raise.
"""

from __future__ import annotations

import dataclasses
import json
import math
import re
from collections.abc import Mapping
from enum import Enum
from types import SimpleNamespace
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel

EnumDecoder = Callable[[Any], Any]
DecoderSpec = Union[str, type, EnumDecoder]

_WS = r"[ \t\n\r\v\f]*"
_INTEGER = re.compile(rf"^{_WS}[+-]?\d+{_WS}$", re.ASCII)
_NUMERIC = re.compile(rf"^{_WS}[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?{_WS}$", re.ASCII)


def is_numeric(value: Any) -> bool:
    """Permissive numeric test: real numbers and decimal/exponent strings.

    ``bool`` is not numeric. Strings may carry surrounding whitespace but no
    hex, ``inf``/``nan`` or underscore separators.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC.match(value) is not None
    return False


def is_record(value: Any) -> bool:
    if isinstance(value, type):
        return False
    if isinstance(value, (SimpleNamespace, BaseModel)):
        return True
    return dataclasses.is_dataclass(value)


def coerce_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def coerce_int(value: Any) -> Optional[int]:
    """Numeric values truncated toward zero; non-finite values have no int form."""
    if not is_numeric(value):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.match(value):
        return int(value.strip())
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def coerce_float(value: Any) -> Optional[float]:
    if not is_numeric(value):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def coerce_bool(value: Any) -> Optional[bool]:
    """Booleans pass through; numerics whose integer form is 0 or 1 map to False/True."""
    if isinstance(value, bool):
        return value
    number = coerce_int(value)
    if number == 0:
        return False
    if number == 1:
        return True
    return None


def coerce_array(value: Any) -> Any:
    if isinstance(value, (Mapping, list, tuple)):
        return value
    return None


def parse_record(text: str) -> Any:
    """Parse JSON text, decoding objects as ``SimpleNamespace`` records.

    Returns ``None`` for text that is not valid JSON.
    """
    try:
        return json.loads(text, object_hook=lambda d: SimpleNamespace(**d))
    except (ValueError, RecursionError):
        return None


def coerce_object(value: Any) -> Any:
    if isinstance(value, str):
        value = parse_record(value)
    return value if is_record(value) else None


def enum_decoder(enum_class: type[Enum]) -> EnumDecoder:
    """Build a by-value decoder for ``enum_class`` returning ``None`` on no match."""

    def _decode(value: Any) -> Optional[Enum]:
        try:
            return enum_class(value)
        except (ValueError, TypeError):
            return None

    _decode.__name__ = f"decode_{enum_class.__name__}"
    return _decode


def coerce_enum(value: Any, decoder: Optional[EnumDecoder]) -> Any:
    if value is None or decoder is None:
        return None
    return decoder(value)
