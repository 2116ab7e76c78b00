"""entitykit.

Typed accessors over loosely structured data.

Wrap a decoded payload (a dict or a ``SimpleNamespace`` record) in an entity
and read fields with coercion: ``nullable_*`` accessors return ``None`` when a
field is absent or does not coerce, ``required_*`` accessors raise
``RequiredFieldMissingError`` instead.

Public API for clients embedding entitykit in request handling code.
"""

from entitykit.core.base_entity import BaseEntity
from entitykit.core.exceptions import (
    BackingStoreTypeError,
    EntityKitException,
    MissingFieldHandler,
    MissingFieldPolicy,
    RequiredFieldMissingError,
)
from entitykit.decoders.registry import DecoderRegistry, DecoderRegistryError, register_enum
from entitykit.entities.mapping_entity import MappingEntity
from entitykit.entities.record_entity import RecordEntity
from entitykit.models.read_plan import FieldRule, ReadPlan
from entitykit.reader import read_entity

__version__ = "0.1.0"

__all__ = [
    "BaseEntity",
    "MappingEntity",
    "RecordEntity",
    "EntityKitException",
    "RequiredFieldMissingError",
    "BackingStoreTypeError",
    "MissingFieldPolicy",
    "MissingFieldHandler",
    "DecoderRegistry",
    "DecoderRegistryError",
    "register_enum",
    "FieldRule",
    "ReadPlan",
    "read_entity",
]
