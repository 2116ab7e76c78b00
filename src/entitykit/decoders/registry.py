from __future__ import annotations

from enum import Enum
from typing import Callable, ClassVar, Dict, Optional, Type

from entitykit.core.coercion import DecoderSpec, EnumDecoder, enum_decoder
from entitykit.core.logger import get_logger

logger = get_logger(__name__)


class DecoderRegistryError(RuntimeError):
    pass


class DecoderRegistry:
    """Named enum decoders, so reads and read plans can refer to an enum by name."""

    _registry: ClassVar[Dict[str, EnumDecoder]] = {}

    @classmethod
    def register(
        cls,
        *,
        name: str,
        decoder: DecoderSpec,
        overwrite: bool = False,
    ) -> None:
        if not overwrite and name in cls._registry:
            existing = cls._registry[name]
            raise DecoderRegistryError(f"Decoder already registered for name={name!r}: {existing}")
        resolved = _as_decoder(decoder)
        if resolved is None:
            raise DecoderRegistryError(
                f"Decoder for name={name!r} must be an Enum subclass or a callable, got {decoder!r}"
            )
        cls._registry[name] = resolved
        logger.debug(f"Registered enum decoder {name!r}")

    @classmethod
    def get(cls, name: str) -> EnumDecoder:
        try:
            return cls._registry[name]
        except KeyError as exc:
            raise DecoderRegistryError(f"No decoder registered for name={name!r}") from exc

    @classmethod
    def try_get(cls, name: str) -> Optional[EnumDecoder]:
        return cls._registry.get(name)

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def _as_decoder(spec: object) -> Optional[EnumDecoder]:
    if isinstance(spec, type):
        return enum_decoder(spec) if issubclass(spec, Enum) else None
    if callable(spec):
        return spec
    return None


def resolve_decoder(spec: DecoderSpec) -> Optional[EnumDecoder]:
    """Turn an Enum subclass, a callable or a registered name into a decoder.

    Unknown names and non-enum classes resolve to ``None``.
    """
    if isinstance(spec, str):
        decoder = DecoderRegistry.try_get(spec)
        if decoder is None:
            logger.debug(f"No enum decoder registered under {spec!r}")
        return decoder
    return _as_decoder(spec)


def register_enum(
    name: Optional[str] = None,
    *,
    overwrite: bool = False,
) -> Callable[[Type[Enum]], Type[Enum]]:
    def decorator(enum_class: Type[Enum]) -> Type[Enum]:
        DecoderRegistry.register(
            name=name or enum_class.__name__,
            decoder=enum_class,
            overwrite=overwrite,
        )
        return enum_class

    return decorator
