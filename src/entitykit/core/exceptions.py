"""
Custom exception classes for the entitykit package.

Entity reads signal absence as ``None``; only the strict accessors raise, and
they always raise the same error kind regardless of the requested type.
"""

from enum import Enum
from typing import Any, Callable, Optional


class EntityKitException(Exception):
    """Base exception class for all entitykit exceptions."""

    pass


class RequiredFieldMissingError(EntityKitException):
    """
    Raised by a ``required_*`` accessor when the field yields no value.

    The field may be absent, hold ``None``, or hold a value that does not
    coerce to the requested type; all three are reported identically.

    Example:
        >>> entity.required_int("age")
        Traceback (most recent call last):
        ...
        RequiredFieldMissingError: age is required.
    """

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{field_name} is required.")


class BackingStoreTypeError(EntityKitException, TypeError):
    """Raised when a backing store of the wrong representation is installed."""

    def __init__(self, entity_type: str, expected: str, actual: Any):
        self.entity_type = entity_type
        self.expected = expected
        self.actual_type = type(actual).__name__
        super().__init__(
            f"{entity_type} requires a {expected} backing store, got {self.actual_type}"
        )


class MissingFieldPolicy(Enum):
    """Policy for required fields that yield no value while applying a read plan."""

    FAIL = "fail"              # Raise RequiredFieldMissingError (default)
    WARN = "warn"              # Log warning and keep None
    ALLOW = "allow"            # Keep None silently


class MissingFieldHandler:
    """
    Handles missing required fields based on configured policy.

    Usage:
        >>> handler = MissingFieldHandler(policy=MissingFieldPolicy.FAIL)
        >>> handler.handle("email")
        # Raises RequiredFieldMissingError

        >>> handler = MissingFieldHandler(policy=MissingFieldPolicy.WARN, logger=log)
        >>> handler.handle("email")
        # Logs warning and returns True (continue reading)
    """

    def __init__(
        self,
        policy: MissingFieldPolicy = MissingFieldPolicy.FAIL,
        logger: Optional[Any] = None,
        custom_handler: Optional[Callable[[str], Any]] = None,
    ):
        """
        Initialize the handler.

        Args:
            policy: How to handle a missing required field (FAIL, WARN, ALLOW)
            logger: Logger instance for WARN policy
            custom_handler: Custom function called with the field name instead
                of applying the policy
        """
        self.policy = policy
        self.logger = logger
        self.custom_handler = custom_handler

    def handle(self, field_name: str) -> bool:
        """
        Handle a missing required field based on policy.

        Returns:
            True if reading should continue

        Raises:
            RequiredFieldMissingError: If policy is FAIL
        """
        if self.custom_handler:
            return self.custom_handler(field_name)

        if self.policy == MissingFieldPolicy.FAIL:
            raise RequiredFieldMissingError(field_name)

        elif self.policy == MissingFieldPolicy.WARN:
            if self.logger:
                self.logger.warning(f"{field_name} is required but has no value")
            else:
                import warnings
                warnings.warn(f"{field_name} is required but has no value", UserWarning)
            return True

        return True
