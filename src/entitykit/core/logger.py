import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the current request id across the call chain
_REQUEST_ID: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class _RequestFilter(logging.Filter):
    """Logging filter that injects the request_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = _REQUEST_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | request=%(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: Optional[str] = None) -> None:
    """
    Configure root logger and entitykit-specific logger.

    Logs go to stderr so CLI output on stdout stays parseable. Root logger
    stays at INFO to suppress noise from host libraries.
    Only the entitykit namespace is set to the requested level (INFO the first
    time when no level is given; left unchanged on later calls without one).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()
    entitykit_logger = logging.getLogger("entitykit")

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _RequestFilter) for f in h.filters):
            if level:
                entitykit_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_RequestFilter())
    handler.setLevel(logging.DEBUG)
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    entitykit_logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))


def get_logger(name: str = "entitykit", level: Optional[str] = None) -> logging.Logger:
    """
    Get a module-specific logger carrying the request id of the current context.

    When ``level`` is omitted the logger inherits from the entitykit namespace.
    """
    configure_root_logger()
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def push_request_id(request_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current request id in context and return a token for later reset."""
    if not request_id:
        return None
    return _REQUEST_ID.set(request_id)


def reset_request_id(token: Optional[contextvars.Token]) -> None:
    """Reset the request id context using the provided token (if any)."""
    if token is None:
        return
    try:
        _REQUEST_ID.reset(token)
    except ValueError:
        # Token created in another context; leave the current id in place
        pass


def current_request_id() -> str:
    return _REQUEST_ID.get()
