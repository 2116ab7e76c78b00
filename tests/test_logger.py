import logging

from entitykit.core.logger import (
    configure_root_logger,
    current_request_id,
    get_logger,
    push_request_id,
    reset_request_id,
)
from entitykit.entities.mapping_entity import MappingEntity


def _request_handlers():
    return [
        h for h in logging.getLogger().handlers
        if any(type(f).__name__ == "_RequestFilter" for f in h.filters)
    ]


def test_configure_root_logger_is_idempotent():
    configure_root_logger()
    configure_root_logger("DEBUG")
    get_logger("entitykit.test")

    assert len(_request_handlers()) == 1
    assert logging.getLogger("entitykit").level == logging.DEBUG

    configure_root_logger("INFO")
    assert logging.getLogger("entitykit").level == logging.INFO


def test_request_id_push_and_reset():
    assert current_request_id() == "-"
    token = push_request_id("req-1")
    assert current_request_id() == "req-1"
    reset_request_id(token)
    assert current_request_id() == "-"


def test_push_empty_request_id_is_noop():
    assert push_request_id(None) is None
    assert push_request_id("") is None
    reset_request_id(None)
    assert current_request_id() == "-"


def test_request_filter_injects_request_id():
    configure_root_logger()
    handler = _request_handlers()[0]
    record = logging.LogRecord("entitykit", logging.INFO, __file__, 1, "msg", None, None)

    token = push_request_id("req-9")
    try:
        for f in handler.filters:
            f.filter(record)
    finally:
        reset_request_id(token)

    assert record.request_id == "req-9"
    assert "request=req-9" in handler.format(record)


def test_entity_logs_store_lifecycle_at_debug(caplog):
    entity = MappingEntity()

    with caplog.at_level(logging.DEBUG, logger="entitykit"):
        entity.set("a", 1)
        entity.replace_all({"b": 2})
        entity.clear()

    messages = [r.getMessage() for r in caplog.records]
    assert "Allocated empty backing store" in messages
    assert "Replaced backing store" in messages
    assert "Cleared backing store" in messages
