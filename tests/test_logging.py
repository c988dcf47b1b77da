"""Tests for the in-memory diagnostics handler."""
import logging
import uuid

from tsiplink.logging import DiagnosticsHandler, create_logger, ring_buffer


def test_create_logger_installs_one_handler():
    name = f"tsiplink.test.{uuid.uuid4().hex}"
    logger = create_logger(name, 10)
    again = create_logger(name, 99)
    assert again is logger
    handlers = [h for h in logger.handlers if isinstance(h, DiagnosticsHandler)]
    assert len(handlers) == 1
    assert handlers[0].max_entries == 10
    assert logger.propagate is False


def test_events_carry_details():
    logger = create_logger(f"tsiplink.test.{uuid.uuid4().hex}", 10)
    logger.info("found_report", extra={"details": {"code": 0x42}})
    logger.warning("plain")
    events = ring_buffer(logger).get_events()
    assert events[0]["event"] == "found_report"
    assert events[0]["level"] == "INFO"
    assert events[0]["details"] == {"code": 0x42}
    assert events[1]["details"] == {}


def test_ring_buffer_drops_oldest():
    handler = DiagnosticsHandler(max_entries=3)
    logger = logging.getLogger(f"tsiplink.test.{uuid.uuid4().hex}")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for i in range(5):
        logger.info("event %d", i)
    assert [e["event"] for e in handler.get_events()] == ["event 2", "event 3", "event 4"]
    handler.clear()
    assert handler.get_events() == []


def test_ring_buffer_lookup_without_handler():
    assert ring_buffer(logging.getLogger(f"tsiplink.test.{uuid.uuid4().hex}")) is None


def test_events_record_source_logger():
    name = f"tsiplink.test.{uuid.uuid4().hex}"
    logger = create_logger(name, 10)
    logger.info("misframed", extra={"details": {"byte": 7}})
    assert ring_buffer(logger).get_events()[0]["source"] == name


def test_get_events_filters_by_name():
    logger = create_logger(f"tsiplink.test.{uuid.uuid4().hex}", 10)
    logger.info("found_report", extra={"details": {"code": 0x55}})
    logger.info("misframed", extra={"details": {"byte": 7}})
    logger.info("found_report", extra={"details": {"code": 0x42}})
    found = ring_buffer(logger).get_events(event="found_report")
    assert [e["details"]["code"] for e in found] == [0x55, 0x42]
    assert ring_buffer(logger).get_events(event="feed_failed") == []
