"""
Test Structured Logging
=======================

Usage:
    pytest test_logging.py
"""

import json
import logging

from funnyface_overlay.logging import LogEvent, StructuredLogger, create_logger
from funnyface_overlay.logging.events import ERROR_EVENTS, RENDER_EVENTS


def entries(caplog, name):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == name]


def test_info_record_is_json(caplog):
    logger = create_logger("test_info")

    with caplog.at_level(logging.INFO, logger="funnyface_overlay.test_info"):
        logger.info(
            event=LogEvent.IMAGE_LOADED,
            message="Loaded image",
            metadata={'path': 'a.png'},
        )

    [entry] = entries(caplog, "funnyface_overlay.test_info")
    assert entry["level"] == "INFO"
    assert entry["component"] == "test_info"
    assert entry["event"] == "image.loaded"
    assert entry["message"] == "Loaded image"
    assert entry["metadata"] == {'path': 'a.png'}
    assert "timestamp" in entry


def test_error_record_carries_exception(caplog):
    logger = create_logger("test_error")

    with caplog.at_level(logging.INFO, logger="funnyface_overlay.test_error"):
        logger.error(
            event=LogEvent.SURFACE_UNAVAILABLE,
            message="Drawing surface failed",
            exc_info=MemoryError("canvas too large"),
        )

    [entry] = entries(caplog, "funnyface_overlay.test_error")
    assert entry["level"] == "ERROR"
    assert entry["exception"] == {'type': 'MemoryError', 'message': 'canvas too large'}
    assert "metadata" not in entry


def test_level_filtering_and_set_level(caplog):
    logger = StructuredLogger(component="test_levels", level=logging.WARNING)
    name = "funnyface_overlay.test_levels"

    with caplog.at_level(logging.DEBUG):
        logger.info(event=LogEvent.IMAGE_SAVED, message="hidden")
        logger.warning(event=LogEvent.CONFIG_LOADED, message="shown")
        logger.set_level(logging.DEBUG)
        logger.debug(event=LogEvent.FEATURE_SKIPPED, message="now shown")

    assert [e["message"] for e in entries(caplog, name)] == ["shown", "now shown"]


def test_custom_logger_name(caplog):
    logger = StructuredLogger(component="renderer", logger_name="custom.overlay")

    with caplog.at_level(logging.INFO, logger="custom.overlay"):
        logger.info(event=LogEvent.RENDER_FUNNY_FACE, message="done")

    assert entries(caplog, "custom.overlay")[0]["component"] == "renderer"


def test_event_groups():
    assert LogEvent.FEATURE_SKIPPED in RENDER_EVENTS
    assert LogEvent.IMAGE_UNREADABLE in ERROR_EVENTS
    assert all(event.value.startswith("error.") for event in ERROR_EVENTS)
