"""Tests for notification sinks"""
import logging

from storefront import errors
from storefront.services.notifications import LoggingNotificationSink, RecordingNotificationSink


def test_recording_sink_keeps_order():
    sink = RecordingNotificationSink()

    sink.error(errors.OUT_OF_STOCK)
    sink.error(errors.REMOVE_PRODUCT_FAILED)

    assert sink.messages == [errors.OUT_OF_STOCK, errors.REMOVE_PRODUCT_FAILED]


def test_recording_sink_drain_clears():
    sink = RecordingNotificationSink()
    sink.error(errors.ADD_PRODUCT_FAILED)

    assert sink.drain() == [errors.ADD_PRODUCT_FAILED]
    assert sink.messages == []


def test_logging_sink_writes_warning(caplog):
    sink = LoggingNotificationSink()

    with caplog.at_level(logging.WARNING, logger="storefront.notifications"):
        sink.error(errors.STOCK_LIMIT_REACHED)

    assert errors.STOCK_LIMIT_REACHED in caplog.text


def test_message_set_is_fixed():
    assert errors.ALL_MESSAGES == {
        "Requested quantity out of stock",
        "Failed to add product",
        "Failed to remove product",
        "Failed to change product quantity",
        "Stock limit reached",
    }
