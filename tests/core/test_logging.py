"""Tests for crudkit.core.logging — structlog configuration helpers."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from crudkit.config.settings import CrudKitSettings
from crudkit.core.logging import (
    KITS,
    _add_kit_fields,
    configure_from_settings,
    configure_logging,
    get_logger,
)


class TestKitFields:
    @pytest.mark.parametrize(
        ("event", "kit", "operation"),
        [
            ("orm.insert", "orm", "insert"),
            ("mongo.find_one_failed", "mongo", "find_one_failed"),
            ("raw.execute", "raw", "execute"),
            ("container.close_failed", "container", "close_failed"),
        ],
    )
    def test_splits_kit_events(self, event, kit, operation):
        out = _add_kit_fields(None, "debug", {"event": event})
        assert (out["kit"], out["operation"]) == (kit, operation)

    @pytest.mark.parametrize("event", ["startup", "http.request", "orm", ""])
    def test_leaves_other_events_alone(self, event):
        assert _add_kit_fields(None, "info", {"event": event}) == {"event": event}

    def test_explicit_fields_win(self):
        out = _add_kit_fields(None, "info", {"event": "orm.insert", "operation": "bulk"})
        assert out["operation"] == "bulk"

    def test_known_prefixes(self):
        assert {"orm", "mongo", "raw"} <= KITS


class TestConfigure:
    def teardown_method(self):
        structlog.reset_defaults()

    def _last_event(self, caplog) -> dict:
        return json.loads(caplog.records[-1].getMessage())

    def test_kit_event_rendered_as_json(self, caplog):
        configure_logging(level="DEBUG", json_format=True, service="orders")
        caplog.set_level(logging.DEBUG)
        get_logger("crudkit.kits.orm").debug("orm.insert", entity="User")
        event = self._last_event(caplog)
        assert event["event"] == "orm.insert"
        assert event["kit"] == "orm"
        assert event["operation"] == "insert"
        assert event["entity"] == "User"
        assert event["service"] == "orders"
        assert event["level"] == "debug"

    def test_level_filters_debug(self, caplog):
        configure_logging(level="WARNING", json_format=True)
        caplog.set_level(logging.DEBUG)
        get_logger("crudkit.test").debug("orm.insert")
        assert not caplog.records

    def test_configure_from_settings(self, caplog):
        configure_from_settings(CrudKitSettings(log_level="ERROR", log_format="json"))
        caplog.set_level(logging.DEBUG)
        log = get_logger("crudkit.test")
        log.warning("raw.execute")
        log.error("raw.query_failed", query="SELECT 1")
        assert len(caplog.records) == 1
        assert self._last_event(caplog)["operation"] == "query_failed"
