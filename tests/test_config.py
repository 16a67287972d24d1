"""Tests for settings and logging setup."""

import json
import logging

import pytest
import structlog

from staycal.config import Settings, configure_logging, get_logger
from staycal.config.logging import add_owner_prefix, build_processors
from staycal.config.settings import CalendarSettings


@pytest.fixture
def restore_logging():
    """Undo configure_logging so other tests see default structlog."""
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_calendar_defaults():
    config = Settings()

    assert config.calendar.min_stay_nights == 2
    assert config.blocking_statuses == frozenset({"pending", "confirmed"})
    assert config.calendar.month_names[0] == "January"


def test_calendar_settings_from_env(monkeypatch):
    monkeypatch.setenv("CALENDAR_MIN_STAY_NIGHTS", "3")

    assert CalendarSettings().min_stay_nights == 3


class TestOwnerPrefix:
    """Tests for the add_owner_prefix processor."""

    @pytest.mark.parametrize(
        "key,value,expected",
        [
            ("listing_id", "L1", "[listing:L1] Applied reservation snapshot"),
            ("host_id", "h1", "[host:h1] Applied reservation snapshot"),
            ("guest_id", "g1", "[guest:g1] Applied reservation snapshot"),
        ],
    )
    def test_each_owner_kind(self, key, value, expected):
        event = add_owner_prefix(None, "info", {"event": "Applied reservation snapshot", key: value})

        assert event["event"] == expected

    def test_listing_takes_precedence(self):
        event = add_owner_prefix(
            None, "info", {"event": "Built index", "guest_id": "g1", "listing_id": "L1"}
        )

        assert event["event"] == "[listing:L1] Built index"

    def test_no_owner_untouched(self):
        event = add_owner_prefix(None, "info", {"event": "Built index", "host_id": None})

        assert event["event"] == "Built index"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_renderer_selected(self):
        processors = build_processors("json")

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert add_owner_prefix in processors

    def test_console_renderer_selected(self):
        assert isinstance(build_processors("console")[-1], structlog.dev.ConsoleRenderer)

    def test_bound_guest_logger_renders_prefix(self, restore_logging, capsys):
        configure_logging(level="DEBUG", log_format="json")

        get_logger("staycal.tests").bind(guest_id="g1").info("Reservation subscription started")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        assert "[guest:g1] Reservation subscription started" in line
        assert json.loads(line)

    def test_level_filtering(self, restore_logging, capsys):
        configure_logging(level="warning", log_format="console")

        get_logger("staycal.tests").info("hidden", host_id="h1")

        assert "hidden" not in capsys.readouterr().out
