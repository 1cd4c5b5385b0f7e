# src/error_reporting/tests/test_logging/test_formatters.py
import json
import logging
from error_reporting.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record():
    return logging.LogRecord("error_reporting", logging.INFO, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.custom = {"order_id": 42}
    rec.request_id = "req-1"
    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["custom"] == {"order_id": 42}
    assert "timestamp" in data
    assert "version" in data
    # LogRecord internals are not repeated as extras
    assert "levelno" not in data
    assert "args" not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev").format(rec))
    assert isinstance(data["obj"], str)
    assert data["service"] == "error-reporting"


def test_json_formatter_keeps_multiline_message_on_one_line():
    rec = logging.LogRecord("r", logging.ERROR, __file__, 1, "Traceback\n  frame\nValueError: x", None, None)
    out = JsonFormatter().format(rec)
    assert "\n" not in out
    assert json.loads(out)["message"].endswith("ValueError: x")


def test_color_formatter_colors_level_and_shows_request_id():
    rec = make_record()
    rec.request_id = "rid-9"
    line = ColorFormatter().format(rec)
    assert "\033[32mINFO" in line
    assert "rid-9" in line
    assert line.endswith("hello tester")
