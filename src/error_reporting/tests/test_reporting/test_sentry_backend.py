# src/error_reporting/tests/test_reporting/test_sentry_backend.py
import pytest
import sentry_sdk
from sentry_sdk.transport import Transport

from error_reporting.exceptions import HttpError
from error_reporting.reporting.backends import SentryBackend
from error_reporting.reporting.snapshot import RequestSnapshot

DSN = "https://public@sentry.example.com/1"


class CapturingTransport(Transport):
    """Keeps events in memory instead of sending them."""

    def __init__(self, options=None):
        super().__init__(options)
        self.events = []

    def capture_envelope(self, envelope):
        event = envelope.get_event()
        if event is not None:
            self.events.append(event)


@pytest.fixture
def transport():
    transport = CapturingTransport()
    yield transport
    # leave the SDK disabled for the rest of the session
    sentry_sdk.init(dsn=None)


@pytest.fixture
def sentry_backend(transport):
    return SentryBackend(DSN, "staging", transport=transport, default_integrations=False)


def _message(event):
    return event.get("message") or event.get("logentry", {}).get("message")


def test_exception_is_captured_with_level_and_environment(sentry_backend, transport):
    sentry_backend.info(HttpError.not_found("No such thing"))

    assert len(transport.events) == 1
    event = transport.events[0]
    assert event["level"] == "info"
    assert event["environment"] == "staging"
    assert event["exception"]["values"][0]["type"] == "HttpError"


def test_non_exception_value_is_captured_as_message(sentry_backend, transport):
    sentry_backend.warning("disk almost full")
    sentry_backend.debug({"event": "cache warmed"})

    assert [e["level"] for e in transport.events] == ["warning", "debug"]
    assert _message(transport.events[0]) == "disk almost full"
    assert _message(transport.events[1]) == '{"event": "cache warmed"}'


def test_request_snapshot_and_custom_are_attached(sentry_backend, transport):
    snapshot = RequestSnapshot(
        method="POST",
        url="http://public.example.com/orders",
        query_string="",
        headers={"host": "public.example.com"},
        body={"sku": "A-1"},
        request_id="abc",
    )

    sentry_backend.error(RuntimeError("kaboom"), snapshot, {"custom": {"order_id": 42}, "attempt": 2})

    event = transport.events[0]
    assert event["level"] == "error"
    assert event["request"]["method"] == "POST"
    assert event["request"]["url"] == "http://public.example.com/orders"
    assert event["request"]["data"] == {"sku": "A-1"}
    assert event["contexts"]["custom"] == {"order_id": 42}
    assert event["extra"]["attempt"] == 2
    assert event["tags"]["request_id"] == "abc"


def test_missing_custom_is_not_attached(sentry_backend, transport):
    sentry_backend.info(HttpError.bad_request("nope"), {"custom": None})

    assert "custom" not in transport.events[0].get("contexts", {})


def test_context_does_not_leak_between_events(sentry_backend, transport):
    sentry_backend.error(RuntimeError("first"), {"custom": {"a": 1}})
    sentry_backend.error(RuntimeError("second"))

    assert "custom" not in transport.events[1].get("contexts", {})
