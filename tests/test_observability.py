import json
import logging

from rhyme_scope.utils import logging_config
from rhyme_scope.utils.logging_config import configure_logging
from rhyme_scope.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)


class RecordingSpan:
    def __init__(self):
        self.attributes = {}
        self.exceptions = []

    def set_attribute(self, key, value):
        self.attributes[key] = value

    def record_exception(self, error):
        self.exceptions.append(error)


def test_bound_and_call_context_are_rendered_as_json(caplog):
    caplog.set_level(logging.INFO, logger="rhyme_scope.tests")
    logger = get_logger("rhyme_scope.tests").bind(component="loader")

    logger.info("Rhyme mappings loaded", context={"entries": 42, "source": "默认"})

    [record] = caplog.records
    message, payload = record.getMessage().split(" | ", 1)
    assert message == "Rhyme mappings loaded"
    assert json.loads(payload) == {"component": "loader", "entries": 42, "source": "默认"}
    assert "默认" in payload


def test_messages_without_context_are_left_alone(caplog):
    caplog.set_level(logging.INFO, logger="rhyme_scope.tests")

    get_logger("rhyme_scope.tests").info("plain")

    assert caplog.records[0].getMessage() == "plain"


def test_bind_does_not_mutate_parent_context():
    parent = get_logger("rhyme_scope.tests", component="parent")

    child = parent.bind(stage="match")

    assert parent.extra == {"component": "parent"}
    assert child.extra == {"component": "parent", "stage": "match"}


def test_metric_creation_is_idempotent():
    first = create_counter("rhyme_scope_test_events_total", "Test events.", label_names=("kind",))
    second = create_counter("rhyme_scope_test_events_total", "Test events.", label_names=("kind",))
    first.labels(kind="a").inc()
    second.labels(kind="a").inc(2)

    histogram = create_histogram("rhyme_scope_test_seconds", "Test latency.")
    again = create_histogram("rhyme_scope_test_seconds", "Test latency.")
    with histogram.time():
        pass
    again.observe(0.5)

    assert first._impl is second._impl
    assert histogram._impl is again._impl


def test_span_helpers_tolerate_missing_and_non_recording_spans():
    add_span_attributes(None, {"lines": 2})
    record_exception(None, RuntimeError("ignored"))

    with start_span("rhyme_scope.test", {"lines": 2, "skipped": None}) as span:
        add_span_attributes(span, {"counts": (1, 2)})
    assert span is not None


def test_span_attributes_are_normalised():
    span = RecordingSpan()

    add_span_attributes(span, {"lines": 2, "tags": ("a", "b"), "options": {"x": 1}, "none": None})
    record_exception(span, ValueError("bad"))

    assert span.attributes == {
        "lines": 2,
        "tags": ["a", "b"],
        "options": "{'x': 1}",
        "error": True,
    }
    assert isinstance(span.exceptions[0], ValueError)


def test_configure_logging_reads_level_from_environment(monkeypatch):
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setenv("RHYME_SCOPE_LOG_LEVEL", "warning")

    level = configure_logging()

    assert level == logging.WARNING
    assert logging.getLogger("rhyme_scope").level == logging.WARNING
    assert configure_logging("DEBUG") == logging.WARNING
    logging.getLogger("rhyme_scope").setLevel(logging.NOTSET)
