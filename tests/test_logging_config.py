import json
import logging

from site_prompt_builder.logging_config import StructuredFormatter, set_trace_id, trace_id_var


def make_record(**extra):
    record = logging.LogRecord("site_prompt_builder.test", logging.INFO, __file__, 10, "Streamed %s", ("ok",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_includes_extra_fields():
    payload = json.loads(StructuredFormatter().format(make_record(fragments=3, model="gemini-2.5-flash")))

    assert payload["message"] == "Streamed ok"
    assert payload["severity"] == "INFO"
    assert payload["fragments"] == 3
    assert payload["model"] == "gemini-2.5-flash"
    assert payload["timestamp"].endswith("Z")


def test_structured_formatter_adds_trace_id():
    token = trace_id_var.set(None)
    try:
        set_trace_id("trace-123")
        payload = json.loads(StructuredFormatter().format(make_record()))
    finally:
        trace_id_var.reset(token)

    assert payload["logging.googleapis.com/trace"] == "trace-123"
