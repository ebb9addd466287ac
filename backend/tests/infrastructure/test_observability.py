"""JSON log formatter tests."""

import json
import logging

from coupler.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord("coupler.test", logging.INFO, __file__, 1, "hello", None, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "coupler.test"
    assert log["message"] == "hello"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(invite_id="i-1", status_code=201, unrelated="x"),
    ))
    assert log["invite_id"] == "i-1"
    assert log["status_code"] == 201
    assert "unrelated" not in log
