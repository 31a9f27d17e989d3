"""Structured Logging — verifies the JSON and text log formats."""

import json
import logging

from gateway.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "gateway.test", logging.INFO, __file__, 1, "API GET %s", ("users/show",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_carries_request_fields():
    line = json.loads(JSONFormatter().format(
        _record(viewer_id=1, api_path="users/show", status_code=200, other="x"),
    ))
    assert line["message"] == "API GET users/show"
    assert line["level"] == "INFO"
    assert line["viewer_id"] == 1
    assert line["api_path"] == "users/show"
    assert line["status_code"] == 200
    assert "other" not in line
    assert "error_code" not in line


def test_text_line_prefixes_api_path():
    assert TextFormatter().format(_record(api_path="help/test")).startswith("[help/test] ")
    assert not TextFormatter().format(_record()).startswith("[")


def test_setup_logging_replaces_its_handler():
    before = list(logging.root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("INFO", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, TextFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in [h for h in logging.root.handlers if h not in before]:
            logging.root.removeHandler(handler)
