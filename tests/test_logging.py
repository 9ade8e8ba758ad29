import json
import logging

from app.core.logging import (
    JsonFormatter,
    RequestContextFilter,
    request_id_ctx,
    request_route_ctx,
)


def _render(**extra) -> dict:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    RequestContextFilter().filter(record)
    return json.loads(JsonFormatter().format(record))


def test_record_outside_request_has_no_route():
    line = _render()
    assert line["message"] == "hello world"
    assert line["request_id"] == "-"
    assert "method" not in line and "path" not in line


def test_record_inside_request_carries_context():
    id_token = request_id_ctx.set("rid-1")
    route_token = request_route_ctx.set(("POST", "/api/currency/convert"))
    try:
        line = _render(status_code=200, duration_ms=1.5)
    finally:
        request_route_ctx.reset(route_token)
        request_id_ctx.reset(id_token)
    assert line["request_id"] == "rid-1"
    assert line["method"] == "POST"
    assert line["path"] == "/api/currency/convert"
    assert line["status_code"] == 200
    assert line["duration_ms"] == 1.5
