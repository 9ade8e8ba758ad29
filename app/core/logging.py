import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
request_route_ctx: ContextVar[tuple[str, str] | None] = ContextVar(
    "request_route", default=None
)


class RequestContextFilter(logging.Filter):
    """Stamp records with the id, method and path of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.request_id = request_id_ctx.get() or "-"
        route = request_route_ctx.get()
        record.method, record.path = route if route else ("-", "-")
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base: Dict[str, Any] = {
            "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }
        # Only request-scoped records carry a route
        if getattr(record, "method", "-") != "-":
            base["method"] = record.method
            base["path"] = record.path
        for key in ("status_code", "duration_ms"):
            if hasattr(record, key):
                base[key] = getattr(record, key)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def init_logging(debug: bool = False) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    # httpx logs full request URLs at INFO, which would leak the provider API key
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def request_context_middleware(request, call_next):  # type: ignore
    """Bind request id and route for log records; echo the id as X-Request-ID."""
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    id_token = request_id_ctx.set(rid)
    route_token = request_route_ctx.set((request.method, request.url.path))
    logger = logging.getLogger("app.request")
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        logger.info(
            "request completed",
            extra={
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response
    finally:
        request_route_ctx.reset(route_token)
        request_id_ctx.reset(id_token)
