"""Conversion failure taxonomy and the exception handlers that render it.

Every failure leaves the API as an ErrorResponse body:
    {"status": <int>, "error": <kind>, "message": <str>, "timestamp": <epoch ms>}
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("app.errors")


class ConversionError(Exception):
    """Base class for failures raised by the conversion engine."""

    error = "conversion_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmountError(ConversionError):
    error = "invalid_amount"

    def __init__(self, message: str = "Amount must be greater than zero"):
        super().__init__(message)


class MissingCurrencyError(ConversionError):
    error = "missing_currency"

    def __init__(
        self, message: str = "Source and target currencies must be specified"
    ):
        super().__init__(message)


class UnknownCurrencyError(ConversionError):
    error = "unknown_currency"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, currency: str):
        super().__init__(f"Target currency {currency} not found in available rates")
        self.currency = currency


class ProviderError(ConversionError):
    """The provider answered but reported failure."""

    error = "provider_error"

    def __init__(self, error_type: Optional[str] = None):
        message = "Failed to retrieve exchange rates"
        if error_type:
            message = f"{message}: {error_type}"
        super().__init__(message)
        self.error_type = error_type


class ProviderUnavailableError(ConversionError):
    """Transport-level failure talking to the provider."""

    error = "provider_unavailable"

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        super().__init__(f"Error communicating with exchange rate service: {detail}")
        self.upstream_status = upstream_status
        if upstream_status is not None and upstream_status >= 400:
            self.status_code = upstream_status
        else:
            self.status_code = status.HTTP_502_BAD_GATEWAY


def error_body(status_code: int, error: str, message: str) -> dict:
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "timestamp": int(time.time() * 1000),
    }


def conversion_error_handler(request: Request, exc: ConversionError):  # type: ignore
    logger.error("currency conversion error: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.error, exc.message),
    )


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"No route for {request.method} {request.url.path}"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, "not_found", message),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, "http_error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            status.HTTP_400_BAD_REQUEST,
            "validation_error",
            f"Invalid request: {problems}",
        ),
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred.",
        ),
    )
