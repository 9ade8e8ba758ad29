from __future__ import annotations

"""Async HTTP helper for provider calls.

One GET per call, no retries. Anything that keeps us from getting a decoded
JSON object back (connection failure, timeout, non-2xx, bad body) is raised
as HttpError so callers only deal with one transport exception.
"""
import json
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx


class HttpError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


async def get_json(
    url: str,
    *,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    log_url: Optional[str] = None,
) -> Dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    JSON numbers with a fractional part are decoded as Decimal. ``log_url`` is
    the form of the URL used in error messages, for URLs carrying secrets.
    """
    shown = log_url or url
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url)
    except httpx.TimeoutException as e:
        raise HttpError(f"timed out fetching {shown}") from e
    except httpx.HTTPError as e:
        raise HttpError(f"failed to fetch {shown}: {e.__class__.__name__}") from e

    if not resp.is_success:
        raise HttpError(f"HTTP {resp.status_code} for {shown}", resp.status_code)
    try:
        data = resp.json(parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HttpError(f"malformed JSON body from {shown}", resp.status_code) from e
    if not isinstance(data, dict):
        raise HttpError(f"unexpected JSON payload from {shown}", resp.status_code)
    return data
