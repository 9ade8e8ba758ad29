from __future__ import annotations

"""Concrete rate providers and factory.

'exchangerate-api' calls ExchangeRate-API v6 on every request; 'static' serves
a fixed USD-relative table so the service can run without network or API key.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import Settings
from app.models.rates import RateTable
from app.services.http_client import HttpError, get_json
from .base import RateProvider

logger = logging.getLogger("app.rates")

# Units of currency per 1 USD
_STATIC_USD_RATES: Dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.9168"),
    "GBP": Decimal("0.7953"),
    "JPY": Decimal("151.37"),
    "AUD": Decimal("1.5234"),
    "CAD": Decimal("1.3689"),
    "CHF": Decimal("0.9041"),
    "CNY": Decimal("7.2391"),
    "INR": Decimal("83.41"),
}


class StaticRateProvider(RateProvider):
    def __init__(self, usd_rates: Optional[Mapping[str, Decimal]] = None):
        self._usd_rates = dict(usd_rates or _STATIC_USD_RATES)

    async def fetch_rates(self, base_currency: str) -> RateTable:  # type: ignore[override]
        base_per_usd = self._usd_rates.get(base_currency)
        if base_per_usd is None:
            return RateTable(
                base_currency=base_currency, success=False, error_type="unsupported-code"
            )
        if base_currency == "USD":
            rates = dict(self._usd_rates)
        else:
            # cross rate: quote per base = (quote per USD) / (base per USD)
            rates = {c: v / base_per_usd for c, v in self._usd_rates.items()}
            rates[base_currency] = Decimal("1")
        return RateTable(base_currency=base_currency, rates=rates, success=True)


class _ExchangeRateApiPayload(BaseModel):
    """Fields of the v6 /latest response we use; metadata is ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    result: str
    base_code: Optional[str] = None
    conversion_rates: Dict[str, Decimal] = Field(default_factory=dict)
    error_type: Optional[str] = Field(None, alias="error-type")


class ExchangeRateApiProvider(RateProvider):
    """ExchangeRate-API v6 client: GET <base>/v6/<key>/latest/<BASE>."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _url(self, base_currency: str, api_key: str) -> str:
        return f"{self._base_url}/v6/{api_key}/latest/{base_currency}"

    async def fetch_rates(self, base_currency: str) -> RateTable:  # type: ignore[override]
        logger.debug("fetching latest rates base=%s", base_currency)
        data = await get_json(
            self._url(base_currency, self._api_key),
            timeout=self._timeout,
            transport=self._transport,
            log_url=self._url(base_currency, "***"),
        )
        return parse_rate_table(data, base_currency)


def parse_rate_table(data: Dict[str, Any], base_currency: str) -> RateTable:
    try:
        payload = _ExchangeRateApiPayload.model_validate(data)
    except ValidationError as e:
        raise HttpError(
            f"malformed exchange rate payload: {e.error_count()} invalid field(s)"
        ) from e
    success = payload.result == "success"
    return RateTable(
        base_currency=payload.base_code or base_currency,
        rates=payload.conversion_rates if success else {},
        success=success,
        error_type=None if success else payload.error_type,
    )


_PROVIDER_REGISTRY = {
    "exchangerate-api": lambda s: ExchangeRateApiProvider(
        s.exchange_api_base_url, s.exchange_api_key, timeout=s.http_timeout_seconds
    ),
    "static": lambda s: StaticRateProvider(),
}


def make_rate_provider(kind: str, settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)
