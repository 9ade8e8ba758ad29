from __future__ import annotations

"""Currency conversion engine.

Validates a ConversionRequest, fetches the rate table for the source currency
(exactly one provider call), looks up the target rate and multiplies. The
amount is never rounded: callers get the full Decimal product.

Failures are raised as ConversionError subclasses; nothing partial is returned.
"""
import logging
import math
from datetime import datetime, timezone

from app.core.errors import (
    InvalidAmountError,
    MissingCurrencyError,
    ProviderError,
    ProviderUnavailableError,
    UnknownCurrencyError,
)
from app.models.conversion import ConversionRequest, ConversionResult
from app.services.http_client import HttpError
from .base import SupportsRateFetch

logger = logging.getLogger("app.conversion")


def _normalize(code: str | None) -> str | None:
    if code is None:
        return None
    return code.strip().upper() or None


async def convert_currency(
    request: ConversionRequest, provider: SupportsRateFetch
) -> ConversionResult:
    logger.info(
        "converting %s %s to %s",
        request.amount,
        request.source_currency,
        request.target_currency,
    )
    amount = request.amount
    if amount is None or not amount > 0:
        raise InvalidAmountError()
    if not math.isfinite(float(amount)):
        raise InvalidAmountError("Amount is out of range")

    source = _normalize(request.source_currency)
    target = _normalize(request.target_currency)
    if source is None or target is None:
        raise MissingCurrencyError()

    try:
        table = await provider.fetch_rates(source)
    except HttpError as e:
        logger.error("rate provider unavailable base=%s: %s", source, e)
        raise ProviderUnavailableError(str(e), e.status_code) from e

    if not table.success:
        logger.error(
            "rate provider reported failure base=%s error_type=%s",
            source,
            table.error_type,
        )
        raise ProviderError(table.error_type)

    rate = table.rate_for(target)
    if rate is None:
        logger.debug("available currencies: %s", sorted(table.rates))
        raise UnknownCurrencyError(target)

    target_amount = amount * rate
    if not math.isfinite(float(target_amount)):
        raise InvalidAmountError("Converted amount is out of range")
    logger.info("conversion successful rate=%s converted=%s", rate, target_amount)
    return ConversionResult(
        source_currency=source,
        target_currency=target,
        source_amount=amount,
        target_amount=target_amount,
        exchange_rate=rate,
        timestamp=datetime.now(timezone.utc),
    )
