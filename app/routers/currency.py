from decimal import Decimal
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.core.config import Settings
from app.models.constants import SUPPORTED_CURRENCIES
from app.models.conversion import ConversionRequest, ConversionResult, ErrorResponse
from app.services.rates.base import RateProvider
from app.services.rates.conversion import convert_currency
from app.services.rates.providers import make_rate_provider

"""Currency conversion routes.

Endpoints:
    - POST /api/currency/convert                                  -> convert from JSON body
    - GET  /api/currency/convert/{source}/to/{target}?amount=...  -> same via path/query
    - GET  /api/currency/supported-currencies                     -> fixed reference list
"""

router = APIRouter(prefix="/api/currency", tags=["currency"])
logger = logging.getLogger("app.routers.currency")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request or provider failure"},
    404: {"model": ErrorResponse, "description": "Target currency not found"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
    502: {"model": ErrorResponse, "description": "Exchange rate service unreachable"},
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_provider(settings: Settings = Depends(get_app_settings)) -> RateProvider:
    return make_rate_provider(settings.exchange_rate_provider, settings)


@router.post(
    "/convert",
    response_model=ConversionResult,
    responses=_ERROR_RESPONSES,
    summary="Convert an amount between currencies (JSON body)",
)
async def convert(
    payload: ConversionRequest,
    provider: RateProvider = Depends(get_rate_provider),
):
    logger.info("received conversion request: %s", payload.model_dump())
    return await convert_currency(payload, provider)


@router.get(
    "/convert/{source_currency}/to/{target_currency}",
    response_model=ConversionResult,
    responses=_ERROR_RESPONSES,
    summary="Convert an amount between currencies (path + query)",
)
async def convert_by_path(
    source_currency: str,
    target_currency: str,
    amount: Optional[Decimal] = Query(
        None, description="The amount to convert (must be greater than 0)"
    ),
    provider: RateProvider = Depends(get_rate_provider),
):
    payload = ConversionRequest(
        source_currency=source_currency,
        target_currency=target_currency,
        amount=amount,
    )
    logger.info("received path conversion request: %s", payload.model_dump())
    return await convert_currency(payload, provider)


@router.get(
    "/supported-currencies",
    response_model=List[str],
    summary="List currency codes offered to clients",
)
async def supported_currencies() -> List[str]:
    return list(SUPPORTED_CURRENCIES)
