from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimals travel as JSON numbers, not strings
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ConversionRequest(BaseModel):
    """Inbound conversion request.

    Fields are optional here on purpose: the conversion engine owns validation
    so missing values are reported as conversion failures, not parse errors.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    source_currency: Optional[str] = Field(None, examples=["USD"])
    target_currency: Optional[str] = Field(None, examples=["EUR"])
    amount: Optional[Decimal] = Field(None, examples=[100.0])


class ConversionResult(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    source_currency: str
    target_currency: str
    source_amount: JsonDecimal
    target_amount: JsonDecimal
    exchange_rate: JsonDecimal
    timestamp: datetime


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    timestamp: int = Field(..., description="Epoch milliseconds")
