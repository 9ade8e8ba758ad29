from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RateTable(BaseModel):
    """Exchange rates for one base currency at one point in time.

    Built from a single provider response and never shared across conversions.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    base_currency: str
    rates: Dict[str, Decimal] = Field(default_factory=dict)
    success: bool
    error_type: Optional[str] = None

    def rate_for(self, currency: str) -> Optional[Decimal]:
        return self.rates.get(currency)
