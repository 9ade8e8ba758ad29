"""Pydantic domain models for the Currency Conversion API."""

from .constants import SUPPORTED_CURRENCIES  # re-export
from .conversion import ConversionRequest, ConversionResult, ErrorResponse
from .rates import RateTable

__all__ = [
    "SUPPORTED_CURRENCIES",
    "ConversionRequest",
    "ConversionResult",
    "ErrorResponse",
    "RateTable",
]
