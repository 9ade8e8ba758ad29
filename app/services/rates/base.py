from __future__ import annotations

"""Rate provider abstraction.

The conversion engine only needs ``fetch_rates``; swapping the implementation
(live HTTP, static table, test fake) is the sole point of polymorphism.
"""
from abc import ABC, abstractmethod
from typing import Protocol

from app.models.rates import RateTable


class RateProvider(ABC):
    @abstractmethod
    async def fetch_rates(self, base_currency: str) -> RateTable:
        """Return the latest rate table for base_currency (already uppercased)."""
        raise NotImplementedError


class SupportsRateFetch(Protocol):
    async def fetch_rates(self, base_currency: str) -> RateTable: ...
