from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.models.rates import RateTable
from app.routers.currency import get_rate_provider
from app.services.http_client import HttpError


class FakeRateProvider:
    """Returns a canned RateTable (or raises) and records every base requested."""

    def __init__(
        self,
        rates: Optional[Dict[str, Decimal]] = None,
        *,
        success: bool = True,
        error_type: Optional[str] = None,
        error: Optional[HttpError] = None,
    ):
        self.rates = rates or {}
        self.success = success
        self.error_type = error_type
        self.error = error
        self.calls: List[str] = []

    async def fetch_rates(self, base_currency: str) -> RateTable:
        self.calls.append(base_currency)
        if self.error is not None:
            raise self.error
        return RateTable(
            base_currency=base_currency,
            rates=self.rates,
            success=self.success,
            error_type=self.error_type,
        )


USD_RATES = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.9168"),
    "GBP": Decimal("0.7953"),
    "JPY": Decimal("151.37"),
}


@pytest.fixture
def usd_provider() -> FakeRateProvider:
    return FakeRateProvider(USD_RATES)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        exchange_rate_provider="static",
        exchange_api_base_url="https://rates.test/",
        exchange_api_key="test-key",
        debug=False,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def make_client(app):
    """Build a TestClient whose rate provider is the given fake."""

    def _make(provider: Optional[FakeRateProvider] = None) -> TestClient:
        if provider is not None:
            app.dependency_overrides[get_rate_provider] = lambda: provider
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()
