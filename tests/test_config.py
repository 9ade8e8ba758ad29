import pytest

from app.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    s.init_post_load()
    assert s.exchange_api_base_url == "https://v6.exchangerate-api.com"
    assert s.exchange_rate_provider == "exchangerate-api"


def test_base_url_trailing_slash_stripped():
    s = Settings(_env_file=None, exchange_api_base_url="https://rates.test/")
    s.init_post_load()
    assert s.exchange_api_base_url == "https://rates.test"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EXCHANGE_API_KEY", "from-env")
    monkeypatch.setenv("EXCHANGE_RATE_PROVIDER", "static")
    s = Settings(_env_file=None)
    assert s.exchange_api_key == "from-env"
    assert s.exchange_rate_provider == "static"


def test_unknown_provider_rejected():
    s = Settings(_env_file=None, exchange_rate_provider="bogus")
    with pytest.raises(ValueError):
        s.init_post_load()
