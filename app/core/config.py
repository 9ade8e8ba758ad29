from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_API_BASE_URL, EXCHANGE_API_KEY, EXCHANGE_RATE_PROVIDER).
    """

    # Basic app metadata
    app_name: str = "Currency Conversion API"
    debug: bool = False
    version: str = "1.0.0"

    # Exchange rate provider
    exchange_api_base_url: str = "https://v6.exchangerate-api.com"
    exchange_api_key: str = ""
    http_timeout_seconds: float = 5.0

    # Allowed: 'exchangerate-api' (live HTTP), 'static' (built-in fixed rates)
    exchange_rate_provider: str = "exchangerate-api"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def init_post_load(self) -> None:
        """Normalize derived fields and validate the provider kind."""
        self.exchange_api_base_url = self.exchange_api_base_url.rstrip("/")
        allowed = {"exchangerate-api", "static"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
