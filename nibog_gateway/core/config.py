"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "nibog-gateway"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Public URL used to build redirect and callback URLs
    app_url: str = "http://localhost:8000"

    # PhonePe
    phonepe_environment: str = "sandbox"  # sandbox, production
    phonepe_merchant_id: str = ""
    phonepe_salt_key: str = ""
    phonepe_salt_index: str = ""
    phonepe_timeout: float = 20.0
    phonepe_callback_path: str = "/v1/payments/callback"

    # Webhook backend
    backend_api_url: str = "https://ai.alviongs.com/webhook/v1/nibog"
    backend_api_timeout: float = 10.0

    # Caches
    event_cache_ttl_seconds: float = 30.0
    slot_status_ttl_seconds: float = 86400.0
    payment_record_ttl_seconds: float = 86400.0

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def phonepe_is_production(self) -> bool:
        return self.phonepe_environment.lower() == "production"

    @property
    def phonepe_base_url(self) -> str:
        if self.phonepe_is_production:
            return "https://api.phonepe.com/apis/hermes"
        return "https://api-preprod.phonepe.com/apis/pg-sandbox"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
