from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAYZEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    LOG_LEVEL: str = "INFO"

    # Shop credentials
    SHOP_ID: Optional[str] = None
    SHOP_KEY: Optional[str] = None
    MODE: str = "TEST"  # TEST | PRODUCTION

    # Optional header fields
    WS_USER: Optional[str] = None
    RETURN_URL: Optional[str] = None
    ECS_PAYMENT_ID: Optional[str] = None
    REMOTE_ID: Optional[str] = None

    # Endpoint
    ENDPOINT_HOST: str = "secure.payzen.eu"
    ENDPOINT_PATH: str = "/vads-ws/v5"
    SECURE_CONNECTION: bool = True
    CONNECTION_TIMEOUT: float = 10.0
    REQUEST_TIMEOUT: float = 30.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide defaults, built on first use and never rebuilt."""
    return Settings()
