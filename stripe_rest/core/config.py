from functools import lru_cache
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stripe_rest.core.logger import setup_logger


class Settings(BaseSettings):
    # Stripe settings
    STRIPE_API_KEY: str = ""
    STRIPE_API_BASE_URL: str = "https://api.stripe.com"
    STRIPE_API_VERSION: str | None = None

    # Transport settings
    STRIPE_TIMEOUT: float = 80.0  # seconds
    STRIPE_MAX_ATTEMPTS: int = 3
    STRIPE_BACKOFF_BASE: float = 0.5  # start with 0.5s
    STRIPE_BACKOFF_MAX: float = 8.0  # cap at 8s
    STRIPE_JITTER: float = 0.2  # +/-20%

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    model_config: SettingsConfigDict = SettingsConfigDict(  # type: ignore
        env_file=".env",
        extra="ignore",
    )

    @field_validator("STRIPE_MAX_ATTEMPTS")
    @classmethod
    def _validate_max_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("STRIPE_MAX_ATTEMPTS must be at least 1.")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()  # type: ignore


# Console logging at INFO until a StripeClient applies its own Settings
stripe_logger = setup_logger(name="stripe_logger")

__all__ = [
    "Settings",
    "get_settings",
    "stripe_logger",
]
