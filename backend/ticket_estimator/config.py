"""Configuration for the train ticket estimator."""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Train Ticket Estimator"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Group train ticket price estimation with age, advance-purchase "
        "and discount-card rules"
    )

    # CORS Settings
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,"
            "http://localhost:8000,http://127.0.0.1:8000",
        ).split(",")
        if origin.strip()
    ]

    # Base fare provider: "http" (remote pricing service) or "database"
    FARE_PROVIDER = os.getenv("FARE_PROVIDER", "http").strip().lower()
    FARE_API_URL = os.getenv(
        "FARE_API_URL", "https://sncf.com/api/train/estimate/price"
    )
    FARE_API_TIMEOUT = float(os.getenv("FARE_API_TIMEOUT", "5.0"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = _env_bool("LOG_JSON")


settings = Settings()
