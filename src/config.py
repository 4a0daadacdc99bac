# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Currency rates proxy settings.

    Values come from environment variables or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite:///./rates.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Open Exchange Rates
    open_exchange_api_key: str = ""
    open_exchange_api_url: str = "https://openexchangerates.org/api"
    provider_timeout_seconds: float = 10.0

    # Visitor preferences
    default_base_currency: str = "USD"
    visitor_cookie_name: str = "user_id"

    # Caching
    response_cache_ttl_seconds: int = 5 * 60
    currencies_cache_ttl_seconds: int = 60 * 60
    memory_cache_max_entries: int = 10_000
    rate_cache_freshness_hours: int = 24
    cache_cleanup_interval_seconds: int = 60


settings = Settings()
