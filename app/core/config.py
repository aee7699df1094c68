# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - STRIPE_SECRET_KEY (secret key used to list products)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - REVALIDATE_TOKEN (guards the on-demand catalog revalidation hook)
    """

    PROJECT_NAME: str = "Ignite Shop API"
    API_V1_STR: str = "/api/v1"

    # Cart persistence
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Commerce provider (Stripe REST API)
    STRIPE_SECRET_KEY: str
    STRIPE_API_BASE: str = "https://api.stripe.com"
    STRIPE_TIMEOUT_SECONDS: float = 30.0

    # Catalog display + regeneration
    CATALOG_LOCALE: str = "pt-BR"
    CATALOG_CURRENCY: str = "BRL"
    CATALOG_REVALIDATE_SECONDS: int = 60 * 60 * 2  # 2 hours
    CATALOG_REQUIRE_UNIT_AMOUNT: bool = True
    CATALOG_WARM_ON_STARTUP: bool = True

    # Shared secret for POST /catalog/revalidate (disabled check when unset)
    REVALIDATE_TOKEN: str | None = None

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
