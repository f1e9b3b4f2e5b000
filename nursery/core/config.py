# nursery/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env), all optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - CORS_ORIGINS (JSON list)
      - CART_SCOPE (key of the shared cart)
      - RESTORE_STOCK_ON_CART_REMOVE

    Image upload only:
      - SUPABASE_URL
      - SUPABASE_SERVICE_ROLE_KEY
      - STORAGE_BUCKET
    """

    PROJECT_NAME: str = "Nursery Shop API"
    API_PREFIX: str = ""

    DATABASE_URL: str = "sqlite:///./nursery.db"
    DATABASE_ECHO: bool = False

    CORS_ORIGINS: list[str] = ["*"]

    # There is a single shared cart unless callers send X-Cart-Scope
    CART_SCOPE: str = "global"

    # Source behaviour keeps the reservation when a cart line is removed
    RESTORE_STOCK_ON_CART_REMOVE: bool = False

    # Supabase Storage (product images)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
