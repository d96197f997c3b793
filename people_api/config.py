# =============================================================================
# Application Configuration — Pydantic Settings
# =============================================================================
#
# All runtime configuration lives here and is loaded by Pydantic V2's
# `BaseSettings`, in this priority order (highest first):
#   1. Environment variables (e.g., `REDIS_URL=...`)
#   2. Values from the .env file
#   3. Default values defined below
#
# USAGE:
#   from people_api.config import settings
#   print(settings.redis_url)
# =============================================================================

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults target a local Redis Stack container on the standard port.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "People Search API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Store backend
    # -------------------------------------------------------------------------
    # Options:
    #   - "redis": RedisJSON documents indexed by RediSearch (needs Redis Stack)
    #   - "memory": process-local dict, predicates evaluated in Python
    # -------------------------------------------------------------------------
    store_type: str = "redis"

    # -------------------------------------------------------------------------
    # Redis
    # -------------------------------------------------------------------------
    # Person documents are stored as JSON under `<key_prefix><id>` and
    # indexed by a single search index named `index_name`.
    # -------------------------------------------------------------------------
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 5.0
    index_name: str = "person_idx"
    key_prefix: str = "person:"

    # RediSearch returns 10 results unless told otherwise
    max_results: int = 10_000

    # -------------------------------------------------------------------------
    # Demo data
    # -------------------------------------------------------------------------
    # When enabled, startup wipes every Person and loads the six demo records.
    # -------------------------------------------------------------------------
    seed_on_startup: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache a Settings instance.

    In tests, override with FastAPI's dependency_overrides:
        app.dependency_overrides[get_settings] = lambda: Settings(store_type="memory")
    """
    return Settings()


settings = get_settings()
