from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from tocs.config.defaults import (
    DEFAULT_SERVER_URL,
    ENDPOINT_HISTORY_LIMIT,
    PROJECT_HISTORY_LIMIT,
)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    app_env: str = "dev"
    app_name: str = "tocs-backend"
    database_url: str = "sqlite:///./tocs.db"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 30
    enable_dev_login: bool = False
    proxy_timeout_seconds: float = 30.0
    discovery_timeout_seconds: float = 5.0
    project_history_limit: int = PROJECT_HISTORY_LIMIT
    endpoint_history_limit: int = ENDPOINT_HISTORY_LIMIT
    default_server_url: str = DEFAULT_SERVER_URL


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
