from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "bundle-registry"
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data.db"

    # Empty disables the API key check on every route.
    api_key: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
