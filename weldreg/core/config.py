"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Weld Registry"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    database_url: str = "sqlite:///./welds.db"
    host: str = "0.0.0.0"
    port: int = 3333
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    service_name: str = "weldreg"
    # Client-side defaults (HTTP adapter and persisted theme)
    api_base_url: str = "http://localhost:3333/api"
    api_timeout: float = 10.0
    theme_storage_path: str = "~/.weldreg/storage.json"
    theme_storage_key: str = "weldreg-theme-config"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
