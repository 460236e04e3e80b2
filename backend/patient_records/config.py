from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str

    # Session tokens
    jwt_secret_key: str = "supersecretjwtkey"
    jwt_algorithm: str = "HS256"
    token_expire_seconds: int = 3600  # 1 hour

    # Server
    port: int = 8001
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
