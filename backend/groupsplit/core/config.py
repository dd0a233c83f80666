from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "postgresql+asyncpg://localhost:5432/groupsplit"
    jwt_secret: str = Field(default="change-me", validation_alias=AliasChoices("jwt_secret", "secret_key"))
    jwt_algorithm: str = "HS256"
    cors_origins: str = "http://localhost:3000"
    exchange_rate_api_url: str = "https://api.exchangerate-api.com/v4/latest/"
    exchange_rate_cache_ttl: int = 3600  # seconds
    default_currency: str = "USD"
    log_level: str = "INFO"


settings = Settings()
