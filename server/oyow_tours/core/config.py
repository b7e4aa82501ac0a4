"""Environment-driven settings for the Oyow Tours API."""

from typing import Annotated, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LOCAL_FRONTENDS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:8080",
]


class Settings(BaseSettings):
    """
    Settings read from the environment or a ``.env`` file.

    Variable names are the upper-cased field names, e.g. ``MONGODB_URI``
    or ``CORS_ORIGINS=https://oyowtours.example,https://admin.oyowtours.example``.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    mongodb_uri: str = Field("mongodb://localhost:27017/oyow-tours", description="Document store URI")
    mongodb_database: str = Field("oyow-tours", description="Used when the URI carries no database path")
    store_timeout_seconds: float = Field(5.0, gt=0, description="Ceiling for one store round trip")

    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(LOCAL_FRONTENDS))

    host: str = "0.0.0.0"
    port: int = Field(3001, ge=1, le=65535)

    otlp_endpoint: Optional[str] = Field(None, description="OTLP gRPC collector; spans are not exported when unset")

    @field_validator("environment", mode="before")
    @classmethod
    def _lower_environment(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v):
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
