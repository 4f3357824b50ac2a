# userdemo\shared\config.py
from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Values come from the environment (or a local .env file).
    """

    # --- Application Meta ---
    APP_NAME: str = "user-service-demo"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- HTTP Server ---
    # 8080 is the port the container image exposes
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CORS_ORIGINS: str = "*"

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.JSON
    OTEL_SERVICE_NAME: str = "user-service-demo"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_TRACES_SAMPLE_RATIO: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def cors_origins(self) -> list[str]:
        """Comma-separated CORS_ORIGINS as a list; '*' allows everything."""
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
