# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load the backend/.env file when present so settings work outside Docker too
_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(_BACKEND_DIR / ".env")

_DEFAULT_SECRET_KEY = "dev-secret-key-change-me"


class Settings(BaseSettings):
    # JWT
    secret_key: SecretStr = Field(
        default=SecretStr(_DEFAULT_SECRET_KEY),
        description="Secret key for JWT tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Database
    database_url: str = Field(
        default="sqlite:///./skillbridge.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = False

    is_testing: bool = False  # Set to True when running tests
    environment: str = Field(default="development", description="Deployment environment name")
    log_level: str = "INFO"

    # Frontend / CORS
    site_url: str = Field(
        default="http://localhost:3000",
        description="Public site URL used to build checkout redirect URLs",
    )
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of allowed CORS origins",
    )

    # Stripe
    stripe_secret_key: SecretStr = Field(default=SecretStr(""), description="Stripe secret API key")
    stripe_currency: str = Field(default="cad", description="Currency for checkout sessions")

    # Zoom server-to-server OAuth
    zoom_account_id: str = ""
    zoom_client_id: str = ""
    zoom_client_secret: SecretStr = SecretStr("")
    zoom_timezone: str = "America/Winnipeg"
    zoom_oauth_url: str = "https://zoom.us/oauth/token"
    zoom_api_base_url: str = "https://api.zoom.us/v2"
    zoom_request_timeout_seconds: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("site_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"prod", "production"}

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key.get_secret_value())

    @property
    def zoom_configured(self) -> bool:
        return bool(
            self.zoom_account_id and self.zoom_client_id and self.zoom_client_secret.get_secret_value()
        )


settings = Settings()

if settings.is_production and settings.secret_key.get_secret_value() == _DEFAULT_SECRET_KEY:
    raise RuntimeError("Refusing to start: SECRET_KEY must be set in production")

logger.info("[CONFIG] environment=%s database=%s", settings.environment, settings.database_url.split("@")[-1])
