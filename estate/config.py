"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Any, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Estate Listings API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # JWT
    SECRET_KEY: str = ""
    ALGORITHM: str = "HS256"
    # None keeps tokens valid until the secret rotates
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # Session cookie
    SESSION_COOKIE_NAME: str = "access_token"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_COOKIE_SAMESITE: str = "lax"
    # None issues a browser-session cookie
    SESSION_COOKIE_MAX_AGE: Optional[int] = None

    # Storage: "mongodb" or "memory"
    STORAGE_TYPE: str = "mongodb"
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "estate"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_MIN_POOL_SIZE: int = 2
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Google sign-in
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_VERIFY_ID_TOKEN: bool = False

    DEFAULT_AVATAR_URL: str = (
        "https://cdn.pixabay.com/photo/2015/10/05/22/37/blank-profile-picture-973460_1280.png"
    )

    # CORS
    CORS_ORIGINS: Union[str, List[str]] = ["http://localhost:5173"]

    # Object storage (used by the upload client)
    S3_BUCKET_NAME: str = ""
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    S3_ENDPOINT_URL: Optional[str] = None
    S3_PUBLIC_URL: Optional[str] = None
    MAX_IMAGE_SIZE: int = 2 * 1024 * 1024  # 2MB
    MAX_IMAGES_PER_LISTING: int = 6

    # Client
    API_BASE_URL: str = "http://localhost:8000"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    # Monitoring
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v: Any) -> Any:
        """Parse comma-separated origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def use_mongodb(self) -> bool:
        return self.STORAGE_TYPE.lower() == "mongodb"


@lru_cache
def get_settings() -> Settings:
    return Settings()
