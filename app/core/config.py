from typing import Any, List
from pydantic import AnyHttpUrl, field_validator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.

    Loads values from environment variables or .env file.
    """
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Dawai API"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # SECURITY
    SECRET_KEY: str = Field(description="Secret key for JWT encoding")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24

    # Server-held key for cross-user notification writes. Never sent to clients.
    SERVICE_ROLE_KEY: str | None = None

    # DATABASE
    DATABASE_URL: str = Field(description="PostgreSQL Connection URL")

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    # URLS
    APP_URL: str = "http://localhost:8000"
    FRONTEND_URL: str = "http://localhost:3000"

    # NOTIFICATIONS
    NOTIFICATIONS_PAGE_SIZE: int = 20
    NOTIFICATIONS_MAX_PAGE_SIZE: int = 100
    DELIVERY_TIMEOUT_SECONDS: float = 5.0

    # EMAIL
    SMTP_TLS: bool = True
    SMTP_PORT: int | None = 587
    SMTP_HOST: str | None = None
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    EMAILS_FROM_EMAIL: str | None = "no-reply@dawai.app"
    EMAILS_FROM_NAME: str | None = "Dawai"

    # CELERY
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"

    # SENTRY
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> Any:
        """
        Parses comma-separated string of CORS origins into a list.
        """
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

settings = Settings()
