# cocktail_api/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import PostgresDsn, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "psycopg2"
    POSTGRES_USER: str = "cocktail"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "cocktail"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    TEST_MODE: bool = False
    TEST_POSTGRES_DB: str = ""
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)

    DEBUG: bool = False

    # Public URL used to build the confirmation links
    BASE_URL: str = "http://localhost:8000"

    # Token lifecycle
    CONFIRMATION_TOKEN_EXPIRE_DAYS: int = 1
    ACCESS_TOKEN_EXPIRE_DAYS: int = 100
    CREDENTIAL_CLEANUP_INTERVAL_HOURS: int = 24

    # Argon2 hash of the administrative token (see admin_token.py)
    ADMIN_TOKEN_HASH: Optional[str] = None

    # Email client
    MAILJET_API_USER: Optional[str] = None
    MAILJET_API_KEY: Optional[str] = None
    MAILJET_API_URL: str = "https://api.mailjet.com/v3.1/send"
    EMAIL_SENDER_ADDRESS: str = "noreply@localhost"
    EMAIL_SENDER_NAME: str = "Cocktail API"
    ADMIN_EMAIL_ADDRESS: Optional[str] = None

    # API Documentation
    SCHEMA_VISIBILITY: bool = False

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        db_name = data.get("TEST_POSTGRES_DB") if data.get("TEST_MODE") else data.get("POSTGRES_DB")
        return str(PostgresDsn.build(
            scheme=f"postgresql+{data.get('DB_DRIVER', 'psycopg2')}",
            username=data["POSTGRES_USER"],
            password=data["POSTGRES_PASSWORD"],
            host=data["POSTGRES_HOST"],
            port=data["POSTGRES_PORT"],
            path=db_name,
        ))

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensures the value is a valid logging level."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @property
    def admin_email(self) -> str:
        """Operator notifications go to the sender address unless overridden."""
        return self.ADMIN_EMAIL_ADDRESS or self.EMAIL_SENDER_ADDRESS

    @property
    def mailjet_enabled(self) -> bool:
        return bool(self.MAILJET_API_USER and self.MAILJET_API_KEY)

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
