"""
BoxShip configuration

Values come from the process environment first, then the repository's
root .env file. Import `settings` (or call get_settings()) rather than
constructing Settings directly so every module shares one instance.
"""
import warnings
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_SECRET_KEY = "change-this-to-a-random-secret-key-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_REPO_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- service ---
    PROJECT_NAME: str = "BoxShip"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", description="development | staging | production")

    # --- database ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "boxship"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DATABASE_URL: Optional[str] = Field(
        default=None, description="Full SQLAlchemy URL; wins over the DB_* parts"
    )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # --- auth ---
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1)
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)
    AUTH_RATE_LIMIT: str = Field(default="10/minute", description="slowapi limit on register/login")
    RATE_LIMIT_ENABLED: bool = True

    # --- CORS ---
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:5173", "http://localhost:3000"]
    FRONTEND_URL: str = "http://localhost:5173"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # --- logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="json", description="json | text")

    @field_validator("LOG_FORMAT")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v

    # --- shipping ---
    TRACKING_NUMBER_PREFIX: str = "BOX"
    ESTIMATED_DELIVERY_MIN_DAYS: int = Field(default=5, ge=1, description="Business days")
    ESTIMATED_DELIVERY_MAX_DAYS: int = Field(default=10, ge=1, description="Business days")
    DEFAULT_ORIGIN_LOCATION: str = "Origin Facility"
    DEFAULT_UPDATE_LOCATION: str = "System Update"

    # --- pagination ---
    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def check_consistency(self):
        if self.ESTIMATED_DELIVERY_MIN_DAYS > self.ESTIMATED_DELIVERY_MAX_DAYS:
            raise ValueError(
                "ESTIMATED_DELIVERY_MIN_DAYS cannot exceed ESTIMATED_DELIVERY_MAX_DAYS"
            )
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")

        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            if self.is_production:
                raise ValueError("SECRET_KEY must be set in production")
            warnings.warn("Using the default SECRET_KEY; set one before deploying", UserWarning)

        if self.FRONTEND_URL and self.FRONTEND_URL not in self.ALLOWED_ORIGINS:
            self.ALLOWED_ORIGINS = list(self.ALLOWED_ORIGINS) + [self.FRONTEND_URL]
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
