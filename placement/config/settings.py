"""
Environment configuration for the placement intake engine.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = "Placement Intake Engine"
    API_VERSION: str = "v1"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    # Database configuration
    DATABASE_URL: str = "sqlite:///./placement.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10

    # Identity resolution
    IDENTITY_STORE_PATH: str = Field(
        default_factory=lambda: str(Path.home() / ".placement" / "identity.json")
    )
    IDENTITY_COOKIE_NAME: str = "client_uuid"
    IDENTITY_HEADER_NAME: str = "X-Client-UUID"

    # Onboarding
    ONBOARDING_PROFILE: str = "standard"  # standard | single
    ONBOARDING_PERSISTENCE: str = "batch"  # batch | eager

    # Allocation policy
    REQUIRE_ONBOARDED_FOR_INTEREST: bool = True

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # text | json
    LOG_FILE: Optional[str] = None
    ENABLE_STRUCTURED_LOGGING: bool = False

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator('ONBOARDING_PROFILE')
    @classmethod
    def validate_onboarding_profile(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"standard", "single"}:
            raise ValueError(f"Unknown onboarding profile: {v}")
        return v

    @field_validator('ONBOARDING_PERSISTENCE')
    @classmethod
    def validate_onboarding_persistence(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"batch", "eager"}:
            raise ValueError(f"Unknown onboarding persistence mode: {v}")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper()

    def get_database_url(self) -> str:
        """Get the SQLAlchemy database URL"""
        return self.DATABASE_URL

    def is_sqlite(self) -> bool:
        """Check if the configured store is SQLite"""
        return self.DATABASE_URL.startswith("sqlite")

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
