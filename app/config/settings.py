"""
Environment configuration for the dormitory open-data service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from typing import Annotated, List, Optional, Union
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
from dotenv import load_dotenv

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
    APP_NAME: str = "Student Dormitory Open Data"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    # Comma-separated or JSON list in the environment
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    # Database configuration - support both individual fields and DATABASE_URL
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "dormitories"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_FILE: Optional[str] = None
    ENABLE_STRUCTURED_LOGGING: bool = False

    # Open data tunables
    ROOM_SEARCH_DEFAULT_LIMIT: int = Field(default=50, ge=1)
    ROOM_SEARCH_MAX_LIMIT: int = Field(default=1000, ge=1)
    COMPARISON_MAX_DORMS: int = Field(default=10, ge=1)
    TOP_DORMS_COUNT: int = Field(default=5, ge=1)
    TREND_TOLERANCE_PERCENT: float = Field(default=5.0, ge=0)
    ACADEMIC_YEAR_START_MONTH: int = Field(default=10, ge=1, le=12)
    HEATMAP_HIGH_THRESHOLD: float = Field(default=80.0, ge=0, le=100)
    HEATMAP_MEDIUM_THRESHOLD: float = Field(default=50.0, ge=0, le=100)
    EXPORT_CSV_DELIMITER: str = Field(default=",", min_length=1, max_length=1)

    # Validators
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
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only plain text and JSON log output are supported"""
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name"""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v

    @model_validator(mode="after")
    def validate_open_data_bounds(self) -> "Settings":
        """Cross-field checks on the open-data tunables"""
        if self.HEATMAP_MEDIUM_THRESHOLD > self.HEATMAP_HIGH_THRESHOLD:
            raise ValueError("HEATMAP_MEDIUM_THRESHOLD must not exceed HEATMAP_HIGH_THRESHOLD")
        if self.ROOM_SEARCH_DEFAULT_LIMIT > self.ROOM_SEARCH_MAX_LIMIT:
            raise ValueError("ROOM_SEARCH_DEFAULT_LIMIT must not exceed ROOM_SEARCH_MAX_LIMIT")
        return self

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # Construct from individual components
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    def is_sqlite(self) -> bool:
        """Check whether the configured store is SQLite"""
        return self.get_database_url().startswith("sqlite")

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
