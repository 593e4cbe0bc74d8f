"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, upload directory, limits)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Every value has a default so the app runs with no .env at all.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Server
    HOST: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to"
    )
    PORT: int = Field(
        default=3000,
        description="Listening port"
    )

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="userDB",
        description="MongoDB database name"
    )
    USERS_COLLECTION: str = Field(
        default="users",
        description="Collection holding user registration records"
    )

    # Uploads
    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Directory uploaded files are written to"
    )
    MAX_UPLOAD_SIZE: int = Field(
        default=1_000_000,
        gt=0,
        description="Per-file size limit in bytes"
    )
    MAX_ATTACHMENTS: int = Field(
        default=10,
        ge=0,
        description="Maximum number of additional files per registration"
    )
    MAX_REQUEST_SIZE: int = Field(
        default=12_000_000,
        gt=0,
        description="Request body cap in bytes, checked against Content-Length"
    )
    SERVE_UPLOADS_STATIC: bool = Field(
        default=True,
        description="Serve the upload directory as static files at /"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings(app_settings: Settings = settings):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not app_settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not app_settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if not app_settings.UPLOAD_DIR:
        errors.append("UPLOAD_DIR is required")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
