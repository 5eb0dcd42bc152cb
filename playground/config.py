"""
Application configuration using Pydantic Settings.

All environment variables are accessed through this config object.
Components receive a Settings instance explicitly instead of reading
module constants, so tests can point them at isolated directories.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP listener binds to",
    )
    PORT: int = Field(
        default=8080,
        description="Port the HTTP listener binds to",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:8080"],
        description="CORS allowed origins",
    )

    # Static Content Configuration
    STATIC_DIR: str = Field(
        default="./static",
        description="Directory served at / (upload UI and uploaded files)",
    )
    SERVE_STATIC: bool = Field(
        default=True,
        description="Mount the static directory when it exists at startup",
    )

    # Upload Configuration
    UPLOAD_DIR: str = Field(
        default="./static/upload",
        description="Directory where uploaded files are stored",
    )
    UPLOAD_API_PATH: str = Field(
        default="/api/upload/",
        description="Path of the upload REST endpoint",
    )
    UPLOAD_FIELD_NAME: str = Field(
        default="inputFile",
        description="Multipart form field carrying the uploaded file",
    )
    MAX_UPLOAD_SIZE: int = Field(
        default=32 * 1024 * 1024,
        description="Maximum upload size in bytes (32MB)",
    )
    CHUNK_SIZE: int = Field(
        default=1024 * 1024,
        description="Read/write chunk size in bytes when copying uploads",
    )


# Global settings instance
settings = Settings()
