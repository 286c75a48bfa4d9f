"""Application settings and configuration."""

import json
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="Image API Gateway",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )
    environment: Literal["local", "dev", "stage", "prod"] = Field(
        default="local",
        description="Deployment environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    port: int = Field(
        default=3000,
        description="Port the HTTP server listens on"
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Storage Configuration
    storage_type: Literal["azure", "memory"] = Field(
        default="azure",
        description="Blob storage backend for image files"
    )
    azure_storage_connection_string: Optional[str] = Field(
        default=None,
        description="Azure Storage account connection string"
    )
    azure_storage_container_name: str = Field(
        default="images",
        description="Blob container holding the images"
    )
    memory_storage_base_url: str = Field(
        default="http://localhost/images",
        description="URL prefix used by the in-memory backend when building blob URLs"
    )

    @field_validator("azure_storage_container_name")
    @classmethod
    def validate_container_name(cls, v: str) -> str:
        """Ensure the container name is not blank."""
        v = v.strip()
        if not v:
            raise ValueError("azure_storage_container_name cannot be empty")
        return v

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Path to log file (if None, logs to stdout only)"
    )

    # Performance Configuration
    max_upload_size: Optional[int] = Field(
        default=None,
        description="Maximum file upload size in bytes (unbounded if None)"
    )
    worker_count: int = Field(
        default=1,
        description="Number of worker processes"
    )

    @property
    def log_level_numeric(self) -> int:
        """Get numeric log level."""
        return getattr(logging, self.log_level)

    def configure_logging(self) -> None:
        """Configure logging based on settings."""
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.log_file))

        if self.log_json:
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(self.log_format)

        for handler in handlers:
            handler.setFormatter(formatter)

        logging.basicConfig(
            level=self.log_level_numeric,
            handlers=handlers,
            force=True,
        )

        if self.debug:
            logging.getLogger("image_gateway").setLevel(logging.DEBUG)
        else:
            # The Azure SDK logs every HTTP request at INFO
            logging.getLogger("azure").setLevel(logging.WARNING)
            logging.getLogger("httpx").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
