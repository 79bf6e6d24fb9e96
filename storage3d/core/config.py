"""
Configuration settings for the 3D storage MCP service.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


StorageBackendName = Literal["s3", "vercel_blob", "memory"]


class Settings(BaseSettings):
    """Service configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = Field(default="3D File Storage MCP Server", description="Name reported by initialize")
    service_version: str = Field(default="1.0.0", description="Version reported by initialize")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Storage
    storage_backend: StorageBackendName = Field(default="s3", description="Blob store implementation")

    # S3 / MinIO
    s3_endpoint: Optional[str] = Field(default=None, description="S3 compatible endpoint URL")
    s3_access_key: Optional[str] = Field(default=None, description="S3 access key")
    s3_secret_key: Optional[str] = Field(default=None, description="S3 secret key")
    s3_bucket: Optional[str] = Field(default=None, description="Bucket holding models and pages")
    s3_region: str = Field(default="us-east-1", description="Bucket region")
    s3_use_ssl: bool = Field(default=True, description="Use HTTPS when the endpoint has no scheme")
    s3_public_url: Optional[str] = Field(default=None, description="Public base URL override for stored objects")

    # Vercel Blob
    blob_read_write_token: Optional[str] = Field(default=None, description="Vercel Blob read/write token")
    blob_api_url: str = Field(default="https://blob.vercel-storage.com", description="Vercel Blob API base URL")
    blob_timeout_seconds: float = Field(default=30.0, description="Vercel Blob request timeout")

    # In-memory (development and tests)
    memory_base_url: str = Field(default="memory://storage3d", description="URL prefix for in-memory objects")

    @property
    def required_keys(self) -> List[str]:
        """Environment keys the selected backend cannot start without."""
        if self.storage_backend == "s3":
            return ["S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY", "S3_BUCKET"]
        if self.storage_backend == "vercel_blob":
            return ["BLOB_READ_WRITE_TOKEN"]
        return []

    @property
    def optional_keys(self) -> List[str]:
        if self.storage_backend == "s3":
            return ["S3_REGION", "S3_USE_SSL", "S3_PUBLIC_URL"]
        if self.storage_backend == "vercel_blob":
            return ["BLOB_API_URL", "BLOB_TIMEOUT_SECONDS"]
        return ["MEMORY_BASE_URL"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
