"""
Configuration and settings for the registration backend.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Annotated, Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from shared.constants import (
    DEFAULT_REGISTRATIONS_FILENAME,
    DEFAULT_REGISTRATIONS_OBJECT_KEY,
    REGISTRATIONS_COLLECTION,
)

RegistrationBackend = Literal["csv", "sql", "firestore", "object", "memory"]


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Which persistence collaborator stores registrations.
    registration_backend: RegistrationBackend = Field(default="csv")

    # CSV file storage. A persistent disk mount wins over data_dir.
    data_dir: str = Field(default="data")
    render_persistent_dir: Optional[str] = Field(default=None)
    registrations_filename: str = Field(default=DEFAULT_REGISTRATIONS_FILENAME)

    # Database (Postgres expected)
    database_url: Optional[str] = Field(default=None)

    # Firestore
    firestore_collection: str = Field(default=REGISTRATIONS_COLLECTION)

    # S3-compatible storage (Tencent COS)
    cos_endpoint: Optional[str] = Field(default=None)
    cos_region: Optional[str] = Field(default=None)
    cos_bucket: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    registrations_object_key: str = Field(default=DEFAULT_REGISTRATIONS_OBJECT_KEY)

    # HTTP surface
    # Comma-separated or a JSON list.
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )
    admin_token: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                return json.loads(text)
            return [origin.strip() for origin in text.split(",") if origin.strip()]
        return value

    @property
    def resolved_data_dir(self) -> str:
        if self.render_persistent_dir:
            return os.path.join(self.render_persistent_dir, "data")
        return self.data_dir

    @property
    def registrations_file(self) -> str:
        return os.path.join(self.resolved_data_dir, self.registrations_filename)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
