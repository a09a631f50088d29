"""Configuration system for Clearsplit.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults.

Usage:
    from clearsplit_services.config import ClearsplitConfig

    # Load from environment variables and .env file
    config = ClearsplitConfig()

    # Access storage settings
    print(config.storage.backend)
    print(config.storage.path)

    if config.is_debug:
        print("Debug logging enabled")
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clearsplit_core.deadlines import RuleOffsets
from clearsplit_core.reconcile import DEFAULT_JURISDICTION
from clearsplit_core.store import HISTORY_LIMIT

DEFAULT_STORAGE_KEY = "financial-organizer:v1"


class StorageBackend(str, Enum):
    """Supported persistence backends."""

    MEMORY = "memory"
    FILE = "file"


class StorageConfig(BaseSettings):
    """Persistence settings.

    Environment Variables:
        CLEARSPLIT_STORAGE_BACKEND: memory or file
        CLEARSPLIT_STORAGE_PATH: JSON file used by the file backend
        CLEARSPLIT_STORAGE_KEY: Key the document is stored under
    """

    model_config = SettingsConfigDict(
        env_prefix="CLEARSPLIT_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="Persistence backend to use",
    )
    path: Optional[str] = Field(
        default="./data/clearsplit.json",
        description="Path of the JSON file for the file backend",
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        description="Well-known key the document is stored under",
    )

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Ensure the storage key is not empty."""
        if not v or not v.strip():
            raise ValueError("Storage key cannot be empty")
        return v.strip()


class ClearsplitConfig(BaseSettings):
    """Root configuration for Clearsplit.

    Environment Variables:
        CLEARSPLIT_ENV: Environment name (development, test, production)
        CLEARSPLIT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        CLEARSPLIT_LOG_JSON: Render logs as JSON instead of console output
        CLEARSPLIT_HISTORY_LIMIT: Undo depth (default 10)
        CLEARSPLIT_DEFAULT_JURISDICTION: State code for new documents
        CLEARSPLIT_DEADLINE_RULES: JSON object of deadline offsets in days,
            e.g. {"mediation_days": 90}

    Example:
        config = ClearsplitConfig(
            storage=StorageConfig(backend=StorageBackend.MEMORY),
            log_level="debug",
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="CLEARSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, test, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    history_limit: int = Field(
        default=HISTORY_LIMIT,
        ge=1,
        le=100,
        description="Number of undo snapshots kept",
    )
    default_jurisdiction: str = Field(
        default=DEFAULT_JURISDICTION,
        min_length=2,
        max_length=2,
        description="Two-letter state code used for new documents",
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    deadline_rules: RuleOffsets = Field(default_factory=RuleOffsets)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("default_jurisdiction", mode="before")
    @classmethod
    def normalize_jurisdiction(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        return self.log_level == "DEBUG"


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "StorageBackend",
    "StorageConfig",
    "ClearsplitConfig",
]
