"""Tests for the configuration system."""

import pytest
from pydantic import ValidationError

from clearsplit_core.deadlines import RuleOffsets
from clearsplit_services.config import (
    DEFAULT_STORAGE_KEY,
    ClearsplitConfig,
    StorageBackend,
    StorageConfig,
)


class TestStorageConfig:
    """Test suite for StorageConfig."""

    def test_default_values(self, clean_env):
        config = StorageConfig()

        assert config.backend == StorageBackend.FILE
        assert config.path == "./data/clearsplit.json"
        assert config.key == DEFAULT_STORAGE_KEY == "financial-organizer:v1"

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("CLEARSPLIT_STORAGE_BACKEND", "memory")
        clean_env.setenv("CLEARSPLIT_STORAGE_KEY", " custom ")

        config = StorageConfig()

        assert config.backend == StorageBackend.MEMORY
        assert config.key == "custom"

    def test_empty_key_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            StorageConfig(key="  ")


class TestClearsplitConfig:
    """Test suite for ClearsplitConfig."""

    def test_default_values(self, clean_env):
        config = ClearsplitConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"
        assert config.log_json is False
        assert config.history_limit == 10
        assert config.default_jurisdiction == "AZ"
        assert config.deadline_rules == RuleOffsets()
        assert not config.is_production
        assert not config.is_debug

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("CLEARSPLIT_ENV", "Production")
        clean_env.setenv("CLEARSPLIT_LOG_LEVEL", "debug")
        clean_env.setenv("CLEARSPLIT_HISTORY_LIMIT", "25")
        clean_env.setenv("CLEARSPLIT_DEFAULT_JURISDICTION", " ca ")

        config = ClearsplitConfig()

        assert config.is_production
        assert config.is_debug
        assert config.history_limit == 25
        assert config.default_jurisdiction == "CA"

    def test_invalid_env(self, clean_env):
        with pytest.raises(ValidationError):
            ClearsplitConfig(env="staging")

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            ClearsplitConfig(log_level="loud")

    def test_history_limit_bounds(self, clean_env):
        with pytest.raises(ValidationError):
            ClearsplitConfig(history_limit=0)
        with pytest.raises(ValidationError):
            ClearsplitConfig(history_limit=101)

    def test_jurisdiction_length(self, clean_env):
        with pytest.raises(ValidationError):
            ClearsplitConfig(default_jurisdiction="Arizona")

    def test_nested_configs(self, clean_env):
        config = ClearsplitConfig(
            storage=StorageConfig(backend=StorageBackend.MEMORY),
            deadline_rules=RuleOffsets(mediation_days=90),
        )
        assert config.storage.backend == StorageBackend.MEMORY
        assert config.deadline_rules.mediation_days == 90
