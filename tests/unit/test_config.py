# tests/unit/test_config.py
"""
Unit tests for configuration loading.
"""

import pytest

from meetnotes.config import ConfigLoader, MeetnotesConfig


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "default.yaml").write_text(
        "environment: development\n"
        "database_path: default.db\n"
        "ai_model: claude-3-5-sonnet-20241022\n"
        "log_level: INFO\n"
    )
    (tmp_path / "staging.yaml").write_text(
        "environment: staging\n"
        "database_path: staging.db\n"
    )
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "MEETNOTES_ENV", "MEETNOTES_DB_PATH", "MEETNOTES_AI_MODEL",
        "MEETNOTES_AI_MAX_TOKENS", "MEETNOTES_LOG_LEVEL", "MEETNOTES_API_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigLoader:

    def test_defaults_without_files(self, tmp_path, clean_env):
        config = ConfigLoader(str(tmp_path / "missing")).get()

        assert isinstance(config, MeetnotesConfig)
        assert config.database_path == "meetnotes.db"
        assert config.ai_model == "claude-3-5-sonnet-20241022"
        assert config.ai_max_tokens == 2048

    def test_default_yaml(self, config_dir, clean_env):
        config = ConfigLoader(str(config_dir)).get()

        assert config.environment == "development"
        assert config.database_path == "default.db"

    def test_environment_file_overrides_default(self, config_dir, clean_env):
        clean_env.setenv("MEETNOTES_ENV", "staging")

        config = ConfigLoader(str(config_dir)).get()

        assert config.environment == "staging"
        assert config.database_path == "staging.db"
        assert config.log_level == "INFO"

    def test_env_vars_override_files(self, config_dir, clean_env):
        clean_env.setenv("MEETNOTES_ENV", "staging")
        clean_env.setenv("MEETNOTES_DB_PATH", "/tmp/override.db")
        clean_env.setenv("MEETNOTES_AI_MODEL", "gpt-4o-mini")
        clean_env.setenv("MEETNOTES_AI_MAX_TOKENS", "512")
        clean_env.setenv("MEETNOTES_API_PORT", "9001")

        config = ConfigLoader(str(config_dir)).get()

        assert config.database_path == "/tmp/override.db"
        assert config.ai_model == "gpt-4o-mini"
        assert config.ai_max_tokens == 512
        assert config.api_port == 9001

    def test_invalid_yaml_is_ignored(self, tmp_path, clean_env):
        (tmp_path / "default.yaml").write_text("database_path: [unclosed\n")

        config = ConfigLoader(str(tmp_path)).get()

        assert config.database_path == "meetnotes.db"

    def test_reload_picks_up_changes(self, config_dir, clean_env):
        loader = ConfigLoader(str(config_dir))
        clean_env.setenv("MEETNOTES_DB_PATH", "reloaded.db")

        loader.reload()

        assert loader.get().database_path == "reloaded.db"
