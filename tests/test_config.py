"""Tests for commitpilot.lib.config module."""

import pytest
from pathlib import Path
from unittest.mock import patch

from commitpilot.lib.config import (
    AppConfig,
    ConfigError,
    ConfigStore,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    RepositoryContext,
    StaticConfig,
    config_from_env,
    config_to_env,
    default_config_path,
    load_config,
)
from commitpilot.lib.types import FailureKind


class TestConfigFromEnv:
    """Test config_from_env defaults and parsing."""

    @patch.dict("os.environ", {}, clear=True)
    def test_defaults(self):
        config = config_from_env({})
        assert config.repository_path == ""
        assert config.ssh_key_path == ""
        assert config.api_key == ""
        assert config.enabled is True
        assert config.model == DEFAULT_MODEL
        assert config.max_tokens == DEFAULT_MAX_TOKENS
        assert config.base_branch == "main"

    @patch.dict("os.environ", {"ANTHROPIC_API_KEY": "from-env"})
    def test_api_key_falls_back_to_environment(self):
        assert config_from_env({}).api_key == "from-env"

    @patch.dict("os.environ", {"ANTHROPIC_API_KEY": "from-env"})
    def test_file_api_key_wins(self):
        assert config_from_env({"ANTHROPIC_API_KEY": "from-file"}).api_key == "from-file"

    def test_enabled_false(self):
        assert config_from_env({"ENABLED": "False"}).enabled is False

    def test_invalid_max_tokens_defaults_with_warning(self, caplog):
        config = config_from_env({"MAX_TOKENS": "lots"})
        assert config.max_tokens == DEFAULT_MAX_TOKENS
        assert "Invalid MAX_TOKENS 'lots'" in caplog.text

    def test_negative_max_tokens_defaults(self):
        assert config_from_env({"MAX_TOKENS": "-5"}).max_tokens == DEFAULT_MAX_TOKENS

    def test_repository_context(self):
        config = config_from_env({"REPOSITORY_PATH": "/r", "SSH_KEY_PATH": "/k", "GH_EXECUTABLE": "/opt/gh"})
        assert config.repository == RepositoryContext(
            repository_path="/r", ssh_key_path="/k", git_executable="git", gh_executable="/opt/gh"
        )


class TestConfigToEnv:
    """Test config_to_env."""

    def test_omits_empty_values(self):
        env = config_to_env(AppConfig(repository_path="/r"))
        assert env["REPOSITORY_PATH"] == "/r"
        assert "SSH_KEY_PATH" not in env
        assert env["ENABLED"] == "true"
        assert env["MAX_TOKENS"] == str(DEFAULT_MAX_TOKENS)

    @patch.dict("os.environ", {}, clear=True)
    def test_round_trip(self):
        config = AppConfig(repository_path="/r", ssh_key_path="/k", api_key="sk", enabled=False, max_tokens=512)
        assert config_from_env(config_to_env(config)) == config


class TestConfigStore:
    """Test ConfigStore file handling."""

    @patch.dict("os.environ", {}, clear=True)
    def test_missing_file_gives_defaults(self, tmp_path):
        store = ConfigStore(tmp_path / "settings.env")
        assert store.load() == AppConfig()

    def test_rereads_file_on_every_load(self, tmp_path):
        path = tmp_path / "settings.env"
        store = ConfigStore(path)
        path.write_text('REPOSITORY_PATH="/first"\n')
        assert store.load().repository_path == "/first"
        path.write_text('REPOSITORY_PATH="/second"\n')
        assert store.load().repository_path == "/second"

    def test_invalid_file_raises_config_error(self, tmp_path):
        path = tmp_path / "settings.env"
        path.write_text("not valid\n")
        with pytest.raises(ConfigError):
            ConfigStore(path).load()

    def test_unreadable_file_raises_config_error(self, tmp_path):
        path = tmp_path / "settings.env"
        path.mkdir()
        with pytest.raises(ConfigError, match="Invalid settings file"):
            ConfigStore(path).load()

    @patch.dict("os.environ", {}, clear=True)
    def test_save_then_load(self, tmp_path):
        store = ConfigStore(tmp_path / "settings.env")
        config = AppConfig(repository_path="/r", ssh_key_path="/k", api_key="sk-x")
        store.save(config)
        assert store.load() == config

    def test_set_value(self, tmp_path):
        store = ConfigStore(tmp_path / "settings.env")
        store.set_value("REPOSITORY_PATH", "/repo")
        config = store.set_value("SSH_KEY_PATH", "/k")
        assert config.repository_path == "/repo"
        assert store.load().ssh_key_path == "/k"

    @patch.dict("os.environ", {"ANTHROPIC_API_KEY": "from-env"})
    def test_set_value_does_not_persist_environment_key(self, tmp_path):
        path = tmp_path / "settings.env"
        ConfigStore(path).set_value("REPOSITORY_PATH", "/repo")
        assert "from-env" not in path.read_text()

    def test_set_unknown_key(self, tmp_path):
        with pytest.raises(ConfigError, match="Unknown setting"):
            ConfigStore(tmp_path / "settings.env").set_value("NOPE", "x")

    def test_set_forbidden_value(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigStore(tmp_path / "settings.env").set_value("SSH_KEY_PATH", "a;b")


class TestDefaultConfigPath:
    """Test default_config_path."""

    @patch.dict("os.environ", {"COMMITPILOT_HOME": "/custom"})
    def test_honours_commitpilot_home(self):
        assert default_config_path() == Path("/custom/settings.env")

    @patch.dict("os.environ", {}, clear=True)
    def test_default_under_home(self):
        with patch("commitpilot.lib.config.Path.home", return_value=Path("/home/me")):
            assert default_config_path() == Path("/home/me/.config/commitpilot/settings.env")


class TestStaticConfig:
    """Test StaticConfig."""

    def test_returns_same_config(self):
        config = AppConfig(repository_path="/r")
        assert StaticConfig(config).load() is config


class TestLoadConfig:
    """Test load_config."""

    def test_success(self):
        config = AppConfig(repository_path="/r")
        outcome = load_config(StaticConfig(config))
        assert outcome.ok
        assert outcome.value is config

    def test_invalid_file_becomes_failure(self, tmp_path):
        path = tmp_path / "settings.env"
        path.write_text("not valid\n")
        outcome = load_config(ConfigStore(path))
        assert not outcome.ok
        assert outcome.kind is FailureKind.CONFIGURATION_MISSING
        assert str(path) in outcome.reason
