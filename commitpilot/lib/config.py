"""
Configuration loaders for commitpilot.

Settings live in a settings.env file. Components are handed a config source
and call load() at the start of every operation, so edits to the file take
effect on the next call without restarting anything.
"""

import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path

from . import envparse
from .types import Failure, FailureKind, Outcome, Success

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 200
DEFAULT_BASE_BRANCH = "main"

# Settings file key for each AppConfig field
ENV_KEYS = {
    "repository_path": "REPOSITORY_PATH",
    "ssh_key_path": "SSH_KEY_PATH",
    "api_key": "ANTHROPIC_API_KEY",
    "enabled": "ENABLED",
    "model": "MODEL",
    "max_tokens": "MAX_TOKENS",
    "api_url": "API_URL",
    "base_branch": "BASE_BRANCH",
    "git_executable": "GIT_EXECUTABLE",
    "gh_executable": "GH_EXECUTABLE",
}


class ConfigError(Exception):
    """Settings file exists but cannot be parsed."""
    pass


@dataclass(frozen=True)
class RepositoryContext:
    """What git and gh need to run against the user's repository."""
    repository_path: str
    ssh_key_path: str = ""
    git_executable: str = "git"
    gh_executable: str = "gh"


@dataclass(frozen=True)
class AppConfig:
    """All user settings."""
    repository_path: str = ""
    ssh_key_path: str = ""
    api_key: str = ""
    enabled: bool = True
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_url: str = DEFAULT_API_URL
    base_branch: str = DEFAULT_BASE_BRANCH
    git_executable: str = "git"
    gh_executable: str = "gh"

    @property
    def repository(self) -> RepositoryContext:
        return RepositoryContext(
            repository_path=self.repository_path,
            ssh_key_path=self.ssh_key_path,
            git_executable=self.git_executable,
            gh_executable=self.gh_executable,
        )


def default_config_path() -> Path:
    """Settings file location, honouring $COMMITPILOT_HOME."""
    home = os.environ.get("COMMITPILOT_HOME")
    if home:
        return Path(home) / "settings.env"
    return Path.home() / ".config" / "commitpilot" / "settings.env"


def _parse_max_tokens(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        logger.warning(f"Invalid MAX_TOKENS '{raw}', using {DEFAULT_MAX_TOKENS}")
        return DEFAULT_MAX_TOKENS
    return value


def config_from_env(env: dict) -> AppConfig:
    """Build AppConfig from parsed settings (missing keys take defaults)."""
    return AppConfig(
        repository_path=env.get("REPOSITORY_PATH", ""),
        ssh_key_path=env.get("SSH_KEY_PATH", ""),
        api_key=env.get("ANTHROPIC_API_KEY") or os.environ.get("ANTHROPIC_API_KEY", ""),
        enabled=env.get("ENABLED", "true").lower() == "true",
        model=env.get("MODEL", DEFAULT_MODEL),
        max_tokens=_parse_max_tokens(env.get("MAX_TOKENS", str(DEFAULT_MAX_TOKENS))),
        api_url=env.get("API_URL", DEFAULT_API_URL),
        base_branch=env.get("BASE_BRANCH", DEFAULT_BASE_BRANCH),
        git_executable=env.get("GIT_EXECUTABLE", "git"),
        gh_executable=env.get("GH_EXECUTABLE", "gh"),
    )


def config_to_env(config: AppConfig) -> dict:
    """Inverse of config_from_env; empty values are omitted."""
    env = {}
    for field_name, value in asdict(config).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        value = str(value)
        if value:
            env[ENV_KEYS[field_name]] = value
    return env


class ConfigStore:
    """Config source backed by a settings.env file, re-read on every load()."""

    def __init__(self, path: Path | None = None):
        self.path = path or default_config_path()

    def _read_env(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return envparse.load_env(str(self.path))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Invalid settings file {self.path}: {e}") from e

    def load(self) -> AppConfig:
        return config_from_env(self._read_env())

    def save(self, config: AppConfig) -> None:
        try:
            envparse.write_env(str(self.path), config_to_env(config))
        except ValueError as e:
            raise ConfigError(str(e)) from e
        logger.info(f"Saved settings to {self.path}")

    def set_value(self, key: str, value: str) -> AppConfig:
        """
        Update a single setting by its file key and persist it.

        Only the file's own entries are written back, so a key picked up
        from the process environment is never copied into the file.
        """
        if key not in ENV_KEYS.values():
            raise ConfigError(f"Unknown setting '{key}'. Valid: {', '.join(ENV_KEYS.values())}")
        env = self._read_env()
        env[key] = value
        try:
            envparse.write_env(str(self.path), env)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        logger.info(f"Updated {key} in {self.path}")
        return config_from_env(env)


class StaticConfig:
    """Config source that always returns the same AppConfig."""

    def __init__(self, config: AppConfig):
        self.config = config

    def load(self) -> AppConfig:
        return self.config


def load_config(source) -> Outcome[AppConfig]:
    """
    Load from a config source, returning a Failure instead of raising.

    Clients call this at the start of every operation so that a settings
    file broken between two calls is reported like any other failure.
    """
    try:
        return Success(source.load())
    except ConfigError as e:
        logger.warning(f"Could not load settings: {e}")
        return Failure(str(e), FailureKind.CONFIGURATION_MISSING)
