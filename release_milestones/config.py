"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from release_milestones.milestone import DEFAULT_TITLE_PREFIX


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so validators can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")
    per_page: int = Field(default=100, ge=1, le=100, description="Items requested per page")


class RepositoryConfig(BaseSettings):
    """Target repository."""

    model_config = SettingsConfigDict(env_prefix="REPOSITORY_", extra="ignore")

    owner: str = Field(default="WordPress", description="Repository owner")
    name: str = Field(default="gutenberg", description="Repository name")


class MilestonesConfig(BaseSettings):
    """How milestone titles map to release series."""

    model_config = SettingsConfigDict(env_prefix="MILESTONES_", extra="ignore")

    title_prefix: str = Field(default=DEFAULT_TITLE_PREFIX, description="Literal prefix before the series")
    strict_prefix: bool = Field(default=False, description="Fail when a title lacks the prefix")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    milestones: MilestonesConfig = Field(default_factory=MilestonesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file yields defaults (still overridable through env, e.g.
    REPOSITORY_OWNER, LOGGING_LEVEL). Secrets: GITHUB_TOKEN or
    GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw)

    # Explicit env wins over YAML for the target repository
    repository_raw = dict(raw.get("repository") or {})
    for key in ("owner", "name"):
        env_value = _current_env.get(f"REPOSITORY_{key.upper()}")
        if env_value:
            repository_raw[key] = env_value

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        repository=RepositoryConfig(**repository_raw),
        milestones=MilestonesConfig(**(raw.get("milestones") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
