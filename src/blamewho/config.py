"""Configuration management for blamewho.

Two layers of configuration exist:

  - ``BotConfig``: how the bot itself talks to GitHub and git (host, token,
    email aliases, debug cache). Loaded from a JSON file next to the bot.
  - ``RepoConfig``: per-repository reviewer policy, read from
    ``.blamewho.json`` at the root of the repository under review.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from blamewho.exceptions import ConfigError

BOT_CONFIG_FILE = "blamewho.json"
REPO_CONFIG_FILE = ".blamewho.json"


class WhitelistUser(BaseModel):
    """A user that is always notified when one of their paths changes."""

    name: str
    files: list[str] = Field(default_factory=list)


class RepoConfig(BaseModel):
    """Reviewer policy for a single repository."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    max_reviewers: int = Field(default=5, ge=0, alias="maxReviewers")
    num_files_to_check: int = Field(default=5, ge=0, alias="numFilesToCheck")
    user_blacklist: list[str] = Field(default_factory=list, alias="userBlacklist")
    user_blacklist_for_pr: list[str] = Field(default_factory=list, alias="userBlacklistForPR")
    file_blacklist: list[str] = Field(default_factory=list, alias="fileBlacklist")
    required_orgs: list[str] = Field(default_factory=list, alias="requiredOrgs")
    always_notify_for_paths: list[WhitelistUser] = Field(
        default_factory=list, alias="alwaysNotifyForPaths"
    )
    find_potential_reviewers: bool = Field(default=True, alias="findPotentialReviewers")


class GHEConfig(BaseModel):
    """GitHub (or GitHub Enterprise) API location."""

    host: str = "api.github.com"
    path_prefix: str = ""
    protocol: str = "https"
    port: int | None = None
    email_domain: str = ""  # enterprise emails "<login>@<domain>"

    @property
    def api_url(self) -> str:
        port = f":{self.port}" if self.port else ""
        return f"{self.protocol}://{self.host}{port}{self.path_prefix.rstrip('/')}"


class BotConfig(BaseModel):
    """Full bot configuration."""

    ghe: GHEConfig = Field(default_factory=GHEConfig)
    email_aliases: dict[str, str] = Field(default_factory=dict)
    github_token_env: str = "GITHUB_TOKEN"
    git_dir: str | None = None
    required_org: str | None = None
    enable_caching_for_debugging: bool = False
    cache_dir: str = ".blamewho-cache"
    blame_max_bytes: int = 50_000 * 1024

    @property
    def github_token(self) -> str | None:
        return os.environ.get(self.github_token_env)

    @property
    def effective_git_dir(self) -> str | None:
        return self.git_dir or os.environ.get("GITHUB_DIR")

    @property
    def effective_required_org(self) -> str | None:
        return self.required_org or os.environ.get("REQUIRED_ORG")


def load_bot_config(path: Path | None = None) -> BotConfig:
    """Load the bot configuration from a JSON file, or return defaults."""
    config_path = path or Path.cwd() / BOT_CONFIG_FILE
    if not config_path.exists():
        return BotConfig()
    try:
        data = json.loads(config_path.read_text())
        return BotConfig(**data)
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid bot config {config_path}: {e}") from e


def parse_repo_config(text: str | None) -> RepoConfig:
    """Parse the JSON contents of a repository config file over the defaults."""
    if not text or not text.strip():
        return RepoConfig()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid repository config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Repository config must be a JSON object")
    try:
        return RepoConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid repository config: {e}") from e


def load_repo_config(path: Path) -> RepoConfig:
    """Load a repository config from a local file."""
    if not path.exists():
        raise ConfigError(f"Repository config not found: {path}")
    return parse_repo_config(path.read_text())


def with_required_org(config: RepoConfig, org: str | None) -> RepoConfig:
    """Return a copy of `config` that also requires membership of `org`."""
    if not org or org in config.required_orgs:
        return config
    return config.model_copy(update={"required_orgs": [*config.required_orgs, org]})
