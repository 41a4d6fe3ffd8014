"""Typed settings for the GitHub side of the cleanup.

Settings are layered: built-in defaults, then an optional TOML file, then
environment variables. Outside CI a ``.env`` file next to the checkout is
loaded first so a developer can keep the token out of their shell profile.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "DEFAULT_OWNER",
    "DEFAULT_MAIN_REPO",
    "DEFAULT_NIGHTLY_REPO",
    "DEFAULT_API_URL",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "CONFIG_FILE_NAME",
    "TOKEN_ENV_VARS",
]

DEFAULT_OWNER = "electron"
DEFAULT_MAIN_REPO = "electron"
DEFAULT_NIGHTLY_REPO = "nightlies"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

CONFIG_FILE_NAME = "relclean.toml"

# First non-empty wins.
TOKEN_ENV_VARS = ("ELECTRON_GITHUB_TOKEN", "GITHUB_TOKEN")
OWNER_ENV_VAR = "RELCLEAN_GITHUB_OWNER"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when settings cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    """Where releases live and how to reach them.

    Attributes:
        owner: Account or organisation owning both repositories
        main_repo: Repository of the main release channel
        nightly_repo: Repository of the nightly release channel
        api_url: Base URL of the GitHub REST API
        timeout: Per-request HTTP timeout in seconds
        token: API token, None when no credential was found
    """

    owner: str = DEFAULT_OWNER
    main_repo: str = DEFAULT_MAIN_REPO
    nightly_repo: str = DEFAULT_NIGHTLY_REPO
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    token: str | None = None

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        timeout = get_number(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"github.timeout must be positive, got {timeout}")

        return cls(
            owner=get_str(github, "owner") or DEFAULT_OWNER,
            main_repo=get_str(github, "main_repo") or DEFAULT_MAIN_REPO,
            nightly_repo=get_str(github, "nightly_repo") or DEFAULT_NIGHTLY_REPO,
            api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
            timeout=timeout or DEFAULT_HTTP_TIMEOUT_SECONDS,
        )

    def with_env(self, env: Mapping[str, str]) -> Settings:
        """Return a copy with environment overrides applied."""
        token: str | None = None
        for name in TOKEN_ENV_VARS:
            value = env.get(name, "").strip()
            if value:
                token = value
                break

        owner = env.get(OWNER_ENV_VAR, "").strip() or self.owner
        return replace(self, token=token, owner=owner)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_dotenv_unless_ci(repo_dir: Path, env: Mapping[str, str] | None = None) -> bool:
    """Load ``<repo_dir>/.env`` into os.environ unless running in CI.

    Variables already set in the environment are left untouched.

    Returns:
        True if a .env file was loaded
    """
    current = os.environ if env is None else env
    if current.get("CI"):
        return False

    dotenv_path = repo_dir / ".env"
    if not dotenv_path.is_file():
        return False
    return load_dotenv(dotenv_path, override=False)


def load_settings(
    *,
    repo_dir: Path,
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[Settings, ConfigError]:
    """Build Settings from defaults, a TOML file and the environment.

    Args:
        repo_dir: Local checkout; holds the optional relclean.toml and .env
        config_path: Explicit TOML file (must exist when given)
        env: Environment mapping (os.environ if None)

    Returns:
        Ok(Settings) on success, Err(ConfigError) on an unreadable or invalid file
    """
    if env is None:
        load_dotenv_unless_ci(repo_dir)
        env = os.environ

    path = config_path
    if path is None:
        candidate = repo_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            path = candidate

    settings = Settings()
    if path is not None:
        parsed = _parse_toml(path)
        if isinstance(parsed, Err):
            return parsed
        try:
            settings = Settings.from_dict(parsed.value)
        except (KeyError, TypeError, ValueError) as e:
            return Err(ConfigError(f"Invalid config structure: {e}", path=path))

    return Ok(settings.with_env(env))
