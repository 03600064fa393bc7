"""Typed configuration loading.

The constants the scanner, root resolver and branch cleaner depend on live in
a `Config` value that is passed to them explicitly. They can be overridden by
an optional TOML file:

    [scan]
    marker = ".git"

    [root]
    env_var = "DEV_DIR"

    [clean]
    branches = ["develop", "main", "master"]

    [git]
    executable = "git"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from please.platform.detection import default_git_executable
from please.platform.paths import user_config_dir

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_ENV_VAR",
    "Config",
    "ConfigError",
    "DEFAULT_BRANCH_PRIORITY",
    "DEFAULT_ENV_VAR",
    "GIT_MARKER_DIR",
    "default_config_path",
    "load_config",
    "load_config_or_default",
]

GIT_MARKER_DIR = ".git"
DEFAULT_ENV_VAR = "DEV_DIR"
DEFAULT_BRANCH_PRIORITY: tuple[str, ...] = ("develop", "main", "master")

# Points at an alternative config file
CONFIG_ENV_VAR = "PLEASE_CONFIG"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Runtime configuration.

    Attributes:
        marker_dir: Directory name whose presence marks a repository.
        default_env_var: Environment variable holding the discovery root.
        branch_priority: Cleanup target candidates, most preferred first.
        git_executable: Explicit git binary; None selects the platform default.
    """

    marker_dir: str = GIT_MARKER_DIR
    default_env_var: str = DEFAULT_ENV_VAR
    branch_priority: tuple[str, ...] = DEFAULT_BRANCH_PRIORITY
    git_executable: str | None = None

    @property
    def git(self) -> str:
        return self.git_executable or default_git_executable()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: `clean.branches` is present but not a non-empty list
                of strings.
        """
        scan: StrDict = get_table(data, "scan") or {}
        root: StrDict = get_table(data, "root") or {}
        clean: StrDict = get_table(data, "clean") or {}
        git: StrDict = get_table(data, "git") or {}

        branches: tuple[str, ...] = DEFAULT_BRANCH_PRIORITY
        if "branches" in clean:
            parsed = get_str_list(clean, "branches")
            if not parsed:
                raise ValueError("clean.branches must be a non-empty list of branch names")
            branches = tuple(parsed)

        return cls(
            marker_dir=get_str(scan, "marker") or GIT_MARKER_DIR,
            default_env_var=get_str(root, "env_var") or DEFAULT_ENV_VAR,
            branch_priority=branches,
            git_executable=get_str(git, "executable"),
        )


def default_config_path() -> Path:
    """Config file location: $PLEASE_CONFIG, else the user config directory."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return user_config_dir() / "config.toml"


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


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
