"""Discovery root resolution.

The root is the directory under which repositories are discovered.

Resolution order:
1. Explicit path (`--path`)
2. Value of an overriding environment variable (`--override-default VAR`)
3. Value of the default environment variable (DEV_DIR unless configured)

An override variable that is unset or empty falls through to the default.

Whether the root exists is not checked here; the scanner reports an
unreadable root itself.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result

__all__ = [
    "RootError",
    "RootInfo",
    "RootSource",
    "resolve_root",
]


RootSource = Literal["path", "override", "default"]


@dataclass(frozen=True, slots=True)
class RootError:
    """The discovery root could not be resolved."""

    message: str
    env_var: str | None = None


@dataclass(frozen=True, slots=True)
class RootInfo:
    root: Path
    source: RootSource


def _normalize(value: str) -> Path:
    # collapses ".." segments without resolving symlinks
    return Path(os.path.abspath(Path(value).expanduser()))


def resolve_root(
    *,
    path: str | None,
    override_var: str | None,
    default_var: str,
    environ: Mapping[str, str] | None = None,
) -> Result[RootInfo, RootError]:
    """Resolve the discovery root, recording where it came from.

    Args:
        path: Explicit root, highest precedence.
        override_var: Name of an environment variable that replaces
            `default_var` when given.
        default_var: Name of the default environment variable.
        environ: Environment to read (defaults to os.environ).
    """
    env = os.environ if environ is None else environ

    if path is not None:
        if not path.strip():
            return Err(RootError(message="--path must not be empty"))
        return Ok(RootInfo(root=_normalize(path), source="path"))

    if override_var:
        value = env.get(override_var, "").strip()
        if value:
            return Ok(RootInfo(root=_normalize(value), source="override"))

    value = env.get(default_var, "").strip()
    if value:
        return Ok(RootInfo(root=_normalize(value), source="default"))

    if override_var:
        return Err(
            RootError(
                message=f"Neither {override_var} nor {default_var} is defined!",
                env_var=override_var,
            )
        )
    return Err(
        RootError(
            message=f"{default_var} is not defined!",
            env_var=default_var,
        )
    )
