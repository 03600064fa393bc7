"""Core types: results, configuration, root resolution, exit codes."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result
from .root import RootError, RootInfo, resolve_root

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # root
    "RootError",
    "RootInfo",
    "resolve_root",
]
