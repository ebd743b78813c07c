"""Core types: results, exit codes and configuration."""

from .config import (
    ConfigError,
    FormulaConfig,
    Manifest,
    ReleaseConfig,
    TapConfig,
    load_config,
    load_manifest,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "FormulaConfig",
    "Manifest",
    "ReleaseConfig",
    "TapConfig",
    "load_config",
    "load_manifest",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
