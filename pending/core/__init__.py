"""Core domain types."""

from .config import Config, ConfigError, load_config
from .errors import ErrorCode
from .mode import Mode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    # errors
    "ErrorCode",
    # mode
    "Mode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
