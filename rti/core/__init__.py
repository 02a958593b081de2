"""Core types shared by every layer."""

from .config import load_config
from .errors import ErrorCode, ErrorKind, InjectError
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "load_config",
    # errors
    "ErrorCode",
    "ErrorKind",
    "InjectError",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
