"""
ABOUTME: Typed environment variable reading with batched error reporting
ABOUTME: Provides the Reader, its parsers, and the error types surfaced through Reader.err()
"""

__version__ = "0.1.0"

from .exceptions import (
    AmbiguousDefaultError,
    ConfigError,
    EnvError,
    EnvErrors,
    MissingValueError,
    ParseError,
)
from .reader import Reader, new_reader

__all__ = [
    "Reader",
    "new_reader",
    "ConfigError",
    "EnvError",
    "EnvErrors",
    "MissingValueError",
    "AmbiguousDefaultError",
    "ParseError",
]
