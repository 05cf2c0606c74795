"""
ABOUTME: Reader for typed, prefixed environment variables with deferred error reporting
ABOUTME: Accessors never raise; failures are collected and surfaced together through Reader.err()
"""

import logging
import os
from datetime import timedelta
from typing import Any, Callable, Mapping, Optional

from .exceptions import (
    AmbiguousDefaultError,
    ConfigError,
    EnvError,
    EnvErrors,
    MissingValueError,
)
from .parsers import parse_bool, parse_duration, parse_float, parse_int


class Reader:
    """Reads environment variables under a common prefix and collects every problem it finds."""

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the Reader with a name prefix and an optional source mapping.

        Parameters:
            prefix (str): String prepended verbatim to every variable name. No separator is inserted.
            environ (Mapping[str, str], optional): Variables to read from. Defaults to the live os.environ.
        """
        self.prefix = prefix
        self.environ = environ
        self._errors: list[EnvError] = []

    @property
    def errors(self) -> tuple[EnvError, ...]:
        """Errors recorded so far, in the order they occurred."""
        return tuple(self._errors)

    def lookup(self, name: str) -> tuple[Optional[str], bool]:
        """Return the raw value of prefix + name and whether it is set."""
        source = os.environ if self.environ is None else self.environ
        value = source.get(self.prefix + name)
        return value, value is not None

    def get_str(self, name: str, *defaults: str) -> str:
        """
        Read a string variable.

        Parameters:
            name (str): Variable name without the prefix.
            *defaults (str): At most one fallback used when the variable is unset. With none, the variable is required.

        Returns:
            str: The raw value, the default, or "" when the read failed.
        """
        return self._read(name, defaults, "", str)

    def get_bool(self, name: str, *defaults: bool) -> bool:
        """Read a boolean variable ("1", "t", "true", "0", "f", "false", ...). Returns False on failure."""
        return self._read(name, defaults, False, parse_bool)

    def get_int(self, name: str, *defaults: int) -> int:
        """Read a base-10 signed 64-bit integer variable. Returns 0 on failure."""
        return self._read(name, defaults, 0, parse_int)

    def get_float(self, name: str, *defaults: float) -> float:
        """Read a floating point variable. Returns 0.0 on failure."""
        return self._read(name, defaults, 0.0, parse_float)

    def get_duration(self, name: str, *defaults: timedelta) -> timedelta:
        """Read a duration variable such as "1h30m" or "1500ms". Returns timedelta(0) on failure."""
        return self._read(name, defaults, timedelta(0), parse_duration)

    def _read(
        self,
        name: str,
        defaults: tuple,
        zero: Any,
        parse: Callable[[str], Any],
    ) -> Any:
        if len(defaults) > 1:
            self.add_error(name, AmbiguousDefaultError())
            return zero

        value, found = self.lookup(name)
        if not found:
            if not defaults:
                self.add_error(name, MissingValueError())
                return zero
            return defaults[0]

        try:
            return parse(value)
        except ValueError as e:
            self.add_error(name, e)
            return zero

    def add_error(self, name: str, err: Optional[Exception]) -> None:
        """Record err against prefix + name. A None err is ignored."""
        if err is None:
            return
        env_error = EnvError(self.prefix + name, err)
        logging.debug(f"Environment error recorded: {env_error}")
        self._errors.append(env_error)

    def add_errorf(self, name: str, fmt: str, *args: Any) -> None:
        """
        Format a message with %-style args and record it as a ConfigError.

        Without args, fmt is recorded verbatim, so a literal "%" needs no escaping.
        """
        self.add_error(name, ConfigError(fmt % args if args else fmt))

    def err(self) -> Optional[EnvErrors]:
        """
        Return every recorded error as one EnvErrors value, or None if there are none.

        The recorded list is left untouched, so calling this repeatedly yields equal results
        and later accessor calls keep accumulating.
        """
        if not self._errors:
            return None
        return EnvErrors(self._errors)

    def check(self) -> None:
        """Raise the aggregate error if anything has been recorded."""
        err = self.err()
        if err is not None:
            raise err


def new_reader(prefix: str) -> Reader:
    """Create a Reader over the process environment for the given prefix."""
    return Reader(prefix)
