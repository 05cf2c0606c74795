"""
ABOUTME: Exception classes for environment configuration errors
ABOUTME: Provides per-variable errors, their causes, and the aggregate error returned by Reader.err()
"""


class ConfigError(Exception):
    """Configuration validation error."""

    pass


class MissingValueError(ConfigError):
    """Required variable is not set and no default was given."""

    def __init__(self, message: str = "no value set"):
        super().__init__(message)


class AmbiguousDefaultError(ConfigError):
    """More than one default value was passed to an accessor."""

    def __init__(self, message: str = "more than one default value"):
        super().__init__(message)


class ParseError(ConfigError, ValueError):
    """Raw variable text does not match the grammar of the requested type."""

    def __init__(self, kind: str, value: str, reason: str = "invalid syntax"):
        self.kind = kind
        self.value = value
        self.reason = reason
        super().__init__(kind, value, reason)

    def __str__(self):
        return f'{self.reason} for {self.kind}: "{self.value}"'


class EnvError(ConfigError):
    """
    A failure tied to one fully prefixed environment variable.

    Renders as "<name>: <cause>". Two EnvErrors are equal when they name the
    same variable and wrap the same cause object.
    """

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(name, cause)
        self.__cause__ = cause

    def __str__(self):
        return f"{self.name}: {self.cause}"

    def __eq__(self, other):
        if not isinstance(other, EnvError):
            return NotImplemented
        return self.name == other.name and self.cause is other.cause

    def __hash__(self):
        return hash((self.name, id(self.cause)))


class EnvErrors(ConfigError):
    """Ordered collection of EnvError values recorded by a Reader."""

    def __init__(self, errors):
        self.errors = tuple(errors)
        super().__init__(self.errors)

    def __str__(self):
        return "; ".join(str(e) for e in self.errors)

    def __eq__(self, other):
        if not isinstance(other, EnvErrors):
            return NotImplemented
        return self.errors == other.errors

    def __hash__(self):
        return hash(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)
