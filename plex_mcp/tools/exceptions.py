"""Exception hierarchy for the Plex client."""

from enum import Enum
from typing import ClassVar, Optional, Type, Union


class ErrorType(Enum):
    """Base for the closed set of error kinds owned by one exception class.

    Members are declared as ``NAME = (code, template)``.
    """

    def __init__(self, code: int, template: str):
        self.code = code
        self.template = template

    def format(self, *args) -> str:
        """Interpolate positional arguments into the message template."""
        return self.template.format(*args)


class UnknownErrorTypeError(ValueError):
    """Raised when an exception is built with a type its class does not own."""
    pass


class PlexError(Exception):
    """Base exception for Plex API errors."""
    pass


class TypedPlexError(PlexError):
    """A Plex error carrying a symbolic type, a numeric code and a message."""

    error_types: ClassVar[Type[ErrorType]]

    def __init__(self, error_type: Union[ErrorType, str], *args):
        kind = self._lookup(error_type)
        self.type = kind.name
        self.code = kind.code
        self.message = kind.format(*args)
        super().__init__(self.message)

    @classmethod
    def _lookup(cls, error_type: Union[ErrorType, str]) -> ErrorType:
        types = getattr(cls, "error_types", None)
        if types is None:
            raise UnknownErrorTypeError(f"{cls.__name__} has no registered error types")
        if isinstance(error_type, types):
            return error_type
        if isinstance(error_type, str) and error_type in types.__members__:
            return types[error_type]
        raise UnknownErrorTypeError(
            f"{error_type!r} is not a valid error type for {cls.__name__}"
        )


class LibraryErrorType(ErrorType):
    RESOURCE_NOT_FOUND = (404, 'The {} "{}" was not found.')


class LibraryError(TypedPlexError):
    """Problems at the library level (sections, items)."""

    error_types = LibraryErrorType


class TransportErrorType(ErrorType):
    UNAUTHORIZED = (401, "Invalid Plex token")
    NOT_FOUND = (404, "Plex endpoint not found: {}")
    BAD_RESPONSE = (502, "Plex API error {}: {}")
    CONNECTION_FAILED = (503, "Connection error: {}")


class TransportError(TypedPlexError):
    """Failures talking to the Plex server."""

    error_types = TransportErrorType

    def __init__(self, error_type, *args, status: Optional[int] = None):
        super().__init__(error_type, *args)
        self.status = status


class ConfigurationErrorType(ErrorType):
    MISSING_SETTING = (500, "{} not configured")


class ConfigurationError(TypedPlexError):
    """Client settings are missing or invalid."""

    error_types = ConfigurationErrorType
