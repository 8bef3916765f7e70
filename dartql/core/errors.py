"""Exceptions raised by dart-ql."""


class DartQLError(Exception):
    """Base class for errors that abort a generation run."""


class SchemaParseError(DartQLError):
    """Raised when no usable schema can be built from the given input."""


class SchemaFetchError(DartQLError):
    """Raised when a schema cannot be retrieved from a remote endpoint."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)
