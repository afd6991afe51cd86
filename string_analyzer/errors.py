from typing import List, Optional


class StringAnalyzerError(ValueError):
    """Base class for every error the analyzer core raises.

    Each subclass carries the HTTP status the routing layer maps it to, so
    the exception handler in ``main`` does not need a lookup table.
    """

    status_code: int = 400

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(StringAnalyzerError):
    """Submitted value or query is missing/empty."""

    status_code = 400


class InvalidTypeError(InvalidInputError):
    """Submitted value is present but not a string."""

    status_code = 422


class DuplicateError(StringAnalyzerError):
    status_code = 409


class NotFoundError(StringAnalyzerError):
    status_code = 404


class FilterValidationError(StringAnalyzerError):
    """One or more structured filter parameters are malformed."""

    status_code = 400


class QueryParseError(StringAnalyzerError):
    status_code = 400


class FilterConflictError(StringAnalyzerError):
    status_code = 422
