"""Exception hierarchy for mealfinder.

All exceptions inherit from :class:`MealFinderError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`mealfinder.exit_codes`.
View handlers catch the data errors (:class:`NetworkError`,
:class:`DecodeError`, :class:`NotFoundError`) and turn them into error
views; the top-level handler in :func:`mealfinder.app.main` catches whatever
escapes and exits with the appropriate code.

Subclass hierarchy::

    MealFinderError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- NotFoundError       (exit 4)
    +-- NetworkError        (exit 6)
    |   +-- DecodeError     (exit 7)
    +-- ConfigError         (exit 1)
"""

from mealfinder.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_NOT_FOUND,
)


class MealFinderError(Exception):
    """Base exception for all mealfinder errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`mealfinder.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(MealFinderError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(MealFinderError):
    """Raised when a well-formed response holds no data for the request."""

    exit_code = EXIT_NOT_FOUND


class NetworkError(MealFinderError):
    """Raised on transport failures (timeout, DNS, refused) and non-2xx responses.

    Args:
        message: Human-readable error description.
        url: The request URL that failed, when known.
        status_code: The HTTP status for non-success responses, ``None`` for
            transport failures.
    """

    exit_code = EXIT_NETWORK_ERROR

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        exit_code: int | None = None,
    ):
        super().__init__(message, exit_code=exit_code)
        self.url = url
        self.status_code = status_code


class DecodeError(NetworkError):
    """Raised when a response body is not a JSON object.

    Subclasses :class:`NetworkError` because callers treat both the same way.
    """

    exit_code = EXIT_DECODE_ERROR


class ConfigError(MealFinderError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
