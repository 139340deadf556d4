"""Exception hierarchy for connprops.

All exceptions inherit from :class:`ConnPropsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`connprops.exit_codes`.
The top-level error handler in :func:`connprops.app.main` catches
``ConnPropsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ConnPropsError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- TimeoutError_       (exit 8)
    +-- ValidationError     (exit 9)
    +-- ConfigError         (exit 1)
"""

from connprops.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PROMPT_TIMEOUT,
    EXIT_VALIDATION_ERROR,
)


class ConnPropsError(Exception):
    """Base exception for all connprops errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`connprops.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ConnPropsError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class TimeoutError_(ConnPropsError):
    """Raised when a prompt for a required connection property times out.

    Named with a trailing underscore to avoid shadowing the built-in
    ``TimeoutError``.

    Args:
        field: Human-readable name of the property that was being prompted
            for (``"host name"``, ``"port number"``, ``"user name"`` or
            ``"password"``).
    """

    exit_code = EXIT_PROMPT_TIMEOUT

    def __init__(self, field: str):
        super().__init__(f"Timed out waiting for {field}.")
        self.field = field


class ValidationError(ConnPropsError):
    """Raised when a prompted value cannot be interpreted.

    Only the port number is validated today.

    Args:
        field: Name of the offending property (e.g. ``"port"``).
        message: Optional override for the default message.
    """

    exit_code = EXIT_VALIDATION_ERROR

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"Specified {field} was not a number.")
        self.field = field


class ConfigError(ConnPropsError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
