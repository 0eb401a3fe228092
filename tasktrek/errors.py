"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    kind = "internal"

    def __init__(self, message, status_code=500):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def status(self):
        """Return the callable-protocol status name, e.g. ``NOT_FOUND``."""
        return self.kind.upper().replace("-", "_")


class UnauthenticatedError(AppError):
    """Raised when a request carries no valid identity token."""

    kind = "unauthenticated"

    def __init__(self, message="User must be logged in."):
        """Initialize the error."""
        super().__init__(message, 401)


class ValidationError(AppError):
    """Raised when a required argument is missing or malformed."""

    kind = "invalid-argument"

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    kind = "not-found"

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class PermissionDeniedError(AppError):
    """Raised when the caller may not perform a privileged action."""

    kind = "permission-denied"

    def __init__(self, message="Permission denied."):
        """Initialize the error."""
        super().__init__(message, 403)


class InternalError(AppError):
    """Raised for unexpected failures of remote calls or parsing."""

    kind = "internal"

    def __init__(self, message="An unexpected error occurred."):
        """Initialize the error."""
        super().__init__(message, 500)


class ServiceUnavailableError(AppError):
    """Raised when an external provider was never initialized."""

    kind = "unavailable"

    def __init__(self, message="Service unavailable."):
        """Initialize the error."""
        super().__init__(message, 503)
