"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when a request body is missing or has invalid fields."""

    def __init__(self, message="Validation failed."):
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    """Raised when a request carries no valid identity."""

    def __init__(self, message="Authentication required"):
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when the identity's role or assignment does not allow the action."""

    def __init__(self, message="Insufficient permissions"):
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        super().__init__(message, 404)


class ConflictError(AppError):
    """Raised when a write collides with a uniqueness or reference constraint."""

    def __init__(self, message="Resource already exists."):
        super().__init__(message, 409)
