"""
Custom exception classes for the application.

Every exception carries the HTTP status it maps to, so handlers and the
client SDK share one taxonomy: Unauthorized, Forbidden, NotFound,
Validation and Infrastructure failures.
"""


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class UnauthorizedError(AppException):
    """
    No valid session accompanies the request.

    HTTP Status: 401 Unauthorized
    """

    http_status = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppException):
    """
    The session user may not modify the target entity.

    HTTP Status: 403 Forbidden
    """

    http_status = 403


class NotFoundError(AppException):
    """
    Resource not found.

    HTTP Status: 404 Not Found
    """

    http_status = 404


class ValidationError(AppException):
    """
    Malformed input (bad cursor, empty content, invalid page size, ...).

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class InfrastructureError(AppException):
    """
    Store or network failure.

    Never retried. On the client it triggers rollback of optimistic state.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
