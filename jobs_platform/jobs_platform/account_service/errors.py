"""
Error taxonomy for the account service.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. The request boundary turns them into JSON responses.
"""
from fastapi import status


class AccountError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields are required"


class DuplicateEmailError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already exists"


class NotFoundError(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class ForbiddenError(AccountError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied for this user type"


class InvalidCredentialsError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class MissingTokenError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access denied. No token provided."


class InvalidOrExpiredTokenError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token"


class InternalError(AccountError):
    """Persistence or hashing failure. The message is always generic."""

    def __init__(self):
        super().__init__()
