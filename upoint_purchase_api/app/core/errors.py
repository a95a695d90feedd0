"""
Error taxonomy shared by services and the HTTP boundary.

Services raise these exceptions; ``main.create_app`` registers a
handler that turns every ``AppError`` into a JSON body of the form
``{"message": ...}`` with the status code carried by the class.
"""

from fastapi import status


class AppError(Exception):
    """Base class for all expected application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class DuplicateUsername(ValidationError):
    message = "Username already exists"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class InvalidCredentials(AuthError):
    message = "Invalid username or password"


class Unauthenticated(AuthError):
    message = "Not authenticated"


class InvalidToken(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid or expired token"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class AccountNotFound(NotFoundError):
    message = "User not found"


class ItemNotFound(NotFoundError):
    message = "Item not found"


class BusinessRuleError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Operation not allowed"


class OutOfStock(BusinessRuleError):
    message = "Item is out of stock"


class InsufficientBalance(BusinessRuleError):
    message = "Insufficient balance"


class InternalError(AppError):
    pass
