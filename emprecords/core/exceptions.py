# emprecords/core/exceptions.py

from fastapi import status


class DomainError(Exception):
    """Base de los errores de negocio. Cada subclase sabe su código HTTP."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request."

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request."


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token."


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid credentials."


class InvalidOldPasswordError(AuthenticationError):
    message = "Incorrect old password."


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists."


class DuplicateUsernameError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username already exists."


class UsernameTakenError(ConflictError):
    message = "Username is already taken."


class DuplicateEmpIDError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Employee ID already exists."


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found."


class UserNotFoundError(NotFoundError):
    message = "User not found or mobile number mismatch."


class EmployeeNotFoundError(NotFoundError):
    message = "Employee not found."


class InvalidOrExpiredTokenError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or expired token."


class InternalError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error."


class DetailWriteFailedError(InternalError):
    message = "Failed to add employee details."


class WriteFailedError(InternalError):
    message = "Failed to save changes."


class DeliveryFailedError(InternalError):
    message = "Could not deliver the password reset token."
