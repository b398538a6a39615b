from typing import Generic, TypeVar
from pydantic import BaseModel

from emprecords.core.security import PASSWORD_TOO_LONG, password_too_long

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Sobre común de todas las respuestas: {success, message, data}."""
    success: bool = True
    message: str
    data: T | None = None


def check_password_bytes(value: str | None) -> str | None:
    """bcrypt ignora lo que pase de 72 bytes: se rechaza en lugar de truncar."""
    if value is not None and password_too_long(value):
        raise ValueError(PASSWORD_TOO_LONG)
    return value
