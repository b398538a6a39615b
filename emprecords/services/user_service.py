# emprecords/services/user_service.py

from sqlalchemy.orm import Session
from emprecords.repositories import UserRepository
from emprecords.schemas import UserResponse, UserUpdateUsername, UserChangePassword
from emprecords.core import logger, security
from emprecords.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    InvalidOldPasswordError,
    ValidationError,
)

MIN_USERNAME_LENGTH = 3


def change_password(db: Session, user_id: int, old_password: str, new_password: str) -> None:
    user_repo = UserRepository(db)
    user = user_repo.get_user_id_repository(user_id)

    if not user:
        # Token válido de un usuario que ya no existe
        logger.warning(f"Cambio de contraseña para un usuario inexistente: {user_id}")
        raise NotFoundError("User not found.")

    if not security.verify_password(old_password, user.user_password):
        logger.warning(f"Contraseña anterior incorrecta para el usuario {user_id}")
        raise InvalidOldPasswordError()

    user_repo.change_password_user_repository(user_id, security.hash_password(new_password))


def set_password(db: Session, user_id: int, new_password: str, commit: bool = True) -> bool:
    """Sin verificar la anterior: solo para el flujo de reseteo por token."""
    return UserRepository(db).change_password_user_repository(
        user_id, security.hash_password(new_password), commit=commit
    )


def update_username(db: Session, user_id: int, new_user_name: str):
    user = UserRepository(db).update_user_name_repository(user_id, new_user_name)
    if not user:
        raise AuthenticationError()
    return user


def update_username_service(db: Session, user_id: int, data: UserUpdateUsername) -> UserResponse:
    new_user_name = data.new_user_name

    if not new_user_name or len(new_user_name) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters.")

    user = update_username(db, user_id, new_user_name)
    return UserResponse.model_validate(user)


def change_password_service(db: Session, user_id: int, data: UserChangePassword) -> None:
    if data.new_password != data.confirm_password:
        raise ValidationError("New passwords don't match.")

    change_password(db, user_id, data.old_password, data.new_password)
