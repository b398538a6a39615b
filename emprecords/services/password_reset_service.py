# emprecords/services/password_reset_service.py

from datetime import datetime, timedelta, timezone
import secrets

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emprecords.repositories import UserRepository, PasswordResetRepository
from emprecords.schemas import ForgotPasswordRequest, ResetPasswordRequest, ResetTokenData
from emprecords.core import logger, settings
from emprecords.core.exceptions import (
    InvalidOrExpiredTokenError,
    UserNotFoundError,
    ValidationError,
    WriteFailedError,
)
from .notification_service import send_reset_token_sms
from .user_service import set_password

RESET_TOKEN_TTL = timedelta(minutes=10)
RESET_TOKEN_BYTES = 32  # 256 bits, 64 caracteres hex


def _utc(value: datetime | None = None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    # SQLite devuelve los TIMESTAMP sin zona; siempre se guardan en UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    # DateTime en SQLite guarda la hora de pared y descarta el offset
    return value.astimezone(timezone.utc)


def request_reset_token(db: Session, user_name: str, user_phone: str, now: datetime | None = None) -> str:
    """
    Emite un token de un solo uso válido 10 minutos si usuario y teléfono
    coinciden exactamente. Devuelve el valor crudo para su entrega.
    """
    now = _utc(now)
    user = UserRepository(db).get_user_by_name_and_phone_repository(user_name, user_phone)

    if not user:
        logger.warning(f"Solicitud de reseteo sin coincidencia para el usuario: {user_name}")
        raise UserNotFoundError()

    reset_repo = PasswordResetRepository(db)
    # Limpieza oportunista; la validez se decide siempre al leer
    reset_repo.delete_expired(now, user_id=user.user_id)

    token = secrets.token_hex(RESET_TOKEN_BYTES)
    try:
        reset_repo.create_token(user_id=user.user_id, token=token, expires_at=now + RESET_TOKEN_TTL)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"No se pudo guardar el token de reseteo del usuario {user.user_id}: {e}")
        raise WriteFailedError("Could not create password reset token.")

    logger.info(f"Token de reseteo emitido para el usuario {user.user_id}")
    return token


def consume_reset_token(db: Session, token: str, new_password: str, now: datetime | None = None) -> None:
    """
    Borrado del token y cambio de contraseña en una sola transacción.
    Si el cambio falla el token sigue siendo válido; si tiene éxito el
    token ya no existe al regresar.
    """
    now = _utc(now)
    reset_repo = PasswordResetRepository(db)
    reset_token_obj = reset_repo.get_token(token)

    if not reset_token_obj or now >= _utc(reset_token_obj.prt_expires_at):
        logger.warning("Intento de uso de token de reseteo inválido o expirado")
        raise InvalidOrExpiredTokenError()

    user_id = reset_token_obj.prt_user_id

    try:
        # Un rowcount de 0 significa que otra petición lo consumió primero
        if not reset_repo.delete_token(reset_token_obj.prt_id):
            db.rollback()
            raise InvalidOrExpiredTokenError()

        if not set_password(db, user_id, new_password, commit=False):
            db.rollback()
            raise InvalidOrExpiredTokenError()

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"No se pudo restablecer la contraseña del usuario {user_id}: {e}")
        raise WriteFailedError("Failed to update password.")

    logger.info(f"Contraseña restablecida para el usuario ID {user_id}")


def purge_expired_reset_tokens(db: Session, now: datetime | None = None) -> int:
    return PasswordResetRepository(db).delete_expired(_utc(now))


def forgot_password_service(db: Session, request: ForgotPasswordRequest) -> tuple[str, ResetTokenData | None]:
    token = request_reset_token(db, request.user_name, request.user_phone)

    if settings.RESET_TOKEN_DELIVERY == "sms":
        send_reset_token_sms(request.user_phone, request.user_name, token)
        return "Reset token sent to the registered mobile number.", None

    # Modo "response": el token viaja en la respuesta (sin canal externo)
    return "Token generated successfully.", ResetTokenData(token=token)


def reset_password_service(db: Session, request: ResetPasswordRequest) -> None:
    if not request.token or not request.new_password or not request.confirm_password:
        raise ValidationError("Missing required fields.")

    if request.new_password != request.confirm_password:
        raise ValidationError("Passwords don't match.")

    consume_reset_token(db, request.token, request.new_password)
