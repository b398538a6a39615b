from sqlalchemy.orm import Session

from emprecords.models import User
from emprecords.repositories import UserRepository
from emprecords.schemas import RegisterRequest, UserLogin, LoginData, UserResponse
from emprecords.core import logger, security
from emprecords.core.exceptions import ValidationError, InvalidCredentialsError


def register_user(db: Session, user_name: str, user_phone: str, password: str) -> User:
    """
    Alta de usuario: hash bcrypt con sal nueva. El UNIQUE de user_name
    decide los duplicados (DuplicateUsernameError).
    """
    new_user = User(
        user_name=user_name,
        user_phone=user_phone,
        user_password=security.hash_password(password),
    )
    return UserRepository(db).create_user_repository(new_user)


def verify_credentials(db: Session, user_name: str, password: str) -> User:
    """
    Usuario inexistente y contraseña incorrecta producen el mismo error,
    para no revelar qué usuarios existen.
    """
    user = UserRepository(db).get_user_by_name_repository(user_name)

    if user is None:
        security.dummy_verify()
        raise InvalidCredentialsError()

    if not security.verify_password(password, user.user_password):
        raise InvalidCredentialsError()

    return user


def register_service(db: Session, data: RegisterRequest) -> UserResponse:
    if data.password != data.confirm_password:
        raise ValidationError("Passwords don't match")

    user = register_user(db, data.user_name, data.user_phone, data.password)
    logger.info(f"Usuario {user.user_id} registrado exitosamente")
    return UserResponse.model_validate(user)


def login_for_access_token(db: Session, user_data: UserLogin) -> LoginData:
    try:
        user = verify_credentials(db, user_data.user_name, user_data.password)
    except InvalidCredentialsError:
        logger.warning(f"Fallo de autenticación para el usuario: {user_data.user_name}")
        raise

    token = security.create_token(user.user_id, user.user_name)

    logger.info(f"Usuario {user.user_id} ha iniciado sesión exitosamente.")
    return LoginData(token=token, user=UserResponse.model_validate(user))
