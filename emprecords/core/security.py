from datetime import datetime, timezone
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from passlib.exc import PasswordTruncateError
from pydantic import BaseModel
from .settings import settings
from .exceptions import AuthenticationError, ValidationError

# Vida fija de una sesión: una hora desde su emisión
SESSION_TTL_SECONDS = 3600

# bcrypt solo lee los primeros 72 bytes de la contraseña
BCRYPT_MAX_BYTES = 72
PASSWORD_TOO_LONG = f"Password must be at most {BCRYPT_MAX_BYTES} bytes"

# auto_error=False para responder con nuestro propio 401 y no el de FastAPI
oauth2_schema = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
    bcrypt__truncate_error=True,
)


class TokenData(BaseModel):
    user_id: int
    user_name: str


# --- Hashing de contraseñas ---

def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES

def hash_password(password: str) -> str:
    """bcrypt con sal aleatoria nueva en cada llamada. Nunca trunca."""
    try:
        return pwd_context.hash(password)
    except PasswordTruncateError:
        raise ValidationError(f"{PASSWORD_TOO_LONG}.")

def verify_password(password: str, hashed: str) -> bool:
    # passlib trunca al verificar: un candidato largo podría coincidir por prefijo
    if password_too_long(password):
        return False
    return pwd_context.verify(password, hashed)

def dummy_verify() -> None:
    """Gasta el mismo tiempo que una verificación real cuando el usuario no existe."""
    pwd_context.dummy_verify()


# --- Tokens de sesión ---

def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)

def create_token(user_id: int, user_name: str, now: datetime | None = None) -> str:
    """
    Emite un JWT firmado con user_id, user_name, iat y exp = iat + 3600.
    """
    issued_at = int(_now(now).timestamp())
    to_encode = {
        "user_id": user_id,
        "user_name": user_name,
        "iat": issued_at,
        "exp": issued_at + SESSION_TTL_SECONDS,
    }
    return jwt.encode(to_encode, settings.KEY_SECRET, algorithm=settings.ALGORITHM)

def verify_token(token: str | None, now: datetime | None = None) -> TokenData:
    """
    Valida firma y expiración. El token deja de ser válido en el instante exp.
    """
    if not token:
        raise AuthenticationError("Authorization token not found.")

    try:
        # La expiración se comprueba abajo con nuestro reloj (exp es exclusivo)
        payload = jwt.decode(
            token,
            settings.KEY_SECRET,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": False, "verify_iat": False},
        )
    except JWTError:
        raise AuthenticationError()

    user_id = payload.get("user_id")
    user_name = payload.get("user_name")
    expires = payload.get("exp")

    if not isinstance(user_id, int) or not isinstance(user_name, str) or not isinstance(expires, (int, float)):
        raise AuthenticationError()

    if _now(now).timestamp() >= expires:
        raise AuthenticationError()

    return TokenData(user_id=user_id, user_name=user_name)

async def get_current_user(token: str | None = Depends(oauth2_schema)) -> TokenData:
    return verify_token(token)
