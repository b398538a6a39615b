from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, status

from emprecords.database import get_db

from emprecords.schemas import (
    ApiResponse,
    RegisterRequest,
    UserLogin,
    LoginData,
    ForgotPasswordRequest,
    ResetTokenData,
    ResetPasswordRequest
)

from emprecords.services import (
    register_service,
    login_for_access_token,
    forgot_password_service,
    reset_password_service
)

router = APIRouter(tags=["Authentication"])

@router.post("/register", response_model=ApiResponse[None], status_code=status.HTTP_201_CREATED)
def register_route(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Endpoint público para registrar un nuevo usuario.
    """
    register_service(db, user_data)
    return ApiResponse(message="User registered successfully.")

@router.post("/login", response_model=ApiResponse[LoginData])
def login_route(user_data: UserLogin, db: Session = Depends(get_db)):
    """
    Inicia sesión y devuelve un token de una hora junto con el usuario (sin contraseña).
    """
    return ApiResponse(message="Login successful.", data=login_for_access_token(db, user_data))

@router.post("/forgot-password", response_model=ApiResponse[ResetTokenData])
def forgot_password_route(request: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """
    Emite un token de reseteo de un solo uso, válido 10 minutos.
    """
    message, data = forgot_password_service(db, request)
    return ApiResponse(message=message, data=data)

@router.post("/reset-password", response_model=ApiResponse[None])
def reset_password_route(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    Completa la recuperación usando el token y la nueva contraseña.
    """
    reset_password_service(db, request)
    return ApiResponse(message="Password has been reset successfully.")
