# emprecords/routers/profile_router.py

from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends

from emprecords.database import get_db
from emprecords.core import TokenData, get_current_user
from emprecords.schemas import ApiResponse, UserResponse, UserUpdateUsername, UserChangePassword
from emprecords.services import update_username_service, change_password_service

router = APIRouter(prefix="/profile", tags=["Profile"], dependencies=[Depends(get_current_user)])

@router.put("/username", response_model=ApiResponse[UserResponse])
def update_username_route(data: UserUpdateUsername, db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    user = update_username_service(db, current_user.user_id, data)
    return ApiResponse(message="Username updated successfully.", data=user)

@router.post("/password", response_model=ApiResponse[None])
def change_password_route(data: UserChangePassword, db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    change_password_service(db, current_user.user_id, data)
    return ApiResponse(message="Password changed successfully.")
