# emprecords/schemas/user_schema.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from .common_schema import check_password_bytes

class UserResponse(BaseModel):
    """Usuario sin el hash de la contraseña."""
    user_id: int = Field(alias="userID")
    user_name: str = Field(alias="userName")
    user_phone: str = Field(alias="mobileNumber")
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class UserUpdateUsername(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_user_name: str | None = Field(default=None, max_length=100, alias="newUserName")

class UserChangePassword(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(alias="oldPassword")
    new_password: str = Field(alias="newPassword", min_length=1)
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("new_password", "confirm_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)
