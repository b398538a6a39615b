from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from .common_schema import check_password_bytes
from .user_schema import UserResponse

class RegisterRequest(BaseModel):
    user_name: str = Field(min_length=1, max_length=100, validation_alias=AliasChoices("userName", "username"))
    user_phone: str = Field(min_length=1, max_length=20, validation_alias=AliasChoices("mobileNumber", "phone"))
    password: str = Field(min_length=1)
    confirm_password: str = Field(validation_alias=AliasChoices("confirmPassword", "confirm_password"))

    @field_validator("password", "confirm_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)

class UserLogin(BaseModel):
    user_name: str = Field(min_length=1, validation_alias=AliasChoices("userName", "username"))
    # Sin tope aquí: un candidato demasiado largo simplemente no coincide
    password: str = Field(min_length=1)

class LoginData(BaseModel):
    token: str
    user: UserResponse

class ForgotPasswordRequest(BaseModel):
    user_name: str = Field(min_length=1, validation_alias=AliasChoices("userName", "username"))
    user_phone: str = Field(min_length=1, validation_alias=AliasChoices("mobileNumber", "phone"))

class ResetTokenData(BaseModel):
    token: str

class ResetPasswordRequest(BaseModel):
    # Opcionales a propósito: la ausencia se reporta como "Missing required fields."
    model_config = ConfigDict(populate_by_name=True)

    token: str | None = None
    new_password: str | None = Field(default=None, alias="newPassword")
    confirm_password: str | None = Field(default=None, alias="confirmPassword")

    @field_validator("new_password", "confirm_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return check_password_bytes(value)
