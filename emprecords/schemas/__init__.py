# Common
from .common_schema import ApiResponse

# Auth Schemas
from .auth_schema import RegisterRequest, UserLogin, LoginData, ForgotPasswordRequest, ResetTokenData, ResetPasswordRequest

# User Schemas
from .user_schema import UserResponse, UserUpdateUsername, UserChangePassword

# Employee Schemas
from .employee_schema import EmployeeWrite, EmployeeRecord, EmployeeCreated
