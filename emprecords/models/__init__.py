from .user import User
from .employee import EmployeeMaster, EmployeeDetail
from .password_reset_token import PasswordResetToken
