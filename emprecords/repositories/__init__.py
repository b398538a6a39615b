# emprecords/repositories/__init__.py

from .user_repository import UserRepository
from .password_reset_repository import PasswordResetRepository
from .employee_repository import EmployeeRepository
