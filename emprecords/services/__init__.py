# emprecords/services/__init__.py

# Auth Service
from .auth_service import register_user, verify_credentials, register_service, login_for_access_token

# User Service
from .user_service import change_password, set_password, update_username, update_username_service, change_password_service

# Password Reset Service
from .password_reset_service import (
    request_reset_token,
    consume_reset_token,
    purge_expired_reset_tokens,
    forgot_password_service,
    reset_password_service
)

# Employee Service
from .employee_service import (
    list_employees_service,
    get_employee_service,
    create_employee_service,
    update_employee_service,
    delete_employee_service
)
