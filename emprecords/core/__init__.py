from .settings import settings
from .logger import logger
from .security import create_token, verify_token, get_current_user, TokenData
