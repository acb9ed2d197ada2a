from src.core.auth.models import User
from src.core.auth.service import AuthService
from src.core.auth.jwt import create_access_token, create_refresh_token, decode_token
from src.core.auth.dependencies import CurrentUser, get_current_user

__all__ = [
    "User",
    "AuthService",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "CurrentUser",
    "get_current_user",
]
