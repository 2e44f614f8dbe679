"""
Schemas module
"""

from hvacpro.schemas.token import LoginResponse, TokenPayload
from hvacpro.schemas.user import UserCreate, UserLogin, UserRegister, UserResponse

__all__ = [
    "LoginResponse",
    "TokenPayload",
    "UserCreate",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
