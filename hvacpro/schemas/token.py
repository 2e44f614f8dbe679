"""
Pydantic schemas for authentication and tokens
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from hvacpro.schemas.base import CamelModel
from hvacpro.schemas.user import UserResponse


class TokenPayload(CamelModel):
    """JWT token payload"""
    sub: str = Field(..., description="User ID")
    role: str = Field(..., description="User role")
    contractor_id: Optional[int] = Field(default=None, description="Contractor ID")
    exp: datetime = Field(..., description="Expiration time")
    iat: datetime = Field(default_factory=datetime.utcnow, description="Issued at")


class LoginResponse(CamelModel):
    """Login response: the signed-in user plus its session token"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
