"""
Pydantic schemas for users
"""

from pydantic import Field, EmailStr
from typing import Optional
from datetime import datetime

from hvacpro.models.user import UserRole
from hvacpro.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Admin user creation schema"""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    role: UserRole = Field(default=UserRole.CONTRACTOR)
    contractor_id: Optional[int] = None


class UserRegister(CamelModel):
    """First-admin bootstrap registration schema"""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserLogin(CamelModel):
    """User login schema"""
    username: str = Field(..., min_length=1, description="Username is required")
    password: str = Field(..., min_length=1, description="Password is required")


class UserResponse(CamelModel):
    """User response model"""
    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    contractor_id: Optional[int] = None
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None
