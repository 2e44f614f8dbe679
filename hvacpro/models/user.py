"""
User model with roles and contractor scoping
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """User roles for RBAC"""
    ADMIN = "admin"
    CONTRACTOR = "contractor"
    EMPLOYEE = "employee"


class User(SQLModel, table=True):
    """User model; contractor and employee users belong to one contractor"""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Authentication
    username: str = Field(unique=True, index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)
    email: str = Field(index=True, nullable=False, max_length=255)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    # RBAC
    role: UserRole = Field(default=UserRole.CONTRACTOR, nullable=False, index=True)
    contractor_id: Optional[int] = Field(
        default=None,
        foreign_key="contractors.id",
        index=True,
        description="Contractor this user works for",
    )

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_login_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
