"""
Admin user management API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import structlog

from hvacpro.core.auth import hash_password
from hvacpro.core.dependencies import get_storage, require_permission
from hvacpro.core.exceptions import DuplicateUsernameError
from hvacpro.core.permissions import Permission
from hvacpro.models import Contractor, User, UserRole
from hvacpro.schemas.user import UserCreate, UserResponse
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(require_permission(Permission.USERS_MANAGE)),
    storage: Storage = Depends(get_storage)
):
    """List all users"""
    return storage.list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    admin: User = Depends(require_permission(Permission.USERS_MANAGE)),
    storage: Storage = Depends(get_storage)
):
    """Create a user; contractor and employee users must name an existing contractor"""
    if user_data.role != UserRole.ADMIN:
        if user_data.contractor_id is None or storage.get(Contractor, user_data.contractor_id) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A valid contractorId is required for contractor and employee users"
            )

    try:
        user = storage.add(User(
            username=user_data.username,
            password_hash=hash_password(user_data.password),
            email=user_data.email,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=user_data.role,
            contractor_id=user_data.contractor_id,
            is_active=True,
        ))
    except DuplicateUsernameError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    logger.info(f"User {user.id} created by admin {admin.id}")
    return user
