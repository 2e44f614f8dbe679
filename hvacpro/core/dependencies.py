"""
Authentication and authorization dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlmodel import Session
from typing import Optional
import structlog

from hvacpro.core.auth import decode_access_token
from hvacpro.core.config import get_settings
from hvacpro.core.database import get_session
from hvacpro.core.permissions import Permission, get_permissions_for_role, has_permission
from hvacpro.models import Contact, User
from hvacpro.schemas.token import TokenPayload
from hvacpro.storage import DatabaseStorage, Storage

logger = structlog.get_logger(__name__)
settings = get_settings()
security = HTTPBearer(auto_error=False)


def get_storage(session: Session = Depends(get_session)) -> Storage:
    """Storage bound to the request's database session"""
    return DatabaseStorage(session)


def _request_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
) -> Optional[User]:
    """Signed-in active user, or None"""
    token = _request_token(request, credentials)
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None:
        return None

    try:
        user_id = int(TokenPayload.model_validate(payload).sub)
    except (ValidationError, ValueError):
        return None

    user = storage.get(User, user_id)
    if user is None or not user.is_active:
        return None

    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Get the signed-in user or fail with 401"""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"User authenticated: {user.id}")
    return user


def require_permission(permission: Permission):
    """Dependency factory that lets through users whose role grants ``permission``"""

    async def checker(user: User = Depends(get_current_user)) -> User:
        if not has_permission(permission, get_permissions_for_role(user.role)):
            logger.warning(f"Permission {permission.value} denied for user {user.id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return checker


async def get_workspace_user(
    user: User = Depends(require_permission(Permission.WORKSPACE_VIEW)),
) -> User:
    """Signed-in user that belongs to a contractor"""
    if user.contractor_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is not associated with a contractor",
        )
    return user


def ensure_owned(record, user: User, name: str):
    """404 for a missing record, 403 for another contractor's record"""
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{name} not found",
        )

    if record.contractor_id != user.contractor_id and not user.is_admin:
        logger.warning(f"User {user.id} denied access to {name.lower()} {record.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )

    return record


def ensure_contact(storage: Storage, contractor_id: int, contact_id: Optional[int]) -> None:
    """Reject references to contacts outside the given workspace"""
    if contact_id is None:
        return

    contact = storage.get(Contact, contact_id)
    if contact is None or contact.contractor_id != contractor_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown contact",
        )
