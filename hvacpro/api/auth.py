"""
Session authentication API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from datetime import datetime
import structlog

from hvacpro.core.auth import create_access_token, hash_password, verify_password
from hvacpro.core.config import get_settings
from hvacpro.core.dependencies import get_current_user, get_storage
from hvacpro.core.exceptions import DuplicateUsernameError
from hvacpro.models import Contractor, User, UserRole
from hvacpro.schemas.contractor import ContractorRead
from hvacpro.schemas.token import LoginResponse
from hvacpro.schemas.user import UserLogin, UserRegister, UserResponse
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()
settings = get_settings()


def start_session(user: User, response: Response) -> LoginResponse:
    """Issue a token for ``user`` and set it as the session cookie"""
    access_token = create_access_token(
        user_id=user.id,
        role=UserRole(user.role).value,
        contractor_id=user.contractor_id,
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return LoginResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserRegister,
    response: Response,
    storage: Storage = Depends(get_storage)
):
    """Register the first user of a fresh installation as admin"""
    if storage.count_users() > 0:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is closed. Ask an administrator for an account."
        )

    try:
        user = storage.add(User(
            username=user_data.username,
            password_hash=hash_password(user_data.password),
            email=user_data.email,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=UserRole.ADMIN,
            is_active=True,
        ))
    except DuplicateUsernameError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    logger.info(f"First admin registered: {user.id}")
    return start_session(user, response)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    login_data: UserLogin,
    response: Response,
    storage: Storage = Depends(get_storage)
):
    """Login with username and password"""
    user = storage.get_user_by_username(login_data.username)

    if not user or not verify_password(login_data.password, user.password_hash):
        logger.info(f"Failed login for username {login_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is inactive"
        )

    user = storage.update(user, {"last_login_at": datetime.utcnow()})
    logger.info(f"User logged in: {user.id}")
    return start_session(user, response)


@router.post("/logout")
async def logout_user(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(user: User = Depends(get_current_user)):
    """Get current user info"""
    return user


@router.get("/user/contractor", response_model=ContractorRead)
async def get_current_user_contractor(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage)
):
    """Get the contractor the current user belongs to"""
    contractor = storage.get(Contractor, user.contractor_id) if user.contractor_id else None
    if not contractor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No contractor associated with this user"
        )
    return contractor
