"""
Password hashing and JWT session token utilities
"""

from datetime import datetime, timedelta
from typing import Dict, Optional
import hmac

from jose import JWTError, jwt
from passlib.context import CryptContext

from hvacpro.core.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with the configured scheme"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, stored: str) -> bool:
    """Check a password against a stored hash.

    Rows written by the legacy importers hold the password in plain text;
    anything passlib does not recognise as a hash is compared directly.
    """
    if pwd_context.identify(stored) is None:
        return hmac.compare_digest(plain_password.encode(), stored.encode())
    return pwd_context.verify(plain_password, stored)


def create_access_token(
    user_id: int,
    role: str,
    contractor_id: Optional[int] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token with user claims"""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "role": role,
        "contractor_id": contractor_id,
        "exp": expire,
        "iat": datetime.utcnow(),
    }

    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate JWT token"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None
