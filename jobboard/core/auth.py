"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from jobboard.core.config import get_settings
from jobboard.core.errors import AuthenticationError, ForbiddenError
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import User, UserRole

logger = logging.getLogger(__name__)

settings = get_settings()

# Bearer token extractor; missing headers are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.password_hash_rounds,
    )


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return get_pwd_context().verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def token_for(user: User) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role.value})


def default_approval(role: UserRole) -> bool:
    """New employers wait for an admin; every other role starts approved."""
    return role != UserRole.employer


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: JobBoardStore = Depends(get_store),
) -> User:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        def route(user: User = Depends(get_current_user)):
            return user.public()
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = store.get_user(user_id)
    if user is None:
        raise AuthenticationError("Invalid or expired token")
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory - Require one of `roles`."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning("User %s (%s) denied, requires %s",
                           user.id, user.role.value, "/".join(r.value for r in roles))
            raise ForbiddenError()
        return user

    return dependency


def ensure_can_post(user: User) -> None:
    """Employers may post only once an admin has approved them."""
    if user.role == UserRole.employer and not user.is_approved:
        logger.warning("Unapproved employer %s tried to post a job", user.id)
        raise ForbiddenError("Your employer account is pending approval")


def ensure_owner_or_admin(user: User, owner_id: int) -> None:
    if user.id != owner_id and user.role != UserRole.admin:
        logger.warning("User %s denied access to a record owned by %s", user.id, owner_id)
        raise ForbiddenError()
