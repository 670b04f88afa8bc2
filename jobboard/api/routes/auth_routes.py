"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, Depends

from jobboard.core.auth import (
    default_approval, get_current_user, hash_password, token_for, verify_password,
)
from jobboard.core.errors import AuthenticationError, ConflictError
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, User, UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest, store: JobBoardStore = Depends(get_store)):
    """
    Register a new account and log it in.

    Employers start unapproved and cannot post jobs until an admin approves them.
    """
    if store.get_user_by_username(request.username):
        raise ConflictError("Username already exists")
    if store.get_user_by_email(request.email):
        raise ConflictError("Email already registered")

    data = request.to_user_create()
    user = store.create_user(
        data,
        password_hash=hash_password(data.password),
        is_approved=default_approval(data.role),
    )
    logger.info("Registered %s as %s", user.username, user.role.value)
    return TokenResponse(access_token=token_for(user), user=user.public())


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, store: JobBoardStore = Depends(get_store)):
    """Login with username and password."""
    user = store.get_user_by_username(request.username)
    if user is None or not verify_password(request.password, user.password):
        raise AuthenticationError("Invalid username or password")
    return TokenResponse(access_token=token_for(user), user=user.public())


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user.public()
