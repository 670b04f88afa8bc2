"""
User Routes

GET /users/profile - Get own profile
PUT /users/profile - Update profile
GET /users/profile/completion - Profile completion checklist
"""

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_current_user
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import ProfileCompletion, User, UserProfileUpdate, UserResponse
from jobboard.services.derivation import profile_completion

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return user.public()


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: UserProfileUpdate,
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Update profile fields. Username, email, password and role cannot change here."""
    return store.update_user(user.id, data).public()


@router.get("/profile/completion", response_model=ProfileCompletion)
async def get_profile_completion(user: User = Depends(get_current_user)):
    return profile_completion(user)
