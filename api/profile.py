"""User profile router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.health_schema import UserProfileCreate, UserProfileResponse, UserProfileUpdate

logger = get_logger("api.profile")
router = APIRouter(prefix="/api/user", tags=["profile"])


def _profile_or_404(db: Session, user_id: str) -> models.UserProfile:
    profile = UserScopedRepository(models.UserProfile, db, user_id).query().first()
    if profile is None:
        raise NotFoundError("User profile", message="User profile not found")
    return profile


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the caller's profile.

    Raises:
        NotFoundError: If no profile exists yet.
    """
    return _profile_or_404(db, user_id)


@router.post("/profile", response_model=UserProfileResponse, status_code=201)
def create_profile(payload: UserProfileCreate, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_write)):
    """Create the caller's profile.

    Raises:
        ValidationError: If the user already has a profile.
    """
    repo = UserScopedRepository(models.UserProfile, db, user_id)
    if repo.query().first() is not None:
        raise ValidationError("User profile already exists", field="user_id")
    profile = repo.create(**payload.model_dump())
    logger.info("Profile created for user %s", user_id)
    return profile


@router.put("/profile", response_model=UserProfileResponse)
def update_profile(payload: UserProfileUpdate, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_write)):
    """Update display name and/or email.

    Raises:
        NotFoundError: If no profile exists yet.
    """
    profile = _profile_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return UserScopedRepository(models.UserProfile, db, user_id).update(profile, changes)
