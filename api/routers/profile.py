"""
Profile router for rider weight, demographics and preferences.

Provides GET/PUT endpoints for the authenticated user's profile.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from api.deps import get_current_user, get_profile_repo
from application.ports import ProfileRepository
from domain.models import UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
)


class ProfileResponse(BaseModel):
    """Stored profile plus the normalized weight."""
    profile: UserProfile
    weight_kg: Optional[float] = None


@router.get("", response_model=ProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
):
    """Get the user's profile; defaults when none has been saved."""
    profile = profile_repo.get(user_id) or UserProfile()
    return ProfileResponse(profile=profile, weight_kg=profile.weight_kg)


@router.put("", response_model=ProfileResponse)
def update_profile(
    profile: UserProfile,
    user_id: str = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
):
    """Replace the user's profile."""
    if not profile_repo.save(user_id, profile):
        logger.error(f"Profile update failed for {user_id}")
        raise HTTPException(status_code=503, detail="Profile could not be saved")

    logger.info(f"Profile updated for {user_id}")
    return ProfileResponse(profile=profile, weight_kg=profile.weight_kg)
