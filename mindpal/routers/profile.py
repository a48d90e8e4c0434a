"""
Profile endpoints: wallet, streak and pet state for the current user.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId
from mindpal.core.deps import SupabaseDep
from mindpal.models.schemas import Profile

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileUpdateRequest(BaseModel):
    """Fields a user may change directly. Coins and stats are server-owned."""
    username: str | None = Field(None, min_length=1, max_length=50)
    pet_name: str | None = Field(None, min_length=1, max_length=30)
    is_premium: bool | None = None


@router.get("", response_model=Profile)
async def get_profile(user_id: CurrentUserId, supabase_service: SupabaseDep) -> Profile:
    """
    Get the current user's profile.

    A profile is created with the starting coin balance on first access.
    """
    try:
        profile = await supabase_service.get_profile(user_id)
        if profile:
            return profile

        return await supabase_service.create_profile(user_id)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load profile: {str(e)}")


@router.patch("", response_model=Profile)
async def update_profile(
    request: ProfileUpdateRequest,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
) -> Profile:
    """Update username, pet name or premium flag."""
    updates = request.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        if not await supabase_service.get_profile(user_id):
            raise HTTPException(status_code=404, detail="Profile not found")

        return await supabase_service.update_profile(user_id, updates)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")
