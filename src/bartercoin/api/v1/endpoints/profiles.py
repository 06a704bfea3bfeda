"""Profile endpoints for the BarterCoin API."""

from fastapi import APIRouter, status

from bartercoin.models import Profile
from bartercoin.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate, PublicProfile

from ..dependencies import CurrentUserDep, CurrentUserIdDep, ProfileServiceDep

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def register_profile(
    payload: ProfileCreate,
    user_id: CurrentUserIdDep,
    profiles: ProfileServiceDep,
) -> Profile:
    """Create the profile for the authenticated identity and grant the signup bonus."""
    return profiles.register(user_id, payload.username, payload.display_name)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(current_user: CurrentUserDep) -> Profile:
    return current_user


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    profiles: ProfileServiceDep,
) -> Profile:
    return profiles.update(current_user.id, payload.model_dump(exclude_unset=True))


@router.get("/{user_id}", response_model=PublicProfile)
def get_public_profile(user_id: str, profiles: ProfileServiceDep) -> Profile:
    return profiles.get(user_id)
