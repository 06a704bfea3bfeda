"""Profile-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileCreate(BaseModel):
    """Schema for registering the profile of the authenticated identity."""

    username: str = Field(..., min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_]+$")
    display_name: str | None = Field(None, max_length=64)


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(None, max_length=64)
    bio: str | None = Field(None, max_length=1000)
    avatar_url: str | None = Field(None, max_length=2048)


class PublicProfile(BaseModel):
    """Fields of a profile that any user may see."""

    id: str
    username: str
    display_name: str | None
    bio: str | None
    avatar_url: str | None
    rating: float

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(PublicProfile):
    """The caller's own profile, including the coin balance."""

    coin_balance: int
    created_at: datetime
