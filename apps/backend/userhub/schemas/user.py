"""Pydantic schemas for users."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints, field_validator

from userhub.schemas.base import BaseResponse

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
# Stored exactly as sent (apart from surrounding whitespace); uniqueness ignores case
UserEmail = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class UserCreate(BaseModel):
    """Schema for creating a user."""

    name: UserName
    email: UserEmail


class UserUpdate(BaseModel):
    """Schema for updating a user. Omitted fields are left unchanged."""

    name: UserName | None = None
    email: UserEmail | None = None


class UserResponse(BaseResponse):
    """Schema for user response."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime fields are timezone-aware."""
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class UserListData(BaseResponse):
    """Payload of GET /api/users."""

    users: list[UserResponse]
    count: int
