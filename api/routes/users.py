"""
User-related endpoints.

Exposes the session the caller's token resolves to.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import Role, Session
from ..middleware.auth import get_current_session

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: str
    name: Optional[str] = None
    role: Optional[Role] = None
    is_admin: bool


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    session: Session = Depends(get_current_session),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Requires authentication. is_admin reflects the role only; the
    allow-list is consulted by the organizer checks.
    """
    return UserProfileResponse(
        id=session.subject_id,
        email=session.email,
        name=session.display_name,
        role=session.role,
        is_admin=session.is_admin,
    )
