"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Roles stored on the users profile row."""

    USER = "user"
    ADMIN = "admin"


class Session(BaseModel):
    """
    The authenticated identity and role of the current actor.

    Identity fields come from the auth provider. The role is only ever
    taken from the remote profile record; None means the profile could
    not be loaded, which every check treats as "not an admin".
    """

    subject_id: str = Field(..., description="User ID (UUID from Supabase Auth)")
    email: str = Field(..., description="User's email address")
    display_name: Optional[str] = Field(None, description="Name from the profile")
    role: Optional[Role] = Field(None, description="Role from the profile record")

    model_config = {
        "frozen": True,  # Only the session store replaces it
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
