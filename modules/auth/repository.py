"""
Profile repository for the users table.
"""

from datetime import datetime, timezone
from typing import Optional

from shared.models import Role
from shared.repository import BaseRepository, Row

from .models import UserProfile

USERS_TABLE = "users"


class ProfileRepository(BaseRepository[UserProfile]):
    """
    Repository for user profile rows.

    Note: This repository does NOT perform authorization checks.
    """

    table = USERS_TABLE

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        return self._one(self._query().select("*").eq("id", user_id).execute())

    def get_many(self, user_ids: list[str]) -> dict[str, UserProfile]:
        if not user_ids:
            return {}
        profiles = self._all(self._query().select("*").in_("id", user_ids).execute())
        return {profile.id: profile for profile in profiles}

    def create(self, user_id: str, name: str, email: str, role: Role = Role.USER) -> UserProfile:
        """
        Create the profile row for a new account.

        The row key is the auth user ID so the profile can be looked up
        from any session.
        """
        data = {
            "id": user_id,
            "name": name,
            "email": email,
            "role": role.value,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        return self._one(self._query().insert(data).execute())

    def _map(self, row: Row) -> UserProfile:
        role = row.get("role")
        return UserProfile(
            id=str(row["id"]),
            name=row.get("name"),
            email=row.get("email", ""),
            role=Role(role) if role in (Role.USER.value, Role.ADMIN.value) else None,
            created_at=row.get("created_at"),
        )
