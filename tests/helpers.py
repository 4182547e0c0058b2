"""Token, header and row builders shared by the tests."""

from datetime import datetime, timezone, timedelta

import jwt  # PyJWT

# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

MEMBER_ID = "user-1"
MEMBER_EMAIL = "member@club.example"
ADMIN_ID = "admin-1"
ADMIN_EMAIL = "admin@club.example"
CHAIR_ID = "chair-1"
CHAIR_EMAIL = "chair@club.example"  # allow-listed, profile role is user
LEGACY_ID = "legacy-1"
LEGACY_EMAIL = "legacy@club.example"  # profile row without a role


def create_test_token(
    user_id: str = MEMBER_ID,
    email: str = MEMBER_EMAIL,
    expired: bool = False,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def bearer(user_id: str = MEMBER_ID, email: str = MEMBER_EMAIL) -> dict[str, str]:
    """Authorization header for the given user."""
    return {"Authorization": f"Bearer {create_test_token(user_id, email)}"}


def event_row(**overrides) -> dict:
    """A stored events row with sensible defaults."""
    row = {
        "title": "Spring Social",
        "description": "Drinks and games in the hall",
        "date": "2030-04-12",
        "time": "07:00 PM",
        "location": "Main Hall",
        "image_url": "assets/images/placeholder.jpg",
        "created_by": ADMIN_ID,
        "created_at": "2030-01-01T10:00:00+00:00",
    }
    row.update(overrides)
    return row
