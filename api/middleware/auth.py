"""
Session resolution and authorization dependencies.

Resolves the bearer token into a Session and runs the authorization
guard once per gated route.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.guard import AuthorizationGuard
from modules.auth.interfaces import IAuthService
from shared.exceptions import AuthenticationError
from shared.models import Role, Session

from ..dependencies import get_auth_service, get_guard

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def _resolve(
    credentials: Optional[HTTPAuthorizationCredentials],
    auth: IAuthService,
) -> Optional[Session]:
    if credentials is None:
        return None
    return await auth.resolve_session(credentials.credentials)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
    guard: AuthorizationGuard = Depends(get_guard),
) -> Session:
    """
    Dependency that requires a signed-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(session: Session = Depends(get_current_session)):
            return {"user_id": session.subject_id}
    """
    session = await _resolve(credentials, auth)
    return guard.require(session, Role.USER)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
    guard: AuthorizationGuard = Depends(get_guard),
) -> Session:
    """
    Dependency that requires organizer (admin) authorization.

    Denials carry sign_out and redirect_to hints in the error details.
    """
    session = await _resolve(credentials, auth)
    return guard.require(session, Role.ADMIN)


async def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[Session]:
    """
    Dependency that optionally extracts the session if authenticated.

    Use this for public endpoints that show extra state to signed-in users.
    """
    try:
        return await _resolve(credentials, auth)
    except AuthenticationError:
        return None

