"""
Account API endpoints.

Sign-up plus the two login entry points: the member login refuses
organizer accounts, the organizer login runs the admin check.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import Portal, SignInRequest, SignInResponse, SignUpRequest, SignUpResponse

router = APIRouter()


@router.post("/signup", response_model=SignUpResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """Create an account with the default user role."""
    return await service.sign_up(request)


@router.post("/login", response_model=SignInResponse)
async def login(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignInResponse:
    """
    Member login.

    Organizers get 403 WRONG_PORTAL and are pointed at the admin login.
    """
    return await service.sign_in(request, Portal.USER)


@router.post("/admin-login", response_model=SignInResponse)
async def admin_login(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignInResponse:
    """Organizer login; non-organizers are signed out and get 403."""
    return await service.sign_in(request, Portal.ADMIN)
