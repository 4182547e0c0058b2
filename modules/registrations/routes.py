"""
Registration API endpoints.

Mounted under /api so the event-scoped paths sit next to the event
endpoints: /api/events/{event_id}/registration and friends.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from api.dependencies import get_registration_service
from api.middleware.auth import get_current_session, get_optional_session, require_admin
from shared.models import Session

from .interfaces import IRegistrationService
from .models import (
    CancelResult,
    Participant,
    ParticipantCount,
    RegisteredEvent,
    RegistrationResult,
    RegistrationStatus,
)

router = APIRouter()


@router.post("/events/{event_id}/registration", response_model=RegistrationResult)
async def register_for_event(
    event_id: str,
    session: Session = Depends(get_current_session),
    service: IRegistrationService = Depends(get_registration_service),
) -> RegistrationResult:
    """
    Register the caller for an event.

    Registering twice is not an error: the outcome is
    ALREADY_REGISTERED and no second record is written.
    """
    return await service.register(session, event_id)


@router.delete("/events/{event_id}/registration", response_model=CancelResult)
async def cancel_registration(
    event_id: str,
    session: Session = Depends(get_current_session),
    service: IRegistrationService = Depends(get_registration_service),
) -> CancelResult:
    """Cancel the caller's registration; 404 when there is none."""
    return await service.cancel(session, event_id)


@router.get("/events/{event_id}/registration", response_model=RegistrationStatus)
async def get_registration_status(
    event_id: str,
    session: Session = Depends(get_current_session),
    service: IRegistrationService = Depends(get_registration_service),
) -> RegistrationStatus:
    registered = await service.is_registered(session, event_id)
    return RegistrationStatus(event_id=event_id, registered=registered)


@router.get("/events/{event_id}/participants/count", response_model=ParticipantCount)
async def get_participant_count(
    event_id: str,
    session: Optional[Session] = Depends(get_optional_session),
    service: IRegistrationService = Depends(get_registration_service),
) -> ParticipantCount:
    """
    Participant count for the details page.

    Signed-in callers also get their own registration state.
    """
    count = await service.participant_count(event_id)
    registered = await service.is_registered(session, event_id) if session else None
    return ParticipantCount(event_id=event_id, count=count, registered=registered)


@router.get("/events/{event_id}/participants", response_model=list[Participant])
async def list_participants(
    event_id: str,
    session: Session = Depends(require_admin),
    service: IRegistrationService = Depends(get_registration_service),
) -> list[Participant]:
    """Organizer view of who registered, earliest first."""
    return await service.list_participants(event_id)


@router.get("/registrations/me", response_model=list[RegisteredEvent])
async def list_my_registrations(
    session: Session = Depends(get_current_session),
    service: IRegistrationService = Depends(get_registration_service),
) -> list[RegisteredEvent]:
    """The caller's registered events, most recent registration first."""
    return await service.list_user_registrations(session)
