"""Tests for the registration service."""

import asyncio

import pytest
from unittest.mock import patch

from modules.auth.exceptions import NotAuthenticatedError
from modules.auth.repository import ProfileRepository
from modules.events.exceptions import EventNotFoundError
from modules.events.repository import EventRepository
from modules.registrations.exceptions import RegistrationNotFoundError
from modules.registrations.models import RegistrationOutcome
from modules.registrations.repository import RegistrationRepository
from modules.registrations.service import RegistrationService
from shared.exceptions import RemoteUnavailableError
from shared.models import Session

from tests.fakes import FakeSupabase
from tests.helpers import ADMIN_ID, MEMBER_EMAIL, MEMBER_ID, event_row


@pytest.fixture
def service(fake_db):
    fake_db.seed(
        "events",
        event_row(id="E1", title="Spring Social", date="2030-04-12"),
        event_row(id="E2", title="Summer Fair", date="2030-07-01"),
    )
    return RegistrationService(
        repository=RegistrationRepository(fake_db),
        events=EventRepository(fake_db),
        profiles=ProfileRepository(fake_db),
    )


class TestRegister:
    @pytest.mark.asyncio
    async def test_register(self, service, member_session, fake_db):
        result = await service.register(member_session, "E1")

        assert result.outcome == RegistrationOutcome.REGISTERED
        assert result.message == "Successfully registered for the event!"
        assert result.registration.user_id == MEMBER_ID
        assert len(fake_db.rows("registrations")) == 1

    @pytest.mark.asyncio
    async def test_register_twice_keeps_one_record(self, service, member_session, fake_db):
        """A second registration is an outcome, not an error or a duplicate."""
        await service.register(member_session, "E1")
        second = await service.register(member_session, "E1")

        assert second.outcome == RegistrationOutcome.ALREADY_REGISTERED
        assert second.message == "You are already registered for this event."
        assert len(fake_db.rows("registrations")) == 1

    @pytest.mark.asyncio
    async def test_register_waits_for_pending_call_on_same_event(self, service, member_session, fake_db):
        """A double submit queues behind the first and then sees its record."""
        async with service._serialized(MEMBER_ID, "E1"):
            queued = asyncio.create_task(service.register(member_session, "E1"))
            await asyncio.sleep(0)

            assert not queued.done()
            assert fake_db.rows("registrations") == []

            await service.register(member_session, "E2")
            fake_db.seed("registrations", {"user_id": MEMBER_ID, "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"})

        result = await queued

        assert result.outcome == RegistrationOutcome.ALREADY_REGISTERED
        assert len([r for r in fake_db.rows("registrations") if r["event_id"] == "E1"]) == 1

    @pytest.mark.asyncio
    async def test_concurrent_registers_keep_one_record(self, service, member_session, fake_db):
        results = await asyncio.gather(
            service.register(member_session, "E1"),
            service.register(member_session, "E1"),
        )

        outcomes = sorted(result.outcome.value for result in results)
        assert outcomes == ["already_registered", "registered"]
        assert len(fake_db.rows("registrations")) == 1

    @pytest.mark.asyncio
    async def test_unique_violation_is_already_registered(self, service, member_session, fake_db):
        """A racing writer from another process hits the unique constraint."""
        fake_db.seed("registrations", {"user_id": MEMBER_ID, "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"})

        with patch.object(RegistrationRepository, "find", return_value=[]):
            result = await service.register(member_session, "E1")

        assert result.outcome == RegistrationOutcome.ALREADY_REGISTERED
        assert len(fake_db.rows("registrations")) == 1

    @pytest.mark.asyncio
    async def test_other_insert_failure(self, service, member_session, fake_db):
        fake_db.fail("registrations", "insert")
        with pytest.raises(RemoteUnavailableError):
            await service.register(member_session, "E1")

    @pytest.mark.asyncio
    async def test_requires_session(self, service):
        with pytest.raises(NotAuthenticatedError) as exc_info:
            await service.register(None, "E1")
        assert exc_info.value.message == "Please login to register for events."
        assert exc_info.value.details["redirect_to"] == "login"

    @pytest.mark.asyncio
    async def test_unknown_event(self, service, member_session, fake_db):
        with pytest.raises(EventNotFoundError):
            await service.register(member_session, "missing")
        assert fake_db.rows("registrations") == []

    @pytest.mark.asyncio
    async def test_locks_released(self, service, member_session):
        await service.register(member_session, "E1")
        assert service._locks == {}


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel(self, service, member_session, fake_db):
        await service.register(member_session, "E1")

        result = await service.cancel(member_session, "E1")

        assert result.message == "Registration cancelled successfully."
        assert fake_db.rows("registrations") == []

    @pytest.mark.asyncio
    async def test_cancel_without_registration(self, service, member_session, fake_db):
        """Cancelling nothing is an error and changes nothing."""
        fake_db.seed("registrations", {"user_id": ADMIN_ID, "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"})

        with pytest.raises(RegistrationNotFoundError):
            await service.cancel(member_session, "E1")
        assert len(fake_db.rows("registrations")) == 1

    @pytest.mark.asyncio
    async def test_cancel_removes_legacy_duplicates(self, member_session):
        """Rows written before the unique constraint are all removed."""
        legacy = [
            {"id": "r1", "user_id": MEMBER_ID, "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"},
            {"id": "r2", "user_id": MEMBER_ID, "event_id": "E1", "registered_at": "2030-01-02T00:00:00+00:00"},
        ]
        db = FakeSupabase()
        db.tables["events"] = [event_row(id="E1")]
        db.tables["registrations"] = legacy
        service = RegistrationService(
            repository=RegistrationRepository(db),
            events=EventRepository(db),
            profiles=ProfileRepository(db),
        )

        await service.cancel(member_session, "E1")

        assert db.rows("registrations") == []

    @pytest.mark.asyncio
    async def test_requires_session(self, service):
        with pytest.raises(NotAuthenticatedError):
            await service.cancel(None, "E1")


class TestCounts:
    @pytest.mark.asyncio
    async def test_register_cancel_count_cycle(self, service, member_session):
        """Count follows register and cancel; a second cancel fails."""
        assert await service.participant_count("E1") == 0

        await service.register(member_session, "E1")
        assert await service.participant_count("E1") == 1
        assert await service.is_registered(member_session, "E1") is True

        again = await service.register(member_session, "E1")
        assert again.outcome == RegistrationOutcome.ALREADY_REGISTERED
        assert await service.participant_count("E1") == 1

        await service.cancel(member_session, "E1")
        assert await service.participant_count("E1") == 0
        assert await service.is_registered(member_session, "E1") is False

        with pytest.raises(RegistrationNotFoundError):
            await service.cancel(member_session, "E1")

    @pytest.mark.asyncio
    async def test_is_registered_without_session(self, service):
        assert await service.is_registered(None, "E1") is False

    @pytest.mark.asyncio
    async def test_count_backend_failure(self, service, fake_db):
        fake_db.fail("registrations", "select")
        with pytest.raises(RemoteUnavailableError) as exc_info:
            await service.participant_count("E1")
        assert exc_info.value.details["operation"] == "count participants"


class TestListings:
    @pytest.mark.asyncio
    async def test_user_registrations_newest_first(self, service, member_session, fake_db):
        fake_db.seed(
            "registrations",
            {"user_id": MEMBER_ID, "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"},
            {"user_id": MEMBER_ID, "event_id": "E2", "registered_at": "2030-01-05T00:00:00+00:00"},
            {"user_id": MEMBER_ID, "event_id": "gone", "registered_at": "2030-01-09T00:00:00+00:00"},
        )

        entries = await service.list_user_registrations(member_session)

        assert [entry.event.id for entry in entries] == ["E2", "E1"]

    @pytest.mark.asyncio
    async def test_participants_with_profiles(self, service, member_session, admin_session):
        await service.register(member_session, "E1")
        await service.register(admin_session, "E1")

        participants = await service.list_participants("E1")

        assert [p.user_id for p in participants] == [MEMBER_ID, ADMIN_ID]
        assert participants[0].email == MEMBER_EMAIL
        assert participants[0].name == "Uma Member"

    @pytest.mark.asyncio
    async def test_participant_without_profile(self, service, fake_db):
        fake_db.seed("registrations", {"user_id": "ghost", "event_id": "E1", "registered_at": "2030-01-01T00:00:00+00:00"})
        [participant] = await service.list_participants("E1")
        assert participant.name == ""
        assert participant.email == ""

    @pytest.mark.asyncio
    async def test_participants_unknown_event(self, service):
        with pytest.raises(EventNotFoundError):
            await service.list_participants("missing")


class TestAccountWithoutProfile:
    @pytest.mark.asyncio
    async def test_can_register(self, service, fake_db):
        """A session whose profile row is missing still registers."""
        session = Session(subject_id="no-profile", email="new@club.example")

        result = await service.register(session, "E1")

        assert result.outcome == RegistrationOutcome.REGISTERED
        [participant] = await service.list_participants("E1")
        assert participant.user_id == "no-profile"
        assert participant.email == ""
