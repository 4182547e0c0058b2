"""Tests for the session store."""

from modules.auth.models import AuthIdentity, UserProfile
from modules.auth.repository import ProfileRepository
from modules.auth.session import SessionStore, session_from_identity
from shared.models import Role

from tests.fakes import FakeAuthProvider
from tests.helpers import ADMIN_EMAIL, ADMIN_ID, MEMBER_EMAIL, MEMBER_ID


class TestSessionFromIdentity:
    def test_merges_profile(self):
        identity = AuthIdentity(subject_id="u1", email="a@club.example")
        profile = UserProfile(id="u1", name="Ann", email="a@club.example", role=Role.ADMIN)

        session = session_from_identity(identity, profile)

        assert session.subject_id == "u1"
        assert session.display_name == "Ann"
        assert session.role == Role.ADMIN

    def test_missing_profile_leaves_role_unset(self):
        identity = AuthIdentity(subject_id="u1", email="a@club.example")
        session = session_from_identity(identity, None)
        assert session.role is None
        assert session.display_name is None


class TestSessionStore:
    def make_store(self, fake_db):
        provider = FakeAuthProvider()
        provider.add_account(MEMBER_ID, MEMBER_EMAIL, "secret1")
        provider.add_account(ADMIN_ID, ADMIN_EMAIL, "secret2")
        return provider, SessionStore(provider, ProfileRepository(fake_db))

    def test_starts_signed_out(self, fake_db):
        _, store = self.make_store(fake_db)
        with store:
            assert store.current_session() is None
            assert store.is_authenticated() is False

    def test_sign_in_notification_loads_role(self, fake_db):
        """The role comes from the users profile row."""
        provider, store = self.make_store(fake_db)
        with store:
            provider.sign_in(ADMIN_EMAIL, "secret2")
            session = store.current_session()
            assert session.subject_id == ADMIN_ID
            assert session.role == Role.ADMIN
            assert session.display_name == "Ada Admin"

    def test_sign_out_clears_session(self, fake_db):
        provider, store = self.make_store(fake_db)
        with store:
            provider.sign_in(MEMBER_EMAIL, "secret1")
            store.sign_out()
            assert store.current_session() is None
            assert provider.sign_out_calls == 1

    def test_profile_failure_fails_closed(self, fake_db):
        """A profile lookup failure keeps the identity but no role."""
        fake_db.fail("users", "select")
        provider, store = self.make_store(fake_db)
        with store:
            provider.sign_in(ADMIN_EMAIL, "secret2")
            session = store.current_session()
            assert session.subject_id == ADMIN_ID
            assert session.role is None
            assert session.is_admin is False

    def test_start_is_idempotent(self, fake_db):
        provider, store = self.make_store(fake_db)
        store.start()
        store.start()
        assert provider.listener_count == 1
        store.close()
        assert provider.listener_count == 0

    def test_late_notification_ignored_after_close(self, fake_db):
        """Notifications delivered after close() must not revive a session."""
        provider, store = self.make_store(fake_db)
        store.start()
        listener_identity = AuthIdentity(subject_id=MEMBER_ID, email=MEMBER_EMAIL)
        store.close()

        store._on_auth_change(listener_identity)

        assert store.current_session() is None
        assert provider.listener_count == 0

    def test_close_drops_session(self, fake_db):
        provider, store = self.make_store(fake_db)
        store.start()
        provider.sign_in(MEMBER_EMAIL, "secret1")
        store.close()
        assert store.current_session() is None

    def test_late_provider_emit_after_close(self, fake_db):
        provider, store = self.make_store(fake_db)
        store.start()
        store.close()
        provider.emit(AuthIdentity(subject_id=MEMBER_ID, email=MEMBER_EMAIL))
        assert store.current_session() is None
