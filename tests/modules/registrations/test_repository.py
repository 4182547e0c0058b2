"""Tests for the registration repository."""

import pytest

from modules.registrations.repository import RegistrationRepository, is_unique_violation

from tests.fakes import FakeAPIError, FakeSupabase, invalid_uuid_error


def seed(db, user_id, event_id, when):
    db.seed("registrations", {"user_id": user_id, "event_id": event_id, "registered_at": when})


class TestRegistrationRepository:
    def test_create_and_find(self):
        db = FakeSupabase()
        repo = RegistrationRepository(db)

        created = repo.create("u1", "e1")

        assert repo.find("u1", "e1") == [created]
        assert repo.find("u1", "e2") == []

    def test_duplicate_insert_is_unique_violation(self):
        db = FakeSupabase()
        repo = RegistrationRepository(db)
        repo.create("u1", "e1")

        with pytest.raises(FakeAPIError) as exc_info:
            repo.create("u1", "e1")
        assert is_unique_violation(exc_info.value)

    def test_other_errors_are_not_unique_violations(self):
        assert is_unique_violation(FakeAPIError("timeout")) is False
        assert is_unique_violation(RuntimeError("boom")) is False

    def test_list_for_event_oldest_first(self):
        db = FakeSupabase()
        seed(db, "u2", "e1", "2030-01-02T00:00:00+00:00")
        seed(db, "u1", "e1", "2030-01-01T00:00:00+00:00")
        seed(db, "u3", "e2", "2030-01-03T00:00:00+00:00")

        regs = RegistrationRepository(db).list_for_event("e1")

        assert [r.user_id for r in regs] == ["u1", "u2"]

    def test_list_for_user_newest_first(self):
        db = FakeSupabase()
        seed(db, "u1", "e1", "2030-01-01T00:00:00+00:00")
        seed(db, "u1", "e2", "2030-01-02T00:00:00+00:00")

        regs = RegistrationRepository(db).list_for_user("u1")

        assert [r.event_id for r in regs] == ["e2", "e1"]

    def test_counts(self):
        db = FakeSupabase()
        seed(db, "u1", "e1", "2030-01-01T00:00:00+00:00")
        seed(db, "u2", "e1", "2030-01-01T00:00:00+00:00")
        seed(db, "u1", "e2", "2030-01-01T00:00:00+00:00")
        repo = RegistrationRepository(db)

        assert repo.count_for_event("e1") == 2
        assert repo.count_for_event("e3") == 0
        assert repo.count_by_event() == {"e1": 2, "e2": 1}

    def test_delete_by_id(self):
        db = FakeSupabase()
        repo = RegistrationRepository(db)
        keep = repo.create("u1", "e1")
        drop = repo.create("u2", "e1")

        repo.delete_by_id(drop.id)

        assert [r["id"] for r in db.rows("registrations")] == [keep.id]

    def test_malformed_event_id_matches_nothing(self):
        db = FakeSupabase()
        db.fail("registrations", "select", error=invalid_uuid_error())
        repo = RegistrationRepository(db)

        assert repo.find("u1", "abc") == []
        assert repo.list_for_event("abc") == []
        assert repo.count_for_event("abc") == 0
