"""Tests for candidate writes and the activity rows logged with them."""

import pytest

from recruit_crm.core.error_handling import DatabaseError, NotFoundError
from recruit_crm.models.activity import Activity
from recruit_crm.repositories.activity import ActivityRepository
from recruit_crm.repositories.candidate import CandidateRepository
from recruit_crm.schemas.candidate import CandidateCreate, CandidateUpdate
from recruit_crm.services.candidate_service import CandidateService


@pytest.fixture
def service():
    return CandidateService()


@pytest.fixture
def jane(db_session, ctx_a, service):
    return service.create_candidate(
        db_session, ctx_a, CandidateCreate(first_name="Jane", last_name="Doe")
    )


@pytest.fixture
def failing_activity_log(monkeypatch):
    def fail(self, db, context, *args, **kwargs):
        raise DatabaseError("log activity failed: database unavailable")

    monkeypatch.setattr(ActivityRepository, "log", fail)


def activity_types(db_session, candidate_id):
    return [
        a.type for a in db_session.query(Activity).filter(Activity.candidate_id == candidate_id)
    ]


class TestCandidateWrites:

    def test_create_logs_created_activity(self, db_session, jane):
        assert activity_types(db_session, jane.id) == ["created"]

    def test_update_logs_changed_fields(self, db_session, ctx_a, service, jane):
        service.update_candidate(
            db_session, ctx_a, jane.id, CandidateUpdate(first_name="Janet", phone="555")
        )
        updated = db_session.query(Activity).filter(Activity.type == "updated").one()
        assert updated.details == {"fields": ["first_name", "phone"]}

    def test_update_of_unknown_candidate(self, db_session, ctx_b, service, jane):
        with pytest.raises(NotFoundError):
            service.update_candidate(db_session, ctx_b, jane.id, CandidateUpdate(first_name="X"))


class TestFailedActivityWrite:
    """A candidate change and its activity succeed or fail together."""

    def test_create_leaves_no_candidate(self, db_session, ctx_a, service, failing_activity_log):
        with pytest.raises(DatabaseError):
            service.create_candidate(
                db_session, ctx_a, CandidateCreate(first_name="Jane", last_name="Doe")
            )

        assert CandidateRepository().count(db_session, ctx_a) == 0

    def test_update_keeps_previous_values(self, db_session, ctx_a, service, jane, monkeypatch):
        def fail(self, db, context, *args, **kwargs):
            raise DatabaseError("log activity failed: database unavailable")

        monkeypatch.setattr(ActivityRepository, "log", fail)

        with pytest.raises(DatabaseError):
            service.update_candidate(
                db_session, ctx_a, jane.id, CandidateUpdate(first_name="Janet")
            )

        stored = CandidateRepository().get_by_id(db_session, ctx_a, jane.id)
        assert stored.first_name == "Jane"
        assert activity_types(db_session, jane.id) == ["created"]

    def test_session_usable_after_failure(self, db_session, ctx_a, service, jane, monkeypatch):
        def fail(self, db, context, *args, **kwargs):
            raise DatabaseError("log activity failed: database unavailable")

        with monkeypatch.context() as patched:
            patched.setattr(ActivityRepository, "log", fail)
            with pytest.raises(DatabaseError):
                service.update_candidate(
                    db_session, ctx_a, jane.id, CandidateUpdate(first_name="Janet")
                )

        service.update_candidate(db_session, ctx_a, jane.id, CandidateUpdate(first_name="Janet"))
        assert CandidateRepository().get_by_id(db_session, ctx_a, jane.id).first_name == "Janet"
