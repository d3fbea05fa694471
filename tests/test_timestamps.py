"""Tests for created_at/updated_at maintenance."""

from datetime import datetime, timedelta

import pytest

from recruit_crm.core.timestamps import utcnow
from recruit_crm.repositories.candidate import CandidateRepository
from recruit_crm.repositories.template import TemplateRepository


@pytest.fixture
def candidate(db_session, ctx_a):
    return CandidateRepository().create(db_session, ctx_a, first_name="Jane", last_name="Doe")


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None


def test_insert_sets_both_timestamps(candidate):
    assert candidate.created_at is not None
    assert candidate.updated_at is not None
    assert candidate.updated_at >= candidate.created_at


def test_update_refreshes_updated_at(db_session, ctx_a, candidate):
    before = candidate.updated_at
    updated = CandidateRepository().update(db_session, ctx_a, candidate.id, functional_role="ops")
    assert updated.updated_at >= before


def test_supplied_updated_at_is_ignored(db_session, ctx_a, candidate):
    before = candidate.updated_at
    updated = CandidateRepository().update(
        db_session, ctx_a, candidate.id, first_name="Janet", updated_at=datetime(2000, 1, 1)
    )
    assert updated.updated_at >= before
    assert updated.updated_at > datetime(2000, 1, 1)


def test_created_at_cannot_change(db_session, candidate):
    original = candidate.created_at
    candidate.created_at = original - timedelta(days=365)
    candidate.last_name = "Roe"
    db_session.commit()
    db_session.refresh(candidate)

    assert candidate.created_at == original
    assert candidate.last_name == "Roe"


def test_created_at_is_protected_through_repository(db_session, ctx_a, candidate):
    from recruit_crm.core.error_handling import ValidationError

    with pytest.raises(ValidationError):
        CandidateRepository().update(db_session, ctx_a, candidate.id, created_at=datetime(2000, 1, 1))


def test_unchanged_row_keeps_updated_at(db_session, candidate):
    before = candidate.updated_at
    db_session.commit()
    db_session.refresh(candidate)
    assert candidate.updated_at == before


def test_templates_are_timestamped(db_session, ctx_a):
    repository = TemplateRepository()
    template = repository.create(db_session, ctx_a, name="Intro", type="email", content="Hi")
    before = template.updated_at
    updated = repository.update(db_session, ctx_a, template.id, content="Hello")
    assert updated.updated_at >= before
    assert updated.created_at == template.created_at
