"""Tests for tags and candidate tagging."""

import pytest

from recruit_crm.core.error_handling import ConstraintViolationError, NotFoundError
from recruit_crm.schemas.candidate import CandidateCreate
from recruit_crm.schemas.tag import TagCreate, TagUpdate
from recruit_crm.services.candidate_service import CandidateService
from recruit_crm.services.tag_service import TagService


@pytest.fixture
def tags():
    return TagService()


@pytest.fixture
def candidates():
    return CandidateService()


@pytest.fixture
def candidate(db_session, ctx_a, candidates):
    return candidates.create_candidate(
        db_session, ctx_a, CandidateCreate(first_name="Jane", last_name="Doe")
    )


@pytest.fixture
def hot(db_session, ctx_a, tags):
    return tags.create_tag(db_session, ctx_a, TagCreate(name="hot", color="#ff0000"))


def test_list_is_ordered_by_name(db_session, ctx_a, tags, hot):
    tags.create_tag(db_session, ctx_a, TagCreate(name="cold"))
    assert [t.name for t in tags.list_tags(db_session, ctx_a)] == ["cold", "hot"]


def test_update_tag(db_session, ctx_a, tags, hot):
    updated = tags.update_tag(db_session, ctx_a, hot.id, TagUpdate(color="#00ff00"))
    assert updated.color == "#00ff00"
    assert updated.name == "hot"


def test_assign_and_remove(db_session, ctx_a, candidates, candidate, hot):
    candidates.assign_tag(db_session, ctx_a, candidate.id, hot.id)
    reloaded = candidates.get_candidate(db_session, ctx_a, candidate.id)
    assert [t.name for t in reloaded.tags] == ["hot"]

    candidates.remove_tag(db_session, ctx_a, candidate.id, hot.id)
    db_session.expire_all()
    assert candidates.get_candidate(db_session, ctx_a, candidate.id).tags == []


def test_duplicate_assignment_is_a_conflict(db_session, ctx_a, candidates, candidate, hot):
    candidates.assign_tag(db_session, ctx_a, candidate.id, hot.id)
    with pytest.raises(ConstraintViolationError):
        candidates.assign_tag(db_session, ctx_a, candidate.id, hot.id)


def test_referenced_tag_cannot_be_deleted(db_session, ctx_a, tags, candidates, candidate, hot):
    candidates.assign_tag(db_session, ctx_a, candidate.id, hot.id)
    with pytest.raises(ConstraintViolationError):
        tags.delete_tag(db_session, ctx_a, hot.id)

    candidates.remove_tag(db_session, ctx_a, candidate.id, hot.id)
    tags.delete_tag(db_session, ctx_a, hot.id)
    assert tags.list_tags(db_session, ctx_a) == []


def test_remove_missing_assignment(db_session, ctx_a, candidates, candidate, hot):
    with pytest.raises(NotFoundError):
        candidates.remove_tag(db_session, ctx_a, candidate.id, hot.id)


def test_foreign_tag_is_not_found(db_session, ctx_a, ctx_b, tags, candidates, candidate):
    theirs = tags.create_tag(db_session, ctx_b, TagCreate(name="theirs"))
    with pytest.raises(NotFoundError):
        candidates.assign_tag(db_session, ctx_a, candidate.id, theirs.id)
    with pytest.raises(NotFoundError):
        tags.delete_tag(db_session, ctx_a, theirs.id)


def test_invalid_color_rejected():
    with pytest.raises(ValueError):
        TagCreate(name="bad", color="red")
