"""Tests for candidate free-text search and filters."""

import pytest

from recruit_crm.repositories.candidate import CandidateFilters, CandidateRepository, escape_like


@pytest.fixture
def repository():
    return CandidateRepository()


@pytest.fixture
def people(db_session, ctx_a, ctx_b, repository):
    """A small population in organization A plus a decoy in B."""
    def add(ctx, **fields):
        return repository.create(db_session, ctx, **fields)

    return {
        "jane": add(
            ctx_a, first_name="Jane", last_name="Doe", relationship_type="client",
            functional_role="engineering", current_company="Initech",
            current_location={"city": "Austin", "category": "us"},
        ),
        "john": add(
            ctx_a, first_name="John", last_name="Doe", relationship_type="candidate",
            functional_role="sales", is_active_looking=True,
            current_location={"city": "Berlin", "category": "europe"},
        ),
        "mary": add(
            ctx_a, first_name="Mary", last_name="Smith", relationship_type="both",
            current_job_title="Head of People", current_company="Doe & Sons",
            is_active_looking=True,
        ),
        "percent": add(
            ctx_a, first_name="Rob", last_name="Hundred", current_company="100% Remote",
        ),
        "dan": add(ctx_b, first_name="Dan", last_name="Doe", relationship_type="client"),
    }


def ids(rows):
    return {row.id for row in rows}


class TestTextSearch:

    def test_blank_text_returns_everything_in_organization(self, db_session, ctx_a, repository, people):
        everyone = {people[k].id for k in ("jane", "john", "mary", "percent")}
        assert ids(repository.search(db_session, ctx_a, "")) == everyone
        assert ids(repository.search(db_session, ctx_a, "   ")) == everyone
        assert ids(repository.search(db_session, ctx_a, None)) == everyone

    def test_case_insensitive_across_fields(self, db_session, ctx_a, repository, people):
        found = repository.search(db_session, ctx_a, "DOE")
        # last name for Jane and John, company for Mary
        assert ids(found) == {people["jane"].id, people["john"].id, people["mary"].id}

    def test_matches_job_title(self, db_session, ctx_a, repository, people):
        assert ids(repository.search(db_session, ctx_a, "head of")) == {people["mary"].id}

    def test_text_is_trimmed(self, db_session, ctx_a, repository, people):
        assert ids(repository.search(db_session, ctx_a, "  initech  ")) == {people["jane"].id}

    def test_wildcards_match_literally(self, db_session, ctx_a, repository, people):
        assert ids(repository.search(db_session, ctx_a, "100%")) == {people["percent"].id}
        assert ids(repository.search(db_session, ctx_a, "%")) == {people["percent"].id}
        assert repository.search(db_session, ctx_a, "_oe") == []

    def test_never_crosses_organizations(self, db_session, ctx_a, repository, people):
        assert people["dan"].id not in ids(repository.search(db_session, ctx_a, "dan"))

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestFilters:

    def test_text_and_relationship_filter(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters(relationship_type=["client"])
        assert ids(repository.search(db_session, ctx_a, "doe", filters)) == {people["jane"].id}

    def test_multiple_values_within_a_filter(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters(relationship_type=["client", "both"])
        assert ids(repository.search(db_session, ctx_a, "", filters)) == {
            people["jane"].id, people["mary"].id
        }

    def test_functional_role(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters(functional_role=["sales"])
        assert ids(repository.search(db_session, ctx_a, None, filters)) == {people["john"].id}

    def test_active_looking_tri_state(self, db_session, ctx_a, repository, people):
        looking = CandidateFilters(is_active_looking=True)
        not_looking = CandidateFilters(is_active_looking=False)

        assert ids(repository.search(db_session, ctx_a, None, looking)) == {
            people["john"].id, people["mary"].id
        }
        assert ids(repository.search(db_session, ctx_a, None, not_looking)) == {
            people["jane"].id, people["percent"].id
        }

    def test_location_category(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters(location_category=["europe"])
        assert ids(repository.search(db_session, ctx_a, None, filters)) == {people["john"].id}

    def test_empty_filters_apply_no_restriction(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters()
        assert filters.is_empty()
        assert len(repository.search(db_session, ctx_a, None, filters)) == 4

    def test_filters_combine_with_and(self, db_session, ctx_a, repository, people):
        filters = CandidateFilters(relationship_type=["client", "candidate"], is_active_looking=True)
        assert ids(repository.search(db_session, ctx_a, "doe", filters)) == {people["john"].id}


class TestOrderingAndPaging:

    def test_most_recently_updated_first(self, db_session, ctx_a, repository, people):
        repository.update(db_session, ctx_a, people["jane"].id, functional_role="product")
        results = repository.search(db_session, ctx_a, None)
        assert results[0].id == people["jane"].id

    def test_skip_and_limit(self, db_session, ctx_a, repository, people):
        first_page = repository.search(db_session, ctx_a, None, skip=0, limit=2)
        second_page = repository.search(db_session, ctx_a, None, skip=2, limit=2)
        assert len(first_page) == 2
        assert len(second_page) == 2
        assert ids(first_page).isdisjoint(ids(second_page))
