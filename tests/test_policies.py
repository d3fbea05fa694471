"""Tests for the organization-scoped policy matrix."""

from uuid import uuid4

import pytest

from recruit_crm.auth.policies import (
    POLICIES,
    PolicyAction,
    authorize,
    can_delete,
    can_insert,
    can_read,
    can_update,
    is_permitted,
    require_permitted,
    same_organization,
)
from recruit_crm.core.error_handling import PolicyViolation
from recruit_crm.core.session_context import RequestContext


ORG = uuid4()
OTHER_ORG = uuid4()
CALLER = RequestContext(user_id=uuid4(), organization_id=ORG)
UNPROVISIONED = RequestContext(user_id=uuid4())


class TestPolicyMatrix:
    """Which statement kinds each table grants."""

    def test_every_table_has_an_entry(self):
        assert set(POLICIES) == {
            "organizations", "profiles", "candidates", "activities",
            "tags", "candidate_tags", "templates",
        }

    @pytest.mark.parametrize("table,action", [
        ("candidates", PolicyAction.DELETE),
        ("activities", PolicyAction.UPDATE),
        ("activities", PolicyAction.DELETE),
        ("organizations", PolicyAction.INSERT),
        ("organizations", PolicyAction.UPDATE),
        ("profiles", PolicyAction.UPDATE),
        ("candidate_tags", PolicyAction.UPDATE),
    ])
    def test_denied_by_default(self, table, action):
        assert not is_permitted(table, action)

    @pytest.mark.parametrize("table,action", [
        ("candidates", PolicyAction.SELECT),
        ("candidates", PolicyAction.INSERT),
        ("candidates", PolicyAction.UPDATE),
        ("activities", PolicyAction.INSERT),
        ("tags", PolicyAction.DELETE),
        ("templates", PolicyAction.UPDATE),
        ("candidate_tags", PolicyAction.DELETE),
    ])
    def test_granted(self, table, action):
        assert is_permitted(table, action)

    def test_unknown_table_is_denied(self):
        assert not is_permitted("audit_logs", PolicyAction.SELECT)


class TestRowChecks:
    """Row-level evaluation of the organization predicate."""

    def test_same_organization(self):
        assert same_organization(CALLER, ORG)
        assert not same_organization(CALLER, OTHER_ORG)
        assert not same_organization(CALLER, None)

    def test_unprovisioned_caller_matches_nothing(self):
        assert not same_organization(UNPROVISIONED, ORG)
        assert not same_organization(UNPROVISIONED, None)
        assert not can_read(UNPROVISIONED, "candidates", None)

    def test_read_and_write_in_own_organization(self):
        assert can_read(CALLER, "candidates", ORG)
        assert can_insert(CALLER, "candidates", ORG)
        assert can_update(CALLER, "candidates", ORG)
        assert can_delete(CALLER, "tags", ORG)

    def test_cross_organization_is_denied(self):
        assert not can_read(CALLER, "candidates", OTHER_ORG)
        assert not can_insert(CALLER, "candidates", OTHER_ORG)
        assert not can_update(CALLER, "templates", OTHER_ORG)
        assert not can_delete(CALLER, "tags", OTHER_ORG)

    def test_delete_candidate_denied_even_in_own_organization(self):
        assert not can_delete(CALLER, "candidates", ORG)

    def test_authorize_raises_policy_violation(self):
        authorize(CALLER, "tags", PolicyAction.UPDATE, ORG)
        with pytest.raises(PolicyViolation):
            authorize(CALLER, "tags", PolicyAction.UPDATE, OTHER_ORG)

    def test_require_permitted(self):
        require_permitted(CALLER, "candidates", PolicyAction.UPDATE)
        with pytest.raises(PolicyViolation) as exc_info:
            require_permitted(CALLER, "candidates", PolicyAction.DELETE)
        assert exc_info.value.message == "Operation not permitted"
