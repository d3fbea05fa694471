"""Tests for dashboard sections and recommended actions."""

from datetime import timedelta
from uuid import uuid4

import pytest

from recruit_crm.core.config import Settings
from recruit_crm.core.timestamps import utcnow
from recruit_crm.models.activity import Activity
from recruit_crm.models.candidate import Candidate
from recruit_crm.schemas.candidate import CandidateCreate
from recruit_crm.services.candidate_service import CandidateService
from recruit_crm.services.dashboard_service import DashboardService
from recruit_crm.services.recommendations import Priority, default_rules, days_since, recommend

NOW = utcnow()
RULES = default_rules(Settings())


def person(created_days_ago=0, **fields):
    fields.setdefault("first_name", "Test")
    fields.setdefault("last_name", "Person")
    return Candidate(id=uuid4(), created_at=NOW - timedelta(days=created_days_ago), **fields)


def days_ago(n):
    return NOW - timedelta(days=n)


class TestRecommendationRules:

    def test_rules_are_in_priority_order(self):
        assert [r.action_type for r in RULES] == ["follow_up", "check_in", "nurture"]

    def test_active_seeker_follow_up(self):
        seeker = person(is_active_looking=True)
        [rec] = recommend([(seeker, days_ago(8))], RULES, NOW)
        assert rec.rule.action_type == "follow_up"
        assert rec.priority == Priority.HIGH
        assert rec.days_since_activity == 8

    def test_recent_activity_means_no_recommendation(self):
        seeker = person(is_active_looking=True)
        assert recommend([(seeker, days_ago(2))], RULES, NOW) == []

    def test_stale_candidate_check_in(self):
        quiet = person(is_active_looking=False, relationship_type="candidate")
        [rec] = recommend([(quiet, days_ago(31))], RULES, NOW)
        assert rec.rule.action_type == "check_in"

    def test_highest_priority_rule_wins(self):
        # Matches all three rules; only follow_up is produced
        client = person(is_active_looking=True, relationship_type="both")
        recs = recommend([(client, days_ago(90))], RULES, NOW)
        assert [r.rule.action_type for r in recs] == ["follow_up"]

    def test_client_nurture(self):
        # check_in matches first for any stale record, so nurture needs its
        # own rule set to be observed in isolation
        nurture_only = [r for r in RULES if r.action_type == "nurture"]
        client = person(relationship_type="client")
        [rec] = recommend([(client, days_ago(61))], nurture_only, NOW)
        assert rec.rule.action_type == "nurture"
        assert rec.priority == Priority.LOW
        assert recommend([(person(relationship_type="candidate"), days_ago(61))], nurture_only, NOW) == []

    def test_falls_back_to_created_at(self):
        assert days_since(None, days_ago(40), NOW) == 40
        [rec] = recommend([(person(created_days_ago=40), None)], RULES, NOW)
        assert rec.days_since_activity == 40

    def test_sorted_by_priority_then_staleness_and_capped(self):
        rows = [
            (person(), days_ago(45)),
            (person(), days_ago(100)),
            (person(is_active_looking=True), days_ago(10)),
        ]
        recs = recommend(rows, RULES, NOW)
        assert [(r.rule.action_type, r.days_since_activity) for r in recs] == [
            ("follow_up", 10), ("check_in", 100), ("check_in", 45)
        ]
        assert len(recommend(rows, RULES, NOW, limit=2)) == 2

    def test_due_date(self):
        [rec] = recommend([(person(is_active_looking=True), days_ago(8))], RULES, NOW)
        assert rec.due_date == NOW + timedelta(days=1)


@pytest.fixture
def populated(db_session, ctx_a, ctx_b):
    service = CandidateService()
    seeker = service.create_candidate(db_session, ctx_a, CandidateCreate(
        first_name="Sam", last_name="Seeker", is_active_looking=True
    ))
    fresh = service.create_candidate(db_session, ctx_a, CandidateCreate(
        first_name="Fay", last_name="Fresh"
    ))
    service.create_candidate(db_session, ctx_b, CandidateCreate(
        first_name="Other", last_name="Org", is_active_looking=True
    ))

    # Age the seeker's history past the follow-up threshold
    db_session.query(Activity).filter(Activity.candidate_id == seeker.id).update(
        {Activity.created_at: days_ago(10)}, synchronize_session=False
    )
    db_session.commit()
    return {"seeker": seeker, "fresh": fresh}


class TestDashboardService:

    def test_builds_all_sections(self, db_session, ctx_a, populated):
        dashboard = DashboardService().get_dashboard(db_session, ctx_a)

        assert dashboard.errors == []
        assert dashboard.stats.total_candidates == 2
        assert dashboard.stats.active_searching == 1
        assert dashboard.stats.recent_activities == len(dashboard.recent_activities) == 2
        assert dashboard.stats.pending_actions == 1

        [action] = dashboard.recommended_actions
        assert action.candidate_id == populated["seeker"].id
        assert action.candidate_name == "Sam Seeker"
        assert action.action_type == "follow_up"
        assert action.priority == "high"
        assert action.days_since_activity == 10

    def test_recent_activities_are_scoped_and_named(self, db_session, ctx_a, populated):
        dashboard = DashboardService().get_dashboard(db_session, ctx_a)
        names = {a.candidate_name for a in dashboard.recent_activities}
        assert names == {"Sam Seeker", "Fay Fresh"}

    def test_recent_activity_limit(self, db_session, ctx_a, populated):
        settings = Settings(recent_activity_limit=1)
        dashboard = DashboardService(settings=settings).get_dashboard(db_session, ctx_a)
        assert len(dashboard.recent_activities) == 1
        assert dashboard.recent_activities[0].candidate_name == "Fay Fresh"

    def test_failed_section_is_isolated(self, db_session, ctx_a, populated, monkeypatch):
        service = DashboardService()

        def broken(db, context):
            raise RuntimeError("activity store unavailable")

        monkeypatch.setattr(service, "load_recent_activities", broken)
        dashboard = service.get_dashboard(db_session, ctx_a)

        assert dashboard.errors == ["recent_activities"]
        assert dashboard.recent_activities == []
        assert dashboard.stats.total_candidates == 2
        assert len(dashboard.recommended_actions) == 1

    def test_unprovisioned_caller_gets_empty_dashboard(self, db_session, ctx_none, populated):
        dashboard = DashboardService().get_dashboard(db_session, ctx_none)
        assert dashboard.errors == []
        assert dashboard.stats.total_candidates == 0
        assert dashboard.recent_activities == []
        assert dashboard.recommended_actions == []
