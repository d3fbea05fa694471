"""Rule set behind the dashboard's recommended actions.

Each rule looks at a candidate and how long it has been since anything was
logged against them. A candidate gets at most one recommendation: the first
matching rule in priority order.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Callable, Iterable, List, Optional, Tuple

from recruit_crm.core.config import Settings
from recruit_crm.models.candidate import Candidate


class Priority(IntEnum):
    HIGH = 0
    MEDIUM = 1
    LOW = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class RecommendationRule:
    """A named condition that produces a recommended action."""

    name: str
    action_type: str
    priority: Priority
    min_days: int
    due_in_days: int
    applies_to: Callable[[Candidate], bool]

    def matches(self, candidate: Candidate, days_since_activity: int) -> bool:
        return days_since_activity >= self.min_days and self.applies_to(candidate)

    def reason(self, days_since_activity: int) -> str:
        return f"No activity in the last {days_since_activity} days"


@dataclass(frozen=True)
class Recommendation:
    candidate: Candidate
    rule: RecommendationRule
    days_since_activity: int
    due_date: datetime

    @property
    def priority(self) -> Priority:
        return self.rule.priority


def _active_seeker(candidate: Candidate) -> bool:
    return bool(candidate.is_active_looking)


def _any_candidate(candidate: Candidate) -> bool:
    return True


def _client_contact(candidate: Candidate) -> bool:
    return candidate.relationship_type in ("client", "both")


def default_rules(settings: Settings) -> List[RecommendationRule]:
    """The standard rule set, with thresholds taken from settings."""
    rules = [
        RecommendationRule(
            name="active_seeker_follow_up",
            action_type="follow_up",
            priority=Priority.HIGH,
            min_days=settings.followup_active_days,
            due_in_days=1,
            applies_to=_active_seeker,
        ),
        RecommendationRule(
            name="stale_check_in",
            action_type="check_in",
            priority=Priority.MEDIUM,
            min_days=settings.stale_candidate_days,
            due_in_days=3,
            applies_to=_any_candidate,
        ),
        RecommendationRule(
            name="client_nurture",
            action_type="nurture",
            priority=Priority.LOW,
            min_days=settings.client_nurture_days,
            due_in_days=7,
            applies_to=_client_contact,
        ),
    ]
    return sorted(rules, key=lambda rule: rule.priority)


def days_since(last_activity_at: Optional[datetime], created_at: datetime, now: datetime) -> int:
    """Whole days since the last activity, or since creation if there is none."""
    reference = last_activity_at or created_at
    return max((now - reference).days, 0)


def recommend(
    candidates: Iterable[Tuple[Candidate, Optional[datetime]]],
    rules: List[RecommendationRule],
    now: datetime,
    limit: Optional[int] = None
) -> List[Recommendation]:
    """Evaluate the rules for each candidate.

    Args:
        candidates: ``(candidate, last_activity_at)`` pairs
        rules: Rules in priority order
        now: Evaluation time
        limit: Maximum number of recommendations

    Returns:
        Recommendations sorted by priority, then longest silence first
    """
    results = []
    for candidate, last_activity_at in candidates:
        idle_days = days_since(last_activity_at, candidate.created_at, now)
        for rule in rules:
            if rule.matches(candidate, idle_days):
                results.append(Recommendation(
                    candidate=candidate,
                    rule=rule,
                    days_since_activity=idle_days,
                    due_date=now + timedelta(days=rule.due_in_days),
                ))
                break

    results.sort(key=lambda r: (r.priority, -r.days_since_activity, str(r.candidate.id)))
    if limit is not None:
        results = results[:limit]
    return results
