"""Pydantic schemas for the dashboard."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_candidates: int = 0
    active_searching: int = 0
    recent_activities: int = 0
    pending_actions: int = 0


class RecentActivity(BaseModel):
    id: UUID
    candidate_id: Optional[UUID] = None
    candidate_name: Optional[str] = None
    type: str
    description: Optional[str] = None
    created_at: datetime


class RecommendedAction(BaseModel):
    candidate_id: UUID
    candidate_name: str
    action_type: str
    reason: str
    priority: str
    rule: str
    days_since_activity: int
    due_date: Optional[datetime] = None


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_activities: List[RecentActivity] = Field(default_factory=list)
    recommended_actions: List[RecommendedAction] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list, description="Sections that failed to load")
