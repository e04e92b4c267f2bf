"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViewModel(BaseModel):
    """Response model built straight from a domain dataclass"""

    model_config = ConfigDict(from_attributes=True)


class SnapshotSchema(ViewModel):
    total_savings: float
    total_loans: float
    active_loans: int
    savings_goals_count: int
    pending_medicine_requests: int
    wallet_balance: float


class SubScoresSchema(ViewModel):
    savings: float
    debt: float
    goals: float
    emergency: float


class HealthScoreResponse(ViewModel):
    """Response for GET /v1/dashboard/health-score"""

    overall_score: int = Field(..., ge=0, le=100)
    sub_scores: SubScoresSchema
    status_label: str
    recommendations: List[str]
    savings_ratio_pct: float
    net_position: float


class GoalSchema(ViewModel):
    id: str
    name: str
    target_amount: float
    current_amount: float
    priority: str
    category: str
    target_date: Optional[datetime] = None
    is_completed: bool
    progress: float


class MilestoneSchema(ViewModel):
    id: str
    title: str
    description: str
    achieved_at: Optional[datetime] = None


class GoalAnalyticsResponse(ViewModel):
    """Response for GET /v1/dashboard/goals"""

    completed: List[GoalSchema]
    active: List[GoalSchema]
    near_complete: List[GoalSchema]
    overdue: List[GoalSchema]
    overall_progress_pct: float
    priority_goals: List[GoalSchema]
    milestones: List[MilestoneSchema]


class MonthlyTrendSchema(ViewModel):
    savings_count: int
    loans_count: int
    total_savings_activity: float


class GoalProgressSchema(ViewModel):
    active: int
    completed: int
    near_complete: int
    average_progress: float


class MedicineInsightsSchema(ViewModel):
    urgent: int
    this_week: int
    total_cost: float


class UpcomingEventSchema(ViewModel):
    title: str
    days_left: int
    priority: str


class HighlightSchema(ViewModel):
    title: str
    value: float
    summary: str
    trend: str


class InsightsResponse(ViewModel):
    """Response for GET /v1/dashboard/insights"""

    monthly_trend: MonthlyTrendSchema
    goal_progress: GoalProgressSchema
    medicine_insights: MedicineInsightsSchema
    upcoming_events: List[UpcomingEventSchema]
    highlights: List[HighlightSchema]


class NotificationSchema(ViewModel):
    id: str
    type: str
    title: str
    message: str
    priority: str
    timestamp: datetime


class NotificationsResponse(BaseModel):
    """Response for GET /v1/notifications"""

    user_id: str
    notifications: List[NotificationSchema]


class DismissRequest(BaseModel):
    """Request body for POST /v1/notifications/{notification_id}/dismiss"""

    user_id: str = Field(..., min_length=1, description="Member identifier")


class DismissResponse(ViewModel):
    user_id: str
    notification_id: str
    dismissed_at: datetime


class ClearDismissalsResponse(BaseModel):
    user_id: str
    cleared: int


class MonthlySpendingSchema(ViewModel):
    month: str
    loans: float
    savings: float
    medicine: float
    total: float


class CategoryTotalSchema(ViewModel):
    category: str
    amount: float


class TrendPointSchema(ViewModel):
    month: str
    spending: float


class SpendingResponse(ViewModel):
    """Response for GET /v1/dashboard/spending"""

    monthly_series: List[MonthlySpendingSchema]
    category_totals: List[CategoryTotalSchema]
    six_month_trend: List[TrendPointSchema]
    average_monthly: float
    month_over_month_change_pct: float


class LoanStatusLineSchema(ViewModel):
    loan_id: str
    purpose: str
    status: str
    amount: float
    outstanding_balance: float
    repayment_progress_pct: float
    days_until_due: Optional[int] = None


class LoanOverviewSchema(ViewModel):
    total_count: int
    active_count: int
    active_outstanding: float
    loans: List[LoanStatusLineSchema]


class MedicineRequestLineSchema(ViewModel):
    request_id: str
    generic_name: str
    urgency_level: str
    status: str
    days_since_request: Optional[int] = None


class MedicineStatusSchema(ViewModel):
    total_count: int
    pending_count: int
    urgent_count: int
    recent: List[MedicineRequestLineSchema]


class ActivitySchema(ViewModel):
    id: str
    type: str
    title: str
    description: str
    date: Optional[datetime] = None
    amount: Optional[float] = None
    status: Optional[str] = None


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    user_id: str
    generated_at: datetime
    snapshot: SnapshotSchema
    health_score: HealthScoreResponse
    goals: GoalAnalyticsResponse
    insights: InsightsResponse
    notifications: List[NotificationSchema]
    spending: SpendingResponse
    loans: LoanOverviewSchema
    medicine: MedicineStatusSchema
    recent_activities: List[ActivitySchema]
