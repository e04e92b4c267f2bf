"""GET /v1/dashboard[...] - derived metrics for the member dashboard"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from medfin_dashboard.api.dependencies import get_account_records, get_now, get_request_id
from medfin_dashboard.api.v1.schemas import (
    ActivitySchema,
    DashboardResponse,
    GoalAnalyticsResponse,
    HealthScoreResponse,
    InsightsResponse,
    LoanOverviewSchema,
    MedicineStatusSchema,
    NotificationSchema,
    SnapshotSchema,
    SpendingResponse,
)
from medfin_dashboard.config import settings
from medfin_dashboard.domain.goals import analyze_goals
from medfin_dashboard.domain.insights import aggregate_insights
from medfin_dashboard.domain.models import AccountRecords
from medfin_dashboard.domain.notifications import generate_notifications
from medfin_dashboard.domain.overview import summarize_loans, summarize_medicine_requests
from medfin_dashboard.domain.scoring import calculate_health_score
from medfin_dashboard.domain.snapshot import build_financial_snapshot, build_recent_activities
from medfin_dashboard.domain.spending import compute_spending_analytics
from medfin_dashboard.infrastructure.database.repositories import DismissalRepository
from medfin_dashboard.infrastructure.database.session import get_db
from medfin_dashboard.infrastructure.observability.logging import log_dashboard_computed
from medfin_dashboard.infrastructure.observability.metrics import (
    dashboard_request_counter,
    record_health_score,
    record_notifications,
)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """
    Compute every dashboard widget from one records snapshot.

    Flow:
    1. Fetch loans, goals, transactions and medicine requests (dependency)
    2. Aggregate the flat snapshot and recent activity feed
    3. Run each widget independently over the same snapshot
    4. Filter notifications through the member's stored dismissals
    """
    start_time = time.time()

    snapshot = build_financial_snapshot(records)
    activities = build_recent_activities(records)
    health = calculate_health_score(snapshot)
    dismissed = DismissalRepository(db).get_dismissed_ids(user_id)
    notifications = generate_notifications(
        records.loans,
        records.savings_goals,
        snapshot.wallet_balance,
        records.medicine_requests,
        now,
        dismissed_ids=dismissed,
        limit=settings.notification_limit,
    )

    response = DashboardResponse(
        user_id=user_id,
        generated_at=now,
        snapshot=SnapshotSchema.model_validate(snapshot),
        health_score=HealthScoreResponse.model_validate(health),
        goals=GoalAnalyticsResponse.model_validate(
            analyze_goals(records.savings_goals, snapshot.total_savings, now)
        ),
        insights=InsightsResponse.model_validate(
            aggregate_insights(records.savings_goals, records.medicine_requests, records.loans, activities, now)
        ),
        notifications=[NotificationSchema.model_validate(n) for n in notifications],
        spending=SpendingResponse.model_validate(
            compute_spending_analytics(
                records.loans,
                records.savings_goals,
                records.medicine_requests,
                activities,
                now.year,
                now.month,
            )
        ),
        loans=LoanOverviewSchema.model_validate(summarize_loans(records.loans, now)),
        medicine=MedicineStatusSchema.model_validate(summarize_medicine_requests(records.medicine_requests, now)),
        recent_activities=[ActivitySchema.model_validate(a) for a in activities],
    )

    dashboard_request_counter.labels(widget="dashboard").inc()
    record_health_score(health.overall_score, health.status_label)
    record_notifications(notifications)
    log_dashboard_computed(
        get_request_id(request),
        user_id,
        "dashboard",
        (time.time() - start_time) * 1000,
        overall_score=health.overall_score,
        notification_count=len(notifications),
    )

    return response


@router.get("/dashboard/health-score", response_model=HealthScoreResponse)
def get_health_score(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
):
    """Financial health score with sub-scores, status band and recommendations"""
    start_time = time.time()

    health = calculate_health_score(build_financial_snapshot(records))

    dashboard_request_counter.labels(widget="health_score").inc()
    record_health_score(health.overall_score, health.status_label)
    log_dashboard_computed(
        get_request_id(request),
        user_id,
        "health_score",
        (time.time() - start_time) * 1000,
        overall_score=health.overall_score,
        status_label=health.status_label,
    )

    return HealthScoreResponse.model_validate(health)


@router.get("/dashboard/goals", response_model=GoalAnalyticsResponse)
def get_goal_analytics(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
    now: datetime = Depends(get_now),
):
    """Completed/active/near-complete/overdue goals, priority goals and milestones"""
    start_time = time.time()

    snapshot = build_financial_snapshot(records)
    analytics = analyze_goals(records.savings_goals, snapshot.total_savings, now)

    dashboard_request_counter.labels(widget="goals").inc()
    log_dashboard_computed(
        get_request_id(request),
        user_id,
        "goals",
        (time.time() - start_time) * 1000,
        goal_count=len(records.savings_goals),
    )

    return GoalAnalyticsResponse.model_validate(analytics)


@router.get("/dashboard/insights", response_model=InsightsResponse)
def get_insights(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
    now: datetime = Depends(get_now),
):
    """Month/week scoped activity, goal and medicine insights"""
    start_time = time.time()

    insights = aggregate_insights(
        records.savings_goals,
        records.medicine_requests,
        records.loans,
        build_recent_activities(records),
        now,
    )

    dashboard_request_counter.labels(widget="insights").inc()
    log_dashboard_computed(get_request_id(request), user_id, "insights", (time.time() - start_time) * 1000)

    return InsightsResponse.model_validate(insights)


@router.get("/dashboard/spending", response_model=SpendingResponse)
def get_spending(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
    now: datetime = Depends(get_now),
):
    """Monthly series for the current calendar year, category totals and trends"""
    start_time = time.time()

    analytics = compute_spending_analytics(
        records.loans,
        records.savings_goals,
        records.medicine_requests,
        build_recent_activities(records),
        now.year,
        now.month,
    )

    dashboard_request_counter.labels(widget="spending").inc()
    log_dashboard_computed(get_request_id(request), user_id, "spending", (time.time() - start_time) * 1000)

    return SpendingResponse.model_validate(analytics)
