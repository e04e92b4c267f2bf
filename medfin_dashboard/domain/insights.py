"""Insight aggregation - month/week scoped counts and sums behind the insights widget"""

from datetime import datetime, timedelta
from typing import List, Sequence

from medfin_dashboard.domain.goals import is_near_complete
from medfin_dashboard.domain.models import (
    Activity,
    FinancialInsights,
    GoalProgressSummary,
    Highlight,
    LoanAccount,
    MedicineInsights,
    MedicineRequest,
    MonthlyTrend,
    SavingsGoal,
    UpcomingEvent,
)
from medfin_dashboard.utils.date_utils import days_until, same_month, week_ago

URGENT_LEVELS = frozenset({"Urgent", "Emergency"})
UPCOMING_WINDOW_DAYS = 30
UPCOMING_HIGH_PRIORITY_DAYS = 7
UPCOMING_LIMIT = 3


def monthly_trend(activities: Sequence[Activity], now: datetime) -> MonthlyTrend:
    """Savings/loan activity in the calendar month of `now` (not a rolling window)"""
    this_month = [
        activity for activity in activities
        if activity.date is not None and same_month(activity.date, now.year, now.month)
    ]
    savings = [activity for activity in this_month if activity.type == "savings"]
    loans = [activity for activity in this_month if activity.type == "loan"]

    return MonthlyTrend(
        savings_count=len(savings),
        loans_count=len(loans),
        total_savings_activity=sum(activity.amount or 0 for activity in savings),
    )


def goal_progress(goals: Sequence[SavingsGoal]) -> GoalProgressSummary:
    active = [goal for goal in goals if not goal.is_completed]
    average = sum(goal.progress for goal in active) / len(active) if active else 0.0

    return GoalProgressSummary(
        active=len(active),
        completed=len(goals) - len(active),
        near_complete=sum(1 for goal in active if is_near_complete(goal)),
        average_progress=average,
    )


def medicine_insights(requests: Sequence[MedicineRequest], now: datetime) -> MedicineInsights:
    """Urgent count, rolling 7-day count (inclusive) and total cost"""
    cutoff = week_ago(now)
    return MedicineInsights(
        urgent=sum(1 for req in requests if req.urgency_level in URGENT_LEVELS),
        this_week=sum(1 for req in requests if req.created_at is not None and req.created_at >= cutoff),
        total_cost=sum(req.total_amount or 0 for req in requests),
    )


def upcoming_events(goals: Sequence[SavingsGoal], now: datetime) -> List[UpcomingEvent]:
    """
    Incomplete goals due within the next 30 days.

    Events keep the order of the goal list and are cut at three; they are not
    sorted by days left.
    """
    horizon = now + timedelta(days=UPCOMING_WINDOW_DAYS)
    events: List[UpcomingEvent] = []

    for goal in goals:
        if goal.is_completed or goal.target_date is None:
            continue
        if now < goal.target_date <= horizon:
            days_left = days_until(goal.target_date, now)
            events.append(
                UpcomingEvent(
                    title=f"Goal deadline: {goal.name}",
                    days_left=days_left,
                    priority="high" if days_left <= UPCOMING_HIGH_PRIORITY_DAYS else "medium",
                )
            )

    return events[:UPCOMING_LIMIT]


def build_highlights(
    trend: MonthlyTrend,
    progress: GoalProgressSummary,
    medicine: MedicineInsights,
) -> List[Highlight]:
    average_pct = round(progress.average_progress * 100)
    return [
        Highlight(
            title="Monthly Activity",
            value=trend.savings_count,
            summary=f"{trend.savings_count} savings transactions",
            trend="up" if trend.savings_count > 0 else "neutral",
        ),
        Highlight(
            title="Goal Achievement",
            value=progress.average_progress,
            summary=f"{average_pct}% average progress",
            trend="up" if progress.average_progress > 0.5 else "down",
        ),
        Highlight(
            title="Medicine Costs",
            value=medicine.total_cost,
            summary=f"{medicine.urgent} urgent requests",
            trend="down" if medicine.urgent > 0 else "neutral",
        ),
    ]


def aggregate_insights(
    goals: Sequence[SavingsGoal],
    medicine_requests: Sequence[MedicineRequest],
    loans: Sequence[LoanAccount],
    activities: Sequence[Activity],
    now: datetime,
) -> FinancialInsights:
    """
    Main entry point for the insights widget.

    `loans` is part of the dashboard snapshot handed to every widget; loan
    activity reaches the month trend through `activities`.
    """
    trend = monthly_trend(activities, now)
    progress = goal_progress(goals)
    medicine = medicine_insights(medicine_requests, now)

    return FinancialInsights(
        monthly_trend=trend,
        goal_progress=progress,
        medicine_insights=medicine,
        upcoming_events=upcoming_events(goals, now),
        highlights=build_highlights(trend, progress, medicine),
    )
