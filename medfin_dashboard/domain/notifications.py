"""Notification generation - time/threshold rules over the dashboard snapshot"""

from datetime import datetime, timedelta
from typing import AbstractSet, List, Sequence

from medfin_dashboard.domain.models import (
    LoanAccount,
    MedicineRequest,
    Notification,
    SavingsGoal,
    priority_rank,
)
from medfin_dashboard.utils.date_utils import days_until

DEFAULT_LIMIT = 5
LOAN_DUE_WINDOW_DAYS = 7
LOAN_DUE_HIGH_DAYS = 3
GOAL_DEADLINE_WINDOW_DAYS = 30
GOAL_DEADLINE_HIGH_DAYS = 7
ALMOST_COMPLETE_RATIO = 0.8
LOW_BALANCE_THRESHOLD = 50_000
INACTIVITY_DAYS = 7

LOW_BALANCE_ID = "low-balance"
NO_RECENT_ACTIVITY_ID = "no-recent-activity"


def loan_due_notifications(loans: Sequence[LoanAccount], now: datetime) -> List[Notification]:
    notifications = []
    for loan in loans:
        if loan.status != "active" or loan.maturity_date is None:
            continue
        days = days_until(loan.maturity_date, now)
        if 0 < days <= LOAN_DUE_WINDOW_DAYS:
            notifications.append(
                Notification(
                    id=f"loan-due-{loan.id}",
                    type="alert",
                    title="Loan Payment Due Soon",
                    message=f"Your {loan.purpose} loan payment is due in {days} day{'s' if days > 1 else ''}",
                    priority="high" if days <= LOAN_DUE_HIGH_DAYS else "medium",
                    timestamp=now,
                )
            )
    return notifications


def goal_deadline_notifications(goals: Sequence[SavingsGoal], now: datetime) -> List[Notification]:
    notifications = []
    for goal in goals:
        if goal.is_completed or goal.target_date is None:
            continue
        days = days_until(goal.target_date, now)
        if 0 < days <= GOAL_DEADLINE_WINDOW_DAYS:
            notifications.append(
                Notification(
                    id=f"goal-deadline-{goal.id}",
                    type="reminder",
                    title="Savings Goal Deadline Approaching",
                    message=(
                        f'"{goal.name}" target date is in {days} days '
                        f"({round(goal.progress * 100)}% complete)"
                    ),
                    priority="high" if days <= GOAL_DEADLINE_HIGH_DAYS else "medium",
                    timestamp=now,
                )
            )
    return notifications


def goal_achievement_notifications(goals: Sequence[SavingsGoal], now: datetime) -> List[Notification]:
    return [
        Notification(
            id=f"goal-almost-complete-{goal.id}",
            type="achievement",
            title="Goal Almost Complete!",
            message=f'"{goal.name}" is {round(goal.progress * 100)}% complete. You\'re almost there!',
            priority="medium",
            timestamp=now,
        )
        for goal in goals
        if not goal.is_completed and goal.progress >= ALMOST_COMPLETE_RATIO
    ]


def low_balance_notifications(wallet_balance: float, now: datetime) -> List[Notification]:
    # Singleton: one warning however far below the threshold
    if not 0 < wallet_balance < LOW_BALANCE_THRESHOLD:
        return []
    return [
        Notification(
            id=LOW_BALANCE_ID,
            type="warning",
            title="Low Available Balance",
            message="Your available balance is low. Consider adding funds for emergencies.",
            priority="medium",
            timestamp=now,
        )
    ]


def emergency_medicine_notifications(
    requests: Sequence[MedicineRequest],
    now: datetime,
) -> List[Notification]:
    """Pending emergency requests, stamped with the request's own creation time"""
    return [
        Notification(
            id=f"urgent-medicine-{request.id}",
            type="alert",
            title="Emergency Medicine Request",
            message=f"Emergency request for {request.generic_name} needs immediate attention",
            priority="high",
            timestamp=request.created_at or now,
        )
        for request in requests
        if request.urgency_level == "Emergency" and request.status == "pending"
    ]


def inactivity_notifications(goals: Sequence[SavingsGoal], now: datetime) -> List[Notification]:
    if not goals:
        return []

    cutoff = now - timedelta(days=INACTIVITY_DAYS)
    if any(goal.updated_at is not None and goal.updated_at > cutoff for goal in goals):
        return []

    return [
        Notification(
            id=NO_RECENT_ACTIVITY_ID,
            type="reminder",
            title="Keep Building Your Savings",
            message="You haven't made any savings contributions this week. Stay on track with your goals!",
            priority="low",
            timestamp=now,
        )
    ]


def generate_notifications(
    loans: Sequence[LoanAccount],
    goals: Sequence[SavingsGoal],
    wallet_balance: float,
    medicine_requests: Sequence[MedicineRequest],
    now: datetime,
    dismissed_ids: AbstractSet[str] = frozenset(),
    limit: int = DEFAULT_LIMIT,
) -> List[Notification]:
    """
    Main entry point: run every rule, drop dismissed ids, sort and truncate.

    Ordering: priority (high > medium > low), then newest timestamp first.
    Ids derive from the source records, so the same snapshot and dismissed
    set always yield the same list.
    """
    notifications = (
        loan_due_notifications(loans, now)
        + goal_deadline_notifications(goals, now)
        + goal_achievement_notifications(goals, now)
        + low_balance_notifications(wallet_balance, now)
        + emergency_medicine_notifications(medicine_requests, now)
        + inactivity_notifications(goals, now)
    )

    visible = [n for n in notifications if n.id not in dismissed_ids]
    visible.sort(key=lambda n: (-priority_rank(n.priority), -n.timestamp.timestamp()))
    return visible[:limit]
