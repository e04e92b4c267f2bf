"""Spending analytics - calendar-month buckets, category totals and trend deltas"""

from typing import List, Sequence

from medfin_dashboard.domain.models import (
    Activity,
    CategoryTotal,
    LoanAccount,
    MedicineRequest,
    MonthlySpending,
    SavingsGoal,
    SpendingAnalytics,
    TrendPoint,
)
from medfin_dashboard.utils.date_utils import month_label, same_month, shift_month

TREND_MONTHS = 6
SPENDING_ACTIVITY_TYPES = frozenset({"loan", "medicine"})


def monthly_series(
    loans: Sequence[LoanAccount],
    goals: Sequence[SavingsGoal],
    medicine_requests: Sequence[MedicineRequest],
    year: int,
    month: int,
) -> List[MonthlySpending]:
    """
    Jan..`month` buckets for `year`, keyed on each record's created_at.

    Records created in other years (or with no created_at) are left out; the
    series is a calendar-year view, not a trailing twelve months.
    """
    buckets = [MonthlySpending(month=month_label(m)) for m in range(1, 13)]

    for loan in loans:
        if loan.created_at is not None and loan.created_at.year == year:
            buckets[loan.created_at.month - 1].loans += loan.amount or 0

    for goal in goals:
        if goal.created_at is not None and goal.created_at.year == year:
            buckets[goal.created_at.month - 1].savings += goal.current_amount or 0

    for request in medicine_requests:
        if request.created_at is not None and request.created_at.year == year and request.total_amount:
            buckets[request.created_at.month - 1].medicine += request.total_amount

    for bucket in buckets:
        bucket.total = bucket.loans + bucket.savings + bucket.medicine

    return buckets[:month]


def category_totals(
    loans: Sequence[LoanAccount],
    goals: Sequence[SavingsGoal],
    medicine_requests: Sequence[MedicineRequest],
) -> List[CategoryTotal]:
    totals = [
        CategoryTotal(category="Medical Loans", amount=sum(loan.amount or 0 for loan in loans)),
        CategoryTotal(category="Savings", amount=sum(goal.current_amount or 0 for goal in goals)),
        CategoryTotal(
            category="Medicine Requests",
            amount=sum(req.total_amount or 0 for req in medicine_requests),
        ),
    ]
    return [total for total in totals if total.amount > 0]


def six_month_trend(activities: Sequence[Activity], year: int, month: int) -> List[TrendPoint]:
    """Loan + medicine activity per calendar month, oldest first, ending at (year, month)"""
    points = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        point_year, point_month = shift_month(year, month, -offset)
        spending = sum(
            activity.amount or 0
            for activity in activities
            if activity.type in SPENDING_ACTIVITY_TYPES
            and activity.date is not None
            and same_month(activity.date, point_year, point_month)
        )
        points.append(TrendPoint(month=month_label(point_month), spending=spending))
    return points


def month_over_month_change(series: Sequence[MonthlySpending]) -> float:
    """Percent change of the last bucket against the one before; 0 when there is no base"""
    current = series[-1].total if series else 0
    previous = series[-2].total if len(series) > 1 else 0
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def compute_spending_analytics(
    loans: Sequence[LoanAccount],
    goals: Sequence[SavingsGoal],
    medicine_requests: Sequence[MedicineRequest],
    activities: Sequence[Activity],
    year: int,
    month: int,
) -> SpendingAnalytics:
    """Main entry point for the spending widget; `month` is 1-based"""
    series = monthly_series(loans, goals, medicine_requests, year, month)
    average = sum(bucket.total for bucket in series) / len(series) if series else 0.0

    return SpendingAnalytics(
        monthly_series=series,
        category_totals=category_totals(loans, goals, medicine_requests),
        six_month_trend=six_month_trend(activities, year, month),
        average_monthly=average,
        month_over_month_change_pct=month_over_month_change(series),
    )
