"""Unit tests for spending analytics"""

import pytest
from datetime import datetime, timezone
from medfin_dashboard.domain.models import Activity, LoanAccount, MedicineRequest, MonthlySpending, SavingsGoal
from medfin_dashboard.domain.spending import (
    category_totals,
    compute_spending_analytics,
    month_over_month_change,
    monthly_series,
    six_month_trend,
)


def at(year, month, day=10) -> datetime:
    return datetime(year, month, day, 9, 0, tzinfo=timezone.utc)


def test_monthly_series_buckets_by_created_month_and_truncates():
    loans = [
        LoanAccount(id="l1", amount=100_000, status="active", purpose="Surgery", created_at=at(2025, 2)),
        LoanAccount(id="l2", amount=50_000, status="pending", purpose="Clinic", created_at=at(2024, 2)),
    ]
    goals = [SavingsGoal(id="g1", name="G", target_amount=1, current_amount=30_000, created_at=at(2025, 3))]
    requests = [
        MedicineRequest(id="m1", generic_name="A", urgency_level="Routine", status="approved",
                        total_amount=8_000, created_at=at(2025, 3)),
        MedicineRequest(id="m2", generic_name="B", urgency_level="Routine", status="pending",
                        total_amount=None, created_at=at(2025, 3)),
        MedicineRequest(id="m3", generic_name="C", urgency_level="Routine", status="approved",
                        total_amount=4_000, created_at=at(2025, 7)),  # beyond the current month
    ]

    series = monthly_series(loans, goals, requests, 2025, 4)

    assert [bucket.month for bucket in series] == ["Jan", "Feb", "Mar", "Apr"]
    assert series[1] == MonthlySpending(month="Feb", loans=100_000, savings=0, medicine=0, total=100_000)
    assert series[2] == MonthlySpending(month="Mar", loans=0, savings=30_000, medicine=8_000, total=38_000)
    assert series[3].total == 0


def test_records_from_other_years_or_undated_are_excluded():
    loans = [
        LoanAccount(id="old", amount=10_000, status="completed", purpose="Old", created_at=at(2023, 1)),
        LoanAccount(id="undated", amount=10_000, status="active", purpose="Unknown"),
    ]

    series = monthly_series(loans, [], [], 2025, 12)

    assert len(series) == 12
    assert sum(bucket.total for bucket in series) == 0


def test_category_totals_filter_empty_categories():
    loans = [LoanAccount(id="l1", amount=70_000, status="active", purpose="Surgery", created_at=at(2020, 1))]
    requests = [MedicineRequest(id="m1", generic_name="A", urgency_level="Routine", status="pending")]

    totals = category_totals(loans, [], requests)

    assert [(t.category, t.amount) for t in totals] == [("Medical Loans", 70_000)]


def test_six_month_trend_crosses_year_boundary():
    activities = [
        Activity(id="a1", type="loan", title="", description="", date=at(2024, 11), amount=40_000),
        Activity(id="a2", type="medicine", title="", description="", date=at(2025, 2), amount=None),
        Activity(id="a3", type="medicine", title="", description="", date=at(2025, 2), amount=6_000),
        Activity(id="a4", type="savings", title="", description="", date=at(2025, 2), amount=99_000),
        Activity(id="a5", type="loan", title="", description="", date=at(2024, 8), amount=1_000),  # too old
    ]

    trend = six_month_trend(activities, 2025, 3)

    assert [(p.month, p.spending) for p in trend] == [
        ("Oct", 0),
        ("Nov", 40_000),
        ("Dec", 0),
        ("Jan", 0),
        ("Feb", 6_000),
        ("Mar", 0),
    ]


def test_month_over_month_guard_when_previous_is_zero():
    series = [MonthlySpending(month="May", total=0), MonthlySpending(month="Jun", total=500)]

    assert month_over_month_change(series) == 0.0


def test_month_over_month_change():
    series = [MonthlySpending(month="May", total=400), MonthlySpending(month="Jun", total=500)]

    assert month_over_month_change(series) == pytest.approx(25.0)


def test_month_over_month_in_january_has_no_base():
    assert month_over_month_change([MonthlySpending(month="Jan", total=500)]) == 0.0


def test_compute_spending_analytics_average():
    loans = [LoanAccount(id="l1", amount=60_000, status="active", purpose="Surgery", created_at=at(2025, 1))]

    analytics = compute_spending_analytics(loans, [], [], [], 2025, 3)

    assert len(analytics.monthly_series) == 3
    assert analytics.average_monthly == pytest.approx(20_000)
    assert analytics.month_over_month_change_pct == 0.0
    assert [t.category for t in analytics.category_totals] == ["Medical Loans"]
    assert len(analytics.six_month_trend) == 6


def test_compute_spending_analytics_on_empty_snapshot():
    analytics = compute_spending_analytics([], [], [], [], 2025, 6)

    assert analytics.average_monthly == 0
    assert analytics.category_totals == []
    assert all(point.spending == 0 for point in analytics.six_month_trend)
