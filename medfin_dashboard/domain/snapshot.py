"""Snapshot building - flat aggregates and the activity feed derived from raw records"""

from typing import List

from medfin_dashboard.domain.models import AccountRecords, Activity, FinancialSnapshot
from medfin_dashboard.utils.date_utils import sort_by_date

RECENT_LOANS = 3
RECENT_TRANSACTIONS = 3
RECENT_MEDICINE_REQUESTS = 2


def build_financial_snapshot(records: AccountRecords) -> FinancialSnapshot:
    """
    Aggregate the records the scoring engine works from.

    Wallet balance is the simplified savings-minus-loans figure; the
    records service does not expose a wallet ledger.
    """
    total_savings = sum(goal.current_amount for goal in records.savings_goals)
    total_loans = sum(loan.total_payable for loan in records.loans)

    return FinancialSnapshot(
        total_savings=total_savings,
        total_loans=total_loans,
        active_loans=sum(1 for loan in records.loans if loan.status == "active"),
        savings_goals_count=len(records.savings_goals),
        pending_medicine_requests=sum(1 for req in records.medicine_requests if req.status == "pending"),
        wallet_balance=total_savings - total_loans,
    )


def build_recent_activities(records: AccountRecords) -> List[Activity]:
    """Merge the head of each record list into one feed, newest first"""
    activities: List[Activity] = []

    for loan in records.loans[:RECENT_LOANS]:
        activities.append(
            Activity(
                id=loan.id,
                type="loan",
                title="Loan Application",
                description=loan.purpose,
                date=loan.created_at,
                amount=loan.amount,
                status=loan.status,
            )
        )

    for txn in records.savings_transactions[:RECENT_TRANSACTIONS]:
        activities.append(
            Activity(
                id=txn.id,
                type="savings",
                title="Savings Transaction",
                description=txn.description,
                date=txn.created_at,
                amount=txn.amount,
                status="completed",
            )
        )

    for request in records.medicine_requests[:RECENT_MEDICINE_REQUESTS]:
        activities.append(
            Activity(
                id=request.id,
                type="medicine",
                title="Medicine Request",
                description=request.generic_name,
                date=request.created_at,
                status=request.status,
            )
        )

    return sort_by_date(activities, lambda activity: activity.date, newest_first=True)
