"""Loan and medicine-request overview summaries"""

from datetime import datetime
from typing import Sequence

from medfin_dashboard.domain.models import (
    LoanAccount,
    LoanOverview,
    LoanStatusLine,
    MedicineRequest,
    MedicineRequestLine,
    MedicineStatusSummary,
)
from medfin_dashboard.utils.date_utils import days_between, days_until

SHOWN_ITEMS = 3
URGENT_LEVELS = frozenset({"Emergency", "Urgent"})


def summarize_loans(loans: Sequence[LoanAccount], now: datetime) -> LoanOverview:
    active = [loan for loan in loans if loan.status == "active"]

    lines = [
        LoanStatusLine(
            loan_id=loan.id,
            purpose=loan.purpose,
            status=loan.status,
            amount=loan.amount,
            outstanding_balance=loan.outstanding_balance,
            repayment_progress_pct=loan.repayment_progress * 100,
            days_until_due=days_until(loan.maturity_date, now) if loan.maturity_date else None,
        )
        for loan in loans[:SHOWN_ITEMS]
    ]

    return LoanOverview(
        total_count=len(loans),
        active_count=len(active),
        active_outstanding=sum(loan.outstanding_balance for loan in active),
        loans=lines,
    )


def summarize_medicine_requests(requests: Sequence[MedicineRequest], now: datetime) -> MedicineStatusSummary:
    lines = [
        MedicineRequestLine(
            request_id=request.id,
            generic_name=request.generic_name,
            urgency_level=request.urgency_level,
            status=request.status,
            days_since_request=days_between(request.created_at, now) if request.created_at else None,
        )
        for request in requests[:SHOWN_ITEMS]
    ]

    return MedicineStatusSummary(
        total_count=len(requests),
        pending_count=sum(1 for req in requests if req.status == "pending"),
        urgent_count=sum(1 for req in requests if req.urgency_level in URGENT_LEVELS),
        recent=lines,
    )
