"""Domain models - pure Python dataclasses representing business entities and view-models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

# Shared ordinal for goal and notification priorities
PRIORITY_RANK: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def priority_rank(priority: str) -> int:
    """Ordinal for a priority label; unknown labels rank below "low" """
    return PRIORITY_RANK.get(priority, 0)


# --- Records supplied by the data-access collaborator ---


@dataclass
class LoanAccount:
    """Medical loan row"""

    id: str
    amount: float
    status: str  # pending | approved | active | completed | overdue | rejected | defaulted
    purpose: str
    outstanding_balance: float = 0.0
    total_paid: float = 0.0
    total_payable: float = 0.0
    monthly_payment: float = 0.0
    interest_rate: float = 0.0
    term_months: int = 0
    maturity_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def repayment_progress(self) -> float:
        """Share of principal repaid; 0 when amount is not positive"""
        return self.total_paid / self.amount if self.amount > 0 else 0.0


@dataclass
class SavingsGoal:
    """Savings goal row"""

    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0
    priority: str = "medium"  # low | medium | high
    category: str = "general"
    target_date: Optional[datetime] = None
    is_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def progress(self) -> float:
        """current/target ratio, unclamped; 0 when target is not positive"""
        return self.current_amount / self.target_amount if self.target_amount > 0 else 0.0


@dataclass
class MedicineRequest:
    """Medicine-sharing request row"""

    id: str
    generic_name: str
    urgency_level: str  # Emergency | Urgent | Routine | Standard | Preventive
    status: str  # pending | approved | rejected | fulfilled
    medical_condition: str = ""
    brand_name: Optional[str] = None
    total_amount: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass
class SavingsTransaction:
    """Deposit/withdrawal against a savings goal or plan"""

    id: str
    amount: float
    transaction_type: str
    description: str = ""
    created_at: Optional[datetime] = None


@dataclass
class Activity:
    """Entry in the recent-activity feed"""

    id: str
    type: str  # loan | savings | medicine | repayment
    title: str
    description: str
    date: Optional[datetime] = None
    amount: Optional[float] = None
    status: Optional[str] = None


@dataclass
class AccountRecords:
    """Atomic per-user snapshot fetched once per dashboard load"""

    loans: List[LoanAccount] = field(default_factory=list)
    savings_goals: List[SavingsGoal] = field(default_factory=list)
    savings_transactions: List[SavingsTransaction] = field(default_factory=list)
    medicine_requests: List[MedicineRequest] = field(default_factory=list)


@dataclass
class FinancialSnapshot:
    """Flat aggregate fed to the scoring engine"""

    total_savings: float
    total_loans: float
    active_loans: int
    savings_goals_count: int
    pending_medicine_requests: int
    wallet_balance: float


# --- Scoring ---


@dataclass
class SubScores:
    """Component scores, each in [0, 100]"""

    savings: float
    debt: float
    goals: float
    emergency: float


@dataclass
class HealthScore:
    """Output of the scoring engine"""

    overall_score: int
    sub_scores: SubScores
    status_label: str
    recommendations: List[str]
    savings_ratio_pct: float
    net_position: float


# --- Goal analytics ---


@dataclass
class Milestone:
    """Achievement unlocked by the member's goal history"""

    id: str
    title: str
    description: str
    achieved_at: Optional[datetime]


@dataclass
class GoalAnalytics:
    """Classification and progress over the member's savings goals"""

    completed: List[SavingsGoal]
    active: List[SavingsGoal]
    near_complete: List[SavingsGoal]
    overdue: List[SavingsGoal]
    overall_progress_pct: float
    priority_goals: List[SavingsGoal]
    milestones: List[Milestone]


# --- Insights ---


@dataclass
class MonthlyTrend:
    savings_count: int
    loans_count: int
    total_savings_activity: float


@dataclass
class GoalProgressSummary:
    active: int
    completed: int
    near_complete: int
    average_progress: float


@dataclass
class MedicineInsights:
    urgent: int
    this_week: int
    total_cost: float


@dataclass
class UpcomingEvent:
    title: str
    days_left: int
    priority: str  # high | medium


@dataclass
class Highlight:
    """Short narrative row shown at the top of the insights widget"""

    title: str
    value: float
    summary: str
    trend: str  # up | down | neutral


@dataclass
class FinancialInsights:
    monthly_trend: MonthlyTrend
    goal_progress: GoalProgressSummary
    medicine_insights: MedicineInsights
    upcoming_events: List[UpcomingEvent]
    highlights: List[Highlight]


# --- Notifications ---


@dataclass
class Notification:
    """Dashboard alert; id is derived from the source record so it can be dismissed"""

    id: str
    type: str  # alert | reminder | achievement | warning
    title: str
    message: str
    priority: str  # high | medium | low
    timestamp: datetime


# --- Spending ---


@dataclass
class MonthlySpending:
    month: str
    loans: float = 0.0
    savings: float = 0.0
    medicine: float = 0.0
    total: float = 0.0


@dataclass
class CategoryTotal:
    category: str
    amount: float


@dataclass
class TrendPoint:
    month: str
    spending: float


@dataclass
class SpendingAnalytics:
    monthly_series: List[MonthlySpending]
    category_totals: List[CategoryTotal]
    six_month_trend: List[TrendPoint]
    average_monthly: float
    month_over_month_change_pct: float


# --- Overview widgets ---


@dataclass
class LoanStatusLine:
    loan_id: str
    purpose: str
    status: str
    amount: float
    outstanding_balance: float
    repayment_progress_pct: float
    days_until_due: Optional[int]


@dataclass
class LoanOverview:
    total_count: int
    active_count: int
    active_outstanding: float
    loans: List[LoanStatusLine]


@dataclass
class MedicineRequestLine:
    request_id: str
    generic_name: str
    urgency_level: str
    status: str
    days_since_request: Optional[int]


@dataclass
class MedicineStatusSummary:
    total_count: int
    pending_count: int
    urgent_count: int
    recent: List[MedicineRequestLine]
