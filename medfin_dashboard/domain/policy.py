"""Scoring policy - weights and thresholds for the financial health score"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from medfin_dashboard.domain.exceptions import ScoringPolicyError

# (inclusive lower bound, score) pairs, highest bound first
Tiers = Tuple[Tuple[float, float], ...]


@dataclass(frozen=True)
class ScoreWeights:
    """Composite weights; must sum to exactly 1.0"""

    savings: float = 0.3
    debt: float = 0.3
    goals: float = 0.2
    emergency: float = 0.2

    def total(self) -> float:
        return math.fsum((self.savings, self.debt, self.goals, self.emergency))


@dataclass(frozen=True)
class SteppedScale:
    """
    Step function with a linear lowest tier.

    Values at or above a tier bound take that tier's score. Below the last
    bound the score is max(floor, value / scale_base * scale_points).
    """

    tiers: Tiers
    floor: float
    scale_base: float
    scale_points: float

    def score(self, value: float) -> float:
        for bound, score in self.tiers:
            if value >= bound:
                return score
        return max(self.floor, (value / self.scale_base) * self.scale_points)


@dataclass(frozen=True)
class DebtScale:
    """Debt-to-savings ratio tiers (inclusive upper bounds, lowest first)"""

    no_debt_score: float = 100
    no_savings_score: float = 20
    ratio_tiers: Tiers = ((0.3, 90), (0.5, 70), (1.0, 50))
    overflow_base: float = 50
    overflow_slope: float = 30
    floor: float = 10

    def score(self, total_loans: float, total_savings: float) -> float:
        if total_loans == 0:
            return self.no_debt_score
        if total_savings == 0:
            return self.no_savings_score

        ratio = total_loans / total_savings
        for ceiling, score in self.ratio_tiers:
            if ratio <= ceiling:
                return score
        return max(self.floor, self.overflow_base - (ratio - 1) * self.overflow_slope)


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Named configuration for the health score.

    Thresholds rationale (UGX):
    - savings: 1M excellent, 500K good, 100K fair
    - emergency fund (wallet): 200K excellent, 100K good, 50K fair
    - goals: 3+ active planning habits score full marks
    """

    weights: ScoreWeights = field(default_factory=ScoreWeights)
    savings: SteppedScale = field(
        default_factory=lambda: SteppedScale(
            tiers=((1_000_000, 100), (500_000, 80), (100_000, 60)),
            floor=20,
            scale_base=100_000,
            scale_points=60,
        )
    )
    debt: DebtScale = field(default_factory=DebtScale)
    emergency: SteppedScale = field(
        default_factory=lambda: SteppedScale(
            tiers=((200_000, 100), (100_000, 80), (50_000, 60)),
            floor=20,
            scale_base=50_000,
            scale_points=60,
        )
    )
    no_savings_score: float = 0
    empty_wallet_score: float = 10
    # goal count -> score; counts above the highest key take the top score
    goal_scores: Tuple[Tuple[int, float], ...] = ((3, 100), (2, 80), (1, 60))
    no_goals_score: float = 30
    status_bands: Tuple[Tuple[int, str], ...] = ((80, "Excellent"), (60, "Good"), (40, "Fair"))
    fallback_status: str = "Needs Improvement"
    recommendation_threshold: float = 60
    max_recommendations: int = 3
    active_loans_trigger: int = 2
    pending_medicine_trigger: int = 3

    def __post_init__(self) -> None:
        if self.weights.total() != 1.0:
            raise ScoringPolicyError(f"Score weights must sum to 1.0, got {self.weights.total()}")


DEFAULT_POLICY = ScoringPolicy()
