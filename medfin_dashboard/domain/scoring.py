"""Financial health scoring engine - turns a flat account snapshot into a 0-100 score"""

import math
from typing import List

from medfin_dashboard.domain.models import FinancialSnapshot, HealthScore, SubScores
from medfin_dashboard.domain.policy import DEFAULT_POLICY, ScoringPolicy

SAVINGS_RECOMMENDATION = "Increase your savings target to build a stronger financial foundation"
DEBT_RECOMMENDATION = "Focus on reducing outstanding loan balances"
GOALS_RECOMMENDATION = "Set more specific savings goals to improve financial planning"
EMERGENCY_RECOMMENDATION = "Build an emergency fund for unexpected medical expenses"
LOANS_RECOMMENDATION = "Consider consolidating multiple loans for better management"
MEDICINE_RECOMMENDATION = "Review pending medicine requests to avoid accumulating costs"


def calculate_savings_score(total_savings: float, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    """Savings sub-score: 0 with no savings, stepped tiers above 100K UGX"""
    if total_savings == 0:
        return policy.no_savings_score
    return policy.savings.score(total_savings)


def calculate_debt_score(
    total_loans: float,
    total_savings: float,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> float:
    """Debt sub-score from the loans-to-savings ratio (no savings short-circuits before dividing)"""
    return policy.debt.score(total_loans, total_savings)


def calculate_goals_score(goal_count: int, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    """Goals sub-score: rewards having several savings goals"""
    if goal_count == 0:
        return policy.no_goals_score
    for min_count, score in policy.goal_scores:
        if goal_count >= min_count:
            return score
    return policy.no_goals_score


def calculate_emergency_score(wallet_balance: float, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    """Emergency-fund sub-score keyed on the available wallet balance"""
    if wallet_balance <= 0:
        return policy.empty_wallet_score
    return policy.emergency.score(wallet_balance)


def calculate_sub_scores(snapshot: FinancialSnapshot, policy: ScoringPolicy = DEFAULT_POLICY) -> SubScores:
    return SubScores(
        savings=calculate_savings_score(snapshot.total_savings, policy),
        debt=calculate_debt_score(snapshot.total_loans, snapshot.total_savings, policy),
        goals=calculate_goals_score(snapshot.savings_goals_count, policy),
        emergency=calculate_emergency_score(snapshot.wallet_balance, policy),
    )


def calculate_overall_score(sub_scores: SubScores, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """
    Weighted composite of the four sub-scores.

    Scoring weights (default policy):
    - 30%: Savings
    - 30%: Debt
    - 20%: Goals
    - 20%: Emergency fund

    Halves round up, matching how the dashboard has always displayed the score.
    """
    weights = policy.weights
    weighted = (
        sub_scores.savings * weights.savings
        + sub_scores.debt * weights.debt
        + sub_scores.goals * weights.goals
        + sub_scores.emergency * weights.emergency
    )
    return max(0, min(100, int(math.floor(weighted + 0.5))))


def determine_status_label(score: int, policy: ScoringPolicy = DEFAULT_POLICY) -> str:
    """Map score to status band; bands are inclusive lower bounds checked top-down"""
    for lower_bound, label in policy.status_bands:
        if score >= lower_bound:
            return label
    return policy.fallback_status


def build_recommendations(
    sub_scores: SubScores,
    snapshot: FinancialSnapshot,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> List[str]:
    """
    Independent rule checks in fixed declaration order.

    Every triggered rule contributes its message; only the first
    `max_recommendations` are kept (no priority re-ordering).
    """
    threshold = policy.recommendation_threshold
    rules = [
        (sub_scores.savings < threshold, SAVINGS_RECOMMENDATION),
        (sub_scores.debt < threshold, DEBT_RECOMMENDATION),
        (sub_scores.goals < threshold, GOALS_RECOMMENDATION),
        (sub_scores.emergency < threshold, EMERGENCY_RECOMMENDATION),
        (snapshot.active_loans > policy.active_loans_trigger, LOANS_RECOMMENDATION),
        (snapshot.pending_medicine_requests > policy.pending_medicine_trigger, MEDICINE_RECOMMENDATION),
    ]
    triggered = [message for hit, message in rules if hit]
    return triggered[: policy.max_recommendations]


def calculate_health_score(
    snapshot: FinancialSnapshot,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> HealthScore:
    """
    Main entry point: score a snapshot and attach status and recommendations.

    Returns complete HealthScore with overall score, sub-scores, label and
    the savings-ratio / net-position key stats.
    """
    sub_scores = calculate_sub_scores(snapshot, policy)
    overall = calculate_overall_score(sub_scores, policy)

    # Share of savings in savings+loans; 100% when there is no debt
    if snapshot.total_loans > 0:
        denominator = snapshot.total_savings + snapshot.total_loans
        savings_ratio_pct = snapshot.total_savings / denominator * 100 if denominator != 0 else 0.0
    else:
        savings_ratio_pct = 100.0

    return HealthScore(
        overall_score=overall,
        sub_scores=sub_scores,
        status_label=determine_status_label(overall, policy),
        recommendations=build_recommendations(sub_scores, snapshot, policy),
        savings_ratio_pct=savings_ratio_pct,
        net_position=snapshot.total_savings - snapshot.total_loans,
    )
