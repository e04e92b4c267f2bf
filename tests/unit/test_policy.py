"""Unit tests for the scoring policy configuration"""

import math
import pytest
from medfin_dashboard.domain.exceptions import ScoringPolicyError
from medfin_dashboard.domain.models import FinancialSnapshot
from medfin_dashboard.domain.policy import DEFAULT_POLICY, ScoreWeights, ScoringPolicy, SteppedScale
from medfin_dashboard.domain.scoring import calculate_health_score, determine_status_label


def test_default_weights_sum_to_exactly_one():
    weights = DEFAULT_POLICY.weights

    assert (weights.savings, weights.debt, weights.goals, weights.emergency) == (0.3, 0.3, 0.2, 0.2)
    assert weights.total() == 1.0
    assert math.fsum([0.3, 0.3, 0.2, 0.2]) == 1.0


def test_policy_rejects_weights_not_summing_to_one():
    with pytest.raises(ScoringPolicyError):
        ScoringPolicy(weights=ScoreWeights(savings=0.5))


def test_custom_weights_change_composite():
    policy = ScoringPolicy(weights=ScoreWeights(savings=0.0, debt=1.0, goals=0.0, emergency=0.0))
    snapshot = FinancialSnapshot(
        total_savings=0,
        total_loans=0,
        active_loans=0,
        savings_goals_count=0,
        pending_medicine_requests=0,
        wallet_balance=0,
    )

    assert calculate_health_score(snapshot, policy).overall_score == 100


def test_custom_status_bands():
    policy = ScoringPolicy(status_bands=((90, "Excellent"), (50, "Good")), fallback_status="Poor")

    assert determine_status_label(85, policy) == "Good"
    assert determine_status_label(49, policy) == "Poor"


def test_stepped_scale_linear_lowest_tier():
    scale = SteppedScale(tiers=((100, 100), (50, 70)), floor=5, scale_base=50, scale_points=70)

    assert scale.score(150) == 100
    assert scale.score(50) == 70
    assert scale.score(25) == pytest.approx(35)
    assert scale.score(1) == 5
