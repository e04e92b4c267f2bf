"""Goal analytics - completion classification, aggregate progress and milestones"""

from datetime import datetime
from typing import List, Sequence

from medfin_dashboard.domain.models import GoalAnalytics, Milestone, SavingsGoal, priority_rank
from medfin_dashboard.utils.date_utils import sort_by_date

NEAR_COMPLETE_RATIO = 0.8
PRIORITY_GOALS_LIMIT = 3
MILESTONES_SHOWN = 3
SERIAL_ACHIEVER_COUNT = 3
MILLIONAIRE_THRESHOLD = 1_000_000
CONSISTENT_SAVER_COUNT = 5

def is_near_complete(goal: SavingsGoal) -> bool:
    return not goal.is_completed and goal.progress >= NEAR_COMPLETE_RATIO


def is_overdue(goal: SavingsGoal, now: datetime) -> bool:
    return not goal.is_completed and goal.target_date is not None and goal.target_date < now


def overall_progress_pct(goals: Sequence[SavingsGoal]) -> float:
    """Σcurrent / Σtarget as a percentage; 0 when nothing is targeted"""
    total_target = sum(goal.target_amount for goal in goals)
    total_current = sum(goal.current_amount for goal in goals)
    return total_current / total_target * 100 if total_target > 0 else 0.0


def rank_priority_goals(goals: Sequence[SavingsGoal], limit: int = PRIORITY_GOALS_LIMIT) -> List[SavingsGoal]:
    """
    Active goals ordered by priority (high first), then by progress.

    sorted() is stable, so goals with equal priority and progress keep the
    order they arrived in.
    """
    active = [goal for goal in goals if not goal.is_completed]
    ranked = sorted(active, key=lambda goal: (-priority_rank(goal.priority), -goal.progress))
    return ranked[:limit]


def derive_milestones(
    goals: Sequence[SavingsGoal],
    total_savings: float,
    now: datetime,
) -> List[Milestone]:
    """
    Evaluate the achievement checklist and return achieved milestones, newest first.

    "First goal" means earliest created_at and "first completion" means
    earliest updated_at among completed goals, regardless of the order the
    records were fetched in. Balance and goal-count milestones have no
    natural timestamp and are stamped with `now`.
    """
    by_creation = sort_by_date(goals, lambda goal: goal.created_at)
    completions = sort_by_date([goal for goal in goals if goal.is_completed], lambda goal: goal.updated_at)

    milestones: List[Milestone] = []

    if by_creation:
        milestones.append(
            Milestone(
                id="first-goal",
                title="Goal Setter",
                description="Created your first savings goal",
                achieved_at=by_creation[0].created_at,
            )
        )

    if completions:
        milestones.append(
            Milestone(
                id="first-completion",
                title="Goal Achiever",
                description="Completed your first savings goal",
                achieved_at=completions[0].updated_at,
            )
        )

    if len(completions) >= SERIAL_ACHIEVER_COUNT:
        milestones.append(
            Milestone(
                id="multiple-goals",
                title="Serial Achiever",
                description="Completed 3 or more goals",
                achieved_at=completions[SERIAL_ACHIEVER_COUNT - 1].updated_at,
            )
        )

    if total_savings >= MILLIONAIRE_THRESHOLD:
        milestones.append(
            Milestone(
                id="high-saver",
                title="Millionaire Saver",
                description="Reached UGX 1,000,000 in savings",
                achieved_at=now,
            )
        )

    funded = [goal for goal in goals if goal.current_amount > 0]
    if len(funded) >= CONSISTENT_SAVER_COUNT:
        milestones.append(
            Milestone(
                id="consistent",
                title="Consistent Saver",
                description="Maintained 5+ active savings goals",
                achieved_at=now,
            )
        )

    return sort_by_date(milestones, lambda m: m.achieved_at, newest_first=True)


def analyze_goals(
    goals: Sequence[SavingsGoal],
    total_savings: float,
    now: datetime,
) -> GoalAnalytics:
    """Main entry point for the goal achievement widget"""
    completed = [goal for goal in goals if goal.is_completed]
    active = [goal for goal in goals if not goal.is_completed]

    return GoalAnalytics(
        completed=completed,
        active=active,
        near_complete=[goal for goal in active if is_near_complete(goal)],
        overdue=[goal for goal in active if is_overdue(goal, now)],
        overall_progress_pct=overall_progress_pct(goals),
        priority_goals=rank_priority_goals(goals),
        milestones=derive_milestones(goals, total_savings, now)[:MILESTONES_SHOWN],
    )
