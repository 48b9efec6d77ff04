"""
Goal System

Arithmetic over an agent's sales goals: derived averages, monthly
targets, and progress percentages toward GCI, volume and transaction
targets.

Percentages saturate at 100 and a zero target yields 0 rather than an
error. Targets outside the onboarding ranges are clamped, not rejected.
"""

import calendar
from typing import Any, Dict, NamedTuple, Union
import logging

from landlord.models.goal import AnnualGoal, GoalProgress, MonthlyGoal

logger = logging.getLogger(__name__)

Goal = Union[AnnualGoal, MonthlyGoal]

# Onboarding ranges for annual targets (min, max)
GCI_TARGET_RANGE = (50_000.0, 500_000.0)
VOLUME_TARGET_RANGE = (500_000.0, 5_000_000.0)
TRANSACTION_TARGET_RANGE = (1, 50)

PROGRESS_DESCRIPTIONS = [
    (10, "Your quest has just begun, brave knight!"),
    (25, "The kingdom grows slowly but surely."),
    (50, "Halfway to conquering the realm!"),
    (75, "Victory is within sight!"),
    (100, "The crown is nearly yours!"),
]


class MonthlyTargets(NamedTuple):
    gci: float
    volume: float
    transactions: float


def _clamp(value, bounds):
    low, high = bounds
    return min(max(value, low), high)


def clamp_goal_targets(goal: AnnualGoal) -> AnnualGoal:
    """Copy of the goal with each target pulled into its onboarding range"""
    clamped = goal.model_copy(update={
        "gci_target": _clamp(goal.gci_target, GCI_TARGET_RANGE),
        "volume_target": _clamp(goal.volume_target, VOLUME_TARGET_RANGE),
        "transaction_target": _clamp(goal.transaction_target, TRANSACTION_TARGET_RANGE),
    })
    if clamped != goal:
        logger.debug(f"Clamped goal targets for {goal.year}")
    return clamped


def average_transaction_value(goal: Goal) -> float:
    if goal.transaction_target <= 0:
        return 0.0
    return goal.volume_target / goal.transaction_target


def average_commission(goal: Goal) -> float:
    if goal.transaction_target <= 0:
        return 0.0
    return goal.gci_target / goal.transaction_target


def effective_commission_rate(goal: Goal) -> float:
    """GCI as a percentage of volume"""
    if goal.volume_target <= 0:
        return 0.0
    return goal.gci_target / goal.volume_target * 100


def monthly_targets(goal: AnnualGoal) -> MonthlyTargets:
    """Annual targets spread evenly over 12 months"""
    return MonthlyTargets(
        gci=goal.gci_target / 12,
        volume=goal.volume_target / 12,
        transactions=goal.transaction_target / 12,
    )


def month_name(goal: MonthlyGoal) -> str:
    return calendar.month_name[goal.month]


def progress_percentage(current: float, target: float) -> float:
    """Percentage (0-100) of target reached, 0 when the target is not positive"""
    if target <= 0:
        return 0.0
    return min(max(current, 0) / target * 100, 100.0)


def gci_progress_percentage(progress: GoalProgress, target: float) -> float:
    return progress_percentage(progress.current_gci, target)


def volume_progress_percentage(progress: GoalProgress, target: float) -> float:
    return progress_percentage(progress.current_volume, target)


def transaction_progress_percentage(progress: GoalProgress, target: int) -> float:
    return progress_percentage(progress.current_transactions, target)


def overall_progress_percentage(progress: GoalProgress, goal: Goal) -> float:
    """Unweighted mean of the GCI, volume and transaction percentages"""
    return (
        gci_progress_percentage(progress, goal.gci_target)
        + volume_progress_percentage(progress, goal.volume_target)
        + transaction_progress_percentage(progress, goal.transaction_target)
    ) / 3


def progress_description(percentage: float) -> str:
    for upper_bound, description in PROGRESS_DESCRIPTIONS:
        if percentage < upper_bound:
            return description
    return "All hail the conquering hero!"


def goal_summary(progress: GoalProgress, goal: Goal) -> Dict[str, Any]:
    """
    Every derived goal value for one period

    Returns:
        {
            'gci_progress': float,
            'volume_progress': float,
            'transaction_progress': float,
            'overall_progress': float,
            'description': str,
            'average_transaction_value': float,
            'average_commission': float,
            'effective_commission_rate': float
        }
    """
    overall = overall_progress_percentage(progress, goal)
    return {
        "gci_progress": gci_progress_percentage(progress, goal.gci_target),
        "volume_progress": volume_progress_percentage(progress, goal.volume_target),
        "transaction_progress": transaction_progress_percentage(progress, goal.transaction_target),
        "overall_progress": overall,
        "description": progress_description(overall),
        "average_transaction_value": average_transaction_value(goal),
        "average_commission": average_commission(goal),
        "effective_commission_rate": effective_commission_rate(goal),
    }
