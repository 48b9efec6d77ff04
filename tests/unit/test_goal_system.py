"""Unit tests for sales goal arithmetic (landlord/gamification/goal_system.py)"""
import pytest
from pydantic import ValidationError

from landlord.gamification.goal_system import (
    average_commission,
    average_transaction_value,
    clamp_goal_targets,
    effective_commission_rate,
    goal_summary,
    month_name,
    monthly_targets,
    overall_progress_percentage,
    progress_description,
    progress_percentage,
)
from landlord.models.goal import AnnualGoal, GoalProgress, GoalType, MonthlyGoal


@pytest.fixture
def annual_goal():
    return AnnualGoal(
        user_id="agent_123",
        gci_target=150_000,
        volume_target=1_500_000,
        transaction_target=15,
        year=2024,
    )


# ============================================================================
# Derived Goal Values
# ============================================================================

def test_goal_averages(annual_goal):
    assert average_transaction_value(annual_goal) == pytest.approx(100_000)
    assert average_commission(annual_goal) == pytest.approx(10_000)
    assert effective_commission_rate(annual_goal) == pytest.approx(10.0)


def test_goal_averages_zero_targets():
    goal = AnnualGoal(gci_target=0, volume_target=0, transaction_target=0, year=2024)

    assert average_transaction_value(goal) == 0
    assert average_commission(goal) == 0
    assert effective_commission_rate(goal) == 0


def test_monthly_targets(annual_goal):
    targets = monthly_targets(annual_goal)

    assert targets.gci == pytest.approx(12_500)
    assert targets.volume == pytest.approx(125_000)
    assert targets.transactions == pytest.approx(1.25)


def test_month_name():
    goal = MonthlyGoal(gci_target=12_500, volume_target=125_000, transaction_target=1, year=2024, month=3)

    assert month_name(goal) == "March"


def test_month_out_of_range_rejected():
    with pytest.raises(ValidationError):
        MonthlyGoal(gci_target=1, volume_target=1, transaction_target=1, year=2024, month=13)


def test_goal_type_description():
    assert GoalType.ANNUAL.description == "Yearly Goal"
    assert GoalType.MONTHLY.description == "Monthly Goal"


# ============================================================================
# Target Clamping
# ============================================================================

def test_clamp_goal_targets():
    goal = AnnualGoal(gci_target=10_000, volume_target=9_000_000, transaction_target=0, year=2024)

    clamped = clamp_goal_targets(goal)

    assert clamped.gci_target == 50_000
    assert clamped.volume_target == 5_000_000
    assert clamped.transaction_target == 1
    assert goal.gci_target == 10_000


def test_clamp_keeps_targets_in_range(annual_goal):
    assert clamp_goal_targets(annual_goal) == annual_goal


# ============================================================================
# Progress Percentages
# ============================================================================

@pytest.mark.parametrize("current,target,expected", [
    (50, 100, 50.0),
    (150, 100, 100.0),
    (0, 100, 0.0),
    (10, 0, 0.0),
    (10, -5, 0.0),
])
def test_progress_percentage(current, target, expected):
    assert progress_percentage(current, target) == pytest.approx(expected)


def test_overall_progress_is_mean(annual_goal):
    progress = GoalProgress(
        year=2024,
        current_gci=75_000,
        current_volume=300_000,
        current_transactions=20,
    )

    # 50 + 20 + 100 (capped)
    assert overall_progress_percentage(progress, annual_goal) == pytest.approx(170 / 3)


def test_goal_summary(annual_goal):
    progress = GoalProgress(year=2024, current_gci=75_000, current_volume=750_000, current_transactions=3)

    summary = goal_summary(progress, annual_goal)

    assert summary["gci_progress"] == pytest.approx(50)
    assert summary["volume_progress"] == pytest.approx(50)
    assert summary["transaction_progress"] == pytest.approx(20)
    assert summary["overall_progress"] == pytest.approx(40)
    assert summary["description"] == "Halfway to conquering the realm!"
    assert summary["average_commission"] == pytest.approx(10_000)


@pytest.mark.parametrize("percentage,description", [
    (0, "Your quest has just begun, brave knight!"),
    (10, "The kingdom grows slowly but surely."),
    (49.9, "Halfway to conquering the realm!"),
    (74, "Victory is within sight!"),
    (99, "The crown is nearly yours!"),
    (100, "All hail the conquering hero!"),
])
def test_progress_description(percentage, description):
    assert progress_description(percentage) == description
