"""Sales goal models: annual and monthly targets and progress against them"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class GoalType(str, Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"

    @property
    def description(self) -> str:
        return "Yearly Goal" if self is GoalType.ANNUAL else "Monthly Goal"


class AnnualGoal(BaseModel):
    """Targets an agent sets for one year"""
    user_id: Optional[str] = None
    gci_target: float = Field(..., ge=0, description="Gross commission income")
    volume_target: float = Field(..., ge=0, description="Sales volume")
    transaction_target: int = Field(..., ge=0)
    year: int


class MonthlyGoal(AnnualGoal):
    month: int = Field(..., ge=1, le=12)


class GoalProgress(BaseModel):
    """What the agent has achieved so far in a goal period"""
    user_id: Optional[str] = None
    goal_type: GoalType = GoalType.ANNUAL
    year: int
    month: Optional[int] = Field(None, ge=1, le=12)
    current_gci: float = Field(0, ge=0)
    current_volume: float = Field(0, ge=0)
    current_transactions: int = Field(0, ge=0)
