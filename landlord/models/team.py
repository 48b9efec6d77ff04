"""Team models: members and their rolling performance"""
from typing import List, Optional

from pydantic import BaseModel, Field


class TeamPerformance(BaseModel):
    """Performance over the last 30 days"""
    properties_sold: int = Field(0, ge=0)
    gold_earned: int = Field(0, ge=0)
    quests_completed: int = Field(0, ge=0)
    satisfaction_rating: float = Field(0.0, ge=0, le=5)
    new_clients: int = Field(0, ge=0)
    achievements: List[str] = Field(default_factory=list)


class TeamMember(BaseModel):
    user_id: str
    name: str
    rank: str = ""
    specialization: Optional[str] = None
    is_leader: bool = False
    performance: TeamPerformance = Field(default_factory=TeamPerformance)
