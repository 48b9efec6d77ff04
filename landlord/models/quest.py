"""Quest models: activity types, status machine, and the Quest value object"""
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from landlord.exceptions import InvalidQuestTransitionError


class ActivityType(str, Enum):
    """Real estate activities, each a kind of quest"""
    LISTING = "listing"
    SHOWING = "showing"
    OFFER = "offer"
    CLOSING = "closing"
    PROSPECTING = "prospecting"
    TRAINING = "training"
    MARKETING = "marketing"


class ActivityProfile(NamedTuple):
    difficulty_level: int
    medieval_name: str
    icon: str


# Difficulty is a fixed integer in [1, 4] per activity
ACTIVITY_PROFILES: dict[ActivityType, ActivityProfile] = {
    ActivityType.LISTING: ActivityProfile(3, "Claim Land", "flag.fill"),
    ActivityType.SHOWING: ActivityProfile(1, "Royal Tour", "building.columns.fill"),
    ActivityType.OFFER: ActivityProfile(2, "Treaty Proposal", "doc.text.fill"),
    ActivityType.CLOSING: ActivityProfile(4, "Kingdom Acquisition", "checkmark.seal.fill"),
    ActivityType.PROSPECTING: ActivityProfile(2, "Scout Mission", "binoculars.fill"),
    ActivityType.TRAINING: ActivityProfile(1, "Knight Training", "book.fill"),
    ActivityType.MARKETING: ActivityProfile(2, "Town Crier", "megaphone.fill"),
}


class QuestStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def display_name(self) -> str:
        return {
            QuestStatus.NOT_STARTED: "Quest Awaits",
            QuestStatus.IN_PROGRESS: "On Quest",
            QuestStatus.COMPLETED: "Victory",
        }[self]


class Quest(BaseModel):
    """
    A unit of user activity yielding gold and XP on completion.

    Immutable: status transitions return a new Quest.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: Optional[str] = None
    title: str = ""
    description: str = ""
    type: ActivityType
    gold_reward: int = Field(50, ge=0)
    xp_reward: int = Field(25, ge=0)
    is_special_quest: bool = False
    status: QuestStatus = QuestStatus.NOT_STARTED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @property
    def difficulty_level(self) -> int:
        return ACTIVITY_PROFILES[self.type].difficulty_level

    @property
    def is_completed(self) -> bool:
        return self.status is QuestStatus.COMPLETED

    def start(self) -> "Quest":
        """NotStarted -> InProgress"""
        if self.status is not QuestStatus.NOT_STARTED:
            raise InvalidQuestTransitionError(
                f"Cannot start quest in status {self.status.value}",
                quest_id=self.id,
            )
        return self.model_copy(update={"status": QuestStatus.IN_PROGRESS})

    def complete(self, now: Optional[datetime] = None) -> "Quest":
        """NotStarted/InProgress -> Completed. Completed is terminal."""
        if self.status is QuestStatus.COMPLETED:
            raise InvalidQuestTransitionError(
                "Quest is already completed",
                quest_id=self.id,
            )
        return self.model_copy(update={
            "status": QuestStatus.COMPLETED,
            "completed_at": now or datetime.now(timezone.utc),
        })
