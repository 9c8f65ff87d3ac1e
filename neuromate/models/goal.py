# goal models - user-tracked objectives, possibly seeded from a suggestion

from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator

from neuromate.config import settings


class Goal(BaseModel):
    """stored goal - completion is toggled in place"""
    id: str
    description: str
    is_completed: bool = Field(False, alias="isCompleted")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class GoalCreate(BaseModel):
    """payload for a new goal"""
    goal_description: str = Field(..., alias="goalDescription", min_length=settings.GOAL_MIN_LENGTH, max_length=500,
                                  description="goal description")

    model_config = {"populate_by_name": True}


class GoalFromSuggestion(BaseModel):
    """promote one of an entry's suggested goals"""
    entry_id: str = Field(..., alias="entryId")
    index: int = Field(..., ge=0, description="position in the entry's suggested goals")

    model_config = {"populate_by_name": True}


class GoalBoard(BaseModel):
    """goals split by completion, newest first"""
    active: list[Goal] = Field(default_factory=list)
    completed: list[Goal] = Field(default_factory=list)
