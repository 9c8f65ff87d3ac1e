# notification model - toast-style messages queued for the frontend

from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, Field


class Notification(BaseModel):
    variant: Literal["default", "destructive"] = "default"
    title: str
    description: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="createdAt")

    model_config = {"populate_by_name": True}
