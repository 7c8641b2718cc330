from datetime import datetime
from typing import Literal

from pydantic import BaseModel

ReminderKind = Literal["ph-brix", "bottling-check", "final-measurements"]


class ReminderRead(BaseModel):
    id: str
    batch_id: int
    message: str
    trigger_at: datetime
    completed: bool
    kind: ReminderKind


class ReminderListRead(BaseModel):
    generated_at: datetime
    count: int
    reminders: list[ReminderRead]
