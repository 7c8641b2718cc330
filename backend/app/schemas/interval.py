from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

NoteInput = str | list[str] | None
MatchSource = Literal["attached", "time_window", "batch_fallback"]


class BatchIntervalBase(BaseModel):
    ph_level: float | None = Field(default=None, gt=0, lt=14)
    brix_level: float | None = Field(default=None, ge=0, le=40)
    temperature: float | None = Field(default=None, ge=32, le=212)
    taste_notes: NoteInput = None
    visual_notes: NoteInput = None
    aroma_notes: NoteInput = None


class BatchIntervalCreate(BatchIntervalBase):
    recorded_at: datetime | None = None


class BatchIntervalUpdate(BatchIntervalBase):
    pass


class BatchIntervalRead(BatchIntervalBase):
    id: int
    batch_id: int
    recorded_at: datetime
    created_at: datetime
    ai_analysis: str | None = None
    health_score: int | None = None
    recommendations: list[str] | None = None
    analysis_id: int | None = None
    match_source: MatchSource | None = None


class HealthTrendPointRead(BaseModel):
    interval_id: int
    recorded_at: datetime
    ph_level: float | None
    brix_level: float | None
    temperature: float | None
    health_score: int | None
    match_source: MatchSource | None


class HealthTrendRead(BaseModel):
    batch_id: int
    interval_count: int
    analysis_count: int
    average_health_score: float | None
    latest_health_score: int | None
    points: list[HealthTrendPointRead] = Field(default_factory=list)
