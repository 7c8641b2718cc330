from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AnalysisPayload(BaseModel):
    """Analysis content as produced by the rules engine or the LLM."""

    health_score: int = Field(ge=0, le=100)
    analysis: str = Field(min_length=1)
    recommendations: list[str] = Field(default_factory=list)
    alerts: list[str] = Field(default_factory=list)


class AnalysisRequest(BaseModel):
    interval_id: int | None = Field(default=None, gt=0)


class BatchAnalysisRead(BaseModel):
    id: int
    batch_id: int
    insights: str
    recommendations: list[str]
    alerts: list[str]
    health_score: int
    analyzed_data: dict[str, object]
    source: str
    analyzed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AIStatusRead(BaseModel):
    provider: Literal["rules", "llm"]
    configured: bool
    status: Literal["ready", "not_configured"]
    message: str
