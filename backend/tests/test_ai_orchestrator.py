from datetime import date, datetime

import pytest

from app.core.config import settings
from app.models import Batch, BatchInterval
from app.schemas.ai import AnalysisPayload
from app.services import ai_orchestrator
from app.services.ai_assistant import FermentationAIAssistant
from app.services.notes import normalize_note, serialize_note


@pytest.fixture
def batch() -> Batch:
    return Batch(
        id=1,
        owner_user_id=1,
        batch_number="K-010",
        start_date=date(2026, 10, 1),
        brew_size=1.0,
        tea_type="Black",
        sugar_type="Cane",
        method="One-day",
        status="in-progress",
    )


@pytest.fixture
def intervals() -> list[BatchInterval]:
    return [
        BatchInterval(
            id=2,
            batch_id=1,
            recorded_at=datetime(2026, 10, 4, 9, 0),
            ph_level=3.3,
            brix_level=3.0,
            temperature=80.0,
            taste_notes_json=serialize_note(normalize_note(["Tangy", "Dry"])),
        ),
        BatchInterval(
            id=1,
            batch_id=1,
            recorded_at=datetime(2026, 10, 2, 9, 0),
            ph_level=4.4,
            brix_level=7.0,
            temperature=72.0,
        ),
    ]


def test_rules_analysis_scores_focus_interval(
    batch: Batch,
    intervals: list[BatchInterval],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "ai_provider", "rules")

    result, source = ai_orchestrator.analyze_progress(batch=batch, intervals=intervals, focus=intervals[0])

    assert source == "rules"
    assert result is not None
    assert result.health_score == 65
    assert "Move to cooler location" in result.recommendations


def test_rules_analysis_without_readings() -> None:
    result = FermentationAIAssistant.analyze_progress({})

    assert result.health_score == 85
    assert result.analysis.startswith("Fermentation parameters look balanced")


def test_rules_analysis_alerts_on_high_ph() -> None:
    result = FermentationAIAssistant.analyze_progress({"ph_level": 4.5})

    assert result.health_score == 85
    assert result.alerts


def test_analyze_progress_uses_llm_when_enabled(
    batch: Batch,
    intervals: list[BatchInterval],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "ai_provider", "llm")
    monkeypatch.setattr(settings, "ai_llm_base_url", "https://example.com")
    monkeypatch.setattr(settings, "ai_llm_model", "test-model")

    prompts: dict[str, str] = {}

    class FakeClient:
        def __init__(self, **_: object):
            pass

        def analyze(self, *, system_prompt: str, user_prompt: str) -> AnalysisPayload:
            prompts["system"] = system_prompt
            prompts["user"] = user_prompt
            return AnalysisPayload(health_score=77, analysis="Steady acidification.", recommendations=["Taste daily"])

    monkeypatch.setattr(ai_orchestrator, "OpenAICompatibleLLM", FakeClient)

    result, source = ai_orchestrator.analyze_progress(batch=batch, intervals=intervals, focus=intervals[0])

    assert source == "llm"
    assert result is not None
    assert result.health_score == 77
    assert "Batch: K-010" in prompts["user"]
    assert prompts["user"].index("2026-10-02") < prompts["user"].index("2026-10-04")
    assert "Taste: Dry, Tangy" in prompts["user"]


def test_analyze_progress_returns_none_when_llm_fails(
    batch: Batch,
    intervals: list[BatchInterval],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "ai_provider", "llm")
    monkeypatch.setattr(settings, "ai_llm_base_url", "https://example.com")
    monkeypatch.setattr(settings, "ai_llm_model", "test-model")

    class ExplodingClient:
        def __init__(self, **_: object):
            pass

        def analyze(self, *, system_prompt: str, user_prompt: str) -> AnalysisPayload:
            raise ai_orchestrator.LLMProviderError("boom")

    monkeypatch.setattr(ai_orchestrator, "OpenAICompatibleLLM", ExplodingClient)

    result, source = ai_orchestrator.analyze_progress(batch=batch, intervals=intervals, focus=intervals[0])

    assert result is None
    assert source == "llm_error"


def test_analyze_progress_fails_when_llm_not_configured(
    batch: Batch,
    intervals: list[BatchInterval],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "ai_provider", "llm")
    monkeypatch.setattr(settings, "ai_llm_base_url", "")
    monkeypatch.setattr(settings, "ai_llm_model", "")

    result, source = ai_orchestrator.analyze_progress(batch=batch, intervals=intervals, focus=None)

    assert result is None
    assert source == "llm_error"


def test_analyzed_data_describes_notes(intervals: list[BatchInterval]) -> None:
    data = ai_orchestrator.analyzed_data_for(intervals[0])

    assert data["interval_id"] == 2
    assert data["taste_notes"] == "Dry, Tangy"
    assert data["aroma_notes"] is None
    assert ai_orchestrator.analyzed_data_for(None) == {}
