import logging

from app.core.config import settings
from app.models.batch import Batch, BatchInterval
from app.schemas.ai import AnalysisPayload
from app.services.ai_assistant import FermentationAIAssistant
from app.services.llm_provider import LLMProviderError, OpenAICompatibleLLM
from app.services.notes import describe_note, parse_note

logger = logging.getLogger("boochtracker.ai")

SYSTEM_PROMPT = (
    "You are an expert kombucha brewing consultant versed in zero-day, one-day, and two-day methods. "
    "Consider alcohol risk, residual sweetness, and microbial safety. Output JSON only with shape: "
    '{"healthScore": 0-100, "analysis": "...", "recommendations": ["..."], "alerts": ["..."]}.'
)


def _llm_enabled() -> bool:
    return settings.ai_provider.lower() == "llm"


def llm_configured() -> bool:
    return bool(settings.ai_llm_base_url and settings.ai_llm_model)


def _build_llm_client() -> OpenAICompatibleLLM:
    if not llm_configured():
        raise LLMProviderError("LLM provider is enabled but AI_LLM_BASE_URL or AI_LLM_MODEL is missing")

    return OpenAICompatibleLLM(
        base_url=settings.ai_llm_base_url,
        api_key=settings.ai_llm_api_key,
        model=settings.ai_llm_model,
        timeout_seconds=settings.ai_llm_timeout_seconds,
    )


def analyzed_data_for(interval: BatchInterval | None) -> dict[str, object]:
    if interval is None:
        return {}

    return {
        "interval_id": interval.id,
        "recorded_at": interval.recorded_at.isoformat() if interval.recorded_at else None,
        "ph_level": interval.ph_level,
        "brix_level": interval.brix_level,
        "temperature": interval.temperature,
        "taste_notes": describe_note(parse_note(interval.taste_notes_json)),
        "visual_notes": describe_note(parse_note(interval.visual_notes_json)),
        "aroma_notes": describe_note(parse_note(interval.aroma_notes_json)),
    }


def _format_reading(value: object, suffix: str = "") -> str:
    if value is None:
        return "Not recorded"
    return f"{value}{suffix}"


def _analysis_prompts(batch: Batch, intervals: list[BatchInterval]) -> tuple[str, str]:
    data_points = []
    for interval in sorted(intervals, key=lambda item: (item.recorded_at, item.id or 0)):
        data = analyzed_data_for(interval)
        data_points.append(
            f"Date: {data['recorded_at']}\n"
            f"pH: {_format_reading(data['ph_level'])}\n"
            f"Brix: {_format_reading(data['brix_level'])}\n"
            f"Temperature: {_format_reading(data['temperature'], ' F')}\n"
            f"Taste: {_format_reading(data['taste_notes'])}\n"
            f"Visual: {_format_reading(data['visual_notes'])}\n"
            f"Aroma: {_format_reading(data['aroma_notes'])}"
        )

    user_prompt = (
        "Batch Information:\n"
        f"- Batch: {batch.batch_number}\n"
        f"- Method: {batch.method or 'Not specified'}\n"
        f"- Tea Type: {batch.tea_type}\n"
        f"- Sugar Type: {batch.sugar_type}\n"
        f"- Start Date: {batch.start_date}\n"
        f"- Brew Size: {batch.brew_size} gallons\n"
        f"- Status: {batch.status}\n\n"
        "Fermentation Data Points:\n"
        + ("\n\n".join(data_points) if data_points else "None recorded")
        + "\n\nMethod notes: zero-day is for immediate consumption with minimal fermentation; "
        "one-day balances sweetness and tang; two-day runs longer with higher acidity and alcohol potential.\n"
        "Return a health score, an analysis of fermentation progress, method-specific recommendations, "
        "and any safety alerts."
    )

    return SYSTEM_PROMPT, user_prompt


def analyze_progress(
    batch: Batch,
    intervals: list[BatchInterval],
    focus: BatchInterval | None,
) -> tuple[AnalysisPayload | None, str]:
    """Produce an analysis for a batch; returns ``(None, "llm_error")`` when the LLM call fails."""
    if not _llm_enabled():
        return FermentationAIAssistant.analyze_progress(analyzed_data_for(focus)), "rules"

    try:
        client = _build_llm_client()
        system_prompt, user_prompt = _analysis_prompts(batch=batch, intervals=intervals)
        return client.analyze(system_prompt=system_prompt, user_prompt=user_prompt), "llm"
    except LLMProviderError as exc:
        logger.warning("analysis for batch %s failed: %s", batch.id, exc)
        return None, "llm_error"
