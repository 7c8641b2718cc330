from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.ai import AIStatusRead
from app.services import ai_orchestrator

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/status", response_model=AIStatusRead)
def get_ai_status(current_user: User = Depends(get_current_user)) -> AIStatusRead:
    if settings.ai_provider.lower() != "llm":
        return AIStatusRead(
            provider="rules",
            configured=True,
            status="ready",
            message="Using the built-in rules engine for fermentation analysis.",
        )

    if not ai_orchestrator.llm_configured():
        return AIStatusRead(
            provider="llm",
            configured=False,
            status="not_configured",
            message="AI_LLM_BASE_URL and AI_LLM_MODEL must be set to enable LLM analysis.",
        )

    return AIStatusRead(
        provider="llm",
        configured=True,
        status="ready",
        message=f"LLM analysis enabled with model '{settings.ai_llm_model}'.",
    )
