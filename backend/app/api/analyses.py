from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_batch_interval_or_404, get_user_batch_or_404
from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.batch import BatchAnalysis, BatchInterval
from app.models.user import User
from app.schemas.ai import AnalysisRequest, BatchAnalysisRead
from app.schemas.interval import HealthTrendRead
from app.services import ai_orchestrator
from app.services.analysis_correlator import attach_analysis, build_health_trend
from app.services.rate_limit import RateLimitExceeded, analysis_rate_limiter

router = APIRouter(prefix="/batches/{batch_id}", tags=["analyses"])


@router.post("/analyses", response_model=BatchAnalysisRead, status_code=status.HTTP_201_CREATED)
def request_analysis(
    batch_id: int,
    payload: AnalysisRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchAnalysis:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)

    intervals = (
        db.query(BatchInterval)
        .filter(BatchInterval.batch_id == batch.id)
        .order_by(BatchInterval.recorded_at.asc(), BatchInterval.id.asc())
        .all()
    )
    if payload.interval_id is not None:
        focus = get_batch_interval_or_404(db, batch=batch, interval_id=payload.interval_id)
    else:
        focus = intervals[-1] if intervals else None

    try:
        analysis_rate_limiter.acquire()
    except RateLimitExceeded as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(exc),
            headers={"Retry-After": str(exc.retry_after_seconds)},
        ) from exc

    result, source = ai_orchestrator.analyze_progress(batch=batch, intervals=intervals, focus=focus)
    if result is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="AI analysis is currently unavailable")

    analysis = BatchAnalysis(
        batch_id=batch.id,
        insights=result.analysis,
        recommendations=result.recommendations,
        alerts=result.alerts,
        health_score=result.health_score,
        analyzed_data=ai_orchestrator.analyzed_data_for(focus),
        source=source,
        analyzed_at=datetime.utcnow(),
    )
    db.add(analysis)
    db.flush()

    if payload.interval_id is not None and focus is not None:
        attach_analysis(focus, analysis)
        db.add(focus)

    db.commit()
    db.refresh(analysis)
    return analysis


@router.get("/analyses", response_model=list[BatchAnalysisRead])
def list_analyses(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[BatchAnalysis]:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    return (
        db.query(BatchAnalysis)
        .filter(BatchAnalysis.batch_id == batch.id)
        .order_by(BatchAnalysis.analyzed_at.desc(), BatchAnalysis.id.desc())
        .all()
    )


@router.get("/health-trend", response_model=HealthTrendRead)
def get_health_trend(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> HealthTrendRead:
    trend = build_health_trend(
        db,
        batch_id=batch_id,
        user_id=current_user.id,
        window=timedelta(seconds=settings.correlation_window_seconds),
    )
    if trend is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Batch not found")
    return trend
