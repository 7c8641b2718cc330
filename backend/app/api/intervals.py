from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_batch_interval_or_404, get_user_batch_or_404
from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.batch import BatchAnalysis, BatchInterval
from app.models.user import User
from app.schemas.interval import BatchIntervalBase, BatchIntervalCreate, BatchIntervalRead, BatchIntervalUpdate
from app.services.analysis_correlator import detach_analysis, enrich_interval, enrich_intervals
from app.services.notes import normalize_note, serialize_note

router = APIRouter(prefix="/batches/{batch_id}/intervals", tags=["intervals"])


def _correlation_window() -> timedelta:
    return timedelta(seconds=settings.correlation_window_seconds)


def _apply_measurements(interval: BatchInterval, payload: BatchIntervalBase) -> None:
    interval.ph_level = payload.ph_level
    interval.brix_level = payload.brix_level
    interval.temperature = payload.temperature
    interval.taste_notes_json = serialize_note(normalize_note(payload.taste_notes))
    interval.visual_notes_json = serialize_note(normalize_note(payload.visual_notes))
    interval.aroma_notes_json = serialize_note(normalize_note(payload.aroma_notes))


def _batch_analyses(db: Session, batch_id: int) -> list[BatchAnalysis]:
    return (
        db.query(BatchAnalysis)
        .filter(BatchAnalysis.batch_id == batch_id)
        .order_by(BatchAnalysis.analyzed_at.asc(), BatchAnalysis.id.asc())
        .all()
    )


@router.post("", response_model=BatchIntervalRead, status_code=status.HTTP_201_CREATED)
def create_interval(
    batch_id: int,
    payload: BatchIntervalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchIntervalRead:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)

    now = datetime.utcnow()
    interval = BatchInterval(batch_id=batch.id, recorded_at=payload.recorded_at or now, created_at=now)
    _apply_measurements(interval, payload)
    batch.last_entry_date = date.today()

    db.add(interval)
    db.add(batch)
    db.commit()
    db.refresh(interval)

    return enrich_interval(interval, _batch_analyses(db, batch.id), window=_correlation_window())


@router.get("", response_model=list[BatchIntervalRead])
def list_intervals(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[BatchIntervalRead]:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)

    intervals = (
        db.query(BatchInterval)
        .filter(BatchInterval.batch_id == batch.id)
        .order_by(BatchInterval.recorded_at.asc(), BatchInterval.id.asc())
        .all()
    )
    return enrich_intervals(intervals, _batch_analyses(db, batch.id), window=_correlation_window())


@router.put("/{interval_id}", response_model=BatchIntervalRead)
def update_interval(
    batch_id: int,
    interval_id: int,
    payload: BatchIntervalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchIntervalRead:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    interval = get_batch_interval_or_404(db, batch=batch, interval_id=interval_id)

    readings = (interval.ph_level, interval.brix_level, interval.temperature)
    if readings != (payload.ph_level, payload.brix_level, payload.temperature):
        detach_analysis(interval)
    _apply_measurements(interval, payload)
    batch.last_entry_date = date.today()

    db.add(interval)
    db.add(batch)
    db.commit()
    db.refresh(interval)

    return enrich_interval(interval, _batch_analyses(db, batch.id), window=_correlation_window())


@router.delete("/{interval_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_interval(
    batch_id: int,
    interval_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    interval = get_batch_interval_or_404(db, batch=batch, interval_id=interval_id)

    db.delete(interval)
    batch.last_entry_date = date.today()
    db.add(batch)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
