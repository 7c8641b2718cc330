from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_user_batch_or_404
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.batch import Batch
from app.models.user import User
from app.schemas.batch import (
    BatchCalculationsRead,
    BatchCreate,
    BatchRead,
    BatchStatusRead,
    BatchUpdate,
    BrewRatiosRead,
)
from app.schemas.reminder import ReminderListRead
from app.services.batch_status import build_batch_status, refresh_derived_fields
from app.services.kombucha_calculator import brew_ratios
from app.services.reminders import generate_reminders, get_active_reminders

router = APIRouter(prefix="/batches", tags=["batches"])

NON_NULLABLE_FIELDS = frozenset({"notes", "primary_ferment_complete", "ready_to_bottle", "pasteurized"})


@router.post("", response_model=BatchRead, status_code=status.HTTP_201_CREATED)
def create_batch(
    payload: BatchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Batch:
    batch = Batch(owner_user_id=current_user.id, **payload.model_dump())
    batch.primary_ferment_complete = False
    batch.ready_to_bottle = False
    batch.pasteurized = False
    refresh_derived_fields(batch, today=date.today())

    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch


@router.get("", response_model=list[BatchRead])
def list_batches(
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Batch]:
    query = db.query(Batch).filter(Batch.owner_user_id == current_user.id)
    if status_filter is not None:
        query = query.filter(Batch.status == status_filter)
    return query.order_by(Batch.created_at.desc(), Batch.id.desc()).all()


@router.get("/{batch_id}", response_model=BatchRead)
def get_batch(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Batch:
    return get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)


@router.patch("/{batch_id}", response_model=BatchRead)
def update_batch(
    batch_id: int,
    payload: BatchUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Batch:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(batch, field, value)
    refresh_derived_fields(batch, today=date.today())

    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch


@router.delete("/{batch_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_batch(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    db.delete(batch)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{batch_id}/status", response_model=BatchStatusRead)
def get_batch_status(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchStatusRead:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    return build_batch_status(batch)


@router.get("/{batch_id}/calculations", response_model=BatchCalculationsRead)
def get_batch_calculations(
    batch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BatchCalculationsRead:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)
    ratios = brew_ratios(batch.brew_size)

    return BatchCalculationsRead(
        batch_id=batch.id,
        ratios=BrewRatiosRead(
            starter_volume_fl_oz=ratios.starter_volume,
            tea_weight_oz=ratios.tea_weight,
            water_volume_gal=ratios.water_volume,
            sugar_amount_cups=ratios.sugar_amount,
        ),
        alcohol_estimate=batch.alcohol_estimate,
        force_carb_psi=batch.force_carb_psi,
        carb_time_estimate_hours=batch.carb_time_estimate,
    )


@router.get("/{batch_id}/reminders", response_model=ReminderListRead)
def list_batch_reminders(
    batch_id: int,
    active_only: bool = Query(default=True),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReminderListRead:
    batch = get_user_batch_or_404(db, batch_id=batch_id, user_id=current_user.id)

    now = datetime.utcnow()
    reminders = generate_reminders(batch)
    if active_only:
        reminders = get_active_reminders(reminders, now=now)

    return ReminderListRead(generated_at=now, count=len(reminders), reminders=reminders)
