from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.batch import Batch, BatchInterval


def get_user_batch_or_404(db: Session, batch_id: int, user_id: int) -> Batch:
    batch = (
        db.query(Batch)
        .filter(
            Batch.id == batch_id,
            Batch.owner_user_id == user_id,
        )
        .first()
    )
    if not batch:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Batch not found")
    return batch


def get_batch_interval_or_404(db: Session, batch: Batch, interval_id: int) -> BatchInterval:
    interval = (
        db.query(BatchInterval)
        .filter(
            BatchInterval.id == interval_id,
            BatchInterval.batch_id == batch.id,
        )
        .first()
    )
    if not interval:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interval not found")
    return interval
