from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.batch import Batch
from app.models.user import User
from app.schemas.reminder import ReminderListRead, ReminderRead
from app.services.reminders import generate_reminders, get_active_reminders

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/reminders", response_model=ReminderListRead)
def list_active_reminders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReminderListRead:
    now = datetime.utcnow()

    batches = (
        db.query(Batch)
        .filter(Batch.owner_user_id == current_user.id)
        .order_by(Batch.start_date.asc(), Batch.id.asc())
        .all()
    )

    reminders: list[ReminderRead] = []
    for batch in batches:
        reminders.extend(get_active_reminders(generate_reminders(batch), now=now))
    reminders.sort(key=lambda reminder: (reminder.trigger_at, reminder.batch_id))

    return ReminderListRead(generated_at=now, count=len(reminders), reminders=reminders)
