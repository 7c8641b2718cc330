from datetime import date, datetime, time, timedelta

from app.models.batch import Batch
from app.schemas.reminder import ReminderRead

PH_BRIX_DELAY = timedelta(days=2)
BOTTLING_CHECK_DELAY = timedelta(days=7)
FINAL_MEASUREMENTS_DELAY = timedelta(days=2)


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def generate_reminders(batch: Batch) -> list[ReminderRead]:
    """Follow-up tasks for a batch, rebuilt from its current fields on every call."""
    if batch.id is None or batch.start_date is None:
        return []

    started = _start_of_day(batch.start_date)
    reminders = [
        ReminderRead(
            id=f"{batch.id}-ph-brix",
            batch_id=batch.id,
            message=f"Log pH/Brix measurements for Batch {batch.batch_number}",
            trigger_at=started + PH_BRIX_DELAY,
            completed=batch.end_ph is not None and batch.end_brix is not None,
            kind="ph-brix",
        ),
        ReminderRead(
            id=f"{batch.id}-bottling",
            batch_id=batch.id,
            message=f"Check bottling readiness for Batch {batch.batch_number}",
            trigger_at=started + BOTTLING_CHECK_DELAY,
            completed=bool(batch.ready_to_bottle),
            kind="bottling-check",
        ),
    ]

    if batch.secondary_start_date is not None:
        reminders.append(
            ReminderRead(
                id=f"{batch.id}-final",
                batch_id=batch.id,
                message=f"Enter final pH/Brix for Batch {batch.batch_number}",
                trigger_at=_start_of_day(batch.secondary_start_date) + FINAL_MEASUREMENTS_DELAY,
                completed=batch.final_ph is not None and batch.final_brix is not None,
                kind="final-measurements",
            )
        )

    return reminders


def get_active_reminders(reminders: list[ReminderRead], now: datetime) -> list[ReminderRead]:
    return [reminder for reminder in reminders if not reminder.completed and reminder.trigger_at <= now]
