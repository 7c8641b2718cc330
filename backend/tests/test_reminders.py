from datetime import date, datetime

from app.models import Batch
from app.services.reminders import generate_reminders, get_active_reminders


def _batch(**overrides: object) -> Batch:
    fields: dict[str, object] = {
        "id": 7,
        "batch_number": "K-007",
        "start_date": date(2026, 10, 1),
        "brew_size": 1.0,
        "tea_type": "Green",
        "sugar_type": "Cane",
        "ready_to_bottle": False,
    }
    fields.update(overrides)
    return Batch(**fields)


def test_generates_ph_and_bottling_reminders() -> None:
    reminders = generate_reminders(_batch())

    assert [reminder.id for reminder in reminders] == ["7-ph-brix", "7-bottling"]
    assert reminders[0].trigger_at == datetime(2026, 10, 3)
    assert reminders[1].trigger_at == datetime(2026, 10, 8)
    assert reminders[0].message == "Log pH/Brix measurements for Batch K-007"


def test_final_measurements_reminder_needs_secondary_start() -> None:
    reminders = generate_reminders(_batch(secondary_start_date=date(2026, 10, 9)))

    final = reminders[-1]
    assert final.kind == "final-measurements"
    assert final.trigger_at == datetime(2026, 10, 11)


def test_unsaved_batch_has_no_reminders() -> None:
    assert generate_reminders(_batch(id=None)) == []


def test_ph_brix_reminder_active_from_day_two() -> None:
    reminders = generate_reminders(_batch())

    assert get_active_reminders(reminders, now=datetime(2026, 10, 2, 23, 59)) == []

    active = get_active_reminders(reminders, now=datetime(2026, 10, 3))
    assert [reminder.id for reminder in active] == ["7-ph-brix"]


def test_ph_brix_reminder_completes_with_end_readings() -> None:
    reminders = generate_reminders(_batch(end_ph=3.1, end_brix=2.0))

    active = get_active_reminders(reminders, now=datetime(2026, 10, 5))

    assert active == []


def test_bottling_reminder_completes_when_marked_ready() -> None:
    reminders = generate_reminders(_batch(end_ph=3.1, end_brix=2.0, ready_to_bottle=True))

    assert get_active_reminders(reminders, now=datetime(2026, 11, 1)) == []


def test_final_measurements_reminder_clears_once_final_readings_recorded() -> None:
    batch = _batch(end_ph=3.1, end_brix=2.0, ready_to_bottle=True, secondary_start_date=date(2026, 10, 9))

    assert get_active_reminders(generate_reminders(batch), now=datetime(2026, 10, 10, 23, 59)) == []

    active = get_active_reminders(generate_reminders(batch), now=datetime(2026, 10, 11))
    assert [reminder.id for reminder in active] == ["7-final"]

    batch.final_ph = 3.0
    batch.final_brix = 1.5
    assert get_active_reminders(generate_reminders(batch), now=datetime(2026, 10, 11)) == []


def test_final_measurements_reminder_needs_both_final_readings() -> None:
    batch = _batch(
        end_ph=3.1,
        end_brix=2.0,
        ready_to_bottle=True,
        secondary_start_date=date(2026, 10, 9),
        final_ph=3.0,
    )

    active = get_active_reminders(generate_reminders(batch), now=datetime(2026, 10, 12))

    assert [reminder.kind for reminder in active] == ["final-measurements"]
