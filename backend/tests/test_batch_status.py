from datetime import date

from app.models import Batch
from app.services.batch_status import (
    batch_alerts,
    build_batch_status,
    calculate_progress_percentage,
    derive_batch_status,
    refresh_derived_fields,
)


def _batch(**overrides: object) -> Batch:
    fields: dict[str, object] = {
        "id": 1,
        "owner_user_id": 1,
        "batch_number": "K-001",
        "start_date": date(2026, 10, 1),
        "brew_size": 1.0,
        "tea_type": "Black",
        "sugar_type": "Cane",
        "primary_ferment_complete": False,
        "ready_to_bottle": False,
        "pasteurized": False,
    }
    fields.update(overrides)
    return Batch(**fields)


def _complete_batch(**overrides: object) -> Batch:
    fields: dict[str, object] = {
        "start_ph": 4.5,
        "start_brix": 8.0,
        "end_ph": 3.0,
        "end_brix": 1.5,
        "taste_profile": "Tangy + Dry",
        "flavoring_method": "Fruit",
        "filtering_method": "Strainer",
        "carbonation_status": "Complete",
    }
    fields.update(overrides)
    return _batch(**fields)


def test_empty_batch_needs_attention() -> None:
    batch = _batch()

    assert calculate_progress_percentage(batch) == 0
    assert derive_batch_status(batch) == "needs-attention"


def test_progress_steps_through_statuses() -> None:
    batch = _batch(start_ph=4.5, start_brix=8.0)
    assert calculate_progress_percentage(batch) == 25
    assert derive_batch_status(batch) == "in-progress"

    batch.end_ph = 3.0
    batch.end_brix = 1.5
    batch.taste_profile = "Tangy + Dry"
    assert calculate_progress_percentage(batch) == 50
    assert derive_batch_status(batch) == "ready"


def test_blank_strings_do_not_count_as_recorded() -> None:
    batch = _batch(flavoring_method="  ", filtering_method="Strainer")

    assert calculate_progress_percentage(batch) == 0


def test_full_batch_is_complete() -> None:
    batch = _complete_batch()

    assert calculate_progress_percentage(batch) == 100
    assert derive_batch_status(batch) == "complete"


def test_packaging_date_completes_last_milestone() -> None:
    batch = _complete_batch(carbonation_status="In Progress", packaging_date=date(2026, 10, 20))

    assert calculate_progress_percentage(batch) == 100


def test_unsafe_final_ph_overrides_progress() -> None:
    batch = _complete_batch(final_ph=4.2, final_brix=1.0)

    assert calculate_progress_percentage(batch) == 100
    assert derive_batch_status(batch) == "needs-attention"
    assert any("above 4.0" in alert for alert in batch_alerts(batch))


def test_over_fermented_final_ph_overrides_progress() -> None:
    batch = _complete_batch(final_ph=2.2, final_brix=1.0)

    assert derive_batch_status(batch) == "needs-attention"
    assert any("over-fermented" in alert for alert in batch_alerts(batch))


def test_negative_alcohol_estimate_is_reported() -> None:
    batch = _batch(start_brix=2.0, end_brix=6.0)

    assert any("negative" in alert for alert in batch_alerts(batch))


def test_refresh_derived_fields_populates_cache() -> None:
    batch = _complete_batch(carbonation_temp=38, target_co2_volume=2.6)

    refresh_derived_fields(batch, today=date(2026, 10, 10))

    assert batch.starter_volume == 16
    assert batch.tea_weight == 2
    assert batch.water_volume == 1
    assert batch.sugar_amount == 1
    assert batch.alcohol_estimate == round(6.5 * 0.59, 2)
    assert batch.force_carb_psi == 4
    assert batch.carb_time_estimate == 12
    assert batch.primary_ferment_complete is True
    assert batch.progress_percentage == 100
    assert batch.status == "complete"
    assert batch.last_entry_date == date(2026, 10, 10)


def test_refresh_derived_fields_is_idempotent() -> None:
    batch = _complete_batch(final_ph=3.0, final_brix=1.0)

    refresh_derived_fields(batch, today=date(2026, 10, 10))
    first = (batch.alcohol_estimate, batch.progress_percentage, batch.status, batch.primary_ferment_complete)
    refresh_derived_fields(batch, today=date(2026, 10, 10))
    second = (batch.alcohol_estimate, batch.progress_percentage, batch.status, batch.primary_ferment_complete)

    assert first == second


def test_refresh_derived_fields_clears_carbonation_without_inputs() -> None:
    batch = _batch(carbonation_temp=38, target_co2_volume=2.6)
    refresh_derived_fields(batch, today=date(2026, 10, 10))
    assert batch.force_carb_psi == 4

    batch.target_co2_volume = None
    refresh_derived_fields(batch, today=date(2026, 10, 10))

    assert batch.force_carb_psi is None
    assert batch.carb_time_estimate is None


def test_build_batch_status_reports_bottling_criteria() -> None:
    batch = _complete_batch(
        secondary_start_date=date(2026, 10, 8),
        secondary_end_date=date(2026, 10, 11),
        final_ph=3.0,
        final_brix=1.0,
        clarity_achieved="Clear",
    )

    body = build_batch_status(batch)

    assert body.status == "complete"
    assert body.bottling_criteria_met is True
    assert body.unsafe_to_bottle is False
    assert body.milestones.carbonation_or_packaging is True
    assert body.alerts == []


def test_primary_ferment_flag_clears_when_end_readings_are_corrected() -> None:
    batch = _batch(end_ph=3.0, end_brix=1.0, taste_profile="Tangy + Dry")
    refresh_derived_fields(batch, today=date(2026, 10, 10))
    assert batch.primary_ferment_complete is True

    batch.end_ph = 3.8
    refresh_derived_fields(batch, today=date(2026, 10, 11))

    assert batch.primary_ferment_complete is False


def test_primary_ferment_flag_left_alone_without_all_end_readings() -> None:
    batch = _batch(end_ph=3.0, primary_ferment_complete=True)

    refresh_derived_fields(batch, today=date(2026, 10, 10))

    assert batch.primary_ferment_complete is True
