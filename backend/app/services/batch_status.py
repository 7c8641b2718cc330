"""Progress and status derivation for kombucha batches.

Every derived column on :class:`~app.models.batch.Batch` is a cache. This module
is its only writer: routes call :func:`refresh_derived_fields` after applying an
operator change and persist the result in the same commit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from app.models.batch import Batch
from app.schemas.batch import BatchMilestonesRead, BatchStatus, BatchStatusRead
from app.services.kombucha_calculator import (
    alcohol_estimate,
    brew_ratios,
    carb_time_estimate_hours,
    force_carb_psi,
    is_over_fermented,
    is_primary_ferment_complete,
    is_ready_to_bottle,
    is_unsafe_to_bottle,
)

MILESTONE_WEIGHT = 25
CARBONATION_COMPLETE = "Complete"


@dataclass(frozen=True)
class MilestoneChecks:
    initial_measurements: bool
    fermentation_tracking: bool
    flavoring_and_filtering: bool
    carbonation_or_packaging: bool

    def completed_count(self) -> int:
        return sum(
            (
                self.initial_measurements,
                self.fermentation_tracking,
                self.flavoring_and_filtering,
                self.carbonation_or_packaging,
            )
        )


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def milestone_checks(batch: Batch) -> MilestoneChecks:
    return MilestoneChecks(
        initial_measurements=_present(batch.start_ph) and _present(batch.start_brix),
        fermentation_tracking=(
            _present(batch.end_ph) and _present(batch.end_brix) and _present(batch.taste_profile)
        ),
        flavoring_and_filtering=_present(batch.flavoring_method) and _present(batch.filtering_method),
        carbonation_or_packaging=(
            batch.carbonation_status == CARBONATION_COMPLETE or _present(batch.packaging_date)
        ),
    )


def calculate_progress_percentage(batch: Batch) -> int:
    return milestone_checks(batch).completed_count() * MILESTONE_WEIGHT


def derive_batch_status(batch: Batch) -> BatchStatus:
    if batch.final_ph is not None and is_unsafe_to_bottle(batch.final_ph):
        return "needs-attention"
    if batch.final_ph is not None and is_over_fermented(batch.final_ph):
        return "needs-attention"

    progress = calculate_progress_percentage(batch)
    if progress == 100:
        return "complete"
    if progress >= 50:
        return "ready"
    if progress > 0:
        return "in-progress"
    return "needs-attention"


def batch_alerts(batch: Batch) -> list[str]:
    alerts: list[str] = []

    if batch.final_ph is not None and is_unsafe_to_bottle(batch.final_ph):
        alerts.append(f"Final pH {batch.final_ph} is above 4.0. Do not bottle; let fermentation continue.")
    elif batch.final_ph is not None and is_over_fermented(batch.final_ph):
        alerts.append(f"Final pH {batch.final_ph} is below 2.4. Batch is over-fermented.")

    if batch.start_brix is not None and batch.end_brix is not None:
        estimate = alcohol_estimate(batch.start_brix, batch.end_brix)
        if estimate < 0:
            alerts.append(
                f"End Brix {batch.end_brix} is higher than start Brix {batch.start_brix}; "
                f"alcohol estimate {estimate} is negative. Re-check the readings."
            )

    for label, value in (
        ("start pH", batch.start_ph),
        ("end pH", batch.end_ph),
        ("final pH", batch.final_ph),
        ("start Brix", batch.start_brix),
        ("end Brix", batch.end_brix),
        ("final Brix", batch.final_brix),
    ):
        if value is not None and not math.isfinite(value):
            alerts.append(f"Recorded {label} is not a finite number.")

    return alerts


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def refresh_derived_fields(batch: Batch, today: date) -> Batch:
    ratios = brew_ratios(batch.brew_size)
    batch.starter_volume = ratios.starter_volume
    batch.tea_weight = ratios.tea_weight
    batch.water_volume = ratios.water_volume
    batch.sugar_amount = ratios.sugar_amount

    if batch.start_brix is not None and batch.end_brix is not None:
        batch.alcohol_estimate = _finite_or_none(alcohol_estimate(batch.start_brix, batch.end_brix))
    else:
        batch.alcohol_estimate = None

    if batch.carbonation_temp is not None and batch.target_co2_volume is not None:
        psi = force_carb_psi(batch.carbonation_temp, batch.target_co2_volume)
        hours = carb_time_estimate_hours(psi)
        batch.force_carb_psi = int(psi) if math.isfinite(psi) else None
        batch.carb_time_estimate = int(hours) if math.isfinite(hours) else None
    else:
        batch.force_carb_psi = None
        batch.carb_time_estimate = None

    if batch.end_ph is not None and batch.end_brix is not None and batch.taste_profile:
        batch.primary_ferment_complete = is_primary_ferment_complete(
            batch.end_ph, batch.end_brix, batch.taste_profile
        )

    batch.progress_percentage = calculate_progress_percentage(batch)
    batch.status = derive_batch_status(batch)
    batch.last_entry_date = today
    return batch


def build_batch_status(batch: Batch) -> BatchStatusRead:
    checks = milestone_checks(batch)
    final_ph = batch.final_ph

    return BatchStatusRead(
        batch_id=batch.id,
        status=derive_batch_status(batch),
        progress_percentage=checks.completed_count() * MILESTONE_WEIGHT,
        milestones=BatchMilestonesRead(**checks.__dict__),
        unsafe_to_bottle=final_ph is not None and is_unsafe_to_bottle(final_ph),
        over_fermented=final_ph is not None and is_over_fermented(final_ph),
        primary_ferment_complete=bool(batch.primary_ferment_complete),
        bottling_criteria_met=is_ready_to_bottle(batch),
        alerts=batch_alerts(batch),
    )
