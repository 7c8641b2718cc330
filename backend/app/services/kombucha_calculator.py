from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.batch import Batch

PRIMARY_COMPLETE_TASTE_TAGS = frozenset({"Tangy + Dry", "Sour + Balanced"})

UNSAFE_TO_BOTTLE_PH = 4.0
OVER_FERMENTED_PH = 2.4
PRIMARY_COMPLETE_MAX_PH = 3.2
PRIMARY_COMPLETE_MAX_BRIX = 2.0


@dataclass(frozen=True)
class BrewRatios:
    starter_volume: float  # fl oz
    tea_weight: float  # oz
    water_volume: float  # gal
    sugar_amount: float  # cups


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def _canonical_taste_tag(tag: str) -> str:
    return "".join(tag.split())


_CANONICAL_COMPLETE_TAGS = frozenset(_canonical_taste_tag(tag) for tag in PRIMARY_COMPLETE_TASTE_TAGS)


def brew_ratios(brew_size: float) -> BrewRatios:
    """Starter, tea, water and sugar amounts for a brew size in gallons."""
    return BrewRatios(
        starter_volume=brew_size * 16,
        tea_weight=brew_size * 2,
        water_volume=brew_size,
        sugar_amount=brew_size * 1,
    )


def alcohol_estimate(start_brix: float, end_brix: float) -> float:
    """Estimate ABV from the Brix drop. Negative results mean the readings are inverted."""
    return round((start_brix - end_brix) * 0.59, 2)


def force_carb_psi(temp_f: float, target_co2_volumes: float) -> float:
    return _round_half_up((target_co2_volumes - 1) * (temp_f + 100) / 50)


def carb_time_estimate_hours(psi: float) -> float:
    return _round_half_up(24 + (psi - 10) * 2)


def is_primary_ferment_complete(ph: float, brix: float, taste_tag: str) -> bool:
    return (
        ph <= PRIMARY_COMPLETE_MAX_PH
        and brix <= PRIMARY_COMPLETE_MAX_BRIX
        and _canonical_taste_tag(taste_tag) in _CANONICAL_COMPLETE_TAGS
    )


def is_unsafe_to_bottle(ph: float) -> bool:
    return ph > UNSAFE_TO_BOTTLE_PH


def is_over_fermented(ph: float) -> bool:
    return ph < OVER_FERMENTED_PH


def is_ready_to_bottle(batch: Batch) -> bool:
    if (
        batch.secondary_start_date is None
        or batch.secondary_end_date is None
        or batch.final_ph is None
        or batch.final_brix is None
        or not batch.clarity_achieved
    ):
        return False
    return OVER_FERMENTED_PH <= batch.final_ph <= PRIMARY_COMPLETE_MAX_PH
