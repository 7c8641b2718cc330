from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BatchStatus = Literal["needs-attention", "in-progress", "ready", "complete"]
BrewMethod = Literal["Zero-day", "One-day", "Two-day"]
CarbonationStatus = Literal["Not Started", "In Progress", "Complete"]
PackagingType = Literal["Bottle", "Keg"]


class BatchMeasurements(BaseModel):
    start_ph: float | None = Field(default=None, gt=0, lt=14)
    start_brix: float | None = Field(default=None, ge=0, le=40)
    end_ph: float | None = Field(default=None, gt=0, lt=14)
    end_brix: float | None = Field(default=None, ge=0, le=40)
    taste_profile: str | None = Field(default=None, max_length=40)
    final_ph: float | None = Field(default=None, gt=0, lt=14)
    final_brix: float | None = Field(default=None, ge=0, le=40)
    final_taste_notes: str | None = None


class BatchCreate(BatchMeasurements):
    batch_number: str = Field(min_length=1, max_length=50)
    start_date: date
    brew_size: float = Field(gt=0, le=500)
    tea_type: str = Field(min_length=1, max_length=60)
    sugar_type: str = Field(min_length=1, max_length=60)
    method: BrewMethod | None = None
    notes: str = ""


class BatchUpdate(BatchMeasurements):
    """Operator-editable fields only; derived fields are rejected."""

    method: BrewMethod | None = None
    notes: str | None = None
    primary_ferment_complete: bool | None = None
    secondary_start_date: date | None = None
    secondary_end_date: date | None = None
    flavoring_method: str | None = Field(default=None, max_length=40)
    flavor_ingredients: str | None = None
    filtering_method: str | None = Field(default=None, max_length=40)
    clarity_achieved: str | None = Field(default=None, max_length=40)
    ready_to_bottle: bool | None = None
    carbonation_temp: float | None = Field(default=None, ge=32, le=212)
    target_co2_volume: float | None = Field(default=None, gt=0, le=6)
    carbonation_status: CarbonationStatus | None = None
    packaging_date: date | None = None
    packaging_type: PackagingType | None = None
    pasteurized: bool | None = None

    model_config = ConfigDict(extra="forbid")


class BatchRead(BatchMeasurements):
    id: int
    batch_number: str
    start_date: date
    brew_size: float
    tea_type: str
    sugar_type: str
    method: str | None
    notes: str
    primary_ferment_complete: bool
    secondary_start_date: date | None
    secondary_end_date: date | None
    flavoring_method: str | None
    flavor_ingredients: str | None
    filtering_method: str | None
    clarity_achieved: str | None
    ready_to_bottle: bool
    carbonation_temp: float | None
    target_co2_volume: float | None
    carbonation_status: str | None
    packaging_date: date | None
    packaging_type: str | None
    pasteurized: bool

    starter_volume: float | None
    tea_weight: float | None
    water_volume: float | None
    sugar_amount: float | None
    alcohol_estimate: float | None
    force_carb_psi: int | None
    carb_time_estimate: int | None
    progress_percentage: int
    status: BatchStatus
    last_entry_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BatchMilestonesRead(BaseModel):
    initial_measurements: bool
    fermentation_tracking: bool
    flavoring_and_filtering: bool
    carbonation_or_packaging: bool


class BatchStatusRead(BaseModel):
    batch_id: int
    status: BatchStatus
    progress_percentage: int
    milestones: BatchMilestonesRead
    unsafe_to_bottle: bool
    over_fermented: bool
    primary_ferment_complete: bool
    bottling_criteria_met: bool
    alerts: list[str] = Field(default_factory=list)


class BrewRatiosRead(BaseModel):
    starter_volume_fl_oz: float
    tea_weight_oz: float
    water_volume_gal: float
    sugar_amount_cups: float


class BatchCalculationsRead(BaseModel):
    batch_id: int
    ratios: BrewRatiosRead
    alcohol_estimate: float | None
    force_carb_psi: int | None
    carb_time_estimate_hours: int | None
