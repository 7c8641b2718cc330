from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.user import User


class Batch(Base):
    __tablename__ = "batches"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    batch_number: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    brew_size: Mapped[float] = mapped_column(Float, nullable=False)
    tea_type: Mapped[str] = mapped_column(String(60), nullable=False)
    sugar_type: Mapped[str] = mapped_column(String(60), nullable=False)
    method: Mapped[str | None] = mapped_column(String(30), nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="")

    start_ph: Mapped[float | None] = mapped_column(Float, nullable=True)
    start_brix: Mapped[float | None] = mapped_column(Float, nullable=True)
    end_ph: Mapped[float | None] = mapped_column(Float, nullable=True)
    end_brix: Mapped[float | None] = mapped_column(Float, nullable=True)
    taste_profile: Mapped[str | None] = mapped_column(String(40), nullable=True)
    primary_ferment_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    secondary_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    secondary_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    flavoring_method: Mapped[str | None] = mapped_column(String(40), nullable=True)
    flavor_ingredients: Mapped[str | None] = mapped_column(Text, nullable=True)
    filtering_method: Mapped[str | None] = mapped_column(String(40), nullable=True)
    clarity_achieved: Mapped[str | None] = mapped_column(String(40), nullable=True)
    ready_to_bottle: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    final_ph: Mapped[float | None] = mapped_column(Float, nullable=True)
    final_brix: Mapped[float | None] = mapped_column(Float, nullable=True)
    final_taste_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    carbonation_temp: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_co2_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    carbonation_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    packaging_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    packaging_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pasteurized: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Derived cache, written only by app.services.batch_status.refresh_derived_fields.
    starter_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    tea_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    water_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    sugar_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    alcohol_estimate: Mapped[float | None] = mapped_column(Float, nullable=True)
    force_carb_psi: Mapped[int | None] = mapped_column(Integer, nullable=True)
    carb_time_estimate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    progress_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(30), default="needs-attention", nullable=False)
    last_entry_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner: Mapped[User] = relationship(back_populates="batches")
    intervals: Mapped[list[BatchInterval]] = relationship(
        back_populates="batch",
        cascade="all, delete-orphan",
    )
    analyses: Mapped[list[BatchAnalysis]] = relationship(
        back_populates="batch",
        cascade="all, delete-orphan",
    )


class BatchInterval(Base):
    __tablename__ = "batch_intervals"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    batch_id: Mapped[int] = mapped_column(ForeignKey("batches.id", ondelete="CASCADE"), nullable=False, index=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    ph_level: Mapped[float | None] = mapped_column(Float, nullable=True)
    brix_level: Mapped[float | None] = mapped_column(Float, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    taste_notes_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    visual_notes_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    aroma_notes_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    ai_analysis: Mapped[str | None] = mapped_column(Text, nullable=True)
    health_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    recommendations: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    analysis_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    batch: Mapped[Batch] = relationship(back_populates="intervals")


class BatchAnalysis(Base):
    __tablename__ = "batch_analyses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    batch_id: Mapped[int] = mapped_column(ForeignKey("batches.id", ondelete="CASCADE"), nullable=False, index=True)
    insights: Mapped[str] = mapped_column(Text, nullable=False)
    recommendations: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    alerts: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    health_score: Mapped[int] = mapped_column(Integer, nullable=False)
    analyzed_data: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    source: Mapped[str] = mapped_column(String(20), default="rules", nullable=False)
    analyzed_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    batch: Mapped[Batch] = relationship(back_populates="analyses")
