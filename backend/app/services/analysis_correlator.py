"""Join measurement snapshots to the analyses produced for them.

Snapshots and analyses are written independently, so the link between them is
re-derived from timestamps: an analysis belongs to the snapshot whose creation
time it falls closest to, inside a short tolerance window.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.models.batch import Batch, BatchAnalysis, BatchInterval
from app.schemas.interval import BatchIntervalRead, HealthTrendPointRead, HealthTrendRead, MatchSource
from app.services.notes import note_to_payload, parse_note

CORRELATION_WINDOW = timedelta(seconds=60)


@dataclass(frozen=True)
class AnalysisMatch:
    analysis: BatchAnalysis
    match_source: MatchSource
    time_delta: timedelta | None = None


def _interval_timestamp(interval: BatchInterval) -> datetime:
    return interval.created_at or interval.recorded_at


def find_matching_analysis(
    interval: BatchInterval,
    analyses: Sequence[BatchAnalysis],
    window: timedelta = CORRELATION_WINDOW,
) -> AnalysisMatch | None:
    same_batch = [analysis for analysis in analyses if analysis.batch_id == interval.batch_id]
    if not same_batch:
        return None

    anchor = _interval_timestamp(interval)
    if anchor is not None:
        in_window = [
            (abs(analysis.analyzed_at - anchor), analysis)
            for analysis in same_batch
            if analysis.analyzed_at is not None and abs(analysis.analyzed_at - anchor) < window
        ]
        if in_window:
            delta, closest = min(in_window, key=lambda item: item[0])
            return AnalysisMatch(analysis=closest, match_source="time_window", time_delta=delta)

    return AnalysisMatch(analysis=same_batch[0], match_source="batch_fallback")


def attach_analysis(interval: BatchInterval, analysis: BatchAnalysis) -> BatchInterval:
    if interval.batch_id != analysis.batch_id:
        raise ValueError(f"Analysis {analysis.id} belongs to batch {analysis.batch_id}, not {interval.batch_id}")

    interval.ai_analysis = analysis.insights
    interval.health_score = analysis.health_score
    interval.recommendations = list(analysis.recommendations or [])
    interval.analysis_id = analysis.id
    return interval


def detach_analysis(interval: BatchInterval) -> BatchInterval:
    interval.ai_analysis = None
    interval.health_score = None
    interval.recommendations = None
    interval.analysis_id = None
    return interval


def enrich_interval(
    interval: BatchInterval,
    analyses: Sequence[BatchAnalysis],
    window: timedelta = CORRELATION_WINDOW,
) -> BatchIntervalRead:
    ai_analysis = interval.ai_analysis
    health_score = interval.health_score
    recommendations = interval.recommendations
    analysis_id = interval.analysis_id
    match_source: MatchSource | None = None

    if health_score is not None:
        match_source = "attached"
    else:
        match = find_matching_analysis(interval, analyses, window=window)
        if match is not None:
            ai_analysis = match.analysis.insights
            health_score = match.analysis.health_score
            recommendations = list(match.analysis.recommendations or [])
            analysis_id = match.analysis.id
            match_source = match.match_source

    return BatchIntervalRead(
        id=interval.id,
        batch_id=interval.batch_id,
        recorded_at=interval.recorded_at,
        created_at=interval.created_at,
        ph_level=interval.ph_level,
        brix_level=interval.brix_level,
        temperature=interval.temperature,
        taste_notes=note_to_payload(parse_note(interval.taste_notes_json)),
        visual_notes=note_to_payload(parse_note(interval.visual_notes_json)),
        aroma_notes=note_to_payload(parse_note(interval.aroma_notes_json)),
        ai_analysis=ai_analysis,
        health_score=health_score,
        recommendations=recommendations,
        analysis_id=analysis_id,
        match_source=match_source,
    )


def enrich_intervals(
    intervals: Sequence[BatchInterval],
    analyses: Sequence[BatchAnalysis],
    window: timedelta = CORRELATION_WINDOW,
) -> list[BatchIntervalRead]:
    return [enrich_interval(interval, analyses, window=window) for interval in intervals]


def average_health_score(analyses: Sequence[BatchAnalysis], batch_id: int) -> float | None:
    scores = [
        analysis.health_score
        for analysis in analyses
        if analysis.batch_id == batch_id and analysis.health_score is not None
    ]
    if not scores:
        return None
    return round(sum(scores) / len(scores), 2)


def build_health_trend(
    db: Session,
    batch_id: int,
    user_id: int,
    window: timedelta = CORRELATION_WINDOW,
) -> HealthTrendRead | None:
    batch = (
        db.query(Batch)
        .filter(
            Batch.id == batch_id,
            Batch.owner_user_id == user_id,
        )
        .first()
    )
    if not batch:
        return None

    intervals = (
        db.query(BatchInterval)
        .filter(BatchInterval.batch_id == batch_id)
        .order_by(BatchInterval.recorded_at.asc(), BatchInterval.id.asc())
        .all()
    )
    analyses = (
        db.query(BatchAnalysis)
        .filter(BatchAnalysis.batch_id == batch_id)
        .order_by(BatchAnalysis.analyzed_at.asc(), BatchAnalysis.id.asc())
        .all()
    )

    enriched = enrich_intervals(intervals, analyses, window=window)
    points = [
        HealthTrendPointRead(
            interval_id=item.id,
            recorded_at=item.recorded_at,
            ph_level=item.ph_level,
            brix_level=item.brix_level,
            temperature=item.temperature,
            health_score=item.health_score,
            match_source=item.match_source,
        )
        for item in enriched
    ]

    scored = [point.health_score for point in points if point.health_score is not None]

    return HealthTrendRead(
        batch_id=batch_id,
        interval_count=len(intervals),
        analysis_count=len(analyses),
        average_health_score=average_health_score(analyses, batch_id),
        latest_health_score=scored[-1] if scored else None,
        points=points,
    )
