"""Reclaimed-Hours Aggregator: what the team saved by going async."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from clockalign.engine.rounding import round1, round_int
from clockalign.models.nudge import (
    AsyncDecision,
    AsyncDecisionRecord,
    AsyncType,
    ReclaimedStats,
    TypeSavings,
)
from clockalign.models.sacrifice import Trend

logger = logging.getLogger(__name__)

# Percent change within ±STABLE_BAND counts as stable.
STABLE_BAND = 10


def _went_async(records: Iterable[AsyncDecisionRecord]) -> list[AsyncDecisionRecord]:
    return [r for r in records if r.decision == AsyncDecision.WENT_ASYNC]


def _reclaimed_trend(
    current: float, previous_records: Optional[list[AsyncDecisionRecord]]
) -> tuple[Trend, int]:
    """No previous period means no comparison; an empty one means it saved nothing."""
    if previous_records is None:
        return Trend.STABLE, 0
    previous = sum(r.hours_saved or 0 for r in _went_async(previous_records))
    if previous == 0:
        if current > 0:
            return Trend.UP, 100
        return Trend.STABLE, 0
    percent = round_int(100 * (current - previous) / previous)
    if percent > STABLE_BAND:
        return Trend.UP, percent
    if percent < -STABLE_BAND:
        return Trend.DOWN, percent
    return Trend.STABLE, percent


def calculate_reclaimed_stats(
    records: Iterable[AsyncDecisionRecord],
    previous_period_records: Optional[Iterable[AsyncDecisionRecord]] = None,
) -> ReclaimedStats:
    converted = _went_async(records)
    total = sum(r.hours_saved or 0 for r in converted)

    hours = {t: 0.0 for t in AsyncType}
    counts = {t: 0 for t in AsyncType}
    for record in converted:
        async_type = AsyncType(record.async_type) if record.async_type else AsyncType.OTHER
        hours[async_type] += record.hours_saved or 0
        counts[async_type] += 1

    previous = list(previous_period_records) if previous_period_records is not None else None
    trend, trend_percent = _reclaimed_trend(total, previous)

    logger.debug(f"Reclaimed {total:.1f}h across {len(converted)} async conversions")

    return ReclaimedStats(
        total_hours_reclaimed=round1(total),
        meetings_converted=len(converted),
        average_hours_per_meeting=round1(total / len(converted)) if converted else 0.0,
        by_type={t: TypeSavings(hours=round1(hours[t]), count=counts[t]) for t in AsyncType},
        trend=trend,
        trend_percent=trend_percent,
    )
