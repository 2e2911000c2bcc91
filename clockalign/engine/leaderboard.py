"""Leaderboard Builder and Score History Aggregator.

Both consume persisted score rows over a period. The leaderboard ranks team
members by accumulated sacrifice and classifies each against the team
average; the history buckets the same rows by UTC calendar day for charting.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Optional

import pytz

from clockalign.config.settings import HISTORY_DAYS
from clockalign.engine.local_time import to_utc
from clockalign.engine.rounding import round1, round_int
from clockalign.models.sacrifice import (
    CumulativeHistoryEntry,
    FairnessStatus,
    LeaderboardEntry,
    ScoreHistoryEntry,
    ScoreRow,
    Trend,
    UserInfo,
)

logger = logging.getLogger(__name__)

# Ratio of a user's total to the team average, checked highest first.
FAIRNESS_TIERS: tuple[tuple[float, FairnessStatus], ...] = (
    (3.0, FairnessStatus.CRITICAL),
    (2.0, FairnessStatus.HIGH_SACRIFICE),
    (1.3, FairnessStatus.ABOVE_AVERAGE),
)


# ── Classification ───────────────────────────────────────────────────────

def classify_fairness(total_points: float, team_average: float) -> FairnessStatus:
    for ratio, status in FAIRNESS_TIERS:
        if total_points > team_average * ratio:
            return status
    return FairnessStatus.BALANCED


def calculate_trend(current: float, previous: Optional[float]) -> tuple[Trend, int]:
    """Compare a period total with the previous one. "up" means more sacrifice."""
    if previous is None:
        return Trend.UP, 100
    if previous == 0:
        if current > 0:
            return Trend.UP, 100
        return Trend.STABLE, 0
    percent = round_int(100 * (current - previous) / previous)
    if current > previous:
        return Trend.UP, percent
    if current < previous:
        return Trend.DOWN, percent
    return Trend.STABLE, 0


# ── Leaderboard ──────────────────────────────────────────────────────────

class _UserAggregate:
    __slots__ = ("total", "slots", "categories")

    def __init__(self):
        self.total = 0.0
        self.slots: set[str] = set()
        self.categories: dict[str, int] = defaultdict(int)


def calculate_leaderboard(
    scores: Iterable[ScoreRow],
    users: Mapping[str, UserInfo],
    previous_period_totals: Optional[Mapping[str, float]] = None,
) -> list[LeaderboardEntry]:
    """Rank users by total sacrifice, most first; ties go to the lower user id."""
    aggregates: dict[str, _UserAggregate] = {}
    for row in scores:
        agg = aggregates.setdefault(row.user_id, _UserAggregate())
        agg.total += row.points
        agg.slots.add(row.meeting_slot_id)
        agg.categories[str(getattr(row.category, "value", row.category))] += 1

    if not aggregates:
        return []

    grand_total = sum(a.total for a in aggregates.values())
    team_average = grand_total / len(aggregates)
    previous = previous_period_totals if previous_period_totals is not None else {}

    ordered = sorted(aggregates.items(), key=lambda item: (-item[1].total, item[0]))

    entries = []
    for rank, (user_id, agg) in enumerate(ordered, start=1):
        user = users.get(user_id)
        meeting_count = len(agg.slots)
        trend, trend_percent = calculate_trend(agg.total, previous.get(user_id))
        entries.append(LeaderboardEntry(
            user_id=user_id,
            user_name=user.name if user else None,
            user_email=user.email if user else "Unknown",
            timezone=user.timezone if user else "UTC",
            rank=rank,
            total_points=round1(agg.total),
            meeting_count=meeting_count,
            average_per_meeting=round1(agg.total / meeting_count) if meeting_count else 0.0,
            percent_of_total=round_int(100 * agg.total / grand_total) if grand_total > 0 else 0,
            worst_slot_count=dict(agg.categories),
            fairness_status=classify_fairness(agg.total, team_average),
            trend=trend,
            trend_percent=trend_percent,
        ))

    logger.debug(f"Leaderboard built: {len(entries)} users, {grand_total:.1f} total points")
    return entries


# ── Score history ────────────────────────────────────────────────────────

def _row_date(row: ScoreRow) -> Optional[date]:
    if row.calculated_at is None:
        return None
    return to_utc(row.calculated_at).date()


def aggregate_score_history(
    scores: Iterable[ScoreRow],
    days: int = HISTORY_DAYS,
    *,
    today: Optional[date] = None,
) -> list[ScoreHistoryEntry]:
    """Daily buckets for the ``days`` UTC dates ending at ``today``, oldest first.

    Dates without rows are zero-filled; rows outside the window are ignored.
    """
    if days <= 0:
        return []
    if today is None:
        today = datetime.now(pytz.utc).date()
    elif isinstance(today, datetime):
        today = to_utc(today).date()

    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    buckets = {d: {"points": 0.0, "meeting_count": 0, "categories": defaultdict(int)} for d in window}

    for row in scores:
        bucket = buckets.get(_row_date(row))
        if bucket is None:
            continue
        bucket["points"] += row.points
        bucket["meeting_count"] += 1
        bucket["categories"][str(getattr(row.category, "value", row.category))] += 1

    return [
        ScoreHistoryEntry(
            date=d,
            points=round1(buckets[d]["points"]),
            meeting_count=buckets[d]["meeting_count"],
            categories=dict(buckets[d]["categories"]),
        )
        for d in window
    ]


def cumulative_history(entries: Iterable[ScoreHistoryEntry]) -> list[CumulativeHistoryEntry]:
    running = 0.0
    result = []
    for entry in entries:
        running += entry.points
        result.append(CumulativeHistoryEntry(
            date=entry.date,
            points=entry.points,
            meeting_count=entry.meeting_count,
            cumulative=round1(running),
        ))
    return result
