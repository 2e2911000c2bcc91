"""Sacrifice Score Calculator and Meeting Aggregator.

A sacrifice score quantifies the personal cost of attending a meeting at a
given local hour:

    points = base_points(hour) × duration/30 × recurring × organizer × custom

Recurring meetings cost 1.5× (the pain repeats), organizers get a 0.8×
discount (they chose the slot). Per-meeting totals add Jain's fairness index
and an imbalance warning when one participant carries far more than the rest.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from clockalign.config.settings import IMBALANCE_FLOOR_POINTS, IMBALANCE_RATIO
from clockalign.engine.local_time import Instant, LocalTimeProjector, default_projector
from clockalign.engine.pain_weights import get_pain_weight
from clockalign.engine.rounding import format_number, round1, round_half_up
from clockalign.models.sacrifice import (
    MeetingTotalSacrifice,
    Multipliers,
    SacrificeScoreResult,
)

logger = logging.getLogger(__name__)

RECURRING_MULTIPLIER = 1.5
ORGANIZER_MULTIPLIER = 0.8
BASE_DURATION_MINUTES = 30

# Jain's index never drops below 1/n; the rounded value stays above zero too.
MIN_FAIRNESS_INDEX = 0.01


# ── Per-occurrence score ─────────────────────────────────────────────────

def calculate_sacrifice_score(
    local_hour: int,
    duration_minutes: float = 30,
    is_recurring: bool = False,
    is_organizer: bool = False,
    custom_multiplier: float = 1.0,
) -> SacrificeScoreResult:
    """Score one participant's attendance at ``local_hour``."""
    weight = get_pain_weight(local_hour)

    duration = duration_minutes / BASE_DURATION_MINUTES
    recurring = RECURRING_MULTIPLIER if is_recurring else 1.0
    organizer = ORGANIZER_MULTIPLIER if is_organizer else 1.0
    total = duration * recurring * organizer * custom_multiplier

    points = round1(weight.base_points * total)

    parts = [f"Base: {format_number(weight.base_points)} pts ({weight.category.value})"]
    if duration != 1:
        parts.append(f"Duration: ×{format_number(duration)} ({format_number(duration_minutes)} min)")
    if is_recurring:
        parts.append(f"Recurring: ×{format_number(RECURRING_MULTIPLIER)}")
    if is_organizer:
        parts.append(f"Organizer: ×{format_number(ORGANIZER_MULTIPLIER)}")
    if custom_multiplier != 1:
        parts.append(f"Custom: ×{format_number(custom_multiplier)}")

    logger.debug(f"Sacrifice at local {weight.hour}:00 → {points} pts ({weight.category.value})")

    return SacrificeScoreResult(
        base_points=weight.base_points,
        points=points,
        category=weight.category,
        impact_level=weight.impact_level,
        multipliers=Multipliers(
            duration=duration,
            recurring=recurring,
            organizer=organizer,
            custom=custom_multiplier,
            total=total,
        ),
        breakdown=" → ".join(parts),
    )


def calculate_score_for_timezone(
    utc_instant: Instant,
    timezone_id: str,
    *,
    projector: Optional[LocalTimeProjector] = None,
    duration_minutes: float = 30,
    is_recurring: bool = False,
    is_organizer: bool = False,
    custom_multiplier: float = 1.0,
) -> SacrificeScoreResult:
    """Project a UTC instant into ``timezone_id`` and score the local hour.

    Raises ConfigurationError for an unknown timezone identifier.
    """
    projector = projector or default_projector
    local_hour = projector.local_hour(utc_instant, timezone_id)
    return calculate_sacrifice_score(
        local_hour,
        duration_minutes=duration_minutes,
        is_recurring=is_recurring,
        is_organizer=is_organizer,
        custom_multiplier=custom_multiplier,
    )


# ── Meeting aggregate ────────────────────────────────────────────────────

def jain_fairness_index(points: list[float]) -> float:
    """(Σx)² / (n·Σx²). 1.0 for an empty or all-zero distribution."""
    n = len(points)
    sum_squares = sum(p * p for p in points)
    if n == 0 or sum_squares == 0:
        return 1.0
    return sum(points) ** 2 / (n * sum_squares)


def calculate_meeting_total_sacrifice(
    scores: Iterable[Union[SacrificeScoreResult, float]],
    imbalance_floor: float = IMBALANCE_FLOOR_POINTS,
    imbalance_ratio: float = IMBALANCE_RATIO,
) -> MeetingTotalSacrifice:
    """Aggregate per-participant scores for one meeting occurrence.

    ``scores`` may be SacrificeScoreResult objects or bare point values, in
    participant order; the imbalance warning refers to that order.
    """
    points = [float(getattr(s, "points", s)) for s in scores]
    if not points:
        return MeetingTotalSacrifice()

    total = sum(points)
    average = total / len(points)
    max_points = max(points)
    fairness = jain_fairness_index(points)

    warning = None
    if max_points >= imbalance_floor and max_points > imbalance_ratio * average:
        worst = points.index(max_points)
        warning = (
            f"Participant {worst + 1} is taking "
            f"{format_number(max_points / average)}x the average sacrifice"
        )
        logger.info(f"Imbalance detected: {warning}")

    logger.debug(f"Meeting sacrifice: total={total} n={len(points)} fairness={fairness:.3f}")

    return MeetingTotalSacrifice(
        total_points=round1(total),
        average_points=round1(average),
        max_points=round1(max_points),
        fairness_index=max(MIN_FAIRNESS_INDEX, round_half_up(fairness, 2)),
        imbalance_warning=warning,
    )
