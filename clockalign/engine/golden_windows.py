"""Golden Window Finder: energy-weighted multi-participant meeting slots.

For each UTC hour of a reference day, every participant's local hour is read
off their energy curve and checked against their waking window. A slot's
quality blends the team's mean energy with its weakest member:

    quality = round(0.7 × mean(energy) + 0.3 × min(energy))

so an hour where one person is deep in a trough ranks below one where
everybody is merely decent.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence, Union

import pytz

from clockalign.config.settings import BEST_RANGE_MIN_QUALITY, BEST_TIMES_TOP_N
from clockalign.engine.energy import get_energy, is_hour_available, resolve_energy_curve
from clockalign.engine.local_time import LocalTimeProjector, default_projector, to_utc
from clockalign.engine.rounding import round1, round_int
from clockalign.models.golden_window import (
    GoldenWindowSlot,
    Participant,
    ParticipantHour,
    RankedSlot,
    Recommendation,
    TimeRange,
)

logger = logging.getLogger(__name__)

MEAN_WEIGHT = 0.7
MIN_WEIGHT = 0.3

RECOMMENDATION_THRESHOLDS: tuple[tuple[int, Recommendation], ...] = (
    (80, Recommendation.EXCELLENT),
    (60, Recommendation.GOOD),
    (40, Recommendation.FAIR),
)

ReferenceDate = Union[date, datetime, None]


# ── Scoring ──────────────────────────────────────────────────────────────

def utc_instant(utc_hour: int, reference_date: ReferenceDate = None) -> datetime:
    """The aware UTC datetime for ``utc_hour``:00 on ``reference_date`` (default today)."""
    if reference_date is None:
        day = datetime.now(pytz.utc).date()
    elif isinstance(reference_date, datetime):
        day = to_utc(reference_date).date()
    else:
        day = reference_date
    return datetime(day.year, day.month, day.day, utc_hour % 24, tzinfo=pytz.utc)


def quality_score(energies: Sequence[int]) -> int:
    if not energies:
        return 0
    mean = sum(energies) / len(energies)
    return round_int(MEAN_WEIGHT * mean + MIN_WEIGHT * min(energies))


def get_recommendation(score: float) -> Recommendation:
    for threshold, recommendation in RECOMMENDATION_THRESHOLDS:
        if score >= threshold:
            return recommendation
    return Recommendation.POOR


def participant_hour(
    participant: Participant,
    instant: datetime,
    projector: LocalTimeProjector,
    curve: Optional[Sequence[int]] = None,
) -> ParticipantHour:
    local_hour = projector.local_hour(instant, participant.timezone)
    curve = curve if curve is not None else resolve_energy_curve(participant)
    return ParticipantHour(
        participant_id=participant.id,
        local_hour=local_hour,
        energy=get_energy(local_hour, curve),
        is_available=is_hour_available(
            local_hour, participant.work_start_hour, participant.work_end_hour
        ),
    )


def _slot(utc_hour: int, hours: list[ParticipantHour]) -> GoldenWindowSlot:
    energies = [h.energy for h in hours]
    return GoldenWindowSlot(
        utc_hour=utc_hour,
        participants=tuple(hours),
        average_energy=round1(sum(energies) / len(energies)) if energies else 0.0,
        min_energy=min(energies) if energies else 0,
        quality_score=quality_score(energies),
        all_available=all(h.is_available for h in hours),
    )


def calculate_overlap_window(
    participants: Sequence[Participant],
    utc_hour: int,
    *,
    reference_date: ReferenceDate = None,
    projector: Optional[LocalTimeProjector] = None,
) -> GoldenWindowSlot:
    """Score one UTC hour for the whole group.

    With no participants the slot is trivially available with score 0.
    """
    projector = projector or default_projector
    instant = utc_instant(utc_hour, reference_date)
    hours = [participant_hour(p, instant, projector) for p in participants]
    return _slot(utc_hour % 24, hours)


def find_all_overlap_windows(
    participants: Sequence[Participant],
    *,
    reference_date: ReferenceDate = None,
    projector: Optional[LocalTimeProjector] = None,
) -> list[GoldenWindowSlot]:
    """All 24 UTC hours of the reference day, in hour order."""
    projector = projector or default_projector
    curves = [resolve_energy_curve(p) for p in participants]
    slots = []
    for utc_hour in range(24):
        instant = utc_instant(utc_hour, reference_date)
        hours = [
            participant_hour(p, instant, projector, curve)
            for p, curve in zip(participants, curves)
        ]
        slots.append(_slot(utc_hour, hours))
    logger.debug(f"Evaluated 24 UTC hours for {len(participants)} participants")
    return slots


def generate_slot_summary(slot: GoldenWindowSlot) -> str:
    if not slot.all_available:
        return f"{slot.unavailable_count} participant(s) unavailable"
    recommendation = get_recommendation(slot.quality_score)
    if recommendation is Recommendation.EXCELLENT:
        return f"Peak energy alignment ({round_int(slot.average_energy)}% avg energy)"
    if recommendation is Recommendation.GOOD:
        return "Good energy levels across the team"
    if recommendation is Recommendation.FAIR:
        return "Workable time, some participants not at peak"
    return "Low energy period for multiple participants"


# ── Best times ───────────────────────────────────────────────────────────

def find_best_times(
    participants: Sequence[Participant],
    top_n: int = BEST_TIMES_TOP_N,
    require_all_available: bool = True,
    min_quality_score: int = 0,
    reference_date: ReferenceDate = None,
    *,
    projector: Optional[LocalTimeProjector] = None,
) -> list[RankedSlot]:
    """Top ``top_n`` hours by quality; an earlier UTC hour wins a tie."""
    slots = find_all_overlap_windows(
        participants, reference_date=reference_date, projector=projector
    )
    if require_all_available:
        slots = [s for s in slots if s.all_available]
    slots = [s for s in slots if s.quality_score >= min_quality_score]
    slots.sort(key=lambda s: -s.quality_score)

    ranked = [
        RankedSlot(
            rank=i,
            slot=slot,
            recommendation=get_recommendation(slot.quality_score),
            summary=generate_slot_summary(slot),
        )
        for i, slot in enumerate(slots[:max(top_n, 0)], start=1)
    ]
    logger.debug(f"Best times: {len(ranked)} of {len(slots)} candidate hours returned")
    return ranked


def find_best_time_ranges(
    participants: Sequence[Participant],
    min_duration_hours: int = 1,
    min_quality: int = BEST_RANGE_MIN_QUALITY,
    reference_date: ReferenceDate = None,
    *,
    projector: Optional[LocalTimeProjector] = None,
) -> list[TimeRange]:
    """Group consecutive all-available hours scoring ``min_quality`` or more.

    Ranges do not wrap past 24:00 UTC. Sorted by average quality, best first.
    """
    slots = find_all_overlap_windows(
        participants, reference_date=reference_date, projector=projector
    )

    ranges: list[TimeRange] = []
    run: list[GoldenWindowSlot] = []

    def close_run():
        if run and len(run) >= min_duration_hours:
            average = sum(s.quality_score for s in run) / len(run)
            ranges.append(TimeRange(
                start_hour=run[0].utc_hour,
                end_hour=run[-1].utc_hour + 1,
                duration_hours=len(run),
                average_quality=round_int(average),
                recommendation=get_recommendation(round_int(average)),
            ))

    for slot in slots:
        if slot.all_available and slot.quality_score >= min_quality:
            run.append(slot)
        else:
            close_run()
            run = []
    close_run()

    ranges.sort(key=lambda r: -r.average_quality)
    return ranges
