"""Heatmap / Overlap Projector: 24×N energy grid and single-hour detail.

The grid is a materialisation of the golden-window slots: each row's cells
are read back out of the same slots returned in ``combined_scores``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from clockalign.engine.golden_windows import (
    ReferenceDate,
    calculate_overlap_window,
    find_all_overlap_windows,
    get_recommendation,
    utc_instant,
)
from clockalign.engine.local_time import LocalTimeProjector, default_projector, format_offset_label
from clockalign.models.golden_window import (
    HeatmapData,
    HeatmapRow,
    HourDetail,
    LocalTimeLabel,
    Participant,
)

logger = logging.getLogger(__name__)

HOUR_LABELS: tuple[str, ...] = tuple(f"{h:02d}:00" for h in range(24))


def generate_heatmap_data(
    participants: Sequence[Participant],
    reference_date: ReferenceDate = None,
    *,
    projector: Optional[LocalTimeProjector] = None,
) -> HeatmapData:
    projector = projector or default_projector
    slots = find_all_overlap_windows(
        participants, reference_date=reference_date, projector=projector
    )
    # offsets are labelled as of midday UTC on the reference day
    noon = utc_instant(12, reference_date)

    rows = tuple(
        HeatmapRow(
            participant_id=participant.id,
            participant_name=participant.display_name,
            timezone=participant.timezone,
            utc_offset=format_offset_label(projector.utc_offset_minutes(noon, participant.timezone)),
            cells=tuple(slot.participants[index] for slot in slots),
        )
        for index, participant in enumerate(participants)
    )
    logger.debug(f"Heatmap generated: {len(rows)} rows × 24 hours")
    return HeatmapData(hours=HOUR_LABELS, rows=rows, combined_scores=tuple(slots))


def _clock_label(hour: int, minute: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display}:{minute:02d} {suffix}"


def get_hour_detail(
    participants: Sequence[Participant],
    utc_hour: int,
    reference_date: ReferenceDate = None,
    *,
    projector: Optional[LocalTimeProjector] = None,
) -> HourDetail:
    """Detail for one UTC hour: the slot plus each participant's wall-clock time."""
    projector = projector or default_projector
    slot = calculate_overlap_window(
        participants, utc_hour, reference_date=reference_date, projector=projector
    )
    instant = utc_instant(utc_hour, reference_date)

    local_times = []
    for participant, cell in zip(participants, slot.participants):
        # the instant is on the hour, so the offset alone gives the minutes
        offset = projector.utc_offset_minutes(instant, participant.timezone)
        hour, minute = divmod((slot.utc_hour * 60 + offset) % (24 * 60), 60)
        local_times.append(LocalTimeLabel(
            participant_id=participant.id,
            participant_name=participant.display_name,
            local_time=_clock_label(hour, minute),
            energy=cell.energy,
            is_available=cell.is_available,
        ))

    return HourDetail(
        utc_hour=slot.utc_hour,
        utc_label=HOUR_LABELS[slot.utc_hour],
        slot=slot,
        recommendation=get_recommendation(slot.quality_score),
        local_times=tuple(local_times),
    )
