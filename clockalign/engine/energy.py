"""Circadian energy curves and waking-hour availability.

Energy is a 0-100 proxy for cognitive sharpness at a local hour. Every
participant reads from a curve: their own custom one when supplied, else the
curve for their declared chronotype.
"""

from __future__ import annotations

from typing import Optional, Sequence

from clockalign.config.settings import DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR
from clockalign.errors import ConfigurationError
from clockalign.models.golden_window import EnergyType, Participant

# ── Curves (index = local hour) ──────────────────────────────────────────

DEFAULT_ENERGY_CURVE: tuple[int, ...] = (
    15, 10, 10, 10, 15, 25,  # 00-05: sleep
    45, 65, 80, 88, 95, 98,  # 06-11: morning ramp + peak
    92, 60, 92, 96, 93, 80,  # 12-17: post-lunch trough + afternoon peak
    70, 60, 50, 40, 30, 20,  # 18-23: evening decline
)

EARLY_BIRD_CURVE: tuple[int, ...] = (
    15, 15, 20, 25, 40, 60,
    80, 90, 95, 95, 90, 85,
    75, 65, 60, 55, 50, 45,
    40, 35, 30, 25, 20, 15,
)

NIGHT_OWL_CURVE: tuple[int, ...] = (
    40, 35, 30, 25, 20, 20,
    25, 35, 50, 60, 70, 75,
    80, 75, 80, 85, 90, 95,
    95, 90, 85, 80, 70, 55,
)

CHRONOTYPE_CURVES = {
    EnergyType.BALANCED: DEFAULT_ENERGY_CURVE,
    EnergyType.EARLY_BIRD: EARLY_BIRD_CURVE,
    EnergyType.NIGHT_OWL: NIGHT_OWL_CURVE,
}


def get_chronotype_curve(energy_type: EnergyType | str) -> tuple[int, ...]:
    return CHRONOTYPE_CURVES[EnergyType(energy_type)]


def validate_energy_curve(values: Sequence[float]) -> tuple[int, ...]:
    """Check a custom curve has 24 entries and clamp each into 0-100."""
    if len(values) != 24:
        raise ConfigurationError(f"Energy curve must have 24 hourly values, got {len(values)}")
    return tuple(max(0, min(100, int(round(v)))) for v in values)


def resolve_energy_curve(participant: Participant) -> tuple[int, ...]:
    if participant.energy_curve is not None:
        return validate_energy_curve(participant.energy_curve)
    return get_chronotype_curve(participant.energy_type)


def get_energy(local_hour: int, curve: Optional[Sequence[int]] = None) -> int:
    curve = curve if curve is not None else DEFAULT_ENERGY_CURVE
    return curve[local_hour % 24]


# ── Availability ─────────────────────────────────────────────────────────

def is_hour_available(
    local_hour: int,
    start_hour: int = DEFAULT_WORK_START_HOUR,
    end_hour: int = DEFAULT_WORK_END_HOUR,
) -> bool:
    """True iff start <= hour < end. A window with start > end wraps midnight."""
    hour = local_hour % 24
    if start_hour <= end_hour:
        return start_hour <= hour < end_hour
    return hour >= start_hour or hour < end_hour
