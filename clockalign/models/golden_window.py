"""Golden Window value objects: participants, per-hour slots and heatmap rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from clockalign.config.settings import DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR
from clockalign.models.base import Serializable


class EnergyType(str, Enum):
    BALANCED = "balanced"
    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"

    @classmethod
    def _missing_(cls, value):
        # "normal" and anything unrecognised read the default curve
        return cls.BALANCED


class Recommendation(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class Participant:
    id: str
    timezone: str
    name: Optional[str] = None
    email: Optional[str] = None
    energy_type: EnergyType = EnergyType.BALANCED
    energy_curve: Optional[tuple[int, ...]] = None  # 24 values, 0-100
    work_start_hour: int = DEFAULT_WORK_START_HOUR
    work_end_hour: int = DEFAULT_WORK_END_HOUR

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id


@dataclass(frozen=True)
class ParticipantHour(Serializable):
    participant_id: str
    local_hour: int
    energy: int
    is_available: bool


@dataclass(frozen=True)
class GoldenWindowSlot(Serializable):
    utc_hour: int
    participants: tuple[ParticipantHour, ...]
    average_energy: float
    min_energy: int
    quality_score: int
    all_available: bool

    @property
    def unavailable_count(self) -> int:
        return sum(1 for p in self.participants if not p.is_available)


@dataclass(frozen=True)
class RankedSlot(Serializable):
    rank: int
    slot: GoldenWindowSlot
    recommendation: Recommendation
    summary: str

    @property
    def utc_hour(self) -> int:
        return self.slot.utc_hour

    @property
    def quality_score(self) -> int:
        return self.slot.quality_score


@dataclass(frozen=True)
class TimeRange(Serializable):
    start_hour: int
    end_hour: int
    duration_hours: int
    average_quality: int
    recommendation: Recommendation


@dataclass(frozen=True)
class HeatmapRow(Serializable):
    participant_id: str
    participant_name: str
    timezone: str
    utc_offset: str
    cells: tuple[ParticipantHour, ...]


@dataclass(frozen=True)
class HeatmapData(Serializable):
    hours: tuple[str, ...]
    rows: tuple[HeatmapRow, ...]
    combined_scores: tuple[GoldenWindowSlot, ...]


@dataclass(frozen=True)
class LocalTimeLabel(Serializable):
    participant_id: str
    participant_name: str
    local_time: str
    energy: int
    is_available: bool


@dataclass(frozen=True)
class HourDetail(Serializable):
    utc_hour: int
    utc_label: str
    slot: GoldenWindowSlot
    recommendation: Recommendation
    local_times: tuple[LocalTimeLabel, ...] = field(default_factory=tuple)
