"""Sacrifice Score value objects.

Immutable results produced by the pain-weight table, the score calculator,
the meeting aggregator and the leaderboard builder. Inputs supplied by the
persistence collaborator (score rows, user directory) are modelled here too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from clockalign.models.base import Serializable


class HourCategory(str, Enum):
    GOLDEN = "golden"                # 10:00-15:59
    GOOD = "good"                    # 09:00, 16:00
    ACCEPTABLE = "acceptable"        # 08:00, 17:00
    EARLY_MORNING = "early_morning"  # 07:00
    EVENING = "evening"              # 18:00-19:59
    LATE_EVENING = "late_evening"    # 20:00
    NIGHT = "night"                  # 21:00
    LATE_NIGHT = "late_night"        # 22:00
    GRAVEYARD = "graveyard"          # 23:00-06:59


class ImpactLevel(str, Enum):
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SEVERE = "severe"
    EXTREME = "extreme"


class FairnessStatus(str, Enum):
    BALANCED = "balanced"
    ABOVE_AVERAGE = "above_average"
    HIGH_SACRIFICE = "high_sacrifice"
    CRITICAL = "critical"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


# ── Pain weights & per-occurrence scores ─────────────────────────────────

@dataclass(frozen=True)
class PainWeight(Serializable):
    hour: int
    category: HourCategory
    base_points: float
    impact_level: ImpactLevel
    description: str


@dataclass(frozen=True)
class Multipliers(Serializable):
    duration: float = 1.0
    recurring: float = 1.0
    organizer: float = 1.0
    custom: float = 1.0
    total: float = 1.0


@dataclass(frozen=True)
class SacrificeScoreResult(Serializable):
    base_points: float
    points: float
    category: HourCategory
    impact_level: ImpactLevel
    multipliers: Multipliers
    breakdown: str


@dataclass(frozen=True)
class MeetingTotalSacrifice(Serializable):
    total_points: float = 0.0
    average_points: float = 0.0
    max_points: float = 0.0
    fairness_index: float = 1.0
    imbalance_warning: Optional[str] = None


# ── Collaborator inputs ──────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoreRow:
    """One persisted sacrifice score: a user's cost for one meeting slot."""
    user_id: str
    points: float
    category: str
    meeting_slot_id: str = ""
    calculated_at: Optional[datetime | str] = None


@dataclass(frozen=True)
class UserInfo:
    name: Optional[str]
    email: str
    timezone: str = "UTC"


# ── Leaderboard & history ────────────────────────────────────────────────

@dataclass(frozen=True)
class LeaderboardEntry(Serializable):
    user_id: str
    user_name: Optional[str]
    user_email: str
    timezone: str
    rank: int
    total_points: float
    meeting_count: int
    average_per_meeting: float
    percent_of_total: int
    worst_slot_count: dict[str, int]
    fairness_status: FairnessStatus
    trend: Trend
    trend_percent: int


@dataclass(frozen=True)
class ScoreHistoryEntry(Serializable):
    date: date
    points: float = 0.0
    meeting_count: int = 0
    categories: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CumulativeHistoryEntry(Serializable):
    date: date
    points: float
    meeting_count: int
    cumulative: float
