"""Async Nudge value objects.

The nudge analyzer consumes a meeting description (usually with sacrifice
totals already aggregated) and recommends an asynchronous artifact in its
place. Decision records flow back in from the persistence collaborator and
feed the reclaimed-hours summary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from clockalign.models.base import Serializable
from clockalign.models.sacrifice import Trend


class MeetingType(str, Enum):
    STANDUP = "standup"
    PLANNING = "planning"
    ONE_ON_ONE = "one_on_one"
    REVIEW = "review"
    BRAINSTORM = "brainstorm"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        if value == "1on1":
            return cls.ONE_ON_ONE
        return cls.OTHER


class OrganizerPreference(str, Enum):
    PREFER_ASYNC = "prefer_async"
    NEUTRAL = "neutral"
    PREFER_SYNC = "prefer_sync"

    @classmethod
    def _missing_(cls, value):
        return cls.NEUTRAL


class Urgency(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    STRONG = "strong"


class AsyncType(str, Enum):
    LOOM = "loom"
    DOC = "doc"
    POLL = "poll"
    EMAIL = "email"
    SLACK = "slack"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        return cls.OTHER


class ReasonType(str, Enum):
    HIGH_SACRIFICE = "high_sacrifice"
    INDIVIDUAL_SACRIFICE = "individual_sacrifice"
    TIMEZONE_SPREAD = "timezone_spread"
    LOW_ENERGY = "low_energy"
    RECURRING_COST = "recurring_cost"
    PATTERN_MATCH = "pattern_match"
    DURATION = "duration"
    PARTICIPANT_COUNT = "participant_count"


class AsyncDecision(str, Enum):
    WENT_ASYNC = "went_async"
    SCHEDULED_ANYWAY = "scheduled_anyway"


@dataclass(frozen=True)
class NudgeInput:
    title: str
    duration_minutes: int
    participant_count: int
    total_sacrifice_points: float
    max_individual_sacrifice: float
    meeting_type: MeetingType = MeetingType.OTHER
    is_recurring: bool = False
    timezone_spread: float = 0.0  # hours between earliest and latest participant
    organizer_preference: OrganizerPreference = OrganizerPreference.NEUTRAL
    average_energy: Optional[float] = None  # 0-100, team energy at the best available slot


@dataclass(frozen=True)
class NudgeReason(Serializable):
    type: ReasonType
    description: str
    weight: float
    details: str = ""


@dataclass(frozen=True)
class AsyncAlternative(Serializable):
    type: AsyncType
    name: str
    description: str
    best_for: str
    icon: str
    message_template: str
    suitability_score: int = 50

    def render_message(self, title: str) -> str:
        """Fill the reusable template with the meeting title."""
        return self.message_template.format(title=title)


@dataclass(frozen=True)
class NudgeResult(Serializable):
    should_nudge: bool
    nudge_strength: int
    urgency: Urgency
    suggested_alternatives: tuple[AsyncAlternative, ...]
    reasons: tuple[NudgeReason, ...] = field(default_factory=tuple)
    primary_reason: Optional[NudgeReason] = None
    estimated_hours_saved: float = 0.0
    message: str = ""


@dataclass(frozen=True)
class AsyncDecisionRecord:
    decision: AsyncDecision
    hours_saved: float
    async_type: Optional[AsyncType] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TypeSavings(Serializable):
    hours: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class ReclaimedStats(Serializable):
    total_hours_reclaimed: float
    meetings_converted: int
    average_hours_per_meeting: float
    by_type: dict[AsyncType, TypeSavings]
    trend: Trend = Trend.STABLE
    trend_percent: int = 0
