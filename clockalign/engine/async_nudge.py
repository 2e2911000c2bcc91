"""Async Nudge Analyzer: should this meeting be a document, video or thread?

Each contributing reason carries a weight that never decreases as its input
grows, except low energy, whose weight never increases as energy rises. The
weights are summed and capped at 100, then scaled by the
organizer's stated preference and by whether the meeting type genuinely
needs live discussion:

    strength = round(min(100, Σ weights) × preference × type)

A nudge fires at NUDGE_THRESHOLD. Alternatives come from a fixed catalog,
scored against the title and duration, top three returned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Optional

from clockalign.config.settings import NUDGE_THRESHOLD
from clockalign.engine.rounding import format_number, round1, round_int
from clockalign.models.nudge import (
    AsyncAlternative,
    AsyncType,
    MeetingType,
    NudgeInput,
    NudgeReason,
    NudgeResult,
    OrganizerPreference,
    ReasonType,
    Urgency,
)

logger = logging.getLogger(__name__)

# ── Weights ──────────────────────────────────────────────────────────────

TOTAL_SACRIFICE_CAP = 35
TOTAL_SACRIFICE_RATE = 0.8
INDIVIDUAL_SACRIFICE_CAP = 25
INDIVIDUAL_SACRIFICE_RATE = 2
TIMEZONE_SPREAD_CAP = 25
TIMEZONE_SPREAD_RATE = 2
LOW_ENERGY_THRESHOLD = 50
LOW_ENERGY_RATE = 30
RECURRING_WEIGHT = 10
RECURRING_LONG_WEIGHT = 10
LONG_MEETING_MINUTES = 60
PATTERN_WEIGHT_SCALE = 0.5
SHORT_MEETING_MINUTES = 15
SHORT_MEETING_WEIGHT = 10
MANY_PARTICIPANTS = 6
MANY_PARTICIPANTS_WEIGHT = 10

PREFERENCE_MODIFIERS = {
    OrganizerPreference.PREFER_ASYNC: 1.2,
    OrganizerPreference.NEUTRAL: 1.0,
    OrganizerPreference.PREFER_SYNC: 0.6,
}

# Meeting types that usually need live discussion get their nudge halved.
SYNC_PREFERRED_TYPES = frozenset({
    MeetingType.BRAINSTORM,
    MeetingType.ONE_ON_ONE,
    MeetingType.PLANNING,
})
SYNC_TYPE_MODIFIER = 0.5

STRONG_URGENCY = 75
MODERATE_URGENCY = 50

# (pattern, suggested async types, weight); only the first match counts
ASYNC_FRIENDLY_PATTERNS: tuple[tuple[re.Pattern, tuple[AsyncType, ...], int], ...] = (
    (re.compile(r"status|update|check-?in", re.I), (AsyncType.DOC, AsyncType.SLACK), 25),
    (re.compile(r"standup|daily", re.I), (AsyncType.SLACK, AsyncType.DOC), 30),
    (re.compile(r"FYI|announcement|info", re.I), (AsyncType.EMAIL, AsyncType.LOOM), 35),
    (re.compile(r"demo|walkthrough|tutorial", re.I), (AsyncType.LOOM,), 40),
    (re.compile(r"review|feedback", re.I), (AsyncType.DOC, AsyncType.LOOM), 20),
    (re.compile(r"poll|vote|decision", re.I), (AsyncType.POLL, AsyncType.SLACK), 30),
    (re.compile(r"sync|catchup|catch-?up", re.I), (AsyncType.SLACK, AsyncType.DOC), 15),
    (re.compile(r"weekly|bi-?weekly", re.I), (AsyncType.DOC, AsyncType.SLACK), 20),
)

# ── Alternatives catalog ─────────────────────────────────────────────────

ALTERNATIVE_BASE_SCORE = 50
PATTERN_BOOST = 30

ASYNC_ALTERNATIVES: dict[AsyncType, AsyncAlternative] = {
    AsyncType.LOOM: AsyncAlternative(
        type=AsyncType.LOOM,
        name="Loom Video",
        description="Record a video message that participants can watch anytime",
        best_for="Demos, updates, walkthroughs",
        icon="🎥",
        message_template="Instead of meeting for \"{title}\", I've recorded a short video. Watch it when it suits you and reply with questions.",
    ),
    AsyncType.DOC: AsyncAlternative(
        type=AsyncType.DOC,
        name="Shared Document",
        description="Create a collaborative doc for comments and discussion",
        best_for="Reviews, status updates, decisions with context",
        icon="📝",
        message_template="Instead of meeting for \"{title}\", please add your comments to the shared doc by end of day.",
    ),
    AsyncType.POLL: AsyncAlternative(
        type=AsyncType.POLL,
        name="Quick Poll",
        description="Get everyone's input asynchronously via a poll",
        best_for="Decisions, preferences, quick votes",
        icon="📊",
        message_template="Instead of meeting for \"{title}\", please vote in the poll so we can decide without a call.",
    ),
    AsyncType.EMAIL: AsyncAlternative(
        type=AsyncType.EMAIL,
        name="Email Thread",
        description="Send a structured email for async discussion",
        best_for="Announcements, FYI updates, formal communication",
        icon="📧",
        message_template="Instead of meeting for \"{title}\", here is a written summary. Reply to this thread with any questions.",
    ),
    AsyncType.SLACK: AsyncAlternative(
        type=AsyncType.SLACK,
        name="Slack/Chat Thread",
        description="Start a dedicated thread for discussion",
        best_for="Quick syncs, daily updates, informal check-ins",
        icon="💬",
        message_template="Instead of meeting for \"{title}\", let's use this thread. Post your update whenever you're online.",
    ),
    AsyncType.OTHER: AsyncAlternative(
        type=AsyncType.OTHER,
        name="Other Async Method",
        description="Use your preferred async communication tool",
        best_for="Flexible async communication",
        icon="⚡",
        message_template="Instead of meeting for \"{title}\", let's handle this asynchronously.",
    ),
}

_LOOM_TITLE = re.compile(r"demo|walk|show|present", re.I)
_DOC_TITLE = re.compile(r"review|feedback|RFC", re.I)
_POLL_TITLE = re.compile(r"decision|vote|choose|pick", re.I)

MESSAGE_PREFIXES = {
    Urgency.LOW: "💡 Quick thought:",
    Urgency.MODERATE: "🤔 Worth considering:",
    Urgency.STRONG: "⚠️ Recommendation:",
}


# ── Reasons ──────────────────────────────────────────────────────────────

def match_async_pattern(title: str) -> Optional[tuple[re.Pattern, tuple[AsyncType, ...], int]]:
    for entry in ASYNC_FRIENDLY_PATTERNS:
        if entry[0].search(title):
            return entry
    return None


def collect_reasons(meeting: NudgeInput) -> list[NudgeReason]:
    """Every factor with a positive weight, in evaluation order."""
    reasons = []

    total_weight = min(TOTAL_SACRIFICE_CAP, TOTAL_SACRIFICE_RATE * meeting.total_sacrifice_points)
    if total_weight > 0:
        reasons.append(NudgeReason(
            type=ReasonType.HIGH_SACRIFICE,
            description="High sacrifice score across participants",
            weight=total_weight,
            details=f"Total: {format_number(meeting.total_sacrifice_points)} points",
        ))

    individual_weight = min(
        INDIVIDUAL_SACRIFICE_CAP, INDIVIDUAL_SACRIFICE_RATE * meeting.max_individual_sacrifice
    )
    if individual_weight > 0:
        reasons.append(NudgeReason(
            type=ReasonType.INDIVIDUAL_SACRIFICE,
            description="One participant is sacrificing significantly more",
            weight=individual_weight,
            details=f"Max individual: {format_number(meeting.max_individual_sacrifice)} points",
        ))

    spread_weight = min(TIMEZONE_SPREAD_CAP, TIMEZONE_SPREAD_RATE * meeting.timezone_spread)
    if spread_weight > 0:
        reasons.append(NudgeReason(
            type=ReasonType.TIMEZONE_SPREAD,
            description=f"{format_number(meeting.timezone_spread)} hour timezone spread",
            weight=spread_weight,
            details=f"Spread: {format_number(meeting.timezone_spread)}h makes finding good times hard",
        ))

    if meeting.average_energy is not None and meeting.average_energy < LOW_ENERGY_THRESHOLD:
        energy = max(0.0, meeting.average_energy)
        reasons.append(NudgeReason(
            type=ReasonType.LOW_ENERGY,
            description="Low cognitive energy at available times",
            weight=round_int((1 - energy / 100) * LOW_ENERGY_RATE),
            details=f"Average energy: {round_int(energy)}%",
        ))

    if meeting.is_recurring:
        weight = RECURRING_WEIGHT
        if meeting.duration_minutes >= LONG_MEETING_MINUTES:
            weight += RECURRING_LONG_WEIGHT
        reasons.append(NudgeReason(
            type=ReasonType.RECURRING_COST,
            description="Recurring meeting amplifies sacrifice over time",
            weight=weight,
            details=f"{meeting.duration_minutes} min × recurring = ongoing cost",
        ))

    matched = match_async_pattern(meeting.title)
    if matched:
        reasons.append(NudgeReason(
            type=ReasonType.PATTERN_MATCH,
            description=f"\"{meeting.title}\" matches async-friendly pattern",
            weight=matched[2] * PATTERN_WEIGHT_SCALE,
            details="This type of meeting often works well async",
        ))

    if meeting.duration_minutes <= SHORT_MEETING_MINUTES:
        reasons.append(NudgeReason(
            type=ReasonType.DURATION,
            description="Very short meeting could be a message",
            weight=SHORT_MEETING_WEIGHT,
            details=f"{meeting.duration_minutes} min meeting could be a quick message",
        ))

    if meeting.participant_count >= MANY_PARTICIPANTS:
        reasons.append(NudgeReason(
            type=ReasonType.PARTICIPANT_COUNT,
            description="Large group hard to schedule fairly",
            weight=MANY_PARTICIPANTS_WEIGHT,
            details=f"{meeting.participant_count} people = complex coordination",
        ))

    return reasons


# ── Alternatives & estimates ─────────────────────────────────────────────

def find_best_alternatives(meeting: NudgeInput, limit: int = 3) -> list[AsyncAlternative]:
    scores = {t: ALTERNATIVE_BASE_SCORE for t in ASYNC_ALTERNATIVES}

    matched = match_async_pattern(meeting.title)
    if matched:
        for async_type in matched[1]:
            scores[async_type] += PATTERN_BOOST
    if _LOOM_TITLE.search(meeting.title):
        scores[AsyncType.LOOM] += 25
    if _DOC_TITLE.search(meeting.title):
        scores[AsyncType.DOC] += 25
    if meeting.duration_minutes <= SHORT_MEETING_MINUTES:
        scores[AsyncType.SLACK] += 20
    if _POLL_TITLE.search(meeting.title):
        scores[AsyncType.POLL] += 30

    ranked = sorted(ASYNC_ALTERNATIVES.values(), key=lambda alt: -scores[alt.type])
    return [
        replace(alt, suitability_score=min(100, scores[alt.type]))
        for alt in ranked[:limit]
    ]


def estimate_hours_saved(meeting: NudgeInput) -> float:
    """Attendee-hours plus 15 minutes of coordination each; ×1.5 when recurring."""
    n = meeting.participant_count
    saved = meeting.duration_minutes / 60 * n + 0.25 * n
    if meeting.is_recurring:
        saved *= 1.5
    return round1(saved)


def get_urgency(strength: int) -> Urgency:
    if strength >= STRONG_URGENCY:
        return Urgency.STRONG
    if strength >= MODERATE_URGENCY:
        return Urgency.MODERATE
    return Urgency.LOW


def generate_nudge_message(
    meeting: NudgeInput,
    urgency: Urgency,
    primary: Optional[NudgeReason],
    top_alternative: Optional[AsyncAlternative],
) -> str:
    message = MESSAGE_PREFIXES[urgency] + " "
    if primary is None:
        return message + "This meeting might work well async."

    if primary.type is ReasonType.HIGH_SACRIFICE:
        message += "This meeting has a high sacrifice score. Someone's waking up early or staying late."
    elif primary.type is ReasonType.INDIVIDUAL_SACRIFICE:
        message += "One participant is carrying most of the cost of this time slot."
    elif primary.type is ReasonType.TIMEZONE_SPREAD:
        message += (
            f"With {format_number(meeting.timezone_spread)} hours between participants, "
            f"finding a fair time is tough."
        )
    elif primary.type is ReasonType.LOW_ENERGY:
        message += "Available times have low cognitive energy. Consider async for better engagement."
    elif primary.type is ReasonType.PATTERN_MATCH:
        message += "This type of meeting often works well async."
    elif primary.type is ReasonType.DURATION:
        message += "Quick meetings can often be a message instead."
    elif primary.type is ReasonType.RECURRING_COST:
        message += "Recurring meetings compound the sacrifice over time."
    elif primary.type is ReasonType.PARTICIPANT_COUNT:
        message += "Large groups are hard to schedule fairly."

    if top_alternative:
        message += f" Try {top_alternative.icon} {top_alternative.name} instead?"
    return message


# ── Analyzer ─────────────────────────────────────────────────────────────

def analyze_for_async_nudge(meeting: NudgeInput, threshold: int = NUDGE_THRESHOLD) -> NudgeResult:
    reasons = collect_reasons(meeting)
    raw = min(100.0, sum(r.weight for r in reasons))

    preference = PREFERENCE_MODIFIERS[OrganizerPreference(meeting.organizer_preference)]
    type_modifier = (
        SYNC_TYPE_MODIFIER if MeetingType(meeting.meeting_type) in SYNC_PREFERRED_TYPES else 1.0
    )
    strength = min(100, round_int(raw * preference * type_modifier))

    urgency = get_urgency(strength)
    alternatives = find_best_alternatives(meeting)
    # stable: the earliest-evaluated reason wins a tie
    ranked_reasons = sorted(reasons, key=lambda r: -r.weight)
    primary = ranked_reasons[0] if ranked_reasons else None
    should_nudge = strength >= threshold

    if should_nudge:
        logger.info(f"Async nudge for {meeting.title!r}: strength {strength} ({urgency.value})")
    else:
        logger.debug(f"No nudge for {meeting.title!r}: strength {strength}")

    return NudgeResult(
        should_nudge=should_nudge,
        nudge_strength=strength,
        urgency=urgency,
        suggested_alternatives=tuple(alternatives),
        reasons=tuple(ranked_reasons),
        primary_reason=primary,
        estimated_hours_saved=estimate_hours_saved(meeting),
        message=generate_nudge_message(meeting, urgency, primary, alternatives[0] if alternatives else None),
    )
