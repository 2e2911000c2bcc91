"""Display helpers shared by the UI collaborators.

All lookups accept either the engine enum or its raw string value and fall
back to a neutral value for anything unrecognised. None of them raise.
"""

from __future__ import annotations

import math

from clockalign.engine.rounding import round_half_up, round_int

UNKNOWN_EMOJI = "❓"

_GRAY = {"bg": "bg-gray-100", "text": "text-gray-700", "border": "border-gray-300"}


def _key(value) -> str:
    return str(getattr(value, "value", value))


def _number(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


# ── Sacrifice ────────────────────────────────────────────────────────────

def format_points(points) -> str:
    """0 → "0", below 10 → one decimal, otherwise a whole number."""
    value = _number(points)
    if not value:
        return "0"
    if value < 10:
        return f"{round_half_up(value, 1):.1f}"
    return str(round_int(value))


def get_rank_medal(rank) -> str:
    medals = {1: "🥇", 2: "🥈", 3: "🥉"}
    try:
        return medals.get(int(rank), f"#{rank}")
    except (TypeError, ValueError, OverflowError):
        return f"#{rank}"


_IMPACT_EMOJIS = {
    "minimal": "😊",
    "low": "🙂",
    "medium": "😐",
    "high": "😟",
    "severe": "😩",
    "extreme": "💀",
}


def get_impact_emoji(impact_level) -> str:
    return _IMPACT_EMOJIS.get(_key(impact_level), UNKNOWN_EMOJI)


_CATEGORY_COLORS = {
    "golden": {"bg": "bg-green-100", "text": "text-green-700", "border": "border-green-300"},
    "good": {"bg": "bg-green-50", "text": "text-green-600", "border": "border-green-200"},
    "acceptable": {"bg": "bg-yellow-50", "text": "text-yellow-700", "border": "border-yellow-300"},
    "early_morning": {"bg": "bg-orange-100", "text": "text-orange-700", "border": "border-orange-300"},
    "evening": {"bg": "bg-orange-100", "text": "text-orange-700", "border": "border-orange-300"},
    "late_evening": {"bg": "bg-red-100", "text": "text-red-600", "border": "border-red-300"},
    "night": {"bg": "bg-red-200", "text": "text-red-700", "border": "border-red-400"},
    "late_night": {"bg": "bg-red-300", "text": "text-red-800", "border": "border-red-500"},
    "graveyard": {"bg": "bg-rose-200", "text": "text-rose-800", "border": "border-rose-400"},
}


def get_category_color(category) -> dict[str, str]:
    """Tailwind classes for a sacrifice category."""
    return dict(_CATEGORY_COLORS.get(_key(category), _GRAY))


_FAIRNESS_BADGES = {
    "balanced": {"variant": "outline", "label": "Balanced"},
    "above_average": {"variant": "secondary", "label": "Above Average"},
    "high_sacrifice": {"variant": "default", "label": "High Sacrifice"},
    "critical": {"variant": "destructive", "label": "⚠️ Critical"},
}


def get_fairness_status_badge(status) -> dict[str, str]:
    return dict(_FAIRNESS_BADGES.get(_key(status), {"variant": "outline", "label": "Unknown"}))


# ── Golden windows ───────────────────────────────────────────────────────

def get_energy_emoji(energy) -> str:
    value = _number(energy)
    if value is None:
        return UNKNOWN_EMOJI
    if value >= 80:
        return "🔥"
    if value >= 60:
        return "⚡"
    if value >= 40:
        return "😐"
    if value >= 20:
        return "😴"
    return "💤"


_UNAVAILABLE_CELL = {"bg": "bg-gray-100", "text": "text-gray-400"}

# (minimum energy, colours), highest band first
_HEATMAP_CELL_BANDS = (
    (90, {"bg": "bg-green-500", "text": "text-white"}),
    (80, {"bg": "bg-green-400", "text": "text-white"}),
    (70, {"bg": "bg-green-300", "text": "text-green-900"}),
    (60, {"bg": "bg-green-200", "text": "text-green-800"}),
    (50, {"bg": "bg-yellow-200", "text": "text-yellow-800"}),
    (40, {"bg": "bg-orange-200", "text": "text-orange-800"}),
    (30, {"bg": "bg-orange-300", "text": "text-orange-900"}),
)
_LOWEST_CELL = {"bg": "bg-red-200", "text": "text-red-800"}


def get_heatmap_cell_color(energy, is_available: bool) -> dict[str, str]:
    """Tailwind classes for one participant-hour cell of the heatmap."""
    value = _number(energy)
    if not is_available or value is None:
        return dict(_UNAVAILABLE_CELL)
    for floor, colours in _HEATMAP_CELL_BANDS:
        if value >= floor:
            return dict(colours)
    return dict(_LOWEST_CELL)


_UNAVAILABLE_SCORE = {"bg": "bg-gray-50", "text": "text-gray-400", "border": "border-gray-200"}

_COMBINED_SCORE_BANDS = (
    (80, {"bg": "bg-green-100", "text": "text-green-800", "border": "border-green-400"}),
    (65, {"bg": "bg-green-50", "text": "text-green-700", "border": "border-green-300"}),
    (50, {"bg": "bg-yellow-50", "text": "text-yellow-700", "border": "border-yellow-300"}),
)
_LOWEST_SCORE = {"bg": "bg-red-50", "text": "text-red-600", "border": "border-red-200"}


def get_combined_score_color(score, all_available: bool) -> dict[str, str]:
    """Tailwind classes for the combined-score column of a heatmap hour."""
    value = _number(score)
    if not all_available or value is None:
        return dict(_UNAVAILABLE_SCORE)
    for floor, colours in _COMBINED_SCORE_BANDS:
        if value >= floor:
            return dict(colours)
    return dict(_LOWEST_SCORE)


_QUALITY_DESCRIPTIONS = (
    (80, "Excellent - everyone is at peak energy"),
    (65, "Good - solid energy across the team"),
    (50, "Acceptable - some participants not at peak"),
)


def get_quality_description(quality_score) -> str:
    value = _number(quality_score)
    if value is None:
        return "Unknown"
    for floor, description in _QUALITY_DESCRIPTIONS:
        if value >= floor:
            return description
    return "Poor - low energy for multiple participants"


def format_hour(hour) -> str:
    """24h hour to "12 AM" / "9 AM" / "12 PM" / "5 PM"."""
    value = _number(hour)
    if value is None:
        return "Unknown"
    h = int(value) % 24
    if h == 0:
        return "12 AM"
    if h == 12:
        return "12 PM"
    if h < 12:
        return f"{h} AM"
    return f"{h - 12} PM"


# ── Async nudge ──────────────────────────────────────────────────────────

def format_hours_reclaimed(hours) -> str:
    value = _number(hours)
    if not value:
        return "0h"
    if value < 1:
        return f"{round_int(value * 60)}m"
    if value < 10:
        return f"{round_half_up(value, 1):.1f}h"
    return f"{round_int(value)}h"


_ASYNC_ICONS = {
    "loom": "🎥",
    "doc": "📝",
    "poll": "📊",
    "email": "📧",
    "slack": "💬",
    "other": "⚡",
}


def get_async_type_icon(async_type) -> str:
    return _ASYNC_ICONS.get(_key(async_type), _ASYNC_ICONS["other"])


_URGENCY_COLORS = {
    "low": {"bg": "bg-blue-50", "text": "text-blue-700", "border": "border-blue-200"},
    "moderate": {"bg": "bg-yellow-50", "text": "text-yellow-700", "border": "border-yellow-200"},
    "strong": {"bg": "bg-orange-50", "text": "text-orange-700", "border": "border-orange-200"},
}


def get_nudge_urgency_color(urgency) -> dict[str, str]:
    return dict(_URGENCY_COLORS.get(_key(urgency), _GRAY))
