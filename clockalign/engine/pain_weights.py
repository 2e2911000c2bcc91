"""Pain-Weight Table: local hour of day to sacrifice category and base points.

The table is the single source of truth for how costly a given local hour is.
Lookup is total over all integers: hours are normalised into 0-23 first.
"""

from __future__ import annotations

from types import MappingProxyType

from clockalign.models.sacrifice import HourCategory, ImpactLevel, PainWeight

# ── Category table ───────────────────────────────────────────────────────

# category → (base points, impact level, description)
CATEGORY_WEIGHTS = MappingProxyType({
    HourCategory.GOLDEN: (1.0, ImpactLevel.MINIMAL, "Peak productivity hours"),
    HourCategory.GOOD: (1.5, ImpactLevel.LOW, "Good working hours"),
    HourCategory.ACCEPTABLE: (2.0, ImpactLevel.LOW, "Edge of working hours"),
    HourCategory.EARLY_MORNING: (3.0, ImpactLevel.MEDIUM, "Early morning (sleep impact)"),
    HourCategory.EVENING: (3.0, ImpactLevel.MEDIUM, "Evening (personal time)"),
    HourCategory.LATE_EVENING: (4.0, ImpactLevel.HIGH, "Late evening (family time)"),
    HourCategory.NIGHT: (5.0, ImpactLevel.SEVERE, "Night hours (significant disruption)"),
    HourCategory.LATE_NIGHT: (6.0, ImpactLevel.SEVERE, "Late night (severe impact)"),
    HourCategory.GRAVEYARD: (10.0, ImpactLevel.EXTREME, "Graveyard shift (career damage)"),
})

_missing = set(HourCategory) - set(CATEGORY_WEIGHTS)
if _missing:
    raise RuntimeError(f"Pain-weight table is missing categories: {sorted(c.value for c in _missing)}")


def _category_for(hour: int) -> HourCategory:
    if 10 <= hour <= 15:
        return HourCategory.GOLDEN
    if hour in (9, 16):
        return HourCategory.GOOD
    if hour in (8, 17):
        return HourCategory.ACCEPTABLE
    if hour == 7:
        return HourCategory.EARLY_MORNING
    if hour in (18, 19):
        return HourCategory.EVENING
    if hour == 20:
        return HourCategory.LATE_EVENING
    if hour == 21:
        return HourCategory.NIGHT
    if hour == 22:
        return HourCategory.LATE_NIGHT
    return HourCategory.GRAVEYARD


def _build_table() -> MappingProxyType:
    table = {}
    for hour in range(24):
        category = _category_for(hour)
        base_points, impact, description = CATEGORY_WEIGHTS[category]
        table[hour] = PainWeight(hour, category, base_points, impact, description)
    return MappingProxyType(table)


PAIN_WEIGHTS = _build_table()


# ── Lookup ───────────────────────────────────────────────────────────────

def normalize_hour(hour: int) -> int:
    return ((int(hour) % 24) + 24) % 24


def get_pain_weight(hour: int) -> PainWeight:
    """Return the pain weight for any integer hour (25 → 1, -1 → 23)."""
    return PAIN_WEIGHTS[normalize_hour(hour)]


def get_pain_weight_table() -> dict[int, PainWeight]:
    return dict(PAIN_WEIGHTS)


def get_category_weight(category: HourCategory | str) -> float:
    """Base points for a category, accepting the enum or its string value."""
    return CATEGORY_WEIGHTS[HourCategory(category)][0]
