"""Local-Time Projector: UTC instants to participants' wall clocks.

Every engine computation that depends on "what time is it for this person"
goes through a projector. The default resolves IANA identifiers with pytz so
daylight-saving rules are honoured for the exact instant being projected.
Tests inject fakes that implement the same one-method protocol.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Protocol, Union

import pytz

from clockalign.errors import ConfigurationError

logger = logging.getLogger(__name__)

Instant = Union[datetime, str]


class LocalTimeProjector(Protocol):
    def local_hour(self, instant: Instant, timezone_id: str) -> int:
        ...

    def utc_offset_minutes(self, instant: Instant, timezone_id: str) -> int:
        ...


# ── Helpers ──────────────────────────────────────────────────────────────

def to_utc(instant: Instant) -> datetime:
    """Normalise a datetime or ISO-8601 string to an aware UTC datetime.

    Naive datetimes are taken to already be UTC. A trailing ``Z`` is accepted.
    """
    if isinstance(instant, str):
        instant = datetime.fromisoformat(instant.strip().replace("Z", "+00:00"))
    if instant.tzinfo is None:
        return pytz.utc.localize(instant)
    return instant.astimezone(pytz.utc)


def get_timezone(timezone_id: str) -> pytz.BaseTzInfo:
    """Resolve an IANA identifier, raising ConfigurationError if unknown."""
    try:
        return pytz.timezone(timezone_id)
    except pytz.UnknownTimeZoneError as exc:
        logger.warning(f"Unknown timezone identifier: {timezone_id!r}")
        raise ConfigurationError(
            f"Unknown timezone: {timezone_id}", timezone_id=timezone_id
        ) from exc


def is_valid_timezone(timezone_id: str) -> bool:
    try:
        pytz.timezone(timezone_id)
    except pytz.UnknownTimeZoneError:
        return False
    return True


def project(instant: Instant, timezone_id: str) -> datetime:
    """Return the local wall-clock datetime of ``instant`` in ``timezone_id``."""
    return to_utc(instant).astimezone(get_timezone(timezone_id))


def utc_offset_hours(timezone_id: str, at: Optional[Instant] = None) -> float:
    at = at if at is not None else datetime.now(pytz.utc)
    offset = project(at, timezone_id).utcoffset()
    return offset.total_seconds() / 3600 if offset else 0.0


def utc_offset_label(timezone_id: str, at: Optional[Instant] = None) -> str:
    """Format the zone's offset at ``at`` as ``UTC+5:30`` / ``UTC-8`` / ``UTC``."""
    return format_offset_label(round(utc_offset_hours(timezone_id, at) * 60))


def format_offset_label(minutes: int) -> str:
    if minutes == 0:
        return "UTC"
    sign = "+" if minutes > 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    if mins:
        return f"UTC{sign}{hours}:{mins:02d}"
    return f"UTC{sign}{hours}"


def timezone_spread_hours(timezone_ids: Iterable[str], at: Optional[Instant] = None) -> float:
    """Hours between the most-behind and most-ahead zone at ``at``."""
    at = at if at is not None else datetime.now(pytz.utc)
    offsets = [utc_offset_hours(tz, at) for tz in timezone_ids]
    if not offsets:
        return 0.0
    return max(offsets) - min(offsets)


# ── Default projector ────────────────────────────────────────────────────

class PytzProjector:
    """DST-aware projector backed by the IANA database shipped with pytz."""

    def local_hour(self, instant: Instant, timezone_id: str) -> int:
        return project(instant, timezone_id).hour

    def utc_offset_minutes(self, instant: Instant, timezone_id: str) -> int:
        return round(utc_offset_hours(timezone_id, instant) * 60)


default_projector: LocalTimeProjector = PytzProjector()
