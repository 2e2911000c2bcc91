"""Shared serialisation for engine value objects."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from enum import Enum


def to_plain(value):
    """Recursively convert enums and dates to JSON-ready primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {to_plain(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


class Serializable:
    """Mixin for frozen dataclasses handed to the HTTP/UI collaborators."""

    def to_dict(self) -> dict:
        return to_plain(asdict(self))
