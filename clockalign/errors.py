"""Engine errors.

The engine is built from total functions; the only failure it reports is a
bad configuration input such as an unknown timezone identifier.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a caller passes configuration the engine cannot resolve."""

    def __init__(self, message: str, timezone_id: str | None = None):
        super().__init__(message)
        self.timezone_id = timezone_id
