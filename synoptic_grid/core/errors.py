from datetime import datetime
from typing import Optional


class SynopticGridError(Exception):
    """Base class for all pipeline errors."""


class MalformedInput(SynopticGridError):
    """A raw field or document failed to parse; the whole source day is rejected."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"{message}{where}")


def _location(context: Optional[str]) -> str:
    return f" in {context}" if context else ""


class UnknownCharacteristic(SynopticGridError):
    def __init__(self, label: str, context: Optional[str] = None):
        self.label = label
        self.context = context
        super().__init__(f"Unknown weather characteristic '{label}'{_location(context)}.")


class UnknownWindDirection(SynopticGridError):
    def __init__(self, value: str, context: Optional[str] = None):
        self.value = value
        self.context = context
        super().__init__(f"Unknown wind direction '{value}'{_location(context)}.")


class InterpolationBoundsUnavailable(SynopticGridError):
    """No usable prev/next candidate for a missing slot. Fails the whole day."""

    def __init__(self, slot: datetime, reason: str):
        self.slot = slot
        self.reason = reason
        super().__init__(f"Cannot interpolate slot {slot:%Y-%m-%d %H:%M}: {reason}")


class GridInvariantError(SynopticGridError):
    """An emitted record does not have exactly one observation per grid slot."""
