from typing import Dict, List, Optional, Tuple

from .errors import UnknownWindDirection

# Compass point names used by the archive pages, clockwise from north.
_DIRECTIONS: Tuple[Tuple[str, int], ...] = (
    ("северный", 0),
    ("северо-восточный", 45),
    ("восточный", 90),
    ("юго-восточный", 135),
    ("южный", 180),
    ("юго-западный", 225),
    ("западный", 270),
    ("северо-западный", 315),
)

_NAME_TO_AZIMUTH: Dict[str, int] = {name.casefold(): azimuth for name, azimuth in _DIRECTIONS}


def to_azimuth(value: Optional[str], context: Optional[str] = None) -> int:
    if value is None or not value.strip():
        raise UnknownWindDirection(value or "", context)
    azimuth = _NAME_TO_AZIMUTH.get(value.strip().casefold())
    if azimuth is None:
        raise UnknownWindDirection(value, context)
    return azimuth


def known_wind_directions() -> List[str]:
    return sorted((name for name, _ in _DIRECTIONS), key=str.casefold)
