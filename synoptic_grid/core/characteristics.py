"""Weather characteristic flags and the label codec used by ingestion and export.

Source archive pages describe the weather at each reading with one or more
free-text phenomenon labels. Each known label maps to one bit of
``WeatherCharacteristics`` so a reading's conditions fit in a single integer
and can be combined with ``|``.
"""
import enum
from functools import reduce
from typing import Dict, Iterable, List, Optional

from .errors import UnknownCharacteristic


class WeatherCharacteristics(enum.IntFlag):
    NONE = 0
    BLACK_ICE = 1 << 0
    HAIL = 1 << 1
    THUNDERSTORM = 1 << 2
    RAIN = 1 << 3
    RAIN_AND_HAIL = 1 << 4
    RAIN_AND_THUNDERSTORM = 1 << 5
    RAIN_THUNDERSTORM_AND_HAIL = 1 << 6
    RAIN_AND_SNOW = 1 << 7
    HAZE = 1 << 8
    FREEZING_RAIN = 1 << 9
    SHOWER_RAIN = 1 << 10
    SHOWER_RAIN_WITH_SNOW = 1 << 11
    MIST = 1 << 12
    DRIZZLE = 1 << 13
    FEW_CLOUDS = 1 << 14
    VARIABLE_CLOUDINESS = 1 << 15
    SANDSTORM = 1 << 16
    MOSTLY_CLOUDY = 1 << 17
    MOSTLY_CLEAR = 1 << 18
    SEVERE_THUNDERSTORM = 1 << 19
    HEAVY_SNOW_PELLETS = 1 << 20
    HEAVY_RAIN = 1 << 21
    HEAVY_RAIN_WITH_SNOW = 1 << 22
    HEAVY_SHOWER_RAIN = 1 << 23
    HEAVY_SNOW = 1 << 24
    LIGHT_BLIZZARD = 1 << 25
    LIGHT_DRIZZLE = 1 << 26
    LIGHT_SNOW_PELLETS = 1 << 27
    LIGHT_HAIL = 1 << 28
    LIGHT_RAIN = 1 << 29
    LIGHT_RAIN_WITH_THUNDERSTORM = 1 << 30
    LIGHT_RAIN_WITH_SNOW = 1 << 31
    LIGHT_SHOWER_RAIN = 1 << 32
    LIGHT_SHOWER_RAIN_WITH_SNOW = 1 << 33
    LIGHT_GROUND_BLIZZARD = 1 << 34
    LIGHT_SNOW = 1 << 35
    LIGHT_FOG = 1 << 36
    SNOW = 1 << 37
    OVERCAST = 1 << 38
    FOG = 1 << 39
    REDUCED_VISIBILITY_DUE_TO_SMOKE = 1 << 40
    PARTLY_CLOUDY = 1 << 41
    CLEAR = 1 << 42


W = WeatherCharacteristics

# Labels exactly as they appear on the archive pages.
_LABEL_TO_FLAG: Dict[str, WeatherCharacteristics] = {
    "гололед": W.BLACK_ICE,
    "град": W.HAIL,
    "гроза": W.THUNDERSTORM,
    "дождь": W.RAIN,
    "дождь с градом": W.RAIN_AND_HAIL,
    "дождь с грозой": W.RAIN_AND_THUNDERSTORM,
    "дождь с грозой и градом": W.RAIN_THUNDERSTORM_AND_HAIL,
    "дождь со снегом": W.RAIN_AND_SNOW,
    "дымка": W.HAZE,
    "ледяной дождь": W.FREEZING_RAIN,
    "ливневый дождь": W.SHOWER_RAIN,
    "ливневый дождь со снегом": W.SHOWER_RAIN_WITH_SNOW,
    "мгла": W.MIST,
    "мряка": W.DRIZZLE,
    "небольшая облачность": W.FEW_CLOUDS,
    "переменная облачность": W.VARIABLE_CLOUDINESS,
    "песчанная буря": W.SANDSTORM,
    "преимущественно облачно": W.MOSTLY_CLOUDY,
    "преимущественно ясно": W.MOSTLY_CLEAR,
    "сильная гроза": W.SEVERE_THUNDERSTORM,
    "сильная снежная крупа": W.HEAVY_SNOW_PELLETS,
    "сильный дождь": W.HEAVY_RAIN,
    "сильный дождь со снегом": W.HEAVY_RAIN_WITH_SNOW,
    "сильный ливневый дождь": W.HEAVY_SHOWER_RAIN,
    "сильный снег": W.HEAVY_SNOW,
    "слабая метель": W.LIGHT_BLIZZARD,
    "слабая мряка": W.LIGHT_DRIZZLE,
    "слабая снежная крупа": W.LIGHT_SNOW_PELLETS,
    "слабый град": W.LIGHT_HAIL,
    "слабый дождь": W.LIGHT_RAIN,
    "слабый дождь с грозой": W.LIGHT_RAIN_WITH_THUNDERSTORM,
    "слабый дождь со снегом": W.LIGHT_RAIN_WITH_SNOW,
    "слабый ливневый дождь": W.LIGHT_SHOWER_RAIN,
    "слабый ливневый дождь со снегом": W.LIGHT_SHOWER_RAIN_WITH_SNOW,
    "слабый поземок": W.LIGHT_GROUND_BLIZZARD,
    "слабый снег": W.LIGHT_SNOW,
    "слабый туман": W.LIGHT_FOG,
    "снег": W.SNOW,
    "сплошная облачность": W.OVERCAST,
    "туман": W.FOG,
    "ухудшение видимости из-за дыма": W.REDUCED_VISIBILITY_DUE_TO_SMOKE,
    "частично облачно": W.PARTLY_CLOUDY,
    "ясно": W.CLEAR,
}

_LOOKUP: Dict[str, WeatherCharacteristics] = {k.casefold(): v for k, v in _LABEL_TO_FLAG.items()}
_CATALOG: List[str] = sorted(_LABEL_TO_FLAG, key=str.casefold)


def known_catalog() -> List[str]:
    return list(_CATALOG)


def encode(labels: Iterable[str], context: Optional[str] = None) -> WeatherCharacteristics:
    """OR together the flags for ``labels``.

    Lookup is case-insensitive and ignores surrounding whitespace; blank
    labels are skipped. ``context`` (usually the source file) is carried on
    the ``UnknownCharacteristic`` raised for an unrecognized label.
    """
    flags = WeatherCharacteristics.NONE
    for label in labels:
        if label is None or not label.strip():
            continue
        flag = _LOOKUP.get(label.strip().casefold())
        if flag is None:
            raise UnknownCharacteristic(label, context)
        flags |= flag
    return flags


def decode(flags: WeatherCharacteristics) -> List[str]:
    """Catalog labels of every set flag, in catalog (alphabetical) order."""
    value = int(flags)
    return [label for label in _CATALOG if value & int(_LOOKUP[label.casefold()])]


def union(*flag_sets: WeatherCharacteristics) -> WeatherCharacteristics:
    return reduce(lambda a, b: a | b, flag_sets, WeatherCharacteristics.NONE)
