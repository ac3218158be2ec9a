from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Tuple

from .characteristics import WeatherCharacteristics
from .errors import GridInvariantError

SLOTS_PER_DAY = 8
SLOT_STEP = timedelta(hours=3)

SOURCE_OBSERVED = "observed"
SOURCE_INTERPOLATED = "interpolated"


def grid_times(day: date) -> List[datetime]:
    """The synoptic slot times of ``day``: 00:00, 03:00, ... 21:00."""
    start = datetime(day.year, day.month, day.day)
    return [start + SLOT_STEP * i for i in range(SLOTS_PER_DAY)]


@dataclass(frozen=True)
class RawObservation:
    time: datetime
    characteristics: WeatherCharacteristics
    temperature: int
    wind_direction: int
    wind_speed: Decimal
    pressure: int
    humidity: int


@dataclass(frozen=True)
class DailyParseResult:
    place: str
    date: date
    observations: Tuple[RawObservation, ...] = ()


@dataclass(frozen=True)
class NormalizedDailyRecord:
    place: str
    date: date
    observations: Tuple[RawObservation, ...]
    source: str = SOURCE_OBSERVED

    def __post_init__(self):
        times = [o.time for o in self.observations]
        if times != grid_times(self.date):
            raise GridInvariantError(
                f"Record for {self.place} {self.date} has {len(times)} observation(s) "
                f"not aligned to the {SLOTS_PER_DAY}-slot grid"
            )
