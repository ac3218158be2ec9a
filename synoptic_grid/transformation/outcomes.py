from dataclasses import dataclass
from datetime import date
from typing import Union

from ..core.models import NormalizedDailyRecord


@dataclass(frozen=True)
class Complete:
    record: NormalizedDailyRecord


@dataclass(frozen=True)
class Interpolated:
    record: NormalizedDailyRecord


@dataclass(frozen=True)
class Dropped:
    place: str
    date: date
    reason: str


DayOutcome = Union[Complete, Interpolated, Dropped]
