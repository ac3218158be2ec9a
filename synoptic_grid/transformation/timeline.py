from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..core.models import DailyParseResult
from ..utils.logging import get_logger

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


def place_key(place: str) -> str:
    return place.strip().casefold()


@dataclass(frozen=True)
class TimelineEntry:
    source_id: str
    result: DailyParseResult


class PlaceTimeline:
    """Immutable place -> date-ordered index of daily parse results.

    Every lookup is O(1): the neighbouring indexed dates of each date are
    precomputed when the timeline is built.
    """

    def __init__(self, places: Dict[str, str], days: Dict[str, Dict[date, TimelineEntry]]):
        self._places = MappingProxyType(dict(places))
        self._days: Dict[str, Mapping[date, TimelineEntry]] = {}
        self._dates: Dict[str, Tuple[date, ...]] = {}
        self._neighbours: Dict[str, Mapping[date, Tuple[Optional[date], Optional[date]]]] = {}

        for key, by_date in days.items():
            ordered = tuple(sorted(by_date))
            self._dates[key] = ordered
            self._days[key] = MappingProxyType({d: by_date[d] for d in ordered})
            self._neighbours[key] = MappingProxyType({
                d: (ordered[i - 1] if i > 0 else None, ordered[i + 1] if i + 1 < len(ordered) else None)
                for i, d in enumerate(ordered)
            })

    def places(self) -> List[str]:
        """Display names of all places, ordered by normalized name."""
        return [self._places[k] for k in sorted(self._places)]

    def dates(self, place: str) -> Tuple[date, ...]:
        return self._dates.get(place_key(place), ())

    def entries(self, place: str) -> Iterator[TimelineEntry]:
        by_date = self._days.get(place_key(place), {})
        for d in self.dates(place):
            yield by_date[d]

    def get(self, place: str, day: date) -> Optional[TimelineEntry]:
        return self._days.get(place_key(place), {}).get(day)

    def previous_date(self, place: str, day: date) -> Optional[date]:
        return self._neighbours.get(place_key(place), {}).get(day, (None, None))[0]

    def next_date(self, place: str, day: date) -> Optional[date]:
        return self._neighbours.get(place_key(place), {}).get(day, (None, None))[1]

    def adjacent(self, place: str, day: date) -> Tuple[Optional[TimelineEntry], Optional[TimelineEntry]]:
        """Entries for the calendar days right before and after ``day``, if indexed."""
        return self.get(place, day - ONE_DAY), self.get(place, day + ONE_DAY)

    def __len__(self) -> int:
        return sum(len(d) for d in self._dates.values())


class PlaceTimelineBuilder:
    def __init__(self):
        self._places: Dict[str, str] = {}
        self._days: Dict[str, Dict[date, TimelineEntry]] = {}
        self.duplicate_days = 0

    def add(self, source_id: str, result: DailyParseResult) -> None:
        key = place_key(result.place)
        self._places.setdefault(key, result.place.strip())
        by_date = self._days.setdefault(key, {})

        previous = by_date.get(result.date)
        if previous is not None:
            self.duplicate_days += 1
            logger.warning(
                f"Duplicate day {result.date} for {result.place!r}: "
                f"{source_id} replaces {previous.source_id}"
            )
        by_date[result.date] = TimelineEntry(source_id, result)

    def build(self) -> PlaceTimeline:
        return PlaceTimeline(self._places, self._days)
