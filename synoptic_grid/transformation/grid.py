import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional, Tuple

from ..core.models import DailyParseResult, NormalizedDailyRecord, RawObservation, grid_times
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GridResult:
    place: str
    date: date
    duplicate_slots: int
    off_grid_readings: int


@dataclass(frozen=True)
class GridComplete(GridResult):
    record: NormalizedDailyRecord


@dataclass(frozen=True)
class GridIncomplete(GridResult):
    matched: Tuple[RawObservation, ...]
    missing: Tuple[datetime, ...]


class GridNormalizer:
    """Aligns one day's raw readings onto the 8-slot synoptic grid.

    A reading belongs to a slot when its time, truncated to the minute,
    equals the slot time. Readings sharing a slot are resolved by keeping the
    chronologically first one (source order breaks exact ties); the others
    are discarded as duplicates. Readings on no slot of the day are dropped.
    """

    def normalize(self, result: DailyParseResult, source_id: Optional[str] = None) -> GridResult:
        slots = grid_times(result.date)
        slot_set = set(slots)
        where = source_id or f"{result.place} {result.date}"

        matched: Dict[datetime, RawObservation] = {}
        duplicates = 0
        off_grid = 0

        # sorted() is stable, so equal times keep their source order
        for obs in sorted(result.observations, key=lambda o: o.time):
            slot = obs.time.replace(second=0, microsecond=0)
            if slot not in slot_set:
                off_grid += 1
                logger.debug(f"Off-grid reading at {obs.time:%Y-%m-%d %H:%M:%S} dropped ({where})")
                continue
            if slot in matched:
                duplicates += 1
                logger.warning(
                    f"DuplicateSlot {slot:%Y-%m-%d %H:%M}: reading at {obs.time:%H:%M:%S} discarded, "
                    f"keeping {matched[slot].time:%H:%M:%S} ({where})"
                )
                continue
            matched[slot] = obs

        matched = {t: o if o.time == t else dataclasses.replace(o, time=t) for t, o in matched.items()}

        missing = tuple(t for t in slots if t not in matched)
        if not missing:
            record = NormalizedDailyRecord(
                place=result.place,
                date=result.date,
                observations=tuple(matched[t] for t in slots),
            )
            return GridComplete(result.place, result.date, duplicates, off_grid, record)

        return GridIncomplete(
            result.place,
            result.date,
            duplicates,
            off_grid,
            matched=tuple(matched[t] for t in slots if t in matched),
            missing=missing,
        )
