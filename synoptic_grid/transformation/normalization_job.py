from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from ..core.errors import InterpolationBoundsUnavailable
from ..core.models import NormalizedDailyRecord
from ..utils.logging import get_logger
from .grid import GridComplete, GridIncomplete, GridNormalizer
from .interpolator import Interpolator
from .outcomes import Complete, DayOutcome, Dropped, Interpolated
from .timeline import PlaceTimeline

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass
class NormalizationStats:
    complete: int = 0
    interpolated: int = 0
    dropped: int = 0
    duplicate_slots: int = 0
    missing_slots: int = 0
    off_grid_readings: int = 0

    @property
    def total_days(self) -> int:
        return self.complete + self.interpolated + self.dropped

    @property
    def dropped_percentage(self) -> float:
        if self.total_days == 0:
            return 0.0
        return self.dropped * 100.0 / self.total_days

    def add(self, other: "NormalizationStats") -> None:
        self.complete += other.complete
        self.interpolated += other.interpolated
        self.dropped += other.dropped
        self.duplicate_slots += other.duplicate_slots
        self.missing_slots += other.missing_slots
        self.off_grid_readings += other.off_grid_readings


@dataclass
class NormalizationReport:
    outcomes: Dict[str, List[DayOutcome]] = field(default_factory=dict)
    stats: Dict[str, NormalizationStats] = field(default_factory=dict)
    totals: NormalizationStats = field(default_factory=NormalizationStats)

    def records(self, place: str) -> List[NormalizedDailyRecord]:
        return [o.record for o in self.outcomes.get(place, []) if not isinstance(o, Dropped)]

    def records_by_place(self) -> Dict[str, List[NormalizedDailyRecord]]:
        return {place: self.records(place) for place in self.outcomes}


class NormalizationJob:
    """Second pass: grid alignment and gap filling over a built timeline.

    Days of a place are processed in ascending date order because an
    incomplete day may take bounds from the record just emitted for the
    previous calendar day. Places are independent of each other.
    """

    def __init__(
        self,
        grid: Optional[GridNormalizer] = None,
        interpolator: Optional[Interpolator] = None,
        interpolation_enabled: bool = True,
    ):
        self.grid = grid or GridNormalizer()
        self.interpolator = interpolator or Interpolator()
        self.interpolation_enabled = interpolation_enabled

    def run(self, timeline: PlaceTimeline) -> NormalizationReport:
        report = NormalizationReport()
        places = timeline.places()
        logger.info(f"Normalizing {len(timeline)} day(s) across {len(places)} place(s)...")

        for place in places:
            outcomes, stats = self.normalize_place(timeline, place)
            report.outcomes[place] = outcomes
            report.stats[place] = stats
            report.totals.add(stats)
            logger.info(
                f"  {place}: {stats.complete} complete, {stats.interpolated} interpolated, "
                f"{stats.dropped} dropped ({stats.dropped_percentage:.1f}%)"
            )

        t = report.totals
        logger.info(
            f"Normalized {t.total_days} day(s): {t.complete} complete, {t.interpolated} interpolated, "
            f"{t.dropped} dropped; {t.duplicate_slots} duplicate slot(s), {t.missing_slots} missing slot(s), "
            f"{t.off_grid_readings} off-grid reading(s)"
        )
        return report

    def normalize_place(self, timeline: PlaceTimeline, place: str) -> Tuple[List[DayOutcome], NormalizationStats]:
        stats = NormalizationStats()
        outcomes: List[DayOutcome] = []
        emitted: Dict[date, NormalizedDailyRecord] = {}

        for entry in timeline.entries(place):
            result = self.grid.normalize(entry.result, entry.source_id)
            stats.duplicate_slots += result.duplicate_slots
            stats.off_grid_readings += result.off_grid_readings

            if isinstance(result, GridComplete):
                outcome: DayOutcome = Complete(result.record)
                stats.complete += 1
            else:
                stats.missing_slots += len(result.missing)
                outcome = self._fill(timeline, result, emitted, entry.source_id)
                if isinstance(outcome, Interpolated):
                    stats.interpolated += 1
                else:
                    stats.dropped += 1

            if not isinstance(outcome, Dropped):
                emitted[result.date] = outcome.record
            outcomes.append(outcome)

        return outcomes, stats

    def _fill(
        self,
        timeline: PlaceTimeline,
        day: GridIncomplete,
        emitted: Dict[date, NormalizedDailyRecord],
        source_id: str,
    ) -> DayOutcome:
        missing = ", ".join(f"{t:%H:%M}" for t in day.missing)
        logger.debug(f"MissingSlot {day.place} {day.date}: {missing} ({source_id})")

        if not self.interpolation_enabled:
            reason = f"missing slot(s) {missing}; interpolation disabled"
            logger.warning(f"Dropped {day.place} {day.date}: {reason}")
            return Dropped(day.place, day.date, reason)

        previous_entry, next_entry = timeline.adjacent(day.place, day.date)
        previous_record = emitted.get(day.date - ONE_DAY)
        if previous_record is not None:
            previous_day = previous_record.observations
        else:
            previous_day = previous_entry.result.observations if previous_entry else ()
        next_day = next_entry.result.observations if next_entry else ()

        try:
            record = self.interpolator.interpolate(day, previous_day, next_day)
        except InterpolationBoundsUnavailable as e:
            logger.warning(f"Dropped {day.place} {day.date}: {e}")
            return Dropped(day.place, day.date, str(e))

        logger.debug(f"Interpolated {day.place} {day.date}: {missing}")
        return Interpolated(record)
