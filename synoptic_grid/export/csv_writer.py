import re
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from ..core.characteristics import decode, known_catalog
from ..core.models import NormalizedDailyRecord
from ..utils.logging import get_logger

logger = get_logger(__name__)

CORE_COLUMNS = [
    "Place",
    "DateTime",
    "Temperature",
    "WindDirection",
    "WindSpeed",
    "AtmosphericPressure",
    "Humidity",
]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_UNSAFE_FILENAME = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def export_columns() -> List[str]:
    return CORE_COLUMNS + known_catalog()


def safe_filename(name: str) -> str:
    return _UNSAFE_FILENAME.sub("_", name)


def records_to_frame(place: str, records: Iterable[NormalizedDailyRecord]) -> pd.DataFrame:
    """One row per observation, time ascending, one boolean column per characteristic."""
    catalog = known_catalog()
    rows = []
    for record in sorted(records, key=lambda r: r.date):
        for obs in record.observations:
            present = set(decode(obs.characteristics))
            row = {
                "Place": place,
                "DateTime": obs.time.strftime(TIMESTAMP_FORMAT),
                "Temperature": obs.temperature,
                "WindDirection": obs.wind_direction,
                "WindSpeed": f"{obs.wind_speed:.2f}",
                "AtmosphericPressure": obs.pressure,
                "Humidity": obs.humidity,
            }
            row.update({label: label in present for label in catalog})
            rows.append(row)
    return pd.DataFrame(rows, columns=export_columns())


class CsvExporter:
    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)

    def write(self, records_by_place: Dict[str, List[NormalizedDailyRecord]]) -> List[Path]:
        if not records_by_place:
            logger.warning("No normalized records available to write to CSV.")
            return []

        self.output_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for place, records in records_by_place.items():
            if not records:
                logger.debug(f"Skipping CSV for {place}: no normalized days")
                continue
            path = self.output_dir / safe_filename(f"{place}.csv")
            records_to_frame(place, records).to_csv(path, index=False, encoding="utf-8")
            written.append(path)
            logger.info(f"Wrote {len(records)} day(s) for {place} to {path}")
        return written
