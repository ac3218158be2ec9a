from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from dateutil import parser as dt_parser

from ..core import wind_direction
from ..core.errors import MalformedInput

class DailyResultNormalizer:
    """Turns one raw archive day document into a schema-ready dict.

    Only representation changes happen here (string dates to datetimes,
    comma-joined labels to lists, compass names to azimuths). Values that
    cannot be converted reject the whole document with ``MalformedInput``.
    """

    def _split_to_array(self, s: Union[None, str, List[str]]) -> List[str]:
        if not s:
            return []
        if isinstance(s, list):
            return [str(p).strip() for p in s if p is not None and str(p).strip()]
        # try comma first; if no comma, return single element
        parts = [p.strip() for p in s.split(",")]
        return [p for p in parts if p]

    def _parse_date(self, value: Any, source: Optional[str]) -> datetime:
        if not value:
            raise MalformedInput("missing date", source)
        try:
            return dt_parser.isoparse(str(value))
        except (ValueError, OverflowError) as e:
            raise MalformedInput(f"unparseable date '{value}': {e}", source) from e

    def _parse_time(self, value: Any, day_start: datetime, source: Optional[str]) -> datetime:
        # "HH:MM" strings take their calendar date from the document
        if not value:
            raise MalformedInput("observation without time", source)
        try:
            return dt_parser.parse(str(value), default=day_start).replace(tzinfo=None)
        except (ValueError, OverflowError) as e:
            raise MalformedInput(f"unparseable time '{value}': {e}", source) from e

    def _wind_direction(self, value: Any, source: Optional[str]) -> Any:
        if isinstance(value, str) and not value.strip().isdigit():
            return wind_direction.to_azimuth(value, source)
        return value

    def _wind_speed(self, value: Any) -> Any:
        # floats keep their printed precision, not their binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    def normalize(self, record: Dict[str, Any], source: Optional[str] = None) -> Dict[str, Any]:
        if not isinstance(record, dict):
            raise MalformedInput(f"expected an object, got {type(record).__name__}", source)

        day_start = self._parse_date(record.get("date"), source).replace(
            hour=0, minute=0, second=0, microsecond=0, tzinfo=None
        )

        observations = []
        for raw in record.get("observations") or []:
            if not isinstance(raw, dict):
                raise MalformedInput("observation is not an object", source)
            obs = dict(raw)
            obs["time"] = self._parse_time(raw.get("time"), day_start, source)
            obs["characteristics"] = self._split_to_array(raw.get("characteristics"))
            obs["wind_direction"] = self._wind_direction(raw.get("wind_direction"), source)
            obs["wind_speed"] = self._wind_speed(raw.get("wind_speed"))
            observations.append(obs)

        place = record.get("place")
        return {
            "place": place.strip() if isinstance(place, str) else place,
            "date": day_start.date(),
            "observations": observations,
        }
