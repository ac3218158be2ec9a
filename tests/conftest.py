from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from synoptic_grid.core.characteristics import WeatherCharacteristics
from synoptic_grid.core.models import DailyParseResult, RawObservation

SYNOPTIC_HOURS = (0, 3, 6, 9, 12, 15, 18, 21)


def make_obs(when: datetime, temperature=0, wind_direction=0, wind_speed="1.0", pressure=745,
             humidity=80, characteristics=WeatherCharacteristics.NONE) -> RawObservation:
    return RawObservation(
        time=when,
        characteristics=characteristics,
        temperature=temperature,
        wind_direction=wind_direction,
        wind_speed=Decimal(wind_speed),
        pressure=pressure,
        humidity=humidity,
    )


def make_day(place: str, day: date, hours=SYNOPTIC_HOURS, **fields) -> DailyParseResult:
    start = datetime(day.year, day.month, day.day)
    observations = tuple(make_obs(start + timedelta(hours=h), **fields) for h in hours)
    return DailyParseResult(place=place, date=day, observations=observations)


@pytest.fixture
def obs():
    return make_obs


@pytest.fixture
def day():
    return make_day
