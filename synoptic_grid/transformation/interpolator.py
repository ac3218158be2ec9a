"""Fills the missing grid slots of an incomplete day.

Bounds for a missing slot come from a candidate pool made of the day's
matched slots, the previous calendar day (its emitted record when there is
one, its raw readings otherwise) and the raw readings of the next calendar
day. Interpolation is all-or-nothing: one unresolvable slot fails the day.
"""
from datetime import datetime, timedelta
from decimal import Decimal
from fractions import Fraction
from math import floor
from typing import Iterable, List, Optional, Sequence

from ..core.characteristics import union
from ..core.errors import InterpolationBoundsUnavailable
from ..core.models import SOURCE_INTERPOLATED, NormalizedDailyRecord, RawObservation
from .grid import GridIncomplete

_SECOND = timedelta(seconds=1)
_HALF = Fraction(1, 2)


def _lerp(a, b, ratio: Fraction) -> Fraction:
    # exact: Fraction accepts int and Decimal without loss
    a = Fraction(a)
    return a + (Fraction(b) - a) * ratio


def _round_half_away(value: Fraction, digits: int = 0) -> int:
    """``value`` scaled by 10**digits, rounded to an integer with ties away from zero."""
    scaled = value * 10 ** digits
    magnitude = floor(abs(scaled) + _HALF)
    return -magnitude if scaled < 0 else magnitude


def _round_int(value: Fraction) -> int:
    return _round_half_away(value)


def _round_hundredths(value: Fraction) -> Decimal:
    return Decimal(_round_half_away(value, 2)).scaleb(-2)


def interpolate_observation(prev: RawObservation, next_: RawObservation, t: datetime) -> RawObservation:
    """Reading at ``t`` between two bounding readings.

    Continuous fields are linear in time; the wind azimuth is taken from the
    nearer bound (``prev`` on an exact midpoint) and the characteristics are
    the union of both bounds.
    """
    if not prev.time <= t <= next_.time or next_.time <= prev.time:
        raise InterpolationBoundsUnavailable(t, f"bounds {prev.time} .. {next_.time} do not enclose the slot")

    ratio = Fraction((t - prev.time) // _SECOND, (next_.time - prev.time) // _SECOND)

    return RawObservation(
        time=t,
        characteristics=union(prev.characteristics, next_.characteristics),
        temperature=_round_int(_lerp(prev.temperature, next_.temperature, ratio)),
        wind_direction=prev.wind_direction if ratio <= _HALF else next_.wind_direction,
        wind_speed=_round_hundredths(_lerp(prev.wind_speed, next_.wind_speed, ratio)),
        pressure=_round_int(_lerp(prev.pressure, next_.pressure, ratio)),
        humidity=_round_int(_lerp(prev.humidity, next_.humidity, ratio)),
    )


def latest_before(candidates: Iterable[RawObservation], t: datetime) -> Optional[RawObservation]:
    best = None
    for c in candidates:
        if c.time < t and (best is None or c.time > best.time):
            best = c
    return best


def earliest_after(candidates: Iterable[RawObservation], t: datetime) -> Optional[RawObservation]:
    best = None
    for c in candidates:
        if c.time > t and (best is None or c.time < best.time):
            best = c
    return best


class Interpolator:
    def interpolate(
        self,
        day: GridIncomplete,
        previous_day: Sequence[RawObservation] = (),
        next_day: Sequence[RawObservation] = (),
    ) -> NormalizedDailyRecord:
        """Complete ``day`` or raise ``InterpolationBoundsUnavailable``.

        Slots filled here are never used as bounds for other slots of the
        same day.
        """
        pool: List[RawObservation] = [*day.matched, *previous_day, *next_day]

        filled = {o.time: o for o in day.matched}
        for t in day.missing:
            prev = latest_before(pool, t)
            if prev is None:
                raise InterpolationBoundsUnavailable(t, "no reading before the slot")
            next_ = earliest_after(pool, t)
            if next_ is None:
                raise InterpolationBoundsUnavailable(t, "no reading after the slot")
            filled[t] = interpolate_observation(prev, next_, t)

        return NormalizedDailyRecord(
            place=day.place,
            date=day.date,
            observations=tuple(filled[t] for t in sorted(filled)),
            source=SOURCE_INTERPOLATED,
        )
