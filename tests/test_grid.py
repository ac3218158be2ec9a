"""Tests for aligning a day's readings onto the synoptic grid."""

import logging
from datetime import date, datetime

import pytest

from synoptic_grid.core.errors import GridInvariantError
from synoptic_grid.core.models import DailyParseResult, NormalizedDailyRecord, grid_times
from synoptic_grid.transformation.grid import GridComplete, GridIncomplete, GridNormalizer

D = date(2016, 12, 10)


def test_grid_times():
    times = grid_times(D)
    assert [t.hour for t in times] == [0, 3, 6, 9, 12, 15, 18, 21]
    assert all(t.date() == D for t in times)


def test_complete_day(day):
    result = GridNormalizer().normalize(day("Kyiv", D))

    assert isinstance(result, GridComplete)
    times = [o.time for o in result.record.observations]
    assert times == grid_times(D)
    assert all(a < b for a, b in zip(times, times[1:]))
    assert result.record.source == "observed"
    assert result.duplicate_slots == 0


def test_unordered_readings_are_sorted_onto_the_grid(obs):
    readings = tuple(obs(t, temperature=t.hour) for t in reversed(grid_times(D)))
    result = GridNormalizer().normalize(DailyParseResult("Kyiv", D, readings))

    assert isinstance(result, GridComplete)
    assert [o.temperature for o in result.record.observations] == [0, 3, 6, 9, 12, 15, 18, 21]


def test_seconds_are_ignored_and_restamped(obs, day):
    base = day("Kyiv", D, hours=(0, 3, 6, 9, 12, 15, 18))
    late = obs(datetime(2016, 12, 10, 21, 0, 42), temperature=7)
    result = GridNormalizer().normalize(DailyParseResult("Kyiv", D, base.observations + (late,)))

    assert isinstance(result, GridComplete)
    last = result.record.observations[-1]
    assert last.time == datetime(2016, 12, 10, 21, 0)
    assert last.temperature == 7


def test_duplicate_slot_keeps_chronologically_first(obs, day, caplog):
    base = day("Kyiv", D, hours=(0, 3, 6, 9, 12, 15, 18))
    later = obs(datetime(2016, 12, 10, 21, 0, 30), temperature=99)
    earlier = obs(datetime(2016, 12, 10, 21, 0, 5), temperature=1)

    with caplog.at_level(logging.WARNING):
        result = GridNormalizer().normalize(DailyParseResult("Kyiv", D, base.observations + (later, earlier)))

    assert isinstance(result, GridComplete)
    assert result.record.observations[-1].temperature == 1
    assert result.duplicate_slots == 1
    assert "DuplicateSlot" in caplog.text


def test_duplicate_slot_with_identical_times_keeps_source_order(obs, day):
    base = day("Kyiv", D, hours=(3, 6, 9, 12, 15, 18, 21))
    first = obs(datetime(2016, 12, 10, 0, 0), temperature=-3)
    second = obs(datetime(2016, 12, 10, 0, 0), temperature=4)
    result = GridNormalizer().normalize(DailyParseResult("Kyiv", D, (first,) + base.observations + (second,)))

    assert result.record.observations[0].temperature == -3
    assert result.duplicate_slots == 1


def test_off_grid_readings_are_dropped(obs, day):
    base = day("Kyiv", D)
    extra = (
        obs(datetime(2016, 12, 10, 4, 30)),
        obs(datetime(2016, 12, 10, 6, 1)),
        obs(datetime(2016, 12, 11, 0, 0)),  # belongs to the next day
    )
    result = GridNormalizer().normalize(DailyParseResult("Kyiv", D, base.observations + extra))

    assert isinstance(result, GridComplete)
    assert result.off_grid_readings == 3
    assert len(result.record.observations) == 8


def test_incomplete_day_carries_matched_and_missing(day):
    result = GridNormalizer().normalize(day("Kyiv", D, hours=(0, 3, 9, 12, 15, 18)))

    assert isinstance(result, GridIncomplete)
    assert [o.time.hour for o in result.matched] == [0, 3, 9, 12, 15, 18]
    assert result.missing == (datetime(2016, 12, 10, 6), datetime(2016, 12, 10, 21))


def test_empty_day_is_incomplete():
    result = GridNormalizer().normalize(DailyParseResult("Kyiv", D))
    assert isinstance(result, GridIncomplete)
    assert result.missing == tuple(grid_times(D))


def test_record_rejects_anything_but_the_full_grid(day):
    seven = day("Kyiv", D, hours=(0, 3, 6, 9, 12, 15, 18)).observations
    with pytest.raises(GridInvariantError):
        NormalizedDailyRecord("Kyiv", D, seven)

    shuffled = day("Kyiv", D, hours=(3, 0, 6, 9, 12, 15, 18, 21)).observations
    with pytest.raises(GridInvariantError):
        NormalizedDailyRecord("Kyiv", D, shuffled)
