"""End-to-end tests of the normalization pass over a built timeline."""

from datetime import date, datetime, timedelta

from synoptic_grid.core.models import DailyParseResult, grid_times
from synoptic_grid.transformation.normalization_job import NormalizationJob, NormalizationStats
from synoptic_grid.transformation.outcomes import Complete, Dropped, Interpolated
from synoptic_grid.transformation.timeline import PlaceTimelineBuilder

D1 = date(2016, 12, 10)
D2 = date(2016, 12, 11)
D3 = date(2016, 12, 12)


def build(*results):
    builder = PlaceTimelineBuilder()
    for r in results:
        builder.add(f"{r.place}/{r.date}", r)
    return builder.build()


def test_complete_interpolated_and_dropped_days(day):
    timeline = build(
        day("Kyiv", D1),
        day("Kyiv", D2, hours=(0, 3, 9, 12, 15, 18, 21)),
        # 00h and 03h unresolvable: no previous day to bound them
        day("Kyiv", date(2016, 12, 20), hours=(6, 9, 12, 15, 18, 21)),
    )

    report = NormalizationJob().run(timeline)

    kinds = [type(o) for o in report.outcomes["Kyiv"]]
    assert kinds == [Complete, Interpolated, Dropped]
    stats = report.stats["Kyiv"]
    assert (stats.complete, stats.interpolated, stats.dropped) == (1, 1, 1)
    assert stats.missing_slots == 3
    assert [r.date for r in report.records("Kyiv")] == [D1, D2]


def test_two_unresolvable_slots_drop_the_day(day):
    timeline = build(day("Kyiv", D1, hours=(6, 9, 12, 15, 18, 21)))

    report = NormalizationJob().run(timeline)

    assert report.totals.dropped == 1
    assert report.records("Kyiv") == []
    dropped = report.outcomes["Kyiv"][0]
    assert isinstance(dropped, Dropped)
    assert dropped.date == D1


def test_neighbouring_days_supply_bounds(day):
    timeline = build(
        day("Kyiv", D1, hours=(0, 3, 6, 9, 12, 15, 18, 21)),
        day("Kyiv", D2, hours=(3, 6, 9, 12, 15, 18)),
        day("Kyiv", D3, hours=(0, 3, 6, 9, 12, 15, 18, 21)),
    )

    report = NormalizationJob().run(timeline)

    assert [type(o) for o in report.outcomes["Kyiv"]] == [Complete, Interpolated, Complete]


def test_days_further_than_one_day_away_are_not_consulted(day):
    timeline = build(
        day("Kyiv", D1),
        day("Kyiv", D3, hours=(3, 6, 9, 12, 15, 18, 21)),
    )

    report = NormalizationJob().run(timeline)

    assert isinstance(report.outcomes["Kyiv"][1], Dropped)


def test_previous_day_emitted_record_is_preferred_over_its_raw_readings(obs, day):
    d1 = day("Kyiv", D1, hours=(0, 3, 6, 9, 12, 15, 18), temperature=0)
    # off-grid reading: never part of the D1 record, only of its raw readings
    off_grid = obs(datetime(2016, 12, 10, 22), temperature=20)
    d1 = DailyParseResult("Kyiv", D1, d1.observations + (off_grid,))
    d2 = day("Kyiv", D2, hours=(3, 6, 9, 12, 15, 18, 21), temperature=9)

    report = NormalizationJob().run(build(d1, d2))

    first, second = report.records("Kyiv")
    # D1 21h: between D1 18h (0) and D2 03h (9), ratio 1/3
    assert first.observations[-1].temperature == 3
    # D2 00h: between the emitted D1 21h (3) and D2 03h (9)
    assert second.observations[0].temperature == 6


def test_interpolation_disabled_drops_incomplete_days(day):
    timeline = build(
        day("Kyiv", D1),
        day("Kyiv", D2, hours=(0, 3, 9, 12, 15, 18, 21)),
    )

    report = NormalizationJob(interpolation_enabled=False).run(timeline)

    assert [type(o) for o in report.outcomes["Kyiv"]] == [Complete, Dropped]
    assert "interpolation disabled" in report.outcomes["Kyiv"][1].reason


def test_places_are_independent(day):
    timeline = build(
        day("Kyiv", D1, hours=(12,)),
        day("Lviv", D1),
    )

    report = NormalizationJob().run(timeline)

    assert report.stats["Kyiv"].dropped == 1
    assert report.stats["Lviv"].complete == 1
    assert report.totals.total_days == 2
    assert report.totals.dropped_percentage == 50.0
    assert list(report.records_by_place()) == ["Kyiv", "Lviv"]


def test_every_emitted_record_has_the_full_grid(obs, day):
    results = []
    for offset in range(10):
        d = D1 + timedelta(days=offset)
        hours = tuple(h for h in (0, 3, 6, 9, 12, 15, 18, 21) if (h // 3 + offset) % 4)
        results.append(day("Kyiv", d, hours=hours, temperature=offset))

    report = NormalizationJob().run(build(*results))

    for record in report.records("Kyiv"):
        times = [o.time for o in record.observations]
        assert times == grid_times(record.date)
        assert all(a < b for a, b in zip(times, times[1:]))
    assert report.totals.total_days == 10


def test_duplicate_and_off_grid_counts_roll_up(obs, day):
    base = day("Kyiv", D1)
    extra = (obs(datetime(2016, 12, 10, 3)), obs(datetime(2016, 12, 10, 4)))

    report = NormalizationJob().run(build(DailyParseResult("Kyiv", D1, base.observations + extra)))

    assert report.totals.duplicate_slots == 1
    assert report.totals.off_grid_readings == 1


def test_empty_stats():
    stats = NormalizationStats()
    assert stats.total_days == 0
    assert stats.dropped_percentage == 0.0


def test_dropped_previous_day_lends_its_raw_readings(obs, day):
    # D1 cannot be completed (no day before it), so D2 falls back to D1's raw readings
    d1 = day("Kyiv", D1, hours=(6, 9, 12, 15, 18), temperature=10)
    d1 = DailyParseResult("Kyiv", D1, d1.observations + (obs(datetime(2016, 12, 10, 21), temperature=2),))
    d2 = day("Kyiv", D2, hours=(3, 6, 9, 12, 15, 18, 21), temperature=6)

    report = NormalizationJob().run(build(d1, d2))

    first, second = report.outcomes["Kyiv"]
    assert isinstance(first, Dropped)
    assert isinstance(second, Interpolated)
    # D2 00h: between D1's raw 21h (2) and D2 03h (6)
    assert second.record.observations[0].temperature == 4
