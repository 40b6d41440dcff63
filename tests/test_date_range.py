from datetime import date, datetime, timedelta

from lead_dashboard.date_range import (
    MAX_RANGE_DAYS,
    DateRange,
    RangeController,
    format_wire_date,
    normalize,
    trailing_range,
)


def test_normalize_none_stays_none():
    assert normalize(None) is None


def test_reversed_bounds_are_swapped():
    for start, end in [
        (date(2024, 3, 10), date(2024, 1, 1)),
        (date(2024, 1, 2), date(2024, 1, 1)),
        (date(2023, 12, 31), date(2023, 12, 1)),
    ]:
        result = normalize(DateRange(start=start, end=end))
        assert result.start <= result.end
        assert result.start == end


def test_long_spans_are_clamped_to_59_days():
    start = date(2024, 1, 1)
    for days in (60, 61, 90, 365):
        result = normalize(DateRange(start=start, end=start + timedelta(days=days)))
        assert result.start == start
        assert result.end == start + timedelta(days=MAX_RANGE_DAYS - 1)


def test_spans_under_the_limit_are_kept():
    start = date(2024, 1, 1)
    end = start + timedelta(days=59)
    assert normalize(DateRange(start=start, end=end)) == DateRange(start=start, end=end)


def test_reversed_range_within_limit_keeps_both_bounds():
    result = normalize(DateRange(start=date(2024, 2, 20), end=date(2024, 1, 1)))
    assert result == DateRange(start=date(2024, 1, 1), end=date(2024, 2, 20))


def test_reversed_range_over_limit_is_swapped_then_clamped():
    result = normalize(DateRange(start=date(2024, 3, 10), end=date(2024, 1, 1)))
    assert result == DateRange(start=date(2024, 1, 1), end=date(2024, 2, 29))


def test_open_bounds_are_left_alone():
    assert normalize(DateRange(start=None, end=date(2024, 1, 1))) == DateRange(end=date(2024, 1, 1))
    assert normalize(DateRange(start=date(2024, 1, 1))) == DateRange(start=date(2024, 1, 1))
    future = date.today() + timedelta(days=10)
    assert normalize(DateRange(start=future, end=future)).end == future


def test_datetimes_are_reduced_to_dates():
    value = DateRange(start=datetime(2024, 1, 1, 23, 59), end=datetime(2024, 1, 5, 0, 1))
    assert value.start == date(2024, 1, 1)
    assert value.span_days == 4


def test_wire_format_and_trailing_range():
    assert format_wire_date(date(2024, 3, 5)) == "2024/03/05"
    default = trailing_range(date(2024, 3, 10))
    assert default.end == date(2024, 3, 10)
    assert default.span_days == MAX_RANGE_DAYS - 1
    assert normalize(default) == default


def test_controller_notifies_only_on_change():
    seen = []
    controller = RangeController(on_change=seen.append)
    first = controller.propose(DateRange(start=date(2024, 2, 1), end=date(2024, 1, 1)))
    controller.propose(DateRange(start=date(2024, 1, 1), end=date(2024, 2, 1)))

    assert first == DateRange(start=date(2024, 1, 1), end=date(2024, 2, 1))
    assert seen == [first]
    assert controller.current == first


def test_controller_refresh_renotifies_current_range():
    seen = []
    initial = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31))
    controller = RangeController(initial=initial, on_change=seen.append)
    controller.refresh()
    controller.propose(None)
    assert seen == [initial, None]
    assert controller.current is None


def test_debounce_without_event_loop_notifies_immediately():
    seen = []
    controller = RangeController(on_change=seen.append, debounce_seconds=5)
    controller.propose(DateRange(start=date(2024, 1, 1), end=date(2024, 1, 2)))
    assert len(seen) == 1
