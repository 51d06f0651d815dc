from datetime import date, datetime, time, timedelta, timezone

import pytest
from typing_extensions import override

from timespan import (
    DateTimePoint,
    FormattingError,
    NaiveDatePoint,
    NaiveDateSpan,
    NaiveDateTimePoint,
    NaiveTimePoint,
    ParsingError,
    Span,
    Spanable,
    point_kind,
)
from timespan.points import directives


class TestNaiveTimePoint:
    kind = NaiveTimePoint()

    def test_arithmetic_wraps_around_midnight(self) -> None:
        assert self.kind.add(time(23, 30), timedelta(hours=1)) == time(0, 30)
        assert self.kind.sub(time(0, 30), timedelta(hours=1)) == time(23, 30)
        assert self.kind.add(time(10), timedelta(days=2, minutes=5)) == time(10, 5)
        assert self.kind.add(time(10), timedelta(microseconds=1)) == time(
            10, 0, 0, 1
        )

    def test_duration_since_is_signed(self) -> None:
        assert self.kind.duration_since(time(10), time(9)) == timedelta(hours=1)
        assert self.kind.duration_since(time(9), time(10)) == timedelta(hours=-1)

    def test_parse_and_format(self) -> None:
        assert self.kind.parse("09.30", "%H.%M") == time(9, 30)
        assert self.kind.format(time(9, 30), "%H.%M") == "09.30"
        assert self.kind.format(time(9, 30), "") == ""

    def test_rejects_date_directives(self) -> None:
        with pytest.raises(ParsingError, match="not supported by time: %d"):
            self.kind.parse("01 09:30", "%d %H:%M")
        with pytest.raises(FormattingError, match="%Y"):
            self.kind.format(time(9, 30), "%Y")

    def test_native_text(self) -> None:
        assert self.kind.to_str(time(9, 30)) == "09:30:00"
        assert self.kind.from_str("09:30:00") == time(9, 30)

        with pytest.raises(ParsingError):
            self.kind.from_str("")
        with pytest.raises(ParsingError):
            self.kind.from_str("25:00:00")


class TestNaiveDatePoint:
    kind = NaiveDatePoint()

    def test_arithmetic(self) -> None:
        assert self.kind.add(date(2017, 12, 24), timedelta(days=2)) == date(2017, 12, 26)
        assert self.kind.sub(date(2017, 3, 1), timedelta(days=1)) == date(2017, 2, 28)
        assert self.kind.duration_since(date(2017, 12, 26), date(2017, 12, 24)) == (
            timedelta(days=2)
        )

    def test_parse_and_format(self) -> None:
        assert self.kind.parse("24.12.2017", "%d.%m.%Y") == date(2017, 12, 24)
        assert self.kind.format(date(2017, 12, 24), "%d %b %Y") == "24 Dec 2017"

    def test_rejects_time_directives(self) -> None:
        with pytest.raises(FormattingError):
            self.kind.format(date(2017, 12, 24), "%Y %H")
        with pytest.raises(ParsingError):
            self.kind.parse("2017 12", "%Y %H")

    def test_does_not_accept_datetimes(self) -> None:
        assert self.kind.accepts(date(2017, 12, 24))
        assert not self.kind.accepts(datetime(2017, 12, 24))


class TestNaiveDateTimePoint:
    kind = NaiveDateTimePoint()

    def test_native_text_accepts_both_separators(self) -> None:
        expected = datetime(2018, 5, 15, 21, 0)

        assert self.kind.from_str("2018-05-15T21:00:00") == expected
        assert self.kind.from_str("2018-05-15 21:00:00") == expected
        assert self.kind.to_str(expected) == "2018-05-15 21:00:00"

    def test_rejects_offsets(self) -> None:
        with pytest.raises(ParsingError, match="expected a naive datetime"):
            self.kind.from_str("2018-05-15T21:00:00+02:00")
        with pytest.raises(FormattingError):
            self.kind.format(datetime(2018, 5, 15), "%Y %z")

    def test_parse_and_format(self) -> None:
        point = self.kind.parse("15/05/2018 21h", "%d/%m/%Y %Hh")
        assert point == datetime(2018, 5, 15, 21)
        assert self.kind.format(point, "%Y-%m-%d %H:%M") == "2018-05-15 21:00"


def test_directives() -> None:
    assert directives("%H.%M %%Y") == {"H", "M"}
    assert directives("%-d.%m.%Y") == {"d", "m", "Y"}
    assert directives("no directives") == set()


@pytest.mark.parametrize(
    "value, kind",
    [
        (time(9), NaiveTimePoint),
        (date(2017, 12, 24), NaiveDatePoint),
        (datetime(2017, 12, 24, 18), NaiveDateTimePoint),
        (datetime(2017, 12, 24, 18, tzinfo=timezone.utc), DateTimePoint),
    ],
)
def test_point_kind_lookup(value: object, kind: type) -> None:
    assert isinstance(point_kind(value), kind)


def test_point_kind_lookup_rejects_unknown_types() -> None:
    with pytest.raises(TypeError, match="Registered point kinds: naive datetime"):
        point_kind("09:00")


class SecondsPoint(Spanable[int]):
    """Integer seconds, to exercise a point kind outside datetime."""

    name = "seconds"

    @override
    def accepts(self, value: object) -> bool:
        return isinstance(value, int)

    @override
    def duration_since(self, point: int, other: int) -> timedelta:
        return timedelta(seconds=point - other)

    @override
    def add(self, point: int, duration: timedelta) -> int:
        return point + int(duration.total_seconds())

    @override
    def sub(self, point: int, duration: timedelta) -> int:
        return point - int(duration.total_seconds())

    @override
    def to_str(self, point: int) -> str:
        return str(point)

    @override
    def from_str(self, raw: str) -> int:
        try:
            return int(raw)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc


class SecondsSpan(Span[int]):
    point = SecondsPoint()


class TestCustomPointKind:
    def test_algebra_and_arithmetic(self) -> None:
        span = SecondsSpan.from_str("10 - 20")

        assert span.duration() == timedelta(seconds=10)
        assert span.union(SecondsSpan(start=15, end=30)) == SecondsSpan(start=10, end=30)

        span.append(timedelta(seconds=5))
        assert str(span) == "10 - 25"

    def test_optional_capabilities(self) -> None:
        span = SecondsSpan(start=1, end=2)

        with pytest.raises(TypeError, match="does not support format specifiers"):
            SecondsSpan.parse_from_str("1 to 2", "{start} to {end}", "%S", "%S")
        with pytest.raises(FormattingError):
            str(span.format("{start} to {end}", "%S", "%S"))
        with pytest.raises(ValueError, match="Unknown format code"):
            format(span, "%S")
        assert format(span, "") == "1 - 2"


def test_date_span_from_format() -> None:
    span = NaiveDateSpan.parse_from_str(
        "24.12.2017 bis 26.12.2017", "{start} bis {end}", "%d.%m.%Y", "%d.%m.%Y"
    )
    assert span == NaiveDateSpan(start=date(2017, 12, 24), end=date(2017, 12, 26))
