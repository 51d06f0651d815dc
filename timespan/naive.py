"""Spans over zone-naive points: times of day, dates and naive datetimes."""

from datetime import date, datetime, time, timedelta
from typing import Any

from dateutil.parser import isoparse
from typing_extensions import override

from timespan.errors import FormattingError, ParsingError
from timespan.points import (
    DATE_DIRECTIVES,
    TIME_DIRECTIVES,
    ZONE_DIRECTIVES,
    Formatable,
    Parsable,
    Spanable,
    check_directives,
    register,
    strftime,
    strptime,
)
from timespan.span import Span
from timespan.util import DAY_MICROSECONDS

_MICROSECOND = timedelta(microseconds=1)


def _micros(point: time) -> int:
    return (
        (point.hour * 60 + point.minute) * 60 + point.second
    ) * 1_000_000 + point.microsecond


def _from_micros(micros: int, template: time) -> time:
    seconds, microsecond = divmod(micros, 1_000_000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return template.replace(
        hour=hour, minute=minute, second=second, microsecond=microsecond
    )


class NaiveTimePoint(Spanable[time], Parsable[time], Formatable[time]):
    """Time of day. Arithmetic wraps around midnight."""

    name = "time"
    _unsupported = DATE_DIRECTIVES | ZONE_DIRECTIVES

    @override
    def accepts(self, value: Any) -> bool:
        return isinstance(value, time)

    @override
    def duration_since(self, point: time, other: time) -> timedelta:
        return (_micros(point) - _micros(other)) * _MICROSECOND

    @override
    def add(self, point: time, duration: timedelta) -> time:
        micros = _micros(point) + duration // _MICROSECOND
        return _from_micros(micros % DAY_MICROSECONDS, point)

    @override
    def sub(self, point: time, duration: timedelta) -> time:
        return self.add(point, -duration)

    @override
    def to_str(self, point: time) -> str:
        return point.isoformat()

    @override
    def from_str(self, raw: str) -> time:
        try:
            return time.fromisoformat(raw)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc

    @override
    def parse(self, raw: str, fmt: str) -> time:
        check_directives(fmt, self._unsupported, self.name, ParsingError)
        return strptime(raw, fmt).time()

    @override
    def format(self, point: time, fmt: str) -> str:
        check_directives(fmt, self._unsupported, self.name, FormattingError)
        return strftime(point, fmt)


class NaiveDatePoint(Spanable[date], Parsable[date], Formatable[date]):
    """Calendar date. Sub-day parts of a duration are dropped."""

    name = "date"
    _unsupported = TIME_DIRECTIVES | ZONE_DIRECTIVES

    @override
    def accepts(self, value: Any) -> bool:
        return isinstance(value, date) and not isinstance(value, datetime)

    @override
    def duration_since(self, point: date, other: date) -> timedelta:
        return point - other

    @override
    def add(self, point: date, duration: timedelta) -> date:
        return point + duration

    @override
    def sub(self, point: date, duration: timedelta) -> date:
        return point - duration

    @override
    def to_str(self, point: date) -> str:
        return point.isoformat()

    @override
    def from_str(self, raw: str) -> date:
        try:
            return date.fromisoformat(raw)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc

    @override
    def parse(self, raw: str, fmt: str) -> date:
        check_directives(fmt, self._unsupported, self.name, ParsingError)
        return strptime(raw, fmt).date()

    @override
    def format(self, point: date, fmt: str) -> str:
        check_directives(fmt, self._unsupported, self.name, FormattingError)
        return strftime(point, fmt)


class NaiveDateTimePoint(Spanable[datetime], Parsable[datetime], Formatable[datetime]):
    """Date and time without a zone."""

    name = "naive datetime"

    @override
    def accepts(self, value: Any) -> bool:
        return isinstance(value, datetime) and value.tzinfo is None

    @override
    def duration_since(self, point: datetime, other: datetime) -> timedelta:
        return point - other

    @override
    def add(self, point: datetime, duration: timedelta) -> datetime:
        return point + duration

    @override
    def sub(self, point: datetime, duration: timedelta) -> datetime:
        return point - duration

    @override
    def to_str(self, point: datetime) -> str:
        return point.isoformat(sep=" ")

    @override
    def from_str(self, raw: str) -> datetime:
        try:
            point = isoparse(raw)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc
        if point.tzinfo is not None:
            raise ParsingError(f"{raw!r} carries a UTC offset, expected a naive datetime")
        return point

    @override
    def parse(self, raw: str, fmt: str) -> datetime:
        check_directives(fmt, ZONE_DIRECTIVES, self.name, ParsingError)
        return strptime(raw, fmt)

    @override
    def format(self, point: datetime, fmt: str) -> str:
        check_directives(fmt, ZONE_DIRECTIVES, self.name, FormattingError)
        return strftime(point, fmt)


NAIVE_DATETIME = register(NaiveDateTimePoint())
NAIVE_DATE = register(NaiveDatePoint())
NAIVE_TIME = register(NaiveTimePoint())


class NaiveTimeSpan(Span[time]):
    """Span between two times of day.

    Example:
        >>> span = NaiveTimeSpan.from_str("17:30:00 - 19:15:00")
        >>> str(span.format("from {start} to {end}", "%H:%M", "%H:%M"))
        'from 17:30 to 19:15'
    """

    point = NAIVE_TIME


class NaiveDateSpan(Span[date]):
    """Span between two calendar dates, e.g. `"2017-12-24 - 2017-12-26"`."""

    point = NAIVE_DATE


class NaiveDateTimeSpan(Span[datetime]):
    """Span between two naive datetimes.

    Accepts both `T` and space separated ISO points:
    `"2018-05-15T21:00:00 - 2018-06-14T21:00:00"`.
    """

    point = NAIVE_DATETIME


__all__ = [
    "NaiveTimePoint",
    "NaiveDatePoint",
    "NaiveDateTimePoint",
    "NaiveTimeSpan",
    "NaiveDateSpan",
    "NaiveDateTimeSpan",
]
