"""Spans over zone-aware datetimes and dates.

Aware points are compared and displaced in absolute time, so a span crossing
a DST transition has its real elapsed duration. Wall times without an offset
are placed in a zone through `resolve_local`, which reports whether the wall
time maps to no instant (a gap), one instant, or two (a fold).

Example:
    >>> naive = NaiveDateTimeSpan.from_str("2017-04-02T18:15:00 - 2017-04-02T19:45:00")
    >>> str(ZonedDateTimeSpan.from_utc(naive, "Europe/Berlin"))
    '2017-04-02 20:15:00+02:00 Europe/Berlin - 2017-04-02 21:45:00+02:00 Europe/Berlin'
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any, Self
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.parser import isoparse
from dateutil.tz import datetime_ambiguous, datetime_exists
from typing_extensions import override

from timespan.errors import (
    BadFormatError,
    FormattingError,
    LocalAmbiguousError,
    ParsingError,
)
from timespan.naive import NaiveDateSpan, NaiveDateTimeSpan
from timespan.points import (
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
from timespan.util import DEFAULT_TZ

logger = logging.getLogger(__name__)

_ZONE_SUFFIX = re.compile(r"(.*\S)\s+(\S+)$")


def as_zone(tz: str | tzinfo) -> tzinfo:
    """Coerce an IANA zone name or tzinfo into a tzinfo."""
    if isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz)


class LocalResult(Enum):
    NONE = "none"
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class LocalTime:
    """Outcome of placing a wall time in a zone.

    Attributes:
        result: How many instants the wall time maps to
        candidates: Those instants, earliest first
    """

    result: LocalResult
    candidates: tuple[datetime, ...]

    def single(self) -> datetime:
        """Return the only candidate.

        Raises:
            LocalAmbiguousError: If the wall time falls in a gap or a fold
        """
        if self.result is not LocalResult.ONE:
            raise LocalAmbiguousError(
                f"local time has {len(self.candidates)} candidates"
            )
        return self.candidates[0]


def resolve_local(wall: datetime, tz: str | tzinfo) -> LocalTime:
    """Place the wall time `wall` (any tzinfo is ignored) in zone `tz`."""
    zone = as_zone(tz)
    wall = wall.replace(tzinfo=None)

    if not datetime_exists(wall, zone):
        logger.debug("Wall time %s does not exist in %s", wall, zone)
        return LocalTime(LocalResult.NONE, ())

    if datetime_ambiguous(wall, zone):
        logger.debug("Wall time %s is ambiguous in %s", wall, zone)
        return LocalTime(
            LocalResult.MANY,
            (wall.replace(tzinfo=zone, fold=0), wall.replace(tzinfo=zone, fold=1)),
        )

    return LocalTime(LocalResult.ONE, (wall.replace(tzinfo=zone),))


def localize(wall: datetime, tz: str | tzinfo) -> datetime:
    """Shorthand for `resolve_local(wall, tz).single()`."""
    return resolve_local(wall, tz).single()


def named_zone(tz: str | tzinfo) -> ZoneInfo:
    """Coerce `tz` into a zone that can be written by its IANA name.

    Raises:
        BadFormatError: If the name is unknown or the zone has no name
    """
    if isinstance(tz, str):
        try:
            return ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise BadFormatError(f"{tz!r} is not a known time zone") from exc
    if isinstance(tz, ZoneInfo) and tz.key:
        return tz
    raise BadFormatError(f"{tz!r} has no IANA time zone name")


def _split_zone(raw: str) -> tuple[str, ZoneInfo]:
    match = _ZONE_SUFFIX.match(raw)
    if match is None:
        raise BadFormatError(f"{raw!r} does not end with a time zone name")
    wall, name = match.groups()
    return wall, named_zone(name)


class _AwarePoint(Spanable[datetime], Formatable[datetime]):
    """Arithmetic shared by aware datetime kinds, carried out in UTC."""

    @override
    def accepts(self, value: Any) -> bool:
        return isinstance(value, datetime) and value.utcoffset() is not None

    @override
    def duration_since(self, point: datetime, other: datetime) -> timedelta:
        return point.astimezone(timezone.utc) - other.astimezone(timezone.utc)

    @override
    def add(self, point: datetime, duration: timedelta) -> datetime:
        return (point.astimezone(timezone.utc) + duration).astimezone(point.tzinfo)

    @override
    def sub(self, point: datetime, duration: timedelta) -> datetime:
        return self.add(point, -duration)

    @override
    def format(self, point: datetime, fmt: str) -> str:
        return strftime(point, fmt)


class DateTimePoint(_AwarePoint, Parsable[datetime]):
    """Aware datetime. Wall times without an offset are placed in `tz`."""

    name = "aware datetime"

    def __init__(self, tz: str | tzinfo = DEFAULT_TZ):
        """
        Args:
            tz: IANA timezone name (e.g., "UTC", "Europe/Berlin") or tzinfo
        """
        self.zone: tzinfo = as_zone(tz)

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(tz={str(self.zone)!r})"

    def _attach(self, point: datetime) -> datetime:
        if point.tzinfo is None:
            return localize(point, self.zone)
        return point

    @override
    def to_str(self, point: datetime) -> str:
        return point.isoformat(sep=" ")

    @override
    def from_str(self, raw: str) -> datetime:
        try:
            point = isoparse(raw)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc
        return self._attach(point)

    @override
    def parse(self, raw: str, fmt: str) -> datetime:
        return self._attach(strptime(raw, fmt))


class ZonedDateTimePoint(_AwarePoint, Parsable[datetime]):
    """Aware datetime written with its UTC offset and its zone name.

    Native form is `"2017-10-29 02:30:00+02:00 Europe/Berlin"`. The offset
    picks the instant when the wall time occurs twice; without one the wall
    time must be unambiguous in the zone. When parsing with a format
    specifier, the zone name is still expected after the formatted wall
    time, separated by whitespace.
    """

    name = "zoned datetime"

    @override
    def accepts(self, value: Any) -> bool:
        return (
            isinstance(value, datetime)
            and isinstance(value.tzinfo, ZoneInfo)
            and bool(value.tzinfo.key)
        )

    def _place(self, wall: datetime, zone: ZoneInfo) -> datetime:
        if wall.tzinfo is None:
            return localize(wall, zone)

        point = wall.astimezone(zone)
        if point.utcoffset() != wall.utcoffset():
            raise BadFormatError(
                f"offset of {wall.isoformat(sep=' ')} does not match {zone.key}"
            )
        return point

    @override
    def to_str(self, point: datetime) -> str:
        return f"{point.isoformat(sep=' ')} {named_zone(point.tzinfo).key}"

    @override
    def from_str(self, raw: str) -> datetime:
        wall, zone = _split_zone(raw)
        try:
            point = isoparse(wall)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc
        return self._place(point, zone)

    @override
    def parse(self, raw: str, fmt: str) -> datetime:
        wall, zone = _split_zone(raw)
        return self._place(strptime(wall, fmt), zone)


class ZonedDatePoint(Spanable[datetime], Parsable[datetime], Formatable[datetime]):
    """Calendar date in a named zone, held as the aware start of that day.

    Native form is `"2017-12-24 Europe/Berlin"`. Arithmetic moves by whole
    days on the wall calendar; sub-day parts of a duration are dropped.
    """

    name = "zoned date"
    _unsupported = TIME_DIRECTIVES | ZONE_DIRECTIVES

    @override
    def accepts(self, value: Any) -> bool:
        return (
            isinstance(value, datetime)
            and isinstance(value.tzinfo, ZoneInfo)
            and value.time() == time()
        )

    @staticmethod
    def midnight(day: date, tz: str | tzinfo) -> datetime:
        """Start of `day` in zone `tz`.

        Raises:
            LocalAmbiguousError: If midnight falls in a DST gap or fold
        """
        return localize(datetime.combine(day, time()), named_zone(tz))

    @override
    def duration_since(self, point: datetime, other: datetime) -> timedelta:
        return point.date() - other.date()

    @override
    def add(self, point: datetime, duration: timedelta) -> datetime:
        return self.midnight(point.date() + duration, point.tzinfo)

    @override
    def sub(self, point: datetime, duration: timedelta) -> datetime:
        return self.midnight(point.date() - duration, point.tzinfo)

    @override
    def to_str(self, point: datetime) -> str:
        return f"{point.date().isoformat()} {named_zone(point.tzinfo).key}"

    @override
    def from_str(self, raw: str) -> datetime:
        day, zone = _split_zone(raw)
        try:
            wall = date.fromisoformat(day)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc
        return self.midnight(wall, zone)

    @override
    def parse(self, raw: str, fmt: str) -> datetime:
        day, zone = _split_zone(raw)
        check_directives(fmt, self._unsupported, self.name, ParsingError)
        return self.midnight(strptime(day, fmt).date(), zone)

    @override
    def format(self, point: datetime, fmt: str) -> str:
        check_directives(fmt, TIME_DIRECTIVES, self.name, FormattingError)
        return strftime(point, fmt)


AWARE_DATETIME = register(DateTimePoint())


class DateTimeSpan(Span[datetime]):
    """Span between two aware datetimes.

    Points are written in ISO form with a UTC offset,
    `"2017-01-01 15:10:00+02:00 - 2017-01-02 09:30:00+02:00"`; points without
    an offset are read as UTC. Bind another zone by subclassing:

        >>> class BerlinSpan(DateTimeSpan):
        ...     point = DateTimePoint("Europe/Berlin")
    """

    point = AWARE_DATETIME

    @classmethod
    def _zone(cls, tz: str | tzinfo) -> tzinfo:
        return as_zone(tz)

    @classmethod
    def from_utc(cls, span: NaiveDateTimeSpan, tz: str | tzinfo) -> Self:
        """Read a naive span as UTC and express it in zone `tz`."""
        zone = cls._zone(tz)
        return cls(
            start=span.start.replace(tzinfo=timezone.utc).astimezone(zone),
            end=span.end.replace(tzinfo=timezone.utc).astimezone(zone),
        )

    @classmethod
    def from_local(cls, span: NaiveDateTimeSpan, tz: str | tzinfo) -> Self:
        """Read a naive span as wall times in zone `tz`.

        Raises:
            LocalAmbiguousError: If either endpoint falls in a DST gap or fold
        """
        zone = cls._zone(tz)
        return cls(start=localize(span.start, zone), end=localize(span.end, zone))


class ZonedDateTimeSpan(DateTimeSpan):
    """Span between two aware datetimes written with zone names.

    `"2017-04-02 20:15:00+02:00 Europe/Berlin - 2017-04-02 21:45:00+02:00 Europe/Berlin"`.
    The offsets may be left out where the wall time is unambiguous.

    `from_utc` and `from_local` raise `BadFormatError` for zones without an
    IANA name, such as fixed offsets.
    """

    point = ZonedDateTimePoint()

    @classmethod
    @override
    def _zone(cls, tz: str | tzinfo) -> tzinfo:
        return named_zone(tz)


class ZonedDateSpan(Span[datetime]):
    """Span between two calendar dates in named zones.

    Example:
        >>> span = ZonedDateSpan.from_str("2017-12-24 Europe/Berlin - 2017-12-26 Europe/Berlin")
        >>> span.duration()
        datetime.timedelta(days=2)
    """

    point = ZonedDatePoint()

    @classmethod
    def from_dates(cls, span: NaiveDateSpan, tz: str | tzinfo) -> Self:
        """Place both dates of a naive date span in zone `tz`."""
        return cls(
            start=ZonedDatePoint.midnight(span.start, tz),
            end=ZonedDatePoint.midnight(span.end, tz),
        )


__all__ = [
    "LocalResult",
    "LocalTime",
    "resolve_local",
    "localize",
    "as_zone",
    "named_zone",
    "DateTimePoint",
    "ZonedDateTimePoint",
    "ZonedDatePoint",
    "DateTimeSpan",
    "ZonedDateTimeSpan",
    "ZonedDateSpan",
]
