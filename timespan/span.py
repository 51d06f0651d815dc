from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, ClassVar, Generic, Self, TypeVar

from timespan.errors import (
    EmptyError,
    NotContinuousError,
    OrderingError,
    OutOfRangeError,
)
from timespan.points import Formatable, Parsable, Spanable, point_kind
from timespan.template import DelayedFormat, parse_template, split_default
from timespan.util import DISPLAY_TEMPLATE, END, START

P = TypeVar("P")


@dataclass(kw_only=True)
class Span(Generic[P]):
    """A closed range of time between two points, with `start < end`.

    Spans are mutable values: `append`, `prepend`, `pop` and `shift` move one
    endpoint in place and leave the span untouched when they fail. Every
    other operation returns a new span of the same class.

    Concrete aliases (`NaiveTimeSpan`, `NaiveDateSpan`, `NaiveDateTimeSpan`,
    `DateTimeSpan`, `ZonedDateTimeSpan`, `ZonedDateSpan`) bind a point kind,
    which the parsing class methods need. A bare `Span` infers its point kind
    from `start`.
    """

    start: P
    end: P

    point: ClassVar[Spanable[Any] | None] = None

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise OrderingError(
                f"Span start ({self.start}) must be < end ({self.end})"
            )

    def kind(self) -> Spanable[P]:
        """Point kind used for arithmetic and text conversion."""
        return type(self).point or point_kind(self.start)

    @classmethod
    def _class_kind(cls, operation: str) -> Spanable[P]:
        if cls.point is None:
            raise TypeError(
                f"{cls.__name__}.{operation}() needs a span class bound to a point kind.\n"
                f"Hint: Use a concrete alias such as NaiveTimeSpan, NaiveDateSpan,\n"
                f"      NaiveDateTimeSpan, DateTimeSpan, ZonedDateTimeSpan or ZonedDateSpan:\n"
                f"  NaiveTimeSpan.{operation}(...)"
            )
        return cls.point

    # Text

    @classmethod
    def from_str(cls, s: str) -> Self:
        """Parse the default `"<start> - <end>"` form produced by `str()`.

        Raises:
            ParsingError: If either side is not a valid point
            OrderingError: If start is not before end
        """
        kind = cls._class_kind("from_str")
        start, end = split_default(s)
        return cls(start=kind.from_str(start), end=kind.from_str(end))

    @classmethod
    def parse_from_str(cls, s: str, template: str, start: str, end: str) -> Self:
        """Parse `s` using a `{start}`/`{end}` template and two point formats.

        Args:
            s: Input string
            template: Template containing `{start}` and `{end}` once each
            start: Format specifier for the start point
            end: Format specifier for the end point

        Raises:
            PatternError, EmptyError, NoStartError, NoEndError: See
                `timespan.template.parse_template`
            ParsingError: If a point does not match its format
            OrderingError: If start is not before end

        Example:
            >>> NaiveTimeSpan.parse_from_str(
            ...     "from 09.00 to 17.00 on Monday",
            ...     "from {start} to {end} on Monday",
            ...     "%H.%M",
            ...     "%H.%M",
            ... )
            NaiveTimeSpan(start=datetime.time(9, 0), end=datetime.time(17, 0))
        """
        kind = cls._class_kind("parse_from_str")
        if not isinstance(kind, Parsable):
            raise TypeError(
                f"Point kind {type(kind).__name__} of {cls.__name__} "
                f"does not support format specifiers"
            )
        raw_start, raw_end = parse_template(s, template)
        return cls(start=kind.parse(raw_start, start), end=kind.parse(raw_end, end))

    def format(self, template: str, start: str, end: str) -> DelayedFormat:
        """Return a lazy renderer substituting both points into `template`."""
        return DelayedFormat(span=self.copy(), template=template, start=start, end=end)

    def __str__(self) -> str:
        kind = self.kind()
        return DISPLAY_TEMPLATE.replace(START, kind.to_str(self.start)).replace(
            END, kind.to_str(self.end)
        )

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        if not isinstance(self.kind(), Formatable):
            raise ValueError(
                f"Unknown format code {format_spec!r} for {type(self).__name__}"
            )
        return self.format(DISPLAY_TEMPLATE, format_spec, format_spec).render()

    # Queries

    def duration(self) -> timedelta:
        return self.kind().duration_since(self.end, self.start)

    def contains(self, point: P) -> bool:
        """True if `point` lies within the span, both ends inclusive."""
        return self.start <= point <= self.end

    def is_disjoint(self, other: "Span[P]") -> bool:
        return self.end <= other.start or self.start >= other.end

    def is_subset(self, other: "Span[P]") -> bool:
        return self.start >= other.start and self.end <= other.end

    def is_superset(self, other: "Span[P]") -> bool:
        return self.start <= other.start and self.end >= other.end

    # Algebra

    def difference(self, other: "Span[P]") -> Self:
        """The part of this span not covered by `other`.

        Raises:
            EmptyError: If `other` covers this span completely
            NotContinuousError: If `other` lies strictly inside this span,
                which would leave two pieces
        """
        if self.start >= other.start and self.end <= other.end:
            raise EmptyError()
        if self.end <= other.start or self.start >= other.end:
            return self.copy()
        if other.start < self.end <= other.end and self.start < other.start:
            return replace(self, end=other.start)
        if other.start <= self.start < other.end and self.end > other.end:
            return replace(self, start=other.end)
        raise NotContinuousError()

    def symmetric_difference(self, other: "Span[P]") -> Self:
        """Concatenate two exactly adjacent spans.

        Only adjacency is supported: any other pair would produce zero or
        two pieces and raises NotContinuousError.
        """
        if self.end == other.start:
            return replace(self, end=other.end)
        if other.end == self.start:
            return replace(self, start=other.start)
        raise NotContinuousError()

    def intersection(self, other: "Span[P]") -> Self:
        """The overlap of both spans.

        Raises:
            EmptyError: If the spans only touch at one endpoint
            NotContinuousError: If the spans are separated by a gap
        """
        # Touching endpoints first, before the general gap test
        if self.end == other.start:
            raise EmptyError()
        if self.end < other.start or other.end < self.start:
            raise NotContinuousError()
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start == end:
            raise EmptyError()
        return replace(self, start=start, end=end)

    def union(self, other: "Span[P]") -> Self:
        """The smallest span covering both; touching spans merge.

        Raises:
            NotContinuousError: If the spans are separated by a gap
        """
        if self.end < other.start or other.end < self.start:
            raise NotContinuousError()
        return replace(
            self, start=min(self.start, other.start), end=max(self.end, other.end)
        )

    def split_off(self, at: P) -> tuple[Self, Self]:
        """Split into `[start, at]` and `[at, end]`.

        Raises:
            OutOfRangeError: Unless `start < at < end`
        """
        if self.start >= at or self.end <= at:
            raise OutOfRangeError(f"Split point {at} is not inside {self}")
        return replace(self, end=at), replace(self, start=at)

    # Displacement (in place)

    def append(self, duration: timedelta) -> None:
        """Move the end forward by `duration`."""
        end = self._displace(self.end, duration, forward=True)
        if end <= self.start:
            raise EmptyError()
        self.end = end

    def prepend(self, duration: timedelta) -> None:
        """Move the start backward by `duration`."""
        start = self._displace(self.start, duration, forward=False)
        if start >= self.end:
            raise EmptyError()
        self.start = start

    def pop(self, duration: timedelta) -> None:
        """Move the end backward by `duration`."""
        end = self._displace(self.end, duration, forward=False)
        if end <= self.start:
            raise EmptyError()
        self.end = end

    def shift(self, duration: timedelta) -> None:
        """Move the start forward by `duration`."""
        start = self._displace(self.start, duration, forward=True)
        if start >= self.end:
            raise EmptyError()
        self.start = start

    def _displace(self, point: P, duration: timedelta, *, forward: bool) -> P:
        kind = self.kind()
        try:
            return kind.add(point, duration) if forward else kind.sub(point, duration)
        except OverflowError as exc:
            raise OutOfRangeError(str(exc)) from exc

    def copy(self) -> Self:
        return replace(self)

    # Operators

    def __contains__(self, point: P) -> bool:
        return self.contains(point)

    def __or__(self, other: "Span[P]") -> Self:
        return self.union(other)

    def __and__(self, other: "Span[P]") -> Self:
        return self.intersection(other)

    def __sub__(self, other: "Span[P]") -> Self:
        return self.difference(other)

    def __xor__(self, other: "Span[P]") -> Self:
        return self.symmetric_difference(other)

    def __le__(self, other: "Span[P]") -> bool:
        return self.is_subset(other)

    def __ge__(self, other: "Span[P]") -> bool:
        return self.is_superset(other)
