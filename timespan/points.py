"""Temporal point capabilities.

A span never manipulates its endpoints directly. Ordering comes from the
point values themselves; everything else (duration arithmetic, text
conversion) goes through a point kind: an object implementing `Spanable`
and, optionally, `Parsable` and `Formatable`.

Point kinds are registered in order of specificity and looked up by value,
so a bare `Span` built from e.g. two `datetime.time` objects still knows how
to shift and display them.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from timespan.errors import FormattingError, ParsingError

P = TypeVar("P")

_DIRECTIVE = re.compile(r"%[-_0^#]?([A-Za-z%+])")

DATE_DIRECTIVES = frozenset("aAwdbBhmyYjUWcxGuVDFCe")
TIME_DIRECTIVES = frozenset("HIMSfpXTRrlkc")
ZONE_DIRECTIVES = frozenset("zZ")


class Spanable(ABC, Generic[P]):
    """Capability set every span endpoint type must provide."""

    name: str = "point"

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Return True if `value` is a point of this kind."""
        pass

    @abstractmethod
    def duration_since(self, point: P, other: P) -> timedelta:
        """Signed duration from `other` to `point`."""
        pass

    @abstractmethod
    def add(self, point: P, duration: timedelta) -> P:
        pass

    @abstractmethod
    def sub(self, point: P, duration: timedelta) -> P:
        pass

    @abstractmethod
    def to_str(self, point: P) -> str:
        """Native display form, used by `str(span)`."""
        pass

    @abstractmethod
    def from_str(self, raw: str) -> P:
        """Inverse of `to_str`. Raises ParsingError."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Parsable(ABC, Generic[P]):
    """Optional capability: parse a point under a format specifier."""

    @abstractmethod
    def parse(self, raw: str, fmt: str) -> P:
        """Parse `raw` under `fmt`. Raises ParsingError."""
        pass


class Formatable(ABC, Generic[P]):
    """Optional capability: render a point under a format specifier."""

    @abstractmethod
    def format(self, point: P, fmt: str) -> str:
        """Render `point` under `fmt`. Raises FormattingError."""
        pass


_REGISTRY: list[Spanable[Any]] = []


def register(kind: Spanable[Any]) -> Spanable[Any]:
    """Make `kind` available to `point_kind` lookups."""
    _REGISTRY.append(kind)
    return kind


def point_kind(value: Any) -> Spanable[Any]:
    """Return the first registered point kind accepting `value`.

    Raises:
        TypeError: If no registered kind accepts the value
    """
    for kind in _REGISTRY:
        if kind.accepts(value):
            return kind
    known = ", ".join(kind.name for kind in _REGISTRY) or "none"
    raise TypeError(
        f"Unsupported span endpoint type {type(value).__name__!r}: {value!r}\n"
        f"Registered point kinds: {known}\n"
        f"Hint: Subclass Span and bind a point kind:\n"
        f"  class MySpan(Span[MyPoint]):\n"
        f"      point = MyPointKind()"
    )


def directives(fmt: str) -> set[str]:
    """Return the strftime directive letters used in `fmt`."""
    return {letter for letter in _DIRECTIVE.findall(fmt) if letter != "%"}


def check_directives(
    fmt: str, forbidden: Iterable[str], kind: str, error: type[Exception]
) -> None:
    """Raise `error` if `fmt` uses any directive the point kind cannot carry."""
    bad = directives(fmt) & set(forbidden)
    if bad:
        listed = ", ".join(f"%{letter}" for letter in sorted(bad))
        raise error(f"format {fmt!r} uses directives not supported by {kind}: {listed}")


def strptime(raw: str, fmt: str) -> datetime:
    """`datetime.strptime` with failures reported as ParsingError."""
    try:
        return datetime.strptime(raw, fmt)
    except ValueError as exc:
        raise ParsingError(str(exc)) from exc


def strftime(point: Any, fmt: str) -> str:
    """`point.strftime` with failures reported as FormattingError."""
    try:
        return point.strftime(fmt)
    except (ValueError, UnicodeError) as exc:
        raise FormattingError(str(exc)) from exc


__all__ = [
    "Spanable",
    "Parsable",
    "Formatable",
    "register",
    "point_kind",
    "directives",
    "check_directives",
    "strptime",
    "strftime",
]
