"""Error taxonomy for timespan.

Every failure raised by span construction, the span algebra and template
parsing is a `SpanError`. Each subclass corresponds to exactly one
`ErrorKind`, so callers can either catch the class or branch on `err.kind`.

Example:
    >>> from timespan import NaiveTimeSpan, SpanError, ErrorKind
    >>> try:
    ...     NaiveTimeSpan.from_str("12:00:00 - 09:00:00")
    ... except SpanError as err:
    ...     err.kind is ErrorKind.ORDERING
    True
"""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure kinds, valued by their fixed description."""

    PARSING = "An error occurred while parsing a value"
    PATTERN = "An error occurred while creating a regular expression"
    FORMATTING = "An error occurred while formatting a value"
    ORDERING = "The start value is not smaller than the end value"
    OUT_OF_RANGE = "The resulting value is out of range"
    EMPTY = "The resulting span is empty"
    NOT_CONTINUOUS = "The resulting span is not continuous"
    NO_START = "The template has no {start} placeholder"
    NO_END = "The template has no {end} placeholder"
    LOCAL_AMBIGUOUS = "The local time is ambiguous or does not exist"
    BAD_FORMAT = "The input string is malformed"

    @property
    def description(self) -> str:
        return self.value


class SpanError(ValueError):
    """Base class for all timespan errors.

    Attributes:
        kind: The `ErrorKind` this error represents
        detail: Underlying message (collaborator error text for wrapping
            kinds, the kind's description otherwise)
    """

    kind: ErrorKind

    def __init__(self, detail: str | None = None):
        self.detail: str = detail or self.kind.description
        super().__init__(self.detail)


class ParsingError(SpanError):
    """A point could not be parsed under the given format."""

    kind = ErrorKind.PARSING


class PatternError(SpanError):
    """A template could not be translated into a matcher."""

    kind = ErrorKind.PATTERN


class FormattingError(SpanError):
    """A point could not be rendered under the given format."""

    kind = ErrorKind.FORMATTING


class OrderingError(SpanError):
    kind = ErrorKind.ORDERING


class OutOfRangeError(SpanError):
    kind = ErrorKind.OUT_OF_RANGE


class EmptyError(SpanError):
    kind = ErrorKind.EMPTY


class NotContinuousError(SpanError):
    kind = ErrorKind.NOT_CONTINUOUS


class NoStartError(SpanError):
    kind = ErrorKind.NO_START


class NoEndError(SpanError):
    kind = ErrorKind.NO_END


class LocalAmbiguousError(SpanError):
    kind = ErrorKind.LOCAL_AMBIGUOUS


class BadFormatError(SpanError):
    kind = ErrorKind.BAD_FORMAT


__all__ = [
    "ErrorKind",
    "SpanError",
    "ParsingError",
    "PatternError",
    "FormattingError",
    "OrderingError",
    "OutOfRangeError",
    "EmptyError",
    "NotContinuousError",
    "NoStartError",
    "NoEndError",
    "LocalAmbiguousError",
    "BadFormatError",
]
