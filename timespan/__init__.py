from .errors import (
    BadFormatError,
    EmptyError,
    ErrorKind,
    FormattingError,
    LocalAmbiguousError,
    NoEndError,
    NoStartError,
    NotContinuousError,
    OrderingError,
    OutOfRangeError,
    ParsingError,
    PatternError,
    SpanError,
)
from .naive import (
    NaiveDatePoint,
    NaiveDateSpan,
    NaiveDateTimePoint,
    NaiveDateTimeSpan,
    NaiveTimePoint,
    NaiveTimeSpan,
)
from .points import Formatable, Parsable, Spanable, point_kind, register
from .span import Span
from .template import DelayedFormat
from .zoned import (
    DateTimePoint,
    DateTimeSpan,
    LocalResult,
    LocalTime,
    ZonedDatePoint,
    ZonedDateSpan,
    ZonedDateTimePoint,
    ZonedDateTimeSpan,
    localize,
    named_zone,
    resolve_local,
)

__all__ = [
    "Span",
    "DelayedFormat",
    "NaiveTimeSpan",
    "NaiveDateSpan",
    "NaiveDateTimeSpan",
    "DateTimeSpan",
    "ZonedDateTimeSpan",
    "ZonedDateSpan",
    "Spanable",
    "Parsable",
    "Formatable",
    "register",
    "point_kind",
    "NaiveTimePoint",
    "NaiveDatePoint",
    "NaiveDateTimePoint",
    "DateTimePoint",
    "ZonedDateTimePoint",
    "ZonedDatePoint",
    "LocalResult",
    "LocalTime",
    "resolve_local",
    "localize",
    "named_zone",
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
