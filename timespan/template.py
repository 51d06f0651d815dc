"""Template parsing and lazy formatting for spans.

A template is an arbitrary string containing the placeholders `{start}` and
`{end}` exactly once each, in either order:

    >>> parse_template("end: 17.00, start: 09.00", "end: {end}, start: {start}")
    ('09.00', '17.00')

Each extracted substring is then parsed with its own point format specifier
by `Span.parse_from_str`. The reverse direction is `DelayedFormat`, which
captures a span together with a template and renders only on `str()`.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from timespan.errors import (
    EmptyError,
    FormattingError,
    NoEndError,
    NoStartError,
    PatternError,
)
from timespan.points import Formatable
from timespan.util import CAPTURE, END, LOOSE_SEPARATOR, SEPARATOR, START

if TYPE_CHECKING:
    from timespan.span import Span

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def compile_template(template: str) -> re.Pattern[str]:
    """Translate a template into a pattern with one capture group per placeholder.

    Raises:
        PatternError: If a placeholder occurs more than once, or the
            translated pattern does not compile
    """
    for token in (START, END):
        if template.count(token) > 1:
            raise PatternError(
                f"placeholder {token} occurs {template.count(token)} times "
                f"in template {template!r}"
            )

    escaped = re.escape(template)
    for token in (START, END):
        escaped = escaped.replace(re.escape(token), CAPTURE)

    try:
        pattern = re.compile(escaped)
    except re.error as exc:
        raise PatternError(str(exc)) from exc

    logger.debug("Compiled span template %r to %r", template, pattern.pattern)
    return pattern


def parse_template(s: str, template: str) -> tuple[str, str]:
    """Extract the raw (start, end) substrings of `s` described by `template`.

    Captures are mapped by the textual order of the placeholders in the
    template, not by capture order, so `"{end} .. {start}"` works as expected.

    Raises:
        PatternError: If the template is malformed
        EmptyError: If `s` does not match the template
        NoStartError: If the template has no `{start}` placeholder
        NoEndError: If the template has no `{end}` placeholder
    """
    match = compile_template(template).search(s)
    if match is None:
        raise EmptyError(f"{s!r} does not match template {template!r}")

    start_idx = template.find(START)
    if start_idx < 0:
        raise NoStartError()
    end_idx = template.find(END)
    if end_idx < 0:
        raise NoEndError()

    # Both placeholders exist exactly once, so the pattern has two groups
    first, second = match.group(1), match.group(2)
    if start_idx < end_idx:
        return first, second
    return second, first


def split_default(s: str) -> tuple[str, str]:
    """Split the default `"<start> - <end>"` form at its first separator.

    A whitespace-delimited hyphen is preferred so ISO dates keep their own
    hyphens; without one the first bare hyphen is used. A missing separator
    yields an empty end, which then fails point parsing.
    """
    match = SEPARATOR.search(s) or LOOSE_SEPARATOR.search(s)
    if match is None:
        return s, ""
    return s[: match.start()], s[match.end() :]


@dataclass(frozen=True)
class DelayedFormat:
    """A span paired with a template, rendered only when converted to text.

    Point-level formatting errors surface as FormattingError from `str()`
    or `render()`, not when the object is created.

    Example:
        >>> span = NaiveTimeSpan.from_str("09:00:00 - 17:00:00")
        >>> f = span.format("Opened from {start} to {end}", "%H.%M", "%H.%M")
        >>> str(f)
        'Opened from 09.00 to 17.00'
    """

    span: "Span[Any]"
    template: str
    start: str
    end: str

    def render(self) -> str:
        kind = self.span.kind()
        if not isinstance(kind, Formatable):
            raise FormattingError(
                f"point kind {type(kind).__name__} does not support format specifiers"
            )
        start = kind.format(self.span.start, self.start)
        end = kind.format(self.span.end, self.end)
        return self.template.replace(START, start).replace(END, end)

    def __str__(self) -> str:
        return self.render()


__all__ = ["compile_template", "parse_template", "split_default", "DelayedFormat"]
