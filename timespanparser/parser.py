"""
Span grammar

Resolves a token sequence into a TimeSpan relative to an injected "now".
The grammar is small enough for a hand-written recursive-descent parser with
one token of lookahead and no backtracking:

    full        := simple_span (To simple_span)?
    simple_span := Day(d)                              d <= 0
                 | This Span(Week|Month|Year)
                 | Last Span(Week|Month|Year)
                 | This|Last Span(Weekday|SpecificMonth)    refused
                 | Span(Weekday)
                 | Span(SpecificMonth)

Two simple spans joined by "to"/"until" are composed into one span running
from the start of the first to the end of the second.

Nothing here reads the clock: every relative phrase is resolved against
``Context.now``, so identical input always gives identical output.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import (
    EmptyInput,
    InvalidToken,
    LanguageIsComplicated,
    OutOfRange,
    UnexpectedToken,
)
from .timespan import TimeSpan
from .timestamp import Timestamp
from .tokenizer import (
    Day, Span, Last, This, To, Error,
    Unit, Weekday, SpecificMonth,
    Number, Token,
    tokenize,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    """The reference point every relative phrase is resolved against."""
    now: Timestamp


def _checked(timestamp: Optional[Timestamp]) -> Timestamp:
    if timestamp is None:
        raise OutOfRange()
    return timestamp


class _TokenStream:
    """Iterator over tokens with a single token of lookahead."""

    _EXHAUSTED = object()

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._peeked = None

    def peek(self) -> Optional[Token]:
        if self._peeked is None:
            self._peeked = next(self._tokens, self._EXHAUSTED)
        return None if self._peeked is self._EXHAUSTED else self._peeked

    def next(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._peeked = None
        return token


class SpanParser:
    """
    Parser for time span phrases.

    One instance is bound to one Context; it keeps no state between calls
    to :meth:`parse`.
    """

    def __init__(self, context: Context):
        self.context = context

    @property
    def now(self) -> Timestamp:
        return self.context.now

    def parse(self, tokens: Iterable[Token]) -> TimeSpan:
        """
        Resolve ``tokens`` into a single TimeSpan.

        :raises ParseError: one of the subclasses in :mod:`timespanparser.errors`
        """
        stream = _TokenStream(tokens)
        if stream.peek() is None:
            raise EmptyInput()

        span = self._parse_simple_span(stream)

        token = stream.next()
        if token is None:
            return span
        if not isinstance(token, To):
            raise UnexpectedToken(token, f"Expected 'to' or the end of the time span, got {token!r}")

        span = span.extend(self._parse_simple_span(stream))

        trailing = stream.peek()
        if trailing is not None:
            raise UnexpectedToken(trailing, f"Unexpected token after the end of the time span: {trailing!r}")
        return span

    # =========================================================================
    # simple_span
    # =========================================================================

    def _parse_simple_span(self, stream: _TokenStream) -> TimeSpan:
        token = stream.next()

        if token is None:
            raise UnexpectedToken(None, "Expected a time span after 'to'")
        if isinstance(token, Day):
            return self._resolve_day(token, stream)
        if isinstance(token, Span):
            return self._resolve_named_span(token)
        if isinstance(token, (This, Last)):
            return self._resolve_relative_span(token, stream)
        if isinstance(token, To):
            raise UnexpectedToken(token, "A time span cannot start with 'to' or 'until'")
        if isinstance(token, Error):
            raise InvalidToken(token.word)

        # Number, PartialIsoDate and IsoDate cannot start a span
        logger.debug(f"No rule starts with {token!r}")
        raise UnexpectedToken(token)

    def _resolve_day(self, token: Day, stream: _TokenStream) -> TimeSpan:
        if token.offset == 0:
            following = stream.peek()
            if following is not None:
                raise UnexpectedToken(following, f"Unexpected token after 'today': {following!r}")
            return TimeSpan(self.now.at_midnight(), self.now)

        if token.offset > 0:
            raise InvalidToken(
                repr(token),
                f"Relative days can't be in the future, got now + {token.offset} days",
            )

        begin = _checked(self.now.at_midnight().sub_days(-token.offset))
        end = min(self.now, _checked(begin.add_days(1)))
        return TimeSpan(begin, end)

    def _resolve_named_span(self, token: Span) -> TimeSpan:
        kind = token.kind
        if isinstance(kind, Weekday):
            return self._resolve_weekday(kind)
        if isinstance(kind, SpecificMonth):
            return self._resolve_month(kind)
        raise UnexpectedToken(token, f"Expected 'this' or 'last' before {kind.value.lower()}")

    def _resolve_weekday(self, weekday: Weekday) -> TimeSpan:
        """The most recent ``weekday`` that started at or before now."""
        monday = _checked(self.now.at_midnight().sub_days(self.now.weekday()))
        start = _checked(monday.add_days(weekday.day))
        if start > self.now:
            start = _checked(start.sub_days(7))
        return TimeSpan(start, _checked(start.add_days(1)))

    def _resolve_month(self, month: SpecificMonth) -> TimeSpan:
        """The most recent occurrence of ``month`` that started at or before now."""
        start = _checked(self.now.first_of_year().add_months(month.month))
        if start > self.now:
            start = _checked(start.sub_months(12))
        return TimeSpan(start, _checked(start.add_months(1)))

    def _resolve_relative_span(self, token: Token, stream: _TokenStream) -> TimeSpan:
        keyword = "this" if isinstance(token, This) else "last"
        following = stream.next()

        if isinstance(following, Span):
            kind = following.kind
            if isinstance(kind, (Weekday, SpecificMonth)):
                raise LanguageIsComplicated([token, following])
            span = self._current(kind)
            if isinstance(token, Last):
                span = self._previous(span, kind)
            return span

        if isinstance(token, Last) and isinstance(following, Number):
            raise UnexpectedToken(following, "Counted spans like 'last 3 weeks' are not supported")

        raise UnexpectedToken(following, f"Expected week, month or year after '{keyword}'")

    # =========================================================================
    # Calendar units
    # =========================================================================

    def _current(self, unit: Unit) -> TimeSpan:
        """The week, month or year containing now."""
        if unit is Unit.WEEK:
            start = _checked(self.now.at_midnight().sub_days(self.now.weekday()))
            return TimeSpan(start, _checked(start.add_days(7)))
        if unit is Unit.MONTH:
            start = self.now.first_of_month()
            return TimeSpan(start, _checked(start.add_months(1)))
        if unit is Unit.YEAR:
            start = self.now.first_of_year()
            return TimeSpan(start, _checked(start.add_months(12)))
        raise UnexpectedToken(Span(unit))

    @staticmethod
    def _step_back(timestamp: Timestamp, unit: Unit) -> Timestamp:
        if unit is Unit.WEEK:
            return _checked(timestamp.sub_days(7))
        if unit is Unit.MONTH:
            return _checked(timestamp.sub_months(1))
        return _checked(timestamp.sub_months(12))

    def _previous(self, span: TimeSpan, unit: Unit) -> TimeSpan:
        """The unit immediately before ``span``."""
        return TimeSpan(self._step_back(span.start, unit), self._step_back(span.end, unit))


def parse_tokens(tokens: Iterable[Token], context: Context) -> TimeSpan:
    """Resolve an already tokenized phrase."""
    return SpanParser(context).parse(tokens)


def parse(words, context: Context) -> TimeSpan:
    """
    Resolve a phrase into a TimeSpan anchored at ``context.now``.

    :param words:
        The phrase, either as a list of words or as a single string that is
        split on whitespace.
    :param context:
        Holds the anchor timestamp.

    Example::

        >>> now = Timestamp.fromisoformat("2023-10-25T12:33:17+00:00")
        >>> parse(["last", "week"], Context(now=now))
        TimeSpan(start=2023-10-16T00:00:00+00:00, end=2023-10-23T00:00:00+00:00)
    """
    tokens = tokenize(words)
    span = parse_tokens(tokens, context)
    logger.debug(f"Resolved {list(tokens)!r} at {context.now} to {span!r}")
    return span
