"""
Tokenizer for time span phrases.

Every word maps to exactly one token from a closed vocabulary. Tokenizing
never fails: words outside the vocabulary become :class:`Error` tokens and
the grammar decides what to do with them.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Iterator, Union

import regex as re

NUMBER_PATTERN = re.compile(r"[0-9]+")
ISO_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
PARTIAL_ISO_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})")


# =============================================================================
# Span kinds
# =============================================================================

class Unit(Enum):
    """Calendar units a span can be measured in."""
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


@dataclass(frozen=True)
class Weekday:
    """A named day of the week, Monday = 0 ... Sunday = 6."""
    day: int


@dataclass(frozen=True)
class SpecificMonth:
    """A named month, January = 0 ... December = 11."""
    month: int


SpanKind = Union[Unit, Weekday, SpecificMonth]


# =============================================================================
# Tokens
# =============================================================================

@dataclass(frozen=True)
class Day:
    """
    A day relative to now: ``Day(0)`` is today, ``Day(-1)`` yesterday.
    """
    offset: int


@dataclass(frozen=True)
class Span:
    kind: SpanKind


@dataclass(frozen=True)
class Last:
    pass


@dataclass(frozen=True)
class This:
    pass


@dataclass(frozen=True)
class To:
    pass


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class PartialIsoDate:
    """``YYYY-MM``"""
    year: int
    month: int


@dataclass(frozen=True)
class IsoDate:
    """``YYYY-MM-DD``"""
    date: date


@dataclass(frozen=True)
class Error:
    """A word outside the vocabulary, kept verbatim."""
    word: str


Token = Union[Day, Span, Last, This, To, Number, PartialIsoDate, IsoDate, Error]

TOKEN_TYPES = (Day, Span, Last, This, To, Number, PartialIsoDate, IsoDate, Error)


# =============================================================================
# Vocabulary
# =============================================================================

WEEKDAY_NAMES = {
    'monday': Weekday(0),
    'tuesday': Weekday(1),
    'wednesday': Weekday(2),
    'thursday': Weekday(3),
    'friday': Weekday(4),
    'saturday': Weekday(5),
    'sunday': Weekday(6),
}

MONTH_NAMES = {
    'january': SpecificMonth(0),
    'february': SpecificMonth(1),
    'march': SpecificMonth(2),
    'april': SpecificMonth(3),
    'may': SpecificMonth(4),
    'june': SpecificMonth(5),
    'july': SpecificMonth(6),
    'august': SpecificMonth(7),
    'september': SpecificMonth(8),
    'october': SpecificMonth(9),
    'november': SpecificMonth(10),
    'december': SpecificMonth(11),
}

UNIT_NAMES = {
    'week': Unit.WEEK,
    'weeks': Unit.WEEK,
    'month': Unit.MONTH,
    'months': Unit.MONTH,
    'year': Unit.YEAR,
    'years': Unit.YEAR,
}

KEYWORDS = {
    'today': Day(0),
    'yesterday': Day(-1),
    'last': Last(),
    'this': This(),
    'to': To(),
    'until': To(),
}


def _parse_iso_date(word):
    match = ISO_DATE_PATTERN.fullmatch(word)
    if not match:
        return None
    try:
        return date(*(int(group) for group in match.groups()))
    except ValueError:
        return None


def _parse_partial_iso_date(word):
    match = PARTIAL_ISO_DATE_PATTERN.fullmatch(word)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def tokenize_word(word: str) -> Token:
    """Map a single word to its token."""
    lowered = word.lower()

    if lowered in KEYWORDS:
        return KEYWORDS[lowered]
    if lowered in WEEKDAY_NAMES:
        return Span(WEEKDAY_NAMES[lowered])
    if lowered in MONTH_NAMES:
        return Span(MONTH_NAMES[lowered])
    if lowered in UNIT_NAMES:
        return Span(UNIT_NAMES[lowered])

    if NUMBER_PATTERN.fullmatch(lowered):
        return Number(int(lowered))

    iso_date = _parse_iso_date(lowered)
    if iso_date is not None:
        return IsoDate(iso_date)

    partial = _parse_partial_iso_date(lowered)
    if partial is not None:
        return PartialIsoDate(*partial)

    return Error(word)


class Tokens:
    """
    Lazy token sequence over a list of words.

    Each iteration starts over from the first word, so the same Tokens can
    be walked any number of times and always yields the same tokens.
    """

    def __init__(self, words: Iterable[str]):
        self._words = tuple(words)

    def __iter__(self) -> Iterator[Token]:
        return map(tokenize_word, self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"Tokens(words={list(self._words)!r})"


def split_words(text: str):
    """Split a phrase on whitespace."""
    return text.split()


def tokenize(words: Iterable[str]) -> Tokens:
    """
    Tokenize a sequence of words, one token per word.

    Example::

        >>> list(tokenize(["last", "Week"]))
        [Last(), Span(kind=<Unit.WEEK: 'WEEK'>)]
    """
    if isinstance(words, str):
        words = split_words(words)
    return Tokens(words)
