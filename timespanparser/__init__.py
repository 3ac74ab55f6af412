__version__ = "0.3.0"

from datetime import datetime

from .conf import apply_settings, resolve_timezone, Settings, SettingValidationError
from .errors import (
    ParseError,
    EmptyInput,
    InvalidToken,
    UnexpectedToken,
    EndBeforeStart,
    OutOfRange,
    LanguageIsComplicated,
)
from .parser import Context, SpanParser, parse_tokens, parse as parse_words
from .timespan import TimeSpan
from .timestamp import Timestamp
from .tokenizer import (
    Token, TOKEN_TYPES, tokenize, tokenize_word,
    # Tokens
    Day, Span, Last, This, To, Number, PartialIsoDate, IsoDate, Error,
    # Span kinds
    Unit, Weekday, SpecificMonth,
)


@apply_settings
def get_context(settings=None):
    """Build the Context that :func:`parse` anchors phrases to.

    Uses ``settings.RELATIVE_BASE`` when it is set. Otherwise reads the clock
    in ``settings.TIMEZONE``; this is the only place in the package that does.
    """
    tz = resolve_timezone(settings.TIMEZONE)
    base = settings.RELATIVE_BASE

    if isinstance(base, Timestamp):
        now = base
    elif isinstance(base, datetime):
        now = Timestamp(base) if base.tzinfo is not None else Timestamp.from_naive(base, tz)
    else:
        now = Timestamp.now(tz)
    return Context(now=now)


@apply_settings
def parse(phrase, context=None, settings=None):
    """Resolve a natural-language phrase into a half-open TimeSpan.

    :param phrase:
        A phrase such as ``"last week"`` or ``"april to yesterday"``, either as
        a string (split on whitespace) or as a list of words.
    :type phrase: str or list

    :param context:
        The anchor to resolve relative phrases against. Built from
        ``settings`` when omitted.
    :type context: :class:`timespanparser.parser.Context`

    :param settings:
        Configure customized behavior using settings defined in
        :mod:`timespanparser.conf.Settings`.
    :type settings: dict

    :return: The resolved ``[start, end)`` interval.
    :rtype: :class:`timespanparser.timespan.TimeSpan`

    :raises:
        ``ParseError`` (or one of its subclasses) when the phrase cannot be
        resolved, ``SettingValidationError`` when a setting is invalid.

    Example usage::

        >>> import timespanparser
        >>> from datetime import datetime, timezone
        >>> now = datetime(2023, 10, 25, 12, 33, 17, tzinfo=timezone.utc)
        >>> timespanparser.parse("this week", settings={"RELATIVE_BASE": now})
        TimeSpan(start=2023-10-23T00:00:00+00:00, end=2023-10-30T00:00:00+00:00)
    """
    if context is None:
        context = get_context(settings=settings)
    return parse_words(phrase, context)
