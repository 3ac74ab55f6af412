"""
Errors raised while resolving a time span phrase.

Every failure of the resolver is one of the classes below. They all derive
from ParseError (itself a ValueError) so callers can catch a single type and
display ``str(error)`` to the user.
"""


class ParseError(ValueError):
    """Base class for every error the resolver can raise."""


class EmptyInput(ParseError):
    def __init__(self):
        super().__init__("No time span given")


class InvalidToken(ParseError):
    """A word that cannot start or continue a span."""

    def __init__(self, word, message=None):
        self.word = word
        super().__init__(message or f"Unknown word: {word!r}")


class UnexpectedToken(ParseError):
    """
    A known token in a position the grammar does not allow.

    ``token`` is None when the input ended where another token was expected.
    """

    def __init__(self, token, message=None):
        self.token = token
        if message is None:
            if token is None:
                message = "Unexpected end of input"
            else:
                message = f"Unexpected token: {token!r}"
        super().__init__(message)


class EndBeforeStart(ParseError):
    """The interval would be empty or inverted."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"'{start}' is not before '{end}'")


class OutOfRange(ParseError):
    def __init__(self):
        super().__init__("The time span exceeds the representable time range")


class LanguageIsComplicated(ParseError):
    """
    Refused on purpose: "this thursday" or "last april" mean different
    things to different people, so no interval is guessed for them.
    """

    def __init__(self, tokens):
        self.tokens = tuple(tokens)
        super().__init__(
            "Ambiguous phrase, use a plain weekday or month name instead: "
            + " ".join(repr(t) for t in self.tokens)
        )
