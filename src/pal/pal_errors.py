"""
Error types raised by the PAL front end.

Every error is a `SyntaxError`, so callers that only care about "the source
is malformed" can catch that; callers that want the details catch the
specific subclasses and read their attributes.

Classes:
    LexError: A character sequence the scanner cannot turn into a token.
    ParseError: Base class for grammar violations found by the parser.
    UnexpectedTokenError: The lookahead is not the token type the grammar requires.
    InvalidTypeError: A primitive type was required and the lookahead names none.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pal.pal_lexer import Token


class LexError(SyntaxError):
    """Raised by the scanner on malformed input.

    Attributes:
        line (int): Line of the offending character.
        col (int): Column of the offending character.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0):
        super().__init__(message)
        self.line = line
        self.col = col


class ParseError(SyntaxError):
    """Base class for errors raised by the parser.

    Attributes:
        found (Token): The lookahead token at the point of failure. It has not
            been consumed.
    """

    def __init__(self, message: str, found: Token):
        super().__init__(message)
        self.found = found


class UnexpectedTokenError(ParseError):
    """The lookahead differs from the token type the grammar requires next.

    Attributes:
        expected (str): The required token type, or a description of the
            alternatives when more than one would have been accepted.
    """

    def __init__(self, expected: str, found: Token):
        super().__init__(f"Expected {expected} but found {found}", found)
        self.expected = expected


class InvalidTypeError(ParseError):
    """A type position holds something other than `int`, `bool` or `void`.

    Attributes:
        alternatives (tuple[str, ...]): The token types that would have been accepted.
    """

    def __init__(self, found: Token, alternatives: tuple[str, ...]):
        names = ", ".join(alternatives[:-1]) + f", or {alternatives[-1]}"
        super().__init__(
            f"Invalid type: type has to be {names} but found {found}", found
        )
        self.alternatives = alternatives


class NumeralError(ParseError):
    """A numeral the grammar accepts but that cannot be converted to an integer."""

    def __init__(self, found: Token):
        super().__init__(
            f"Numeral too long: {found.lexeme[:20]}... ({len(found.lexeme)} digits)",
            found,
        )


__all__ = [
    "InvalidTypeError",
    "LexError",
    "NumeralError",
    "ParseError",
    "UnexpectedTokenError",
]
