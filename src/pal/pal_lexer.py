"""
Lexical analyzer for the PAL language.

This module turns raw source text into the pull-based token stream the parser
consumes:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with type, lexeme, and source location.
    TokenSource: Protocol for anything that hands out tokens on demand.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenList: Serves a prepared list of tokens through the same interface.

Features:
    - Skips whitespace, `//` line comments and `{ ... }` block comments
    - Longest-match recognition of operators (`<=` before `<`, `==` before `=`)
    - Recognizes identifiers, reserved words, integer numerals and strings
    - Once the input is exhausted, every further request yields EOF

Raises:
    LexError: On unknown characters, unterminated strings or unterminated comments.

Example:
    >>> lexer = Lexer(CharacterStream("val x = 5;"))
    >>> lexer.next_token()
    Token(VAL, val)
"""

from collections.abc import Iterable, Iterator
from typing import Any, Protocol

from pal.pal_constants import keyword_tokens, operator_tokens, token_hashmap
from pal.pal_errors import LexError


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            LexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise LexError(
                f"Attempted to read past end of source at position {self.position}",
                self.line,
                self.column,
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token of a PAL program.

    Attributes:
        type (str): The canonical token type (e.g. 'ID', 'NUM', 'EOF').
        lexeme (str): The raw source text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, lexeme: str, line: int = 0, col: int = 0):
        self.type = type_
        self.lexeme = lexeme
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.lexeme == other.lexeme
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme, self.line, self.col))


class TokenSource(Protocol):
    """Pull-based token provider consumed by the parser."""

    def next_token(self) -> Token: ...  # pragma: no cover


class Lexer:
    """Lexical analyzer for PAL.

    The Lexer takes a CharacterStream and produces Token objects on demand via
    `next_token()`. Iterating over a Lexer yields every token up to and
    including the first EOF.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == "EOF":
                return

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch in " \t\r\n":
                self.advance()
            elif ch == "/" and self.stream.peek(1) == "/":
                self.skip_line_comment()
            elif ch == "{":
                self.skip_block_comment()
            else:
                break

    def skip_line_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def skip_block_comment(self) -> None:
        """Advances past a `{ ... }` comment. Block comments do not nest."""
        line, col = self.stream.line, self.stream.column
        self.advance()
        while not self.stream.end_of_file():
            if self.advance() == "}":
                return
        raise LexError(f"Unterminated comment at line {line}, col {col}", line, col)

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(2):  # longest operator spelling
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in operator_tokens:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(operator_tokens[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexError: If a malformed token or an unknown character is encountered.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token("EOF", "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_")
            ):
                ident += self.advance()
            if ident in keyword_tokens:
                return Token(keyword_tokens[ident], ident, line, col)
            return Token("ID", ident, line, col)

        # 2. Integer numeral
        if ch.isascii() and ch.isdigit():
            num = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and self.peek().isdigit()
            ):
                num += self.advance()
            return Token("NUM", num, line, col)

        # 3. String
        if ch == '"':
            self.advance()
            val = ""
            while not self.stream.end_of_file() and self.peek() not in ('"', "\n"):
                val += self.advance()
            if self.peek() == '"':
                self.advance()
                return Token("STRING", val, line, col)
            raise LexError(f"Unterminated string at line {line}, col {col}", line, col)

        # 4. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character
        raise LexError(
            f"Unexpected character {ch!r} at line {line}, col {col}", line, col
        )


class TokenList:
    """Serves a prepared sequence of tokens through the `next_token()` interface.

    Once the sequence runs out, an EOF token is returned on every further call,
    matching what a Lexer does at the end of its input.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._last: Token | None = None

    def next_token(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            line = self._last.line if self._last else 0
            col = self._last.col if self._last else 0
            return Token("EOF", "EOF", line, col)
        self._last = tok
        return tok


def tokenize(source: str) -> list[Token]:
    """Scans `source` completely, returning every token including the final EOF."""
    return list(Lexer(CharacterStream(source)))


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "TokenList",
    "TokenSource",
    "token_hashmap",
    "tokenize",
]
