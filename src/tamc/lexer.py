"""
tamc Lexer (Scanner)
====================

This module converts source text into a finite sequence of typed tokens
for the parser.

Token Categories
----------------
- Keywords: program, var, begin, end, if, then, else, while, do,
  integer, boolean, true, false, and, or
- Identifiers: letter or underscore, then letters, digits, underscores
- Numbers: integer literals (123) and float literals (10.5)
- Operators: + - * / < > = := :
- Delimiters: ( ) ;

Comments
--------
- Single-line: // comment

Keywords are matched case-sensitively: ``Begin`` is an identifier.

Error Handling
--------------
An unrecognized character does not stop the scan. The lexer records an
InvalidCharacterError, emits no token for the character and keeps going.
An integer literal too long for int() is handled the same way with a
LiteralTooLargeError. Either way the token stream always ends with
exactly one EOF token. Callers must check ``has_errors()`` before
trusting the stream.

Example Usage
-------------
>>> from tamc.lexer import Lexer
>>> for token in Lexer("x := 42;").tokenize():
...     print(token)
Token(ID, 'x', 1:1)
Token(ASSIGN, ':=', 1:3)
Token(INT_LIT, 42, 1:6)
Token(SEMICOLON, ';', 1:8)
Token(EOF, 1:9)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from tamc.errors import (
    ErrorCollector,
    InvalidCharacterError,
    LexicalError,
    LiteralTooLargeError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the source language."""

    # === Single-character punctuation and operators ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMICOLON = auto()      # ;
    PLUS = auto()           # +
    MINUS = auto()          # -
    TIMES = auto()          # *
    DIV = auto()            # /
    LT = auto()             # <
    GT = auto()             # >
    EQ = auto()             # =

    # === One- or two-character operators ===
    COLON = auto()          # :
    ASSIGN = auto()         # :=

    # === Literals ===
    ID = auto()             # soma, val1
    INT_LIT = auto()        # 123
    FLOAT_LIT = auto()      # 10.5

    # === Keywords ===
    PROGRAM = auto()
    VAR = auto()
    BEGIN = auto()
    END = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    WHILE = auto()
    DO = auto()
    INTEGER = auto()
    BOOLEAN = auto()
    TRUE = auto()
    FALSE = auto()
    OR = auto()
    AND = auto()

    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    "program": TokenType.PROGRAM,
    "var": TokenType.VAR,
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "integer": TokenType.INTEGER,
    "boolean": TokenType.BOOLEAN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "or": TokenType.OR,
    "and": TokenType.AND,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.TIMES,
    "/": TokenType.DIV,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "=": TokenType.EQ,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from source code.

    Attributes:
        type: The TokenType classification
        lexeme: The exact source text of the token ("" for EOF)
        literal: Numeric value for INT_LIT (int) and FLOAT_LIT (float)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    lexeme: str
    literal: int | float | None
    line: int
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.literal is not None:
            return f"Token({self.type.name}, {self.literal}, {self.line}:{self.column})"
        if self.lexeme:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes source text.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = lexer.scan()
        if lexer.has_errors():
            ...

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        errors: Lexical errors found while scanning
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits
    WHITESPACE = " \t\r\n"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.errors = ErrorCollector()

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def scan(self) -> list[Token]:
        """Scan the whole source and return the token list."""
        tokens = list(self.tokenize())
        logger.debug(
            f"Scanned {len(tokens)} tokens from {self.filename} "
            f"({self.errors.error_count()} lexical errors)"
        )
        return tokens

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with a single EOF token
        """
        while not self._at_end():
            self._skip_whitespace_and_comments()

            if self._at_end():
                break

            token = self._scan_token()
            if token is not None:
                yield token

        yield self._make_token(TokenType.EOF, "", None, self._line, self._column)

    def has_errors(self) -> bool:
        """Return True if any unrecognized character was found."""
        return self.errors.has_errors()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look ahead without advancing; empty string past end of source."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _make_token(
        self,
        token_type: TokenType,
        lexeme: str,
        literal: int | float | None,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            lexeme=lexeme,
            literal=literal,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """Scan the next token, or return None for an unrecognized character."""
        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_line, start_column)

        char = self._advance()

        if char == ":":
            if self._match("="):
                return self._make_token(TokenType.ASSIGN, ":=", None, start_line, start_column)
            return self._make_token(TokenType.COLON, ":", None, start_line, start_column)

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(
                SINGLE_CHAR_TOKENS[char], char, None, start_line, start_column
            )

        self._report(InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        ))
        return None

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier, folding it to a keyword when it matches one."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        text = "".join(chars)
        token_type = KEYWORDS.get(text, TokenType.ID)
        return self._make_token(token_type, text, None, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Optional[Token]:
        """
        Scan a numeric literal.

        A run of digits is an integer. If it is followed by '.' and another
        digit, the fraction is consumed and the token is a float literal.
        Returns None, after recording the error, for an integer literal
        longer than the interpreter will convert.
        """
        chars = []
        while self._peek() and self._peek() in self.DIGITS:
            chars.append(self._advance())

        if self._peek() == "." and self._peek(1) and self._peek(1) in self.DIGITS:
            chars.append(self._advance())
            while self._peek() and self._peek() in self.DIGITS:
                chars.append(self._advance())
            text = "".join(chars)
            return self._make_token(
                TokenType.FLOAT_LIT, text, float(text), start_line, start_column
            )

        text = "".join(chars)
        try:
            value = int(text)
        except ValueError:
            self._report(LiteralTooLargeError(
                text,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
            ))
            return None
        return self._make_token(TokenType.INT_LIT, text, value, start_line, start_column)

    def _report(self, error: LexicalError) -> None:
        logger.warning(f"{error.message} at line {error.line}")
        self.errors.add(error)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


def scan(source: str, filename: str = "<input>") -> list[Token]:
    """
    Convenience function: tokenize source and return the token list.

    Lexical errors are logged but not raised; use Lexer directly to
    inspect them.
    """
    return Lexer(source, filename).scan()
