"""
tamc Error Hierarchy
====================

This module defines the exception hierarchy for the tamc compiler.
All exceptions inherit from TamError, allowing callers to catch every
compiler error with a single except clause if desired.

Exception Hierarchy
-------------------
TamError (base)
├── LexicalError - characters the lexer cannot classify
│   ├── InvalidCharacterError - unexpected character in source
│   └── LiteralTooLargeError - integer literal beyond conversion limit
├── TamSyntaxError - parser errors
│   ├── UnexpectedTokenError - token does not match the grammar
│   ├── UnsupportedFeatureError - lexically valid but not compilable
│   └── NestingTooDeepError - nesting beyond the recursion limit
└── ContextError - declaration and type rules
    ├── DuplicateDeclarationError - variable declared twice
    ├── UndeclaredIdentifierError - variable used before declaration
    ├── TypeMismatchError - assignment of the wrong type
    ├── ConditionTypeError - non-boolean if/while condition
    └── OperatorTypeError - operand types rejected by an operator

Every class carries an ErrorKind so a caller holding a CompilationResult
can tell the three failure families apart without catching by type.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)

Example:
    prog.src:5:3: error: undeclared identifier 'idad'
        idad := 30;
        ^
    hint: did you mean 'idade'?
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


class ErrorKind(Enum):
    """The three families of compilation failure."""
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    CONTEXT = "context"


# =============================================================================
# Base Exception
# =============================================================================

class TamError(Exception):
    """
    Base exception for all tamc compiler errors.

    Provides source location tracking, source line context and an
    optional hint, formatted into a single user-facing message.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.src:5:3: error: undeclared identifier 'idad'
                idad := 30;
                ^
            hint: did you mean 'idade'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(TamError):
    """Error raised for input the lexer cannot turn into tokens."""
    kind = ErrorKind.LEXICAL


class InvalidCharacterError(LexicalError):
    """
    Invalid character in source code.

    The lexer records this error and keeps scanning, so the rest of the
    token stream is still available for diagnostics. The compilation as a
    whole is nevertheless reported as failed.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unrecognized character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class LiteralTooLargeError(LexicalError):
    """Integer literal with more digits than the interpreter will convert."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.digits = len(text)
        super().__init__(
            f"integer literal too large ({self.digits} digits)",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class TamSyntaxError(TamError):
    """
    Syntax error raised by the parser.

    Parsing stops at the first syntax error; no partial AST is returned.
    """
    kind = ErrorKind.SYNTAX


class UnexpectedTokenError(TamSyntaxError):
    """
    The current token does not match what the grammar rule requires.

    The message names the expected kind, the kind actually found and the
    line, e.g. ``expected SEMICOLON but found END at line 7``.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        line = location.line if location else "?"
        super().__init__(
            f"expected {expected} but found {found} at line {line}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnsupportedFeatureError(TamSyntaxError):
    """
    Lexically valid construct that the language does not compile.

    Float literals are scanned by the lexer but have no type and no
    instruction, so the parser rejects them explicitly.
    """

    def __init__(
        self,
        feature: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        alternative: Optional[str] = None,
    ):
        self.feature = feature
        super().__init__(
            f"{feature} is not supported",
            location=location,
            hint=alternative,
            source_line=source_line,
        )


class NestingTooDeepError(TamSyntaxError):
    """Parentheses or statements nested beyond the interpreter's recursion limit."""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "program nested too deeply",
            location=location,
            hint="reduce the nesting of parentheses or statements",
        )


# =============================================================================
# Context Errors (Declarations and Types)
# =============================================================================

class ContextError(TamError):
    """
    Context error raised by the checker.

    The program is syntactically correct but breaks a declaration or
    typing rule. Checking stops at the first violation and code
    generation never runs.
    """
    kind = ErrorKind.CONTEXT


class DuplicateDeclarationError(ContextError):
    """Identifier declared more than once."""

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location}"

        super().__init__(
            f"duplicate declaration of '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredIdentifierError(ContextError):
    """
    Reference to an undeclared identifier.

    Raised both for assignment targets and for variables used inside
    expressions. Similarly-named declared identifiers are offered as a
    hint to catch typos.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        line = location.line if location else "?"
        super().__init__(
            f"undeclared identifier '{identifier}' at line {line}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TypeMismatchError(ContextError):
    """Right-hand side of an assignment does not match the declared type."""

    def __init__(
        self,
        identifier: str,
        expected_type: str,
        actual_type: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.expected_type = expected_type
        self.actual_type = actual_type

        line = location.line if location else "?"
        super().__init__(
            f"type mismatch in assignment to '{identifier}' at line {line}",
            location=location,
            hint=f"expected '{expected_type}', got '{actual_type}'",
            source_line=source_line,
        )


class ConditionTypeError(ContextError):
    """Condition of an if or while statement is not boolean."""

    def __init__(
        self,
        statement: str,
        actual_type: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.statement = statement
        self.actual_type = actual_type

        super().__init__(
            f"'{statement}' condition must be boolean, got '{actual_type}'",
            location=location,
            source_line=source_line,
        )


class OperatorTypeError(ContextError):
    """Operand types rejected by a binary operator."""

    def __init__(
        self,
        operator: str,
        requirement: str,
        left_type: str,
        right_type: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operator = operator
        self.left_type = left_type
        self.right_type = right_type

        line = location.line if location else "?"
        super().__init__(
            f"operator '{operator}' requires {requirement} (line {line})",
            location=location,
            hint=f"got '{left_type}' and '{right_type}'",
            source_line=source_line,
        )


# =============================================================================
# Error Collection
# =============================================================================

class ErrorCollector:
    """
    Collects errors for batch reporting.

    The lexer keeps scanning after an unrecognized character, so it needs
    somewhere to put the errors it finds along the way. The compiler
    inspects the collector once scanning is finished.
    """

    def __init__(self):
        self.errors: List[TamError] = []

    def add(self, error: TamError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def first(self) -> Optional[TamError]:
        """Return the first collected error, if any."""
        return self.errors[0] if self.errors else None

    def report(self) -> str:
        """Format all errors for display."""
        lines = [str(error) for error in self.errors]
        word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {word}")
        return "\n".join(lines)
