"""
tamc Context Checker
====================

This module implements the context-checking pass: declaration and type
rules that the grammar alone cannot express.

The checker walks the AST in two phases. First every declaration is
entered into a single flat SymbolTable; then the compound body is checked
against it. The first violation raises a ContextError and checking stops.

Rules
-----
| Construct            | Rule                                         |
|----------------------|----------------------------------------------|
| var x : T            | x not already declared                       |
| x := e               | x declared; type(e) == declared type of x    |
| if e / while e       | type(e) is boolean                           |
| a + - * / b          | both integer, result integer                 |
| a and or b           | both boolean, result boolean                 |
| a < > = b            | same type (either), result boolean           |
| variable use x       | x declared; type is the declared type        |

Expression visits return the inferred VarType; statement and declaration
visits return None.

Example Usage
-------------
>>> from tamc.parser import parse_source
>>> from tamc.checker import Checker
>>> program = parse_source('program p; var x : integer; begin x := 1; end')
>>> table = Checker().check(program)
>>> table.find("x").type
<VarType.INTEGER: 'integer'>
"""

import difflib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from tamc.lexer import Token, TokenType
from tamc.ast import (
    ASTVisitor,
    ProgramNode,
    VarDeclNode,
    BeginEndNode,
    AssignNode,
    IfNode,
    WhileNode,
    BinaryOpNode,
    IntLitNode,
    BooleanLitNode,
    VariableUseNode,
)
from tamc.errors import (
    DuplicateDeclarationError,
    UndeclaredIdentifierError,
    TypeMismatchError,
    ConditionTypeError,
    OperatorTypeError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================

class VarType(Enum):
    """The two value types of the language."""
    INTEGER = "integer"
    BOOLEAN = "boolean"

    @classmethod
    def from_token(cls, token: Token) -> "VarType":
        """Map an INTEGER/BOOLEAN keyword token to its type."""
        if token.type == TokenType.INTEGER:
            return cls.INTEGER
        if token.type == TokenType.BOOLEAN:
            return cls.BOOLEAN
        raise ValueError(f"{token.type.name} is not a type name")

    def __str__(self) -> str:
        return self.value


ARITHMETIC_OPERATORS = (TokenType.PLUS, TokenType.MINUS, TokenType.TIMES, TokenType.DIV)
LOGICAL_OPERATORS = (TokenType.AND, TokenType.OR)
RELATIONAL_OPERATORS = (TokenType.LT, TokenType.GT, TokenType.EQ)


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass(frozen=True)
class IdEntry:
    """
    A declared identifier.

    Attributes:
        token: The ID token from the declaration
        type: The declared type
    """
    token: Token
    type: VarType

    @property
    def name(self) -> str:
        return self.token.lexeme


class SymbolTable:
    """
    Single flat namespace of declared variables.

    Populated once by the checker's declaration phase and only read
    afterwards.
    """

    def __init__(self):
        self._entries: dict[str, IdEntry] = {}

    def add(self, entry: IdEntry, source_line: Optional[str] = None) -> None:
        """
        Enter a declaration.

        Raises:
            DuplicateDeclarationError: If the name is already declared
        """
        existing = self._entries.get(entry.name)
        if existing is not None:
            raise DuplicateDeclarationError(
                entry.name,
                location=entry.token.location,
                original_location=existing.token.location,
                source_line=source_line,
            )
        self._entries[entry.name] = entry

    def find(self, name: str) -> Optional[IdEntry]:
        """Look up a name; None if it was never declared."""
        return self._entries.get(name)

    def similar_names(self, name: str) -> list[str]:
        """Declared names close to ``name``, for typo hints."""
        return difflib.get_close_matches(name, list(self._entries), n=3)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[IdEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# Checker Pass
# =============================================================================

class Checker(ASTVisitor):
    """
    Context-checking pass over a parsed program.

    Usage:
        checker = Checker(source_lines=source.splitlines())
        symbols = checker.check(program)

    Attributes:
        symbols: The symbol table built by this checker
    """

    def __init__(self, source_lines: Optional[list[str]] = None):
        self.symbols = SymbolTable()
        self.source_lines = source_lines or []

    def check(self, program: ProgramNode) -> SymbolTable:
        """
        Check a whole program.

        Returns:
            The populated symbol table

        Raises:
            ContextError: On the first rule violation
        """
        self.visit(program)
        logger.debug(f"Context check passed: {len(self.symbols)} variables declared")
        return self.symbols

    def _source_line(self, token: Token) -> Optional[str]:
        if 0 < token.line <= len(self.source_lines):
            return self.source_lines[token.line - 1]
        return None

    def _lookup(self, token: Token) -> IdEntry:
        entry = self.symbols.find(token.lexeme)
        if entry is None:
            raise UndeclaredIdentifierError(
                token.lexeme,
                location=token.location,
                source_line=self._source_line(token),
                similar_identifiers=self.symbols.similar_names(token.lexeme),
            )
        return entry

    def _require_boolean_condition(self, statement: str, node) -> None:
        condition_type = self.visit(node.condition)
        if condition_type != VarType.BOOLEAN:
            anchor = _first_token(node.condition)
            raise ConditionTypeError(
                statement,
                str(condition_type),
                location=anchor.location,
                source_line=self._source_line(anchor),
            )

    # =========================================================================
    # Declarations and Statements
    # =========================================================================

    def visit_ProgramNode(self, node: ProgramNode):
        for decl in node.declarations:
            self.visit(decl)
        self.visit(node.body)

    def visit_VarDeclNode(self, node: VarDeclNode):
        entry = IdEntry(node.identifier, VarType.from_token(node.type_token))
        self.symbols.add(entry, self._source_line(node.identifier))
        logger.debug(f"Declared {entry.name} : {entry.type}")

    def visit_BeginEndNode(self, node: BeginEndNode):
        for stmt in node.statements:
            self.visit(stmt)

    def visit_AssignNode(self, node: AssignNode):
        entry = self._lookup(node.variable)
        value_type = self.visit(node.expression)
        if value_type != entry.type:
            raise TypeMismatchError(
                node.variable.lexeme,
                str(entry.type),
                str(value_type),
                location=node.variable.location,
                source_line=self._source_line(node.variable),
            )

    def visit_IfNode(self, node: IfNode):
        self._require_boolean_condition("if", node)
        self.visit(node.then_branch)
        if node.else_branch is not None:
            self.visit(node.else_branch)

    def visit_WhileNode(self, node: WhileNode):
        self._require_boolean_condition("while", node)
        self.visit(node.body)

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_BinaryOpNode(self, node: BinaryOpNode) -> VarType:
        left = self.visit(node.left)
        right = self.visit(node.right)
        op = node.operator

        if op.type in ARITHMETIC_OPERATORS:
            if left != VarType.INTEGER or right != VarType.INTEGER:
                raise self._operator_error(op, "integer operands", left, right)
            return VarType.INTEGER

        if op.type in LOGICAL_OPERATORS:
            if left != VarType.BOOLEAN or right != VarType.BOOLEAN:
                raise self._operator_error(op, "boolean operands", left, right)
            return VarType.BOOLEAN

        if op.type in RELATIONAL_OPERATORS:
            if left != right:
                raise self._operator_error(op, "operands of the same type", left, right)
            return VarType.BOOLEAN

        raise ValueError(f"unknown binary operator {op.type.name}")

    def _operator_error(
        self, op: Token, requirement: str, left: VarType, right: VarType
    ) -> OperatorTypeError:
        return OperatorTypeError(
            op.lexeme,
            requirement,
            str(left),
            str(right),
            location=op.location,
            source_line=self._source_line(op),
        )

    def visit_IntLitNode(self, node: IntLitNode) -> VarType:
        return VarType.INTEGER

    def visit_BooleanLitNode(self, node: BooleanLitNode) -> VarType:
        return VarType.BOOLEAN

    def visit_VariableUseNode(self, node: VariableUseNode) -> VarType:
        return self._lookup(node.identifier).type


def _first_token(expr) -> Token:
    """Leftmost token of an expression, used to place condition errors."""
    while isinstance(expr, BinaryOpNode):
        expr = expr.left
    if isinstance(expr, VariableUseNode):
        return expr.identifier
    return expr.value
