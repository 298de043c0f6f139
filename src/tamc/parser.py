"""
tamc Recursive Descent Parser
=============================

This module implements an LL(1) recursive descent parser. It takes the
token list from the lexer and builds an Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program      ::= 'program' ID ';' decl* compound
decl         ::= 'var' ID ':' type ';'
type         ::= 'integer' | 'boolean'
compound     ::= 'begin' stmt_list 'end'
stmt_list    ::= (stmt ';')*            (stops at 'end' or end of input)
stmt         ::= assign | cond | loop | compound
assign       ::= ID ':=' expr
cond         ::= 'if' expr 'then' stmt ('else' stmt)?
loop         ::= 'while' expr 'do' stmt
expr         ::= simple (('<' | '>' | '=') simple)*
simple       ::= term (('+' | '-' | 'or') term)*
term         ::= factor (('*' | '/' | 'and') factor)*
factor       ::= INT_LIT | 'true' | 'false' | ID | '(' expr ')'

Expression Precedence (lowest to highest)
-----------------------------------------
1. relational      < > =
2. additive        + - or
3. multiplicative  * / and

All three tiers are left-associative.

Error Handling
--------------
There is no error recovery. ``_match`` is the single failure point: the
first token that does not fit the grammar raises UnexpectedTokenError
and the whole parse unwinds, so no partially built tree escapes.

Example Usage
-------------
>>> from tamc.parser import parse_source
>>> program = parse_source('program p; var x : integer; begin x := 1; end')
>>> len(program.declarations)
1
"""

import logging
from typing import Callable, Optional

from tamc.lexer import Lexer, Token, TokenType
from tamc.ast import (
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
    Expression,
    Statement,
)
from tamc.errors import (
    NestingTooDeepError,
    UnexpectedTokenError,
    UnsupportedFeatureError,
)

logger = logging.getLogger(__name__)


RELATIONAL_OPERATORS = (TokenType.LT, TokenType.GT, TokenType.EQ)
ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS, TokenType.OR)
MULTIPLICATIVE_OPERATORS = (TokenType.TIMES, TokenType.DIV, TokenType.AND)
TYPE_NAMES = (TokenType.INTEGER, TokenType.BOOLEAN)


class Parser:
    """
    Recursive descent parser for the source language.

    Attributes:
        tokens: List of tokens to parse, ending with EOF
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")

        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self._pos = 0

    def parse(self) -> ProgramNode:
        """
        Parse the token list into an AST.

        Returns:
            The ProgramNode root

        Raises:
            UnexpectedTokenError: On the first token that breaks the grammar
            UnsupportedFeatureError: On a float literal
            NestingTooDeepError: If nesting exhausts the recursion limit
        """
        try:
            program = self._parse_program()
        except RecursionError:
            raise NestingTooDeepError(self._peek().location) from None
        logger.debug(
            f"Parsed program '{program.name.lexeme}': "
            f"{len(program.declarations)} declarations, "
            f"{len(program.body.statements)} top-level statements"
        )
        return program

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> Token:
        return self.tokens[self._pos]

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        token = self.tokens[self._pos]
        if self._pos < len(self.tokens) - 1:
            self._pos += 1
        return token

    def _match(self, expected: TokenType) -> Token:
        """
        Consume the current token if it has the expected type.

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token has another type
        """
        if self._check(expected):
            return self._advance()
        raise self._unexpected(expected.name)

    def _unexpected(self, expected: str, hint: Optional[str] = None) -> UnexpectedTokenError:
        current = self._peek()
        return UnexpectedTokenError(
            expected,
            current.type.name,
            current.location,
            self._get_source_line(current.line),
            hint=hint,
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Program and Declarations
    # =========================================================================

    def _parse_program(self) -> ProgramNode:
        self._match(TokenType.PROGRAM)
        name = self._match(TokenType.ID)
        self._match(TokenType.SEMICOLON)

        declarations = []
        while self._check(TokenType.VAR):
            declarations.append(self._parse_declaration())

        body = self._parse_compound()
        return ProgramNode(name=name, declarations=tuple(declarations), body=body)

    def _parse_declaration(self) -> VarDeclNode:
        self._match(TokenType.VAR)
        identifier = self._match(TokenType.ID)
        self._match(TokenType.COLON)

        if not self._check(*TYPE_NAMES):
            raise self._unexpected("type name", hint="declare variables as 'integer' or 'boolean'")
        type_token = self._advance()

        self._match(TokenType.SEMICOLON)
        return VarDeclNode(identifier=identifier, type_token=type_token)

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_compound(self) -> BeginEndNode:
        self._match(TokenType.BEGIN)
        statements = []
        while not self._check(TokenType.END, TokenType.EOF):
            statements.append(self._parse_statement())
            self._match(TokenType.SEMICOLON)
        self._match(TokenType.END)
        return BeginEndNode(statements=tuple(statements))

    def _parse_statement(self) -> Statement:
        token = self._peek()

        if token.type == TokenType.ID:
            return self._parse_assignment()
        if token.type == TokenType.IF:
            return self._parse_if()
        if token.type == TokenType.WHILE:
            return self._parse_while()
        if token.type == TokenType.BEGIN:
            return self._parse_compound()

        raise self._unexpected("statement")

    def _parse_assignment(self) -> AssignNode:
        variable = self._match(TokenType.ID)
        self._match(TokenType.ASSIGN)
        expression = self._parse_expression()
        return AssignNode(variable=variable, expression=expression)

    def _parse_if(self) -> IfNode:
        self._match(TokenType.IF)
        condition = self._parse_expression()
        self._match(TokenType.THEN)
        then_branch = self._parse_statement()

        else_branch = None
        if self._check(TokenType.ELSE):
            self._advance()
            else_branch = self._parse_statement()

        return IfNode(condition=condition, then_branch=then_branch, else_branch=else_branch)

    def _parse_while(self) -> WhileNode:
        self._match(TokenType.WHILE)
        condition = self._parse_expression()
        self._match(TokenType.DO)
        body = self._parse_statement()
        return WhileNode(condition=condition, body=body)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse relational expression (< > =)."""
        return self._parse_binary(self._parse_simple, RELATIONAL_OPERATORS)

    def _parse_simple(self) -> Expression:
        """Parse additive expression (+ - or)."""
        return self._parse_binary(self._parse_term, ADDITIVE_OPERATORS)

    def _parse_term(self) -> Expression:
        """Parse multiplicative expression (* / and)."""
        return self._parse_binary(self._parse_factor, MULTIPLICATIVE_OPERATORS)

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: tuple[TokenType, ...],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Function parsing the next-higher precedence tier
            operators: Token types belonging to this tier
        """
        expr = operand_parser()

        while self._check(*operators):
            operator = self._advance()
            right = operand_parser()
            expr = BinaryOpNode(left=expr, operator=operator, right=right)

        return expr

    def _parse_factor(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.INT_LIT:
            return IntLitNode(self._advance())
        if token.type in (TokenType.TRUE, TokenType.FALSE):
            return BooleanLitNode(self._advance())
        if token.type == TokenType.ID:
            return VariableUseNode(self._advance())
        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._match(TokenType.RPAREN)
            return expr
        if token.type == TokenType.FLOAT_LIT:
            raise UnsupportedFeatureError(
                f"floating-point literal '{token.lexeme}'",
                token.location,
                self._get_source_line(token.line),
                alternative="only integer and boolean values can be compiled",
            )

        raise self._unexpected("expression")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """
    Lex and parse source text in one step.

    Raises:
        LexicalError: If the source contains an unrecognized character
        TamSyntaxError: If the source does not follow the grammar
    """
    lexer = Lexer(source, filename)
    tokens = lexer.scan()
    if lexer.has_errors():
        raise lexer.errors.first()
    return Parser(tokens, filename, source.splitlines()).parse()

