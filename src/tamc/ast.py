"""
tamc Abstract Syntax Tree (AST) Definitions
===========================================

This module defines the AST node types built by the parser and consumed
by every later pass.

Node Hierarchy
--------------
ProgramNode - root: program name, declarations, compound body
├── VarDeclNode - 'var' identifier ':' type
├── Statements
│   ├── BeginEndNode - compound statement begin ... end
│   ├── AssignNode - identifier := expression
│   ├── IfNode - if/then with optional else
│   └── WhileNode - while/do loop
└── Expressions
    ├── BinaryOpNode - arithmetic, logical and relational operators
    ├── IntLitNode - integer constant
    ├── BooleanLitNode - true / false
    └── VariableUseNode - variable reference

Design Notes
------------
- The set of variants is closed; Statement and Expression are Union
  aliases over it.
- Nodes are frozen dataclasses holding tokens, so every node keeps the
  line of the construct it came from without a separate location field.
- No node refers to its parent. Passes traverse top-down through
  ASTVisitor, and adding a pass never touches these definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from tamc.lexer import Token, TokenType


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class VarDeclNode:
    """
    Variable declaration: ``var idade : integer;``

    Attributes:
        identifier: The ID token naming the variable
        type_token: The INTEGER or BOOLEAN keyword token
    """
    identifier: Token
    type_token: Token

    @property
    def name(self) -> str:
        return self.identifier.lexeme


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class IntLitNode:
    """Integer literal; ``value`` is the INT_LIT token."""
    value: Token


@dataclass(frozen=True)
class BooleanLitNode:
    """Boolean literal; ``value`` is the TRUE or FALSE token."""
    value: Token

    @property
    def truth(self) -> bool:
        return self.value.type == TokenType.TRUE


@dataclass(frozen=True)
class VariableUseNode:
    """Reference to a variable inside an expression."""
    identifier: Token

    @property
    def name(self) -> str:
        return self.identifier.lexeme


@dataclass(frozen=True)
class BinaryOpNode:
    """
    Binary operation ``left op right``.

    Attributes:
        left: Left operand expression
        operator: The operator token (PLUS, MINUS, TIMES, DIV, AND, OR, LT, GT, EQ)
        right: Right operand expression
    """
    left: "Expression"
    operator: Token
    right: "Expression"


Expression = Union[BinaryOpNode, IntLitNode, BooleanLitNode, VariableUseNode]


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class AssignNode:
    """
    Assignment ``variable := expression``.

    Attributes:
        variable: The ID token of the target
        expression: The value to store
    """
    variable: Token
    expression: Expression

    @property
    def name(self) -> str:
        return self.variable.lexeme


@dataclass(frozen=True)
class IfNode:
    """
    Conditional statement.

    Attributes:
        condition: Boolean condition expression
        then_branch: Statement executed when the condition holds
        else_branch: Optional statement executed otherwise
    """
    condition: Expression
    then_branch: "Statement"
    else_branch: Optional["Statement"] = None


@dataclass(frozen=True)
class WhileNode:
    """
    While loop.

    Attributes:
        condition: Boolean loop condition
        body: Loop body statement
    """
    condition: Expression
    body: "Statement"


@dataclass(frozen=True)
class BeginEndNode:
    """Compound statement; ``statements`` may be empty."""
    statements: tuple["Statement", ...] = field(default_factory=tuple)


Statement = Union[BeginEndNode, AssignNode, IfNode, WhileNode]


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass(frozen=True)
class ProgramNode:
    """
    Root node of a complete program.

    Attributes:
        name: The ID token after 'program'
        declarations: Variable declarations, in source order
        body: The main compound statement
    """
    name: Token
    declarations: tuple[VarDeclNode, ...]
    body: BeginEndNode


ASTNode = Union[ProgramNode, VarDeclNode, Statement, Expression]

NODE_TYPES = (
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


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for whole-tree passes.

    ``visit`` dispatches on the node's class name to ``visit_<ClassName>``.
    There is no default traversal. A subclass must override the visit
    method of every variant in NODE_TYPES, or defining the class raises
    TypeError, so adding a variant breaks every pass that ignores it as
    soon as the module is imported.

    Usage:
        class MyPass(ASTVisitor):
            def visit_ProgramNode(self, node): ...
            def visit_VarDeclNode(self, node): ...
            # ... one method per variant

        MyPass().visit(program)
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = [
            node_type.__name__
            for node_type in NODE_TYPES
            if getattr(cls, f"visit_{node_type.__name__}")
            is getattr(ASTVisitor, f"visit_{node_type.__name__}")
        ]
        if missing:
            raise TypeError(f"{cls.__name__} does not handle {', '.join(missing)}")

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> Any:
        raise NotImplementedError(
            f"{self.__class__.__name__} does not handle {node.__class__.__name__}"
        )

    def visit_ProgramNode(self, node: ProgramNode): return self.generic_visit(node)
    def visit_VarDeclNode(self, node: VarDeclNode): return self.generic_visit(node)
    def visit_BeginEndNode(self, node: BeginEndNode): return self.generic_visit(node)
    def visit_AssignNode(self, node: AssignNode): return self.generic_visit(node)
    def visit_IfNode(self, node: IfNode): return self.generic_visit(node)
    def visit_WhileNode(self, node: WhileNode): return self.generic_visit(node)
    def visit_BinaryOpNode(self, node: BinaryOpNode): return self.generic_visit(node)
    def visit_IntLitNode(self, node: IntLitNode): return self.generic_visit(node)
    def visit_BooleanLitNode(self, node: BooleanLitNode): return self.generic_visit(node)
    def visit_VariableUseNode(self, node: VariableUseNode): return self.generic_visit(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Indented structural rendering of the AST, for debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))

    Output:
        ProgramNode: Teste
          Declarations:
            VarDeclNode: x : integer
          Compound Statement:
            BeginEndNode
              AssignNode: x
                Expression:
                  IntLitNode: 1
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Render the AST and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _section(self, title: str, node: ASTNode) -> None:
        self._emit(title)
        self._indent()
        self.visit(node)
        self._dedent()

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit(f"ProgramNode: {node.name.lexeme}")
        self._indent()
        self._emit("Declarations:")
        self._indent()
        for decl in node.declarations:
            self.visit(decl)
        self._dedent()
        self._section("Compound Statement:", node.body)
        self._dedent()

    def visit_VarDeclNode(self, node: VarDeclNode):
        self._emit(f"VarDeclNode: {node.identifier.lexeme} : {node.type_token.lexeme}")

    def visit_BeginEndNode(self, node: BeginEndNode):
        self._emit("BeginEndNode")
        self._indent()
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()

    def visit_AssignNode(self, node: AssignNode):
        self._emit(f"AssignNode: {node.variable.lexeme}")
        self._indent()
        self._section("Expression:", node.expression)
        self._dedent()

    def visit_IfNode(self, node: IfNode):
        self._emit("IfNode")
        self._indent()
        self._section("Condition:", node.condition)
        self._section("Then Branch:", node.then_branch)
        if node.else_branch is not None:
            self._section("Else Branch:", node.else_branch)
        self._dedent()

    def visit_WhileNode(self, node: WhileNode):
        self._emit("WhileNode")
        self._indent()
        self._section("Condition:", node.condition)
        self._section("Do:", node.body)
        self._dedent()

    def visit_BinaryOpNode(self, node: BinaryOpNode):
        self._emit(f"BinaryOpNode: '{node.operator.lexeme}'")
        self._indent()
        self._section("Left:", node.left)
        self._section("Right:", node.right)
        self._dedent()

    def visit_IntLitNode(self, node: IntLitNode):
        self._emit(f"IntLitNode: {node.value.lexeme}")

    def visit_BooleanLitNode(self, node: BooleanLitNode):
        self._emit(f"BooleanLitNode: {node.value.lexeme}")

    def visit_VariableUseNode(self, node: VariableUseNode):
        self._emit(f"VariableUseNode: {node.identifier.lexeme}")
