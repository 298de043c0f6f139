"""
TAM Code Generator
==================

This module generates stack-machine instructions from a checked AST.

Code Generation Strategy
------------------------
Every expression leaves exactly one value on top of the operand stack.
A binary operation evaluates its left operand, then its right operand,
then emits one instruction that pops both and pushes the result.
Variables are addressed by name, so declarations reserve nothing.

Instruction Set
---------------
| Instruction      | Effect                                       |
|------------------|----------------------------------------------|
| LOADL <value>    | push a literal (booleans as 1 / 0)           |
| LOAD <name>      | push the value of a variable                 |
| STORE <name>     | pop into a variable                          |
| ADD SUB MULT DIV | integer arithmetic                           |
| AND OR           | boolean connectives                          |
| EQ LT GT         | comparisons, push 1 or 0                     |
| JUMP <label>     | unconditional jump                           |
| JUMPIF(0) <label>| pop; jump if the value is 0 (false)          |
| HALT             | stop the machine                             |

Label lines have the form ``L3:``.

Control Flow Layout
-------------------
    if c then s1 else s2          while c do s
        <c>                       L0:
        JUMPIF(0) L0                  <c>
        <s1>                          JUMPIF(0) L1
        JUMP L1                       <s>
    L0:                               JUMP L0
        <s2>                      L1:
    L1:

The generator trusts the checker: it never consults the symbol table and
must only run on a program that passed checking.

Usage
-----
>>> from tamc.parser import parse_source
>>> from tamc.codegen import CodeGenerator
>>> program = parse_source('program p; var x : integer; begin x := 1; end')
>>> CodeGenerator().generate(program)
['LOADL 1', 'STORE x', 'HALT']
"""

import logging

from tamc.lexer import TokenType
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

logger = logging.getLogger(__name__)


OPERATOR_INSTRUCTIONS: dict[TokenType, str] = {
    TokenType.PLUS: "ADD",
    TokenType.MINUS: "SUB",
    TokenType.TIMES: "MULT",
    TokenType.DIV: "DIV",
    TokenType.AND: "AND",
    TokenType.OR: "OR",
    TokenType.EQ: "EQ",
    TokenType.LT: "LT",
    TokenType.GT: "GT",
}


class LabelAllocator:
    """
    Hands out jump labels L0, L1, L2, ... in allocation order.

    One allocator lives for one generate() call; it is never reset while
    that call runs, so every label in its output is unique.
    """

    def __init__(self, prefix: str = "L"):
        self.prefix = prefix
        self._next = 0

    def new_label(self) -> str:
        label = f"{self.prefix}{self._next}"
        self._next += 1
        return label

    @property
    def count(self) -> int:
        """Number of labels allocated so far."""
        return self._next


class CodeGenerator(ASTVisitor):
    """
    Emits TAM instructions for a checked program.

    Usage:
        code = CodeGenerator().generate(program)
    """

    def __init__(self):
        self._output: list[str] = []
        self._labels = LabelAllocator()

    def generate(self, program: ProgramNode) -> list[str]:
        """
        Generate the instruction sequence for a program.

        Args:
            program: A ProgramNode that passed the context check

        Returns:
            Instruction and label lines in emission order, ending with HALT
        """
        self._output = []
        self._labels = LabelAllocator()

        self.visit(program)

        logger.debug(
            f"Generated {len(self._output)} lines using {self._labels.count} labels"
        )
        return self._output

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _emit(self, instruction: str, operand: object = None) -> None:
        if operand is None:
            self._output.append(instruction)
        else:
            self._output.append(f"{instruction} {operand}")

    def _emit_label(self, label: str) -> None:
        self._output.append(f"{label}:")

    # =========================================================================
    # Declarations and Statements
    # =========================================================================

    def visit_ProgramNode(self, node: ProgramNode):
        for decl in node.declarations:
            self.visit(decl)
        self.visit(node.body)
        self._emit("HALT")

    def visit_VarDeclNode(self, node: VarDeclNode):
        pass

    def visit_BeginEndNode(self, node: BeginEndNode):
        for stmt in node.statements:
            self.visit(stmt)

    def visit_AssignNode(self, node: AssignNode):
        self.visit(node.expression)
        self._emit("STORE", node.variable.lexeme)

    def visit_IfNode(self, node: IfNode):
        else_label = self._labels.new_label()
        end_label = self._labels.new_label()

        self.visit(node.condition)
        self._emit("JUMPIF(0)", else_label)
        self.visit(node.then_branch)
        self._emit("JUMP", end_label)

        self._emit_label(else_label)
        if node.else_branch is not None:
            self.visit(node.else_branch)
        self._emit_label(end_label)

    def visit_WhileNode(self, node: WhileNode):
        start_label = self._labels.new_label()
        end_label = self._labels.new_label()

        self._emit_label(start_label)
        self.visit(node.condition)
        self._emit("JUMPIF(0)", end_label)
        self.visit(node.body)
        self._emit("JUMP", start_label)
        self._emit_label(end_label)

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_BinaryOpNode(self, node: BinaryOpNode):
        self.visit(node.left)
        self.visit(node.right)
        self._emit(OPERATOR_INSTRUCTIONS[node.operator.type])

    def visit_IntLitNode(self, node: IntLitNode):
        self._emit("LOADL", node.value.literal)

    def visit_BooleanLitNode(self, node: BooleanLitNode):
        self._emit("LOADL", 1 if node.truth else 0)

    def visit_VariableUseNode(self, node: VariableUseNode):
        self._emit("LOAD", node.identifier.lexeme)
