"""
Code Generator Test Suite
=========================

Tests for TAM instruction emission.

Test Organization
-----------------
- TestLabelAllocator: label naming and ordering
- TestSimpleCode: assignments, literals, operators
- TestControlFlow: if/else and while layouts
- TestLabels: uniqueness across nested constructs
"""

import re

import pytest
from tamc.parser import parse_source
from tamc.checker import Checker
from tamc.codegen import CodeGenerator, LabelAllocator, OPERATOR_INSTRUCTIONS


def generate(source: str) -> list[str]:
    """Parse, check and generate code for a program."""
    program = parse_source(source)
    Checker().check(program)
    return CodeGenerator().generate(program)


def body(statements: str) -> list[str]:
    """Generate code for statements using integer x, y and boolean b."""
    return generate(
        "program t; var x : integer; var y : integer; var b : boolean;"
        f" begin {statements} end"
    )


# =============================================================================
# Label Allocator Tests
# =============================================================================

class TestLabelAllocator:
    """Test label allocation."""

    def test_sequence(self):
        labels = LabelAllocator()
        assert [labels.new_label() for _ in range(3)] == ["L0", "L1", "L2"]
        assert labels.count == 3

    def test_custom_prefix(self):
        assert LabelAllocator("T").new_label() == "T0"

    def test_fresh_per_generate(self):
        """Each generate() call starts again at L0."""
        gen = CodeGenerator()
        program = parse_source("program t; var b : boolean; begin while b do b := false; end")
        first = gen.generate(program)
        second = gen.generate(program)
        assert first == second
        assert first[0] == "L0:"


# =============================================================================
# Simple Code Tests
# =============================================================================

class TestSimpleCode:
    """Test straight-line code."""

    def test_empty_program(self):
        assert generate("program t; begin end") == ["HALT"]

    def test_declarations_emit_nothing(self):
        assert generate("program t; var x : integer; var b : boolean; begin end") == ["HALT"]

    def test_assignment(self):
        code = generate("program Teste; var idade : integer; begin idade := 30; end")
        assert code == ["LOADL 30", "STORE idade", "HALT"]

    def test_boolean_literals(self):
        assert body("b := true; b := false;") == [
            "LOADL 1", "STORE b", "LOADL 0", "STORE b", "HALT",
        ]

    def test_variable_load(self):
        assert body("x := y;") == ["LOAD y", "STORE x", "HALT"]

    def test_postfix_order(self):
        """Left operand, right operand, then the operator."""
        assert body("x := 1 + 2 * y;") == [
            "LOADL 1", "LOADL 2", "LOAD y", "MULT", "ADD", "STORE x", "HALT",
        ]

    def test_left_associative_order(self):
        assert body("x := 10 - 2 - 3;") == [
            "LOADL 10", "LOADL 2", "SUB", "LOADL 3", "SUB", "STORE x", "HALT",
        ]

    @pytest.mark.parametrize("op,instruction", [
        ("+", "ADD"), ("-", "SUB"), ("*", "MULT"), ("/", "DIV"),
    ])
    def test_arithmetic_instructions(self, op, instruction):
        assert body(f"x := x {op} y;")[2] == instruction

    @pytest.mark.parametrize("op,instruction", [
        ("<", "LT"), (">", "GT"), ("=", "EQ"),
    ])
    def test_relational_instructions(self, op, instruction):
        assert body(f"b := x {op} y;")[2] == instruction

    @pytest.mark.parametrize("op,instruction", [("and", "AND"), ("or", "OR")])
    def test_logical_instructions(self, op, instruction):
        assert body(f"b := b {op} true;")[2] == instruction

    def test_every_operator_has_an_instruction(self):
        assert len(OPERATOR_INSTRUCTIONS) == 9

    def test_nested_blocks_flatten(self):
        assert body("begin x := 1; begin y := 2; end; end;") == [
            "LOADL 1", "STORE x", "LOADL 2", "STORE y", "HALT",
        ]


# =============================================================================
# Control Flow Tests
# =============================================================================

class TestControlFlow:
    """Test if/else and while layouts."""

    def test_if_else(self):
        assert body("if true then x := 1 else x := 2;") == [
            "LOADL 1",
            "JUMPIF(0) L0",
            "LOADL 1",
            "STORE x",
            "JUMP L1",
            "L0:",
            "LOADL 2",
            "STORE x",
            "L1:",
            "HALT",
        ]

    def test_if_without_else(self):
        assert body("if b then x := 1;") == [
            "LOAD b",
            "JUMPIF(0) L0",
            "LOADL 1",
            "STORE x",
            "JUMP L1",
            "L0:",
            "L1:",
            "HALT",
        ]

    def test_while(self):
        assert body("while x < 10 do x := x + 1;") == [
            "L0:",
            "LOAD x",
            "LOADL 10",
            "LT",
            "JUMPIF(0) L1",
            "LOAD x",
            "LOADL 1",
            "ADD",
            "STORE x",
            "JUMP L0",
            "L1:",
            "HALT",
        ]

    def test_halt_is_last(self):
        code = body("while b do if b then x := 1 else b := false;")
        assert code[-1] == "HALT"
        assert code.count("HALT") == 1


# =============================================================================
# Label Uniqueness Tests
# =============================================================================

LABEL_LINE = re.compile(r"^(L\d+):$")
JUMP_LINE = re.compile(r"^JUMP(?:IF\(0\))? (L\d+)$")


class TestLabels:
    """Labels are never repeated and every jump has a target."""

    SOURCE = (
        "while b do begin"
        "  if x < 1 then x := 1 else begin"
        "    while y > 0 do y := y - 1;"
        "  end;"
        "  if b then b := false;"
        "end;"
        "if x = y then x := 0;"
    )

    def test_labels_unique(self):
        code = body(self.SOURCE)
        labels = [m.group(1) for line in code if (m := LABEL_LINE.match(line))]
        assert len(labels) == 10
        assert len(set(labels)) == len(labels)

    def test_labels_numbered_in_allocation_order(self):
        code = body(self.SOURCE)
        labels = {m.group(1) for line in code if (m := LABEL_LINE.match(line))}
        assert labels == {f"L{i}" for i in range(10)}

    def test_every_jump_has_a_target(self):
        code = body(self.SOURCE)
        defined = {m.group(1) for line in code if (m := LABEL_LINE.match(line))}
        targets = {m.group(1) for line in code if (m := JUMP_LINE.match(line))}
        assert targets <= defined

    def test_nested_label_layout(self):
        """The outer construct allocates its labels before the inner one."""
        code = body("while b do if b then x := 1;")
        assert code[0] == "L0:"
        assert "JUMPIF(0) L1" in code
        assert "JUMPIF(0) L2" in code
        assert code[-2] == "L1:"
