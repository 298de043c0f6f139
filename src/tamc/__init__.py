"""
tamc - TAM Compiler
===================

This package implements a compiler for a small imperative language,
targeting the textual instruction set of the TAM stack machine.

The language provides:

- A program header and flat variable declarations (integer, boolean)
- Assignment, if/then/else, while/do and begin/end blocks
- Integer arithmetic, boolean connectives and comparisons

Pipeline
--------
The compilation process follows this pipeline:

    Source → Lexer → Parser → AST → Checker → Code Generator → TAM code

Usage
-----
>>> from tamc import compile_tam
>>> source = '''
... program Teste;
... var idade : integer;
... begin
...     idade := 30;
... end
... '''
>>> compile_tam(source)
['LOADL 30', 'STORE idade', 'HALT']

Not supported:
- Nested scopes, procedures and functions
- Arrays and records
- Floating-point values (scanned, then rejected by the parser)
"""

# =============================================================================
# Version Information
# =============================================================================

__version__ = "1.0.0"

# =============================================================================
# Public API Imports
# =============================================================================

from tamc.compiler import TamCompiler, CompilationResult, compile_tam, compile_file
from tamc.config import CompilerOptions
from tamc.errors import (
    TamError,
    ErrorKind,
    SourceLocation,
    LexicalError,
    InvalidCharacterError,
    LiteralTooLargeError,
    TamSyntaxError,
    UnexpectedTokenError,
    UnsupportedFeatureError,
    NestingTooDeepError,
    ContextError,
    DuplicateDeclarationError,
    UndeclaredIdentifierError,
    TypeMismatchError,
    ConditionTypeError,
    OperatorTypeError,
)
from tamc.lexer import Lexer, Token, TokenType
from tamc.parser import Parser, parse_source
from tamc.checker import Checker, SymbolTable, IdEntry, VarType
from tamc.codegen import CodeGenerator
from tamc.ast import (
    ASTNode,
    ASTVisitor,
    ASTPrinter,
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

__all__ = [
    # Version
    "__version__",
    # Main API
    "TamCompiler",
    "CompilationResult",
    "compile_tam",
    "compile_file",
    "CompilerOptions",
    # Errors
    "TamError",
    "ErrorKind",
    "SourceLocation",
    "LexicalError",
    "InvalidCharacterError",
    "LiteralTooLargeError",
    "TamSyntaxError",
    "UnexpectedTokenError",
    "UnsupportedFeatureError",
    "NestingTooDeepError",
    "ContextError",
    "DuplicateDeclarationError",
    "UndeclaredIdentifierError",
    "TypeMismatchError",
    "ConditionTypeError",
    "OperatorTypeError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "parse_source",
    # Checker
    "Checker",
    "SymbolTable",
    "IdEntry",
    "VarType",
    # Code Generator
    "CodeGenerator",
    # AST Nodes
    "ASTNode",
    "ASTVisitor",
    "ASTPrinter",
    "ProgramNode",
    "VarDeclNode",
    "BeginEndNode",
    "AssignNode",
    "IfNode",
    "WhileNode",
    "BinaryOpNode",
    "IntLitNode",
    "BooleanLitNode",
    "VariableUseNode",
]
