"""
tamc Compiler Main Module
=========================

This module provides the main compiler interface. It runs the complete
pipeline:

    Source → Lex → Parse → Check → Generate → TAM code

Usage
-----
Command line:
    $ tamc prog.src -o prog.tam

Programmatic:
    >>> from tamc import compile_tam
    >>> compile_tam('program p; begin end')
    ['HALT']

Compilation Pipeline
--------------------
1. **Lexical Analysis**: Convert source to tokens. Unrecognized characters
   are collected; if any were found the compilation fails before parsing.
2. **Parsing**: Build the AST; the first syntax error aborts.
3. **Context Check**: Build the symbol table and type-check; the first
   violation aborts.
4. **Code Generation**: Emit the instruction sequence, only after a
   successful check.

Error Handling
--------------
TamCompiler.compile_source never raises a TamError. Every failure,
including nesting too deep for the recursive passes, is folded into a
CompilationResult whose ``kind`` says which family it belongs to, and
whose ``code`` is empty. compile_tam() is the raising
convenience wrapper.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tamc.config import CompilerOptions
from tamc.lexer import Lexer, Token
from tamc.parser import Parser
from tamc.checker import Checker, SymbolTable
from tamc.codegen import CodeGenerator
from tamc.ast import ASTPrinter, ProgramNode
from tamc.errors import ErrorKind, NestingTooDeepError, TamError

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """
    Outcome of one compilation: either success with code, or failure.

    Attributes:
        filename: Source filename
        success: True if every pass completed
        code: Generated instruction lines (empty on failure)
        kind: Failure family (None on success)
        message: Formatted message of the failure (None on success)
        line: Source line of the failure, when known
        errors: Every error found; several only for lexical failures
        tokens: Token list from the lexer (present even after a lexical error)
        ast: Parsed program (if parsing succeeded)
        symbols: Symbol table (if checking succeeded)
        ast_text: Printed AST (only when CompilerOptions.capture_ast is set)
    """
    filename: str = "<input>"
    success: bool = False
    code: tuple[str, ...] = ()
    kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    line: Optional[int] = None
    errors: list[TamError] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[ProgramNode] = None
    symbols: Optional[SymbolTable] = None
    ast_text: Optional[str] = None

    @property
    def error(self) -> Optional[TamError]:
        """The error that stopped the compilation, if any."""
        return self.errors[0] if self.errors else None

    @property
    def code_text(self) -> str:
        """Generated code as newline-terminated text."""
        return "".join(f"{line}\n" for line in self.code)

    def _fail(self, errors: list[TamError]) -> "CompilationResult":
        first = errors[0]
        self.success = False
        self.code = ()
        self.errors = list(errors)
        self.kind = first.kind
        self.message = str(first)
        self.line = first.line
        return self


class TamCompiler:
    """
    Compiler from source text to TAM instruction lines.

    Each call builds fresh lexer, parser, checker and generator objects,
    so one compiler can be reused for any number of compilations.

    Example:
        compiler = TamCompiler()
        result = compiler.compile_file("prog.src")
        if result.success:
            print(result.code_text)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilationResult:
        """
        Compile source text.

        Args:
            source: Program text
            filename: Source filename for error messages

        Returns:
            CompilationResult describing success or the first failure
        """
        result = CompilationResult(filename=filename)
        source_lines = source.splitlines()

        # Stage 1: Lexical analysis
        lexer = Lexer(source, filename)
        result.tokens = lexer.scan()
        if lexer.has_errors():
            logger.info(f"{filename}: {lexer.errors.error_count()} lexical errors")
            return result._fail(lexer.errors.errors)

        try:
            # Stage 2: Parsing
            result.ast = Parser(result.tokens, filename, source_lines).parse()
            if self.options.capture_ast:
                result.ast_text = ASTPrinter().print(result.ast)

            # Stage 3: Context check
            result.symbols = Checker(source_lines).check(result.ast)

            # Stage 4: Code generation
            code = CodeGenerator().generate(result.ast)
        except TamError as e:
            logger.info(f"{filename}: {e.kind.value} error at line {e.line}")
            return result._fail([e])
        except RecursionError:
            # Printer, checker and generator recurse as deeply as the parser
            logger.info(f"{filename}: program nested too deeply")
            return result._fail([NestingTooDeepError()])

        result.code = tuple(code)
        result.success = True
        logger.debug(f"{filename}: compiled to {len(code)} lines")
        return result

    def compile_file(self, filepath: str | Path) -> CompilationResult:
        """
        Compile a source file.

        Raises:
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.compile_source(source, str(path))

    def output_path_for(self, filepath: str | Path) -> Path:
        """Default output path: the source path with the output suffix."""
        return Path(filepath).with_suffix(self.options.output_suffix)

    def write_output(self, result: CompilationResult, output_path: str | Path) -> Path:
        """
        Write the code of a successful result, one instruction per line.

        Raises:
            ValueError: If the result is a failure; no partial code is written
        """
        if not result.success:
            raise ValueError("cannot write code for a failed compilation")
        path = Path(output_path)
        path.write_text(result.code_text, encoding=self.options.encoding)
        logger.debug(f"Wrote {len(result.code)} lines to {path}")
        return path


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_tam(source: str, filename: str = "<input>") -> list[str]:
    """
    Compile source text to TAM instruction lines.

    This is the primary high-level interface.

    Returns:
        Generated instruction lines

    Raises:
        TamError: The first error of the failed compilation

    Example:
        >>> compile_tam('program p; var x : integer; begin x := 30; end')
        ['LOADL 30', 'STORE x', 'HALT']
    """
    result = TamCompiler().compile_source(source, filename)
    if not result.success:
        raise result.error
    return list(result.code)


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
    options: Optional[CompilerOptions] = None,
) -> list[str]:
    """
    Compile a source file and optionally write the code next to it.

    Raises:
        TamError: If compilation fails
        FileNotFoundError: If source file not found
    """
    compiler = TamCompiler(options)
    result = compiler.compile_file(filepath)
    if not result.success:
        raise result.error

    if output_path:
        compiler.write_output(result, output_path)

    return list(result.code)
