"""
tamc - Compiler Command-Line Interface
======================================

This module implements the command-line interface for the compiler.

Usage Examples
--------------
Basic compilation:
    $ tamc prog.src

With output file:
    $ tamc prog.src -o out.tam

Print the AST:
    $ tamc --ast prog.src

Code to stdout:
    $ tamc --stdout prog.src

Verbose mode:
    $ tamc -v prog.src
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from tamc import __version__
from tamc.compiler import TamCompiler
from tamc.config import CompilerOptions
from tamc.cli.errors import ExitCode, handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output code file (default: input.tam)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--stdout", "to_stdout",
    is_flag=True,
    help="Write the generated code to stdout instead of a file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tamc")
def main(
    input_file: Path,
    output: Optional[Path],
    ast: bool,
    to_stdout: bool,
    verbose: bool,
) -> None:
    """
    Compile a source program to TAM stack-machine code.

    INPUT_FILE is the source file to compile.

    \b
    Examples:
        tamc prog.src                # Outputs prog.tam
        tamc prog.src -o out.tam     # Specify output file
        tamc --ast prog.src          # Print the syntax tree
        tamc --stdout prog.src       # Print the code
    """
    try:
        options = CompilerOptions.from_env()
        options.capture_ast = ast

        if verbose:
            logging.basicConfig(level=logging.DEBUG)
            click.echo(f"Compiling {input_file}...")
        else:
            options.configure_logging()

        compiler = TamCompiler(options)
        result = compiler.compile_file(input_file)

        # AST dump mode
        if ast and result.ast_text is not None:
            click.echo(result.ast_text)

        if not result.success:
            for error in result.errors:
                click.echo(str(error), err=True)
            sys.exit(ExitCode.BUILD_ERROR)

        if ast:
            return

        if to_stdout:
            click.echo(result.code_text, nl=False)
            return

        if output is None:
            output = compiler.output_path_for(input_file)
        compiler.write_output(result, output)

        if verbose:
            click.echo(f"Tokenized: {len(result.tokens)} tokens")
            click.echo(f"Declared: {len(result.symbols)} variables")
            click.echo(f"Wrote {len(result.code)} lines to {output}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
