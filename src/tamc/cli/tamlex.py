"""
tamlex - Token Listing Tool
===========================

Prints the tokens the lexer produces, one per line. Useful for checking
how a program is split up before it reaches the parser.

Usage Examples
--------------
Tokens of a file:
    $ tamlex prog.src

Tokens of stdin:
    $ echo "x := 1;" | tamlex

Interactive, one line at a time:
    $ tamlex -i
"""

import sys
from pathlib import Path
from typing import Optional

import click

from tamc import __version__
from tamc.config import CompilerOptions
from tamc.lexer import Lexer
from tamc.cli.errors import ExitCode, handle_cli_exception


def _echo_tokens(lexer: Lexer) -> bool:
    """Print every token, then the lexical error report. Return True if clean."""
    for token in lexer.scan():
        click.echo(repr(token))
    if lexer.has_errors():
        click.echo(lexer.errors.report(), err=True)
    return not lexer.has_errors()


@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-i", "--interactive",
    is_flag=True,
    help="Tokenize stdin line by line until end of input",
)
@click.version_option(version=__version__, prog_name="tamlex")
def main(input_file: Optional[Path], interactive: bool) -> None:
    """
    List the tokens of a source program.

    INPUT_FILE is the source file to scan; stdin is read when omitted.

    \b
    Examples:
        tamlex prog.src              # Tokens of a file
        tamlex < prog.src            # Tokens of stdin
        tamlex -i                    # Echo tokens for each typed line
    """
    try:
        if interactive:
            stdin = click.get_text_stream("stdin")
            clean = True
            for line in stdin:
                clean = _echo_tokens(Lexer(line, "<stdin>")) and clean
            sys.exit(ExitCode.SUCCESS if clean else ExitCode.BUILD_ERROR)

        if input_file is not None:
            encoding = CompilerOptions.from_env().encoding
            lexer = Lexer(input_file.read_text(encoding=encoding), str(input_file))
        else:
            lexer = Lexer(click.get_text_stream("stdin").read(), "<stdin>")

        if not _echo_tokens(lexer):
            sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e)


if __name__ == "__main__":
    main()
