"""
CLI Test Suite
==============

Tests for the tamc and tamlex command-line tools, driven through
click's CliRunner.
"""

from pathlib import Path

import pytest


PROGRAM = """\
program Teste;
var idade : integer;
begin
    idade := 30;
end
"""


# =============================================================================
# tamc Tests
# =============================================================================

class TestTamcCommand:
    """Test the compiler command."""

    def test_compile_writes_tam_file(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text(PROGRAM)
            result = runner.invoke(main, ["prog.src"])

            assert result.exit_code == 0, f"Compile failed: {result.output}"
            assert Path("prog.tam").read_text() == "LOADL 30\nSTORE idade\nHALT\n"
            assert "Compiled prog.src -> prog.tam" in result.output

    def test_output_option(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text(PROGRAM)
            result = runner.invoke(main, ["prog.src", "-o", "out.tam"])

            assert result.exit_code == 0
            assert Path("out.tam").exists()
            assert not Path("prog.tam").exists()

    def test_stdout_option(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text(PROGRAM)
            result = runner.invoke(main, ["prog.src", "--stdout"])

            assert result.exit_code == 0
            assert "LOADL 30\nSTORE idade\nHALT\n" in result.output
            assert not Path("prog.tam").exists()

    def test_ast_option(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text(PROGRAM)
            result = runner.invoke(main, ["prog.src", "--ast"])

            assert result.exit_code == 0
            assert "ProgramNode: Teste" in result.output
            assert "VarDeclNode: idade : integer" in result.output
            assert not Path("prog.tam").exists()

    def test_context_error_exit_code(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main
        from tamc.cli.errors import ExitCode

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.src").write_text(PROGRAM.replace("idade := 30", "idade := true"))
            result = runner.invoke(main, ["bad.src"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "type mismatch in assignment to 'idade'" in result.output
            assert not Path("bad.tam").exists()

    def test_lexical_errors_all_reported(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.src").write_text("program t; begin x := 1 # 2 $ 3; end")
            result = runner.invoke(main, ["bad.src"])

            assert result.exit_code == 1
            assert "unrecognized character '#'" in result.output
            assert "unrecognized character '$'" in result.output

    def test_missing_input(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nothing.src"])
            assert result.exit_code == 2

    def test_output_suffix_from_env(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text(PROGRAM)
            result = runner.invoke(main, ["prog.src"], env={"TAMC_OUTPUT_SUFFIX": ".out"})

            assert result.exit_code == 0
            assert Path("prog.out").exists()

    def test_version(self):
        from click.testing import CliRunner
        from tamc.cli.tamc import main
        from tamc import __version__

        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# tamlex Tests
# =============================================================================

class TestTamlexCommand:
    """Test the token listing command."""

    def test_file_tokens(self):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text("var soma : integer;")
            result = runner.invoke(main, ["prog.src"])

            assert result.exit_code == 0
            lines = result.output.splitlines()
            assert lines[0] == "Token(VAR, 'var', 1:1)"
            assert lines[1] == "Token(ID, 'soma', 1:5)"
            assert lines[-1] == "Token(EOF, 1:20)"

    def test_stdin_tokens(self):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        result = CliRunner().invoke(main, [], input="x := 42;")
        assert result.exit_code == 0
        assert "Token(INT_LIT, 42, 1:6)" in result.output

    def test_interactive_lines(self):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        result = CliRunner().invoke(main, ["-i"], input="x := 1\nwhile\n")
        assert result.exit_code == 0
        assert "Token(ASSIGN, ':=', 1:3)" in result.output
        assert "Token(WHILE, 'while', 1:1)" in result.output
        assert result.output.count("Token(EOF") == 2

    def test_lexical_error_exit_code(self):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        result = CliRunner().invoke(main, [], input="x @ y")
        assert result.exit_code == 1
        assert "Token(ID, 'y', 1:5)" in result.output
        assert "unrecognized character '@'" in result.output

    def test_error_report_counts_errors(self):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        result = CliRunner().invoke(main, [], input="x $ y & z")
        assert result.exit_code == 1
        assert "Token(ID, 'z', 1:9)" in result.output
        assert "unrecognized character '&'" in result.output
        assert "2 errors" in result.output

    @pytest.mark.parametrize("flag", ["-i", "--interactive"])
    def test_interactive_flag_names(self, flag):
        from click.testing import CliRunner
        from tamc.cli.tamlex import main

        result = CliRunner().invoke(main, [flag], input="")
        assert result.exit_code == 0
