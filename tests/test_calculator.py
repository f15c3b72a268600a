"""
Tests for the calculator session and command-line interface.

These tests verify that:
- A session keeps its stack and functions between lines
- Errors are reported on stderr and leave the stack unchanged
- Script files and -e expressions run in batch mode
- The exit status reflects failures
"""

import pytest

from rpnlisp.calculator import RPNCalculator, main


@pytest.fixture
def calc():
    """Create a seeded calculator that does not echo messages."""
    return RPNCalculator(seed=0, echo_messages=False)


class TestSession:
    """Tests for RPNCalculator."""

    def test_stack_persists_between_lines(self, calc):
        assert calc.evaluate_line("1 2")
        assert calc.evaluate_line("+")
        assert calc.stack == ["3"]

    def test_functions_persist_between_lines(self, calc):
        calc.evaluate_line("( sq dup x )")
        calc.evaluate_line("4 sq")
        assert calc.stack == ["16"]

    def test_error_keeps_stack(self, calc, capsys):
        calc.evaluate_line("1 2")
        assert not calc.evaluate_line("3 + + +")
        assert calc.stack == ["1", "2"]
        assert "Error: stack underflow" in capsys.readouterr().err

    def test_messages_are_collected(self, calc):
        calc.evaluate_line("help")
        assert len(calc.messages) == 1

    def test_messages_are_echoed(self, capsys):
        calc = RPNCalculator(seed=0)
        calc.evaluate_line("cmds")
        assert "dup" in capsys.readouterr().out

    def test_format_stack(self, calc):
        assert calc.format_stack() == "(empty)"
        calc.evaluate_line("1 2")
        assert calc.format_stack() == "1: 1\n0: 2"

    def test_format_stack_aligns_indexes(self, calc):
        calc.evaluate_line("11 io")
        lines = calc.format_stack().split("\n")
        assert lines[0] == "10: 1"
        assert lines[-1] == " 0: 11"

    def test_format_stack_escapes_surrogates(self, calc):
        calc.evaluate_line("55296 dec_asc")
        assert calc.format_stack() == "0: \\ud800"

    def test_format_user_commands(self, calc):
        assert calc.format_user_commands() == ""
        calc.evaluate_line("( sq dup x ) ( _ + ) ( cube dup dup x x )")
        assert calc.format_user_commands() == "custom: sq cube"

    def test_run_file(self, calc, tmp_path):
        script = tmp_path / "square.rpn"
        script.write_text("( sq\n  dup x\n)\n7 sq\n")
        assert calc.run_file(str(script))
        assert calc.stack == ["49"]

    def test_run_missing_file(self, calc, tmp_path, capsys):
        assert not calc.run_file(str(tmp_path / "missing.rpn"))
        assert "File not found" in capsys.readouterr().err


class TestMain:
    """Tests for the command-line entry point."""

    def test_expression(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-e", "1 2 +"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "3"

    def test_multiple_expressions_share_stack(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-e", "( sq dup x )", "-e", "3 sq 4 sq"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "9 16"

    def test_script_then_expression(self, tmp_path, capsys):
        script = tmp_path / "defs.rpn"
        script.write_text("( double 2 x )\n")
        with pytest.raises(SystemExit) as exc_info:
            main([str(script), "-e", "21 double"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "42"

    def test_lone_surrogate_is_printed_escaped(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-e", "55296 dec_asc"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "\\ud800"

    def test_error_exit_status(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-e", "+"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_max_depth_option(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--max-depth", "2", "-e", "( a 1 ) ( b a ) ( c b ) c"])
        assert exc_info.value.code == 1
        assert "recursion limit of 2" in capsys.readouterr().err

    def test_max_iterations_option(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--max-iterations", "5", "-e", "6 io"])
        assert exc_info.value.code == 1

    def test_seed_option(self, capsys):
        outputs = []
        for _ in range(2):
            with pytest.raises(SystemExit):
                main(["--seed", "7", "-e", "1000 rand 1000 rand"])
            outputs.append(capsys.readouterr().out)
        assert outputs[0] == outputs[1]
