import pytest

from dsshell.cmdparse import (
    MAX_PIPES,
    Command,
    Pipeline,
    parse_cmdline,
    parse_single_command,
    parseline,
)


def test_parseline_simple():
    assert parseline("ls -al\n") == (["ls", "-al"], False)


def test_parseline_background():
    assert parseline("sleep 1 &\n") == (["sleep", "1"], True)


def test_parseline_ampersand_prefix_marks_background():
    assert parseline("a &b\n") == (["a"], True)


def test_parseline_blank_line():
    assert parseline("   \n") == ([], True)


def test_parseline_collapses_spaces():
    assert parseline("  echo   a    b \n") == (["echo", "a", "b"], False)


def test_single_command_double_quotes():
    cmd = parse_single_command('echo "a b" c')
    assert cmd.argv == ["echo", "a b", "c"]
    assert cmd.background is False


def test_single_command_single_quotes():
    assert parse_single_command("grep 'x  y' f").argv == ["grep", "x  y", "f"]


def test_single_command_unterminated_quote():
    assert parse_single_command('echo "abc').argv == ["echo", "abc"]


def test_single_command_empty_quotes_kept():
    assert parse_single_command('echo ""').argv == ["echo", ""]


def test_single_command_background():
    cmd = parse_single_command("sleep 5 &")
    assert cmd.argv == ["sleep", "5"]
    assert cmd.background is True
    assert cmd.argc == 2


def test_single_command_trailing_ampersand_inside_word():
    cmd = parse_single_command("sleep 5&")
    assert cmd.argv == ["sleep", "5&"]
    assert cmd.background is False


def test_single_command_blank():
    assert parse_single_command("    ") == Command([], False)


def test_cmdline_pipeline():
    pipeline = parse_cmdline("ls -l | grep x\n")
    assert [c.argv for c in pipeline.commands] == [["ls", "-l"], ["grep", "x"]]
    assert pipeline.background is False
    assert pipeline.cmd_count == 2


def test_cmdline_skips_empty_segments():
    pipeline = parse_cmdline("a || b |  | c\n")
    assert [c.argv for c in pipeline.commands] == [["a"], ["b"], ["c"]]


def test_cmdline_background_from_any_command():
    pipeline = parse_cmdline("ls | wc &\n")
    assert pipeline.background is True
    assert pipeline.commands[-1].argv == ["wc"]


def test_cmdline_empty():
    assert parse_cmdline("\n") == Pipeline([], False)


@pytest.mark.parametrize("extra", [1, 5])
def test_cmdline_limits_pipe_count(extra):
    line = " | ".join(f"cmd{i}" for i in range(MAX_PIPES + extra)) + "\n"
    pipeline = parse_cmdline(line)
    assert pipeline.cmd_count == MAX_PIPES
    assert pipeline.commands[0].argv == ["cmd0"]