"""Parsing of shell command lines into commands and pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field

MAX_PIPES = 10
_QUOTES = "\"'"


@dataclass
class Command:
    """One command of a pipeline: its arguments and whether it ends with ``&``."""

    argv: list[str] = field(default_factory=list)
    background: bool = False

    @property
    def argc(self) -> int:
        return len(self.argv)


@dataclass
class Pipeline:
    """Commands joined by ``|``; background if any command asked for it."""

    commands: list[Command] = field(default_factory=list)
    background: bool = False

    @property
    def cmd_count(self) -> int:
        return len(self.commands)


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def parseline(line: str) -> tuple[list[str], bool]:
    """Split ``line`` on spaces into an argument list.

    Returns the arguments and whether the job runs in the background: a
    final argument starting with ``&`` is dropped and marks a background
    job. A blank line gives no arguments and counts as background.
    """
    argv = [token for token in _strip_newline(line).split(" ") if token]
    if not argv:
        return [], True
    background = argv[-1].startswith("&")
    if background:
        argv.pop()
    return argv, background


def _split_arguments(text: str) -> list[str]:
    argv: list[str] = []
    length = len(text)
    pos = 0
    while pos < length and text[pos] == " ":
        pos += 1
    while pos < length:
        char = text[pos]
        if char in _QUOTES:
            end = text.find(char, pos + 1)
            if end == -1:
                argv.append(text[pos + 1:])
                pos = length
            else:
                argv.append(text[pos + 1:end])
                pos = end + 1
        else:
            end = text.find(" ", pos)
            if end == -1:
                argv.append(text[pos:])
                pos = length
            else:
                argv.append(text[pos:end])
                pos = end + 1
        while pos < length and text[pos] == " ":
            pos += 1
    return argv


def parse_single_command(text: str) -> Command:
    """Parse one command, honouring single and double quotes.

    A last argument starting with ``&`` is removed and marks the command
    as a background one.
    """
    argv = _split_arguments(text)
    background = bool(argv) and argv[-1].startswith("&")
    if background:
        argv.pop()
    return Command(argv, background)


def parse_cmdline(line: str) -> Pipeline:
    """Parse a command line into a pipeline of at most ``MAX_PIPES`` commands.

    Empty segments between ``|`` characters are skipped.
    """
    pipeline = Pipeline()
    for segment in _strip_newline(line).split("|"):
        if not segment:
            continue
        if pipeline.cmd_count >= MAX_PIPES:
            break
        command = parse_single_command(segment)
        if command.argv:
            pipeline.commands.append(command)
        if command.background:
            pipeline.background = True
    return pipeline