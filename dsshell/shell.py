"""An interactive shell with pipelines, background jobs and job control."""

from __future__ import annotations

import argparse
import contextlib
import os
import re
import signal
import sys
from typing import TextIO

from .cmdparse import parse_cmdline
from .jobs import MAX_JOBS, Job, JobState, JobTable

PROMPT = "CSE4100-SP-P2> "
_NULL = "(null)"
_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _arg(argv: list[str]) -> str | None:
    return argv[1] if len(argv) > 1 else None


class Shell:
    """Runs command lines, keeping a table of background and stopped jobs."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self.table = JobTable()
        self._terminal = False
        self._shell_pgid = os.getpgrp()

    # Helpers.

    def _print(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _give_terminal(self, pgid: int) -> None:
        if self._terminal:
            with contextlib.suppress(OSError):
                os.tcsetpgrp(0, pgid)

    def _take_terminal(self) -> None:
        for signum in (signal.SIGTTOU, signal.SIGINT, signal.SIGTSTP):
            signal.signal(signum, signal.SIG_IGN)
        with contextlib.suppress(OSError):
            os.setpgid(0, 0)
        self._shell_pgid = os.getpgrp()
        self._terminal = True
        self._give_terminal(self._shell_pgid)

    @staticmethod
    def _signal_group(pgid: int, signum: int) -> None:
        if pgid > 0:
            with contextlib.suppress(ProcessLookupError, PermissionError):
                os.killpg(pgid, signum)

    @staticmethod
    def _wait_group(pgid: int) -> bool:
        """Wait for every process in group ``pgid``; return True if one stopped."""
        while True:
            try:
                _, status = os.waitpid(-pgid, os.WUNTRACED)
            except ChildProcessError:
                return False
            if os.WIFSTOPPED(status):
                return True

    def _find_job(self, text: str) -> Job | None:
        job = self.table.get(_atoi(text))
        if job is None or job.state is JobState.TERMINATED:
            return None
        return job

    def _reap(self) -> None:
        """Collect status changes of job processes without blocking."""
        flags = os.WNOHANG | os.WUNTRACED | os.WCONTINUED
        pids = [
            pid
            for job in map(self.table.get, range(1, MAX_JOBS))
            if job is not None
            for pid in job.pids
        ]
        for pid in pids:
            try:
                got, status = os.waitpid(pid, flags)
            except ChildProcessError:
                continue
            if got == 0:
                continue
            job_id = self.table.id_by_pid(pid)
            if job_id is None:
                continue
            if os.WIFEXITED(status) or os.WIFSIGNALED(status):
                self.table.update(job_id, JobState.TERMINATED)
            elif os.WIFSTOPPED(status):
                self.table.update(job_id, JobState.STOPPED)
                self._give_terminal(self._shell_pgid)
            elif os.WIFCONTINUED(status):
                self.table.update(job_id, JobState.RUNNING)

    def _exec_child(
        self,
        argv: list[str],
        pgid: int,
        stdin_fd: int | None,
        stdout_fd: int | None,
        pipe_fds: list[int],
        foreground: bool,
    ) -> None:
        for signum in (signal.SIGINT, signal.SIGTSTP, signal.SIGTTOU):
            with contextlib.suppress(ValueError):
                signal.signal(signum, signal.SIG_DFL)
        os.setpgid(0, pgid)
        if foreground:
            self._give_terminal(os.getpgrp())
        if stdin_fd is not None:
            os.dup2(stdin_fd, 0)
        if stdout_fd is not None:
            os.dup2(stdout_fd, 1)
        for fd in pipe_fds:
            os.close(fd)
        try:
            os.execvp(argv[0], argv)
        except OSError:
            os.write(1, f"{argv[0]}: Command not found.\n".encode())

    def _spawn(
        self,
        argv: list[str],
        pgid: int,
        stdin_fd: int | None,
        stdout_fd: int | None,
        pipe_fds: list[int],
        foreground: bool,
    ) -> int:
        pid = os.fork()
        if pid == 0:
            try:
                self._exec_child(argv, pgid, stdin_fd, stdout_fd, pipe_fds, foreground)
            finally:
                os._exit(0)
        group = pgid or pid
        with contextlib.suppress(OSError):
            os.setpgid(pid, group)
        if foreground:
            self._give_terminal(group)
        return pid

    # Commands.

    def builtin(self, argv: list[str]) -> bool:
        """Run ``argv`` if it is a built-in command; return whether it was one."""
        name = argv[0]
        if name == "&":
            return True
        if name == "exit":
            raise SystemExit(0)
        if name == "cd":
            target = _arg(argv)
            if target is None or target == "~":
                target = os.environ.get("HOME")
            changed = False
            if target is not None:
                try:
                    os.chdir(target)
                    changed = True
                except OSError:
                    pass
            if not changed:
                shown = target if target is not None else _NULL
                self._print(f"{shown}: No such file or directory.\n")
            return True
        if name == "jobs":
            self.jobs()
            return True
        if name == "bg":
            self.bg(_arg(argv))
            return True
        if name == "fg":
            self.fg(_arg(argv))
            return True
        if name == "kill":
            self.kill(_arg(argv))
            return True
        return False

    def eval(self, cmdline: str) -> None:
        """Evaluate one command line: built-ins, then a pipeline of programs."""
        pipeline = parse_cmdline(cmdline)
        if not pipeline.commands:
            return
        count = pipeline.cmd_count
        pipes = [os.pipe() for _ in range(count - 1)]
        pipe_fds = [fd for pair in pipes for fd in pair]
        foreground = not pipeline.background
        pgid = 0
        pids: list[int] = []
        try:
            for index, command in enumerate(pipeline.commands):
                if self.builtin(command.argv):
                    continue
                stdin_fd = pipes[index - 1][0] if index > 0 else None
                stdout_fd = pipes[index][1] if index < count - 1 else None
                pid = self._spawn(command.argv, pgid, stdin_fd, stdout_fd, pipe_fds, foreground)
                pgid = pgid or pid
                pids.append(pid)
        finally:
            for fd in pipe_fds:
                os.close(fd)

        if not pids:
            return
        text = cmdline.rstrip("\n")
        if foreground:
            if self._wait_group(pgid):
                self.table.add(pgid, pids, text, JobState.STOPPED)
            self._give_terminal(self._shell_pgid)
        else:
            job_id = self.table.add(pgid, pids, text, JobState.RUNNING)
            self._print(f"[{job_id}] [{pgid}]\n")

    def jobs(self) -> None:
        """Print every job with its state and command line."""
        self._reap()
        self._print(self.table.listing())

    def fg(self, arg: str | None) -> None:
        """Continue job ``arg`` in the foreground and wait for it."""
        if arg is None:
            self._print(f"fg: {_NULL}: No such job\n")
            return
        job = self._find_job(arg)
        if job is None:
            self._print(f"fg: {arg}: No such job\n")
            return
        self._give_terminal(job.pgid)
        job.state = JobState.RUNNING
        self._signal_group(job.pgid, signal.SIGCONT)
        self._print(f"{job.cmdline}\n")
        stopped = self._wait_group(job.pgid)
        job.state = JobState.STOPPED if stopped else JobState.TERMINATED
        self._give_terminal(self._shell_pgid)

    def bg(self, arg: str | None) -> None:
        """Continue job ``arg`` in the background."""
        if arg is None:
            self._print(f"bg: {_NULL}: No such job\n")
            return
        job = self._find_job(arg)
        if job is None:
            self._print(f"bg: {arg}: No such job\n")
            return
        self._signal_group(job.pgid, signal.SIGCONT)
        job.state = JobState.RUNNING
        self._give_terminal(self._shell_pgid)

    def kill(self, arg: str | None) -> None:
        """Interrupt job ``%N``."""
        if arg is None or not arg.startswith("%"):
            self._print("kill: usage: kill %[job_id]\n")
            return
        job = self._find_job(arg[1:])
        if job is None:
            self._print(f"kill: {arg}: No such job\n")
            return
        self._signal_group(job.pgid, signal.SIGINT)
        job.state = JobState.TERMINATED

    def run(self, stream: TextIO) -> None:
        """Prompt for and evaluate lines from ``stream`` until end of input or ``exit``."""
        while True:
            self._reap()
            self._print(PROMPT)
            line = stream.readline()
            if not line.endswith("\n"):
                return
            try:
                self.eval(line)
            except SystemExit:
                return


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on standard input."""
    parser = argparse.ArgumentParser(prog="myshell", description="A small job-control shell.")
    parser.parse_args(argv)
    shell = Shell()
    if os.isatty(0):
        shell._take_terminal()
    shell.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())