"""The table of jobs that a shell keeps for background and stopped work."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

MAX_JOBS = 50


class JobState(Enum):
    """The state of a job as shown by the ``jobs`` command."""

    RUNNING = "Running"
    STOPPED = "Stopped"
    TERMINATED = "Terminated"


@dataclass
class Job:
    """A process group started from one command line."""

    pgid: int
    pids: list[int] = field(default_factory=list)
    cmdline: str = ""
    state: JobState = JobState.RUNNING


class JobTable:
    """Jobs numbered from 1 up to ``MAX_JOBS - 1``; numbers are never reused."""

    def __init__(self) -> None:
        self._jobs: dict[int, Job] = {}

    def add(self, pgid: int, pids: Iterable[int], cmdline: str, state: JobState) -> int:
        """Record a job in the lowest free slot and return its number."""
        for job_id in range(1, MAX_JOBS):
            if job_id not in self._jobs:
                self._jobs[job_id] = Job(pgid, list(pids), cmdline, state)
                return job_id
        raise RuntimeError("job table is full")

    def get(self, job_id: int) -> Job | None:
        """Return job ``job_id``, or None if there is none."""
        return self._jobs.get(job_id)

    def update(self, job_id: int, state: JobState) -> None:
        """Set the state of job ``job_id``."""
        try:
            self._jobs[job_id].state = state
        except KeyError:
            raise KeyError(f"no job {job_id}") from None

    def id_by_pid(self, pid: int) -> int | None:
        """Return the number of the running job holding process ``pid``."""
        for job_id, job in sorted(self._jobs.items()):
            if job.state is JobState.RUNNING and pid in job.pids:
                return job_id
        return None

    def id_by_pgid(self, pgid: int) -> int | None:
        """Return the number of the job whose process group is ``pgid``."""
        for job_id, job in sorted(self._jobs.items()):
            if job.pgid == pgid:
                return job_id
        return None

    def listing(self) -> str:
        """Return one line per job: number, state and command line."""
        return "".join(
            f"[{job_id}]  {job.state.value}\t\t\t{job.cmdline}\n"
            for job_id, job in sorted(self._jobs.items())
        )