from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import InvalidProcessError, ZeroBurstDurationError


@dataclass(frozen=True)
class Process:
    """
    Immutable input record for one simulated process.

    ``pid`` is a label; Round Robin also uses it to key its schedule rows.
    ``priority`` is display-only and defaults to 0 when the workload omits it.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self) -> None:
        if self.pid <= 0:
            raise InvalidProcessError(f"process id must be positive, got {self.pid}")
        if self.arrival_time < 0:
            raise InvalidProcessError(f"process {self.pid}: arrival_time must be non-negative")
        if self.burst_time <= 0:
            raise ZeroBurstDurationError(f"process {self.pid}: burst_time must be positive")


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class ScheduleRow:
    """
    One line of the schedule table.

    For the non-preemptive policies ``burst_time`` and ``arrival_time`` are the
    process's own values. Round Robin overwrites the row on every dispatch, so
    there they hold the last time slice and the last dispatch's start time.
    """

    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class ScheduleSummary:
    avg_waiting: float
    avg_turnaround: float
    throughput: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    rows: List[ScheduleRow] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    # None when the batch was empty: there is nothing to average.
    summary: Optional[ScheduleSummary] = None

    @property
    def has_data(self) -> bool:
        return self.summary is not None


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Check batch-level invariants that a single ``Process`` cannot check on
    its own, returning the batch as a list.
    """
    batch = list(processes)
    seen: set[int] = set()
    for p in batch:
        if not isinstance(p, Process):
            raise InvalidProcessError(f"expected a Process, got {p!r}")
        if p.pid in seen:
            raise InvalidProcessError(f"duplicate process id {p.pid}")
        seen.add(p.pid)
    return batch
