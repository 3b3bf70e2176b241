from __future__ import annotations

from typing import Dict, Optional

from .models import ScheduledSlice, ScheduleResult, ScheduleRow, ScheduleSummary


def compute_summary(
    total_waiting: float,
    total_turnaround: float,
    last_completion: int,
    process_count: int,
) -> Optional[ScheduleSummary]:
    """
    Averages are taken over the number of processes, not the number of
    dispatches. Throughput uses the completion time of the last dispatch
    recorded. Returns None for an empty batch.
    """
    if process_count == 0:
        return None

    throughput = process_count / last_completion if last_completion > 0 else 0.0
    return ScheduleSummary(
        avg_waiting=total_waiting / process_count,
        avg_turnaround=total_turnaround / process_count,
        throughput=throughput,
    )


class ScheduleAccumulator:
    """
    Per-policy bookkeeping: the trace, the schedule rows and the running
    totals behind the averages.

    Rows are keyed by process id. Recording a second row for the same id
    replaces the earlier one in place, which is how Round Robin ends up with a
    last-dispatch snapshot per process.
    """

    def __init__(self, algorithm: str, quantum: Optional[int] = None) -> None:
        self.algorithm = algorithm
        self.quantum = quantum
        self.timeline: list[ScheduledSlice] = []
        self._rows: Dict[int, ScheduleRow] = {}
        self.total_waiting = 0
        self.total_turnaround = 0
        self.last_completion = 0

    def record(self, row: ScheduleRow, slice_: ScheduledSlice) -> None:
        self.timeline.append(slice_)
        self._rows[row.pid] = row
        self.total_waiting += row.waiting_time
        self.total_turnaround += row.turnaround_time
        self.last_completion = row.completion_time

    def finish(self, process_count: int) -> ScheduleResult:
        summary = compute_summary(
            self.total_waiting,
            self.total_turnaround,
            self.last_completion,
            process_count,
        )
        return ScheduleResult(
            algorithm=self.algorithm,
            quantum=self.quantum,
            rows=list(self._rows.values()),
            timeline=list(self.timeline),
            summary=summary,
        )
