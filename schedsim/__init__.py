"""
Schedule simulator package.

Runs a fixed batch of processes through classic single-CPU scheduling
algorithms (FCFS, SJF, inverse-burst Priority and Round Robin) and reports
the Gantt trace, per-process timings and averages for each.
"""

from .algorithms import (
    ALGORITHMS,
    RR_QUANTUM,
    inverse_burst_key,
    run_algorithm,
    run_all,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .models import Process, ScheduledSlice, ScheduleResult, ScheduleRow, ScheduleSummary

__all__ = [
    "ALGORITHMS",
    "RR_QUANTUM",
    "Process",
    "ScheduleResult",
    "ScheduleRow",
    "ScheduleSummary",
    "ScheduledSlice",
    "inverse_burst_key",
    "run_algorithm",
    "run_all",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
