from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from typing import Callable, Deque, Dict, List, Sequence

from .errors import UnknownAlgorithmError, ZeroBurstDurationError
from .metrics import ScheduleAccumulator
from .models import Process, ScheduledSlice, ScheduleResult, ScheduleRow, validate_processes
from .ready_queue import ReadyQueue

logger = logging.getLogger(__name__)

RR_QUANTUM = 1

FCFS_TITLE = "First-come, first-serve"
SJF_TITLE = "Shortest-job-first"
PRIORITY_TITLE = "Priority"
RR_TITLE = "Round-robin"


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in the order given; the input is expected to be sorted by
    arrival time already and is not re-sorted here. A process that arrives
    while the CPU is idle starts on arrival with no wait, and the clock jumps
    forward to its completion.
    """
    acc = ScheduleAccumulator(FCFS_TITLE)
    service_time = 0

    for p in processes:
        waiting_time = max(0, service_time - p.arrival_time)
        start_time = waiting_time + p.arrival_time
        turnaround_time = p.burst_time + waiting_time
        completion_time = p.burst_time + p.arrival_time + waiting_time
        service_time = completion_time

        logger.debug("%s: P%d runs %d-%d", FCFS_TITLE, p.pid, start_time, service_time)
        acc.record(
            ScheduleRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            ),
            ScheduledSlice(pid=p.pid, start_time=start_time, end_time=service_time),
        )

    return _finish(acc, len(processes))


def burst_key(p: Process) -> int:
    return p.burst_time


def inverse_burst_key(burst_time: int) -> int:
    """
    Ready-queue key used by the Priority policy: ``1 // burst_time``.

    Integer division makes this 1 for a one-unit burst and 0 for everything
    longer, so the policy only separates one-unit jobs (which sort last) from
    the rest; everything else ties and falls back to arrival order.
    """
    if burst_time <= 0:
        raise ZeroBurstDurationError(f"cannot invert a burst of {burst_time}")
    return 1 // burst_time


def _inverse_burst_key(p: Process) -> int:
    return inverse_burst_key(p.burst_time)


def _schedule_shortest_first(
    processes: Sequence[Process],
    title: str,
    key: Callable[[Process], int],
) -> ScheduleResult:
    """
    Shared driver for the two non-preemptive ready-queue policies.

    At every decision point all processes that have arrived are admitted to the
    ready queue under ``key``, and the one with the smallest key runs to
    completion. If nothing has arrived yet the clock skips to the next arrival.
    """
    ordered = sorted(processes, key=lambda p: p.arrival_time)
    ready = ReadyQueue()
    acc = ScheduleAccumulator(title)

    service_time = 0
    admitted = 0

    while admitted < len(ordered) or ready:
        while admitted < len(ordered) and ordered[admitted].arrival_time <= service_time:
            ready.push(ordered[admitted], key(ordered[admitted]))
            admitted += 1

        if not ready:
            service_time = ordered[admitted].arrival_time
            logger.debug("%s: CPU idle until %d", title, service_time)
            continue

        p = ready.pop()
        waiting_time = service_time - p.arrival_time
        start_time = waiting_time + p.arrival_time
        turnaround_time = p.burst_time + waiting_time
        completion_time = p.burst_time + p.arrival_time + waiting_time
        service_time += p.burst_time

        logger.debug("%s: P%d runs %d-%d", title, p.pid, start_time, service_time)
        acc.record(
            ScheduleRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            ),
            ScheduledSlice(pid=p.pid, start_time=start_time, end_time=service_time),
        )

    return _finish(acc, len(ordered))


def schedule_sjf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Among the processes that have arrived, pick the one with the smallest
    burst time; ties go to the earlier arrival, then to input order.
    """
    return _schedule_shortest_first(processes, SJF_TITLE, burst_key)


def schedule_priority(processes: Sequence[Process]) -> ScheduleResult:
    """
    Priority scheduling keyed on the inverse burst length.

    Same control flow as SJF, but the ready queue is ordered by
    ``inverse_burst_key``. The process's own ``priority`` field is only
    carried through for display.
    """
    return _schedule_shortest_first(processes, PRIORITY_TITLE, _inverse_burst_key)


def schedule_rr(processes: Sequence[Process]) -> ScheduleResult:
    """
    Round Robin with a fixed quantum of ``RR_QUANTUM``.

    Processes are admitted in input order once their arrival time has been
    reached. A preempted process goes to the back of the queue ahead of any
    process admitted at the same instant. Each dispatch reports its own wait
    (start minus arrival) and turnaround (slice plus that wait); the schedule
    row for a process is overwritten on every dispatch, so the table shows the
    last one.
    """
    acc = ScheduleAccumulator(RR_TITLE, quantum=RR_QUANTUM)
    # Working copies carry the remaining burst; the caller's batch is untouched.
    queue: Deque[Process] = deque()

    service_time = 0
    admitted = 0

    while queue or admitted < len(processes):
        while admitted < len(processes) and processes[admitted].arrival_time <= service_time:
            queue.append(processes[admitted])
            admitted += 1

        if not queue:
            service_time += 1
            continue

        current = queue.popleft()
        time_slice = min(RR_QUANTUM, current.burst_time)
        start_time = max(service_time, current.arrival_time)
        waiting_time = max(0, start_time - current.arrival_time)
        turnaround_time = time_slice + waiting_time
        completion_time = start_time + time_slice

        logger.debug("%s: P%d runs %d-%d", RR_TITLE, current.pid, start_time, completion_time)
        acc.record(
            ScheduleRow(
                pid=current.pid,
                priority=current.priority,
                burst_time=time_slice,
                arrival_time=start_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            ),
            ScheduledSlice(pid=current.pid, start_time=start_time, end_time=completion_time),
        )

        remaining = current.burst_time - time_slice
        if remaining > 0:
            queue.append(replace(current, burst_time=remaining))

        service_time = completion_time

    return _finish(acc, len(processes))


def _finish(acc: ScheduleAccumulator, process_count: int) -> ScheduleResult:
    result = acc.finish(process_count)
    if result.summary is None:
        logger.debug("%s: empty batch, no metrics", result.algorithm)
    else:
        logger.debug(
            "%s: %d dispatches, avg wait %.2f, avg turnaround %.2f, throughput %.3f",
            result.algorithm,
            len(result.timeline),
            result.summary.avg_waiting,
            result.summary.avg_turnaround,
            result.summary.throughput,
        )
    return result


# Insertion order is the order `run_all` reports in.
ALGORITHMS: Dict[str, Callable[[Sequence[Process]], ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Sequence[Process]) -> ScheduleResult:
    """
    Validate the batch and dispatch to the requested algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise UnknownAlgorithmError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    batch = validate_processes(processes)
    return ALGORITHMS[name](batch)


def run_all(processes: Sequence[Process]) -> List[ScheduleResult]:
    """
    Run every algorithm over the same batch, in registry order.
    """
    batch = validate_processes(processes)
    return [func(batch) for func in ALGORITHMS.values()]
