from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

CELL_WIDTH = 8
# Rich chart columns per time unit.
UNIT_WIDTH = 3
COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# (pid, start, end); pid is None for an idle stretch.
Segment = Tuple[Optional[int], int, int]


def segments(slices: List[ScheduledSlice]) -> Iterator[Segment]:
    """
    Walk the trace in time order, yielding an idle segment wherever the CPU
    sat unused between two slices.
    """
    clock = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > clock:
            yield None, clock, sl.start_time
        yield sl.pid, sl.start_time, sl.end_time
        clock = max(clock, sl.end_time)


def time_marks(slices: List[ScheduledSlice], unit_width: int = UNIT_WIDTH) -> str:
    """
    Segment boundaries, each printed at ``time * unit_width`` columns.
    """
    if not slices:
        return ""

    marks = "0"
    for _, _, end in segments(slices):
        marks = marks.ljust(end * unit_width) + str(end)
    return marks


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one centered cell per slice, followed by a line
    of tab-separated start times that ends with the final stop time.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    cells = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * ((CELL_WIDTH - len(pid)) // 2)
        cells += f"{padding}{pid}{padding}|"

    times = "\t".join(str(sl.start_time) for sl in slices)
    times += f"\t{slices[-1].end_time}"

    return "\n".join(["Gantt schedule", cells, times])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Colored bar per slice on a shared time scale, labelled underneath, plus
    the matching time-mark line.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    colors: Dict[int, str] = {}
    bar = Text()
    labels = Text()

    for pid, start, end in segments(slices):
        width = max(1, end - start) * UNIT_WIDTH
        if pid is None:
            bar.append(" " * width)
            labels.append(" " * width)
            continue
        color = colors.setdefault(pid, COLORS[len(colors) % len(COLORS)])
        bar.append(" " * width, style=f"on {color}")
        labels.append(f"P{pid}"[:width].ljust(width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), time_marks(slices)
