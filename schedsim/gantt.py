from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]
IDLE_CHAR = "·"

Segment = Tuple[Optional[str], int, int]


def segments(slices: List[ScheduledSlice]) -> Iterator[Segment]:
    """
    Walk the timeline from t=0, yielding ``(pid, start, end)`` runs with
    ``pid=None`` for the stretches where the CPU sat idle.
    """
    clock = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > clock:
            yield None, clock, sl.start_time
        yield sl.pid, sl.start_time, sl.end_time
        clock = max(clock, sl.end_time)


def time_marks(slices: List[ScheduledSlice]) -> str:
    """
    Boundary times, each written at the column where that time begins on the
    bar (one column per time unit). A mark that would run into the previous
    one is left out.
    """
    boundaries: List[int] = []
    for _, start, end in segments(slices):
        if not boundaries:
            boundaries.append(start)
        boundaries.append(end)

    marks = ""
    for t in boundaries:
        if marks and t < len(marks) + 1:
            continue
        marks = marks.ljust(t) + str(t)
    return marks


def build_rich_gantt(slices: List[ScheduledSlice], title: str = "Gantt Chart") -> Panel:
    """
    Build a Rich Panel holding the coloured bar, the pid labels under it and
    the time marks, all on the same one-column-per-time-unit scale.
    """
    if not slices:
        return Panel("No execution", title=title)

    colors: Dict[str, str] = {}
    bar = Text()
    labels = Text()

    for pid, start, end in segments(slices):
        width = end - start
        if pid is None:
            bar.append(IDLE_CHAR * width, style="dim")
            labels.append(" " * width)
            continue
        color = colors.setdefault(pid, COLORS[len(colors) % len(COLORS)])
        bar.append(" " * width, style=f"on {color}")
        labels.append(pid[:width].ljust(width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)
    grid.add_row(Text(time_marks(slices), style="dim"))

    return Panel.fit(grid, title=title)
