from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice


def build_rich_gantt(slices: List[ScheduledSlice], cores: int = 1) -> tuple[Panel, str]:
    """
    Build a Rich Panel with one colored Gantt row per core, and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    job_to_color: Dict[int, str] = {}

    def job_color(job_id: int) -> str:
        if job_id not in job_to_color:
            idx = len(job_to_color) % len(colors)
            job_to_color[job_id] = colors[idx]
        return job_to_color[job_id]

    table = Table.grid(padding=(0, 1))

    for core in range(cores):
        core_slices = sorted((s for s in slices if s.core == core), key=lambda s: s.start_time)

        timeline = Text()
        labels = Text()
        last_time = 0

        for sl in core_slices:
            idle_gap = sl.start_time - last_time
            if idle_gap > 0:
                timeline.append(" " * idle_gap)
                labels.append(" " * idle_gap)

            width = max(1, sl.end_time - sl.start_time)
            timeline.append(" " * width, style=f"on {job_color(sl.job_id)}")
            labels.append(str(sl.job_id)[:width].ljust(width), style="bold")
            last_time = sl.end_time

        table.add_row(Text(f"core {core}", style="dim"), timeline)
        table.add_row(Text(""), labels)

    marks = sorted({0} | {s.start_time for s in slices} | {s.end_time for s in slices})
    time_marks = " ".join(str(m) for m in marks)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
