from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult, Segment
from .ordering import identity_order


def render_gantt(title: str, segments: List[Segment]) -> str:
    """
    Plain-text Gantt chart: a header, the segment labels and the interval boundaries.
    """
    gantt = "Gantt Chart: " + "".join(f"| {seg.label} " for seg in segments) + "|"

    timeline = "Timeline  : "
    if segments:
        timeline += str(segments[0].start_time)
        timeline += "".join(f" --- {seg.end_time}" for seg in segments)

    return "\n".join([f"=== {title} ===", gantt, timeline])


def render_table(processes: List[Process]) -> str:
    """
    Per-process table in pid order followed by the three averages.
    """
    lines = ["PID     AT     BT     WT     TAT    RT"]
    for p in sorted(processes, key=identity_order):
        lines.append(
            f"{p.pid:<7} {p.arrival_time:<6} {p.burst_time:<6} "
            f"{p.waiting_time:<6} {p.turnaround_time:<6} {p.response_time:<6}".rstrip()
        )

    summary = summarize_process_metrics(processes)
    lines.append("")
    lines.append(f"Average Waiting Time: {summary['avg_waiting']:.2f}")
    lines.append(f"Average Turnaround Time: {summary['avg_turnaround']:.2f}")
    lines.append(f"Average Response Time: {summary['avg_response']:.2f}")
    return "\n".join(lines)


def render_report(result: ScheduleResult) -> str:
    return render_gantt(result.algorithm, result.timeline) + "\n" + render_table(result.processes) + "\n"


def build_rich_gantt(segments: List[Segment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = f"{segments[0].start_time}"

    for seg in segments:
        width = max(len(seg.label), seg.end_time - seg.start_time)

        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(seg.label.ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.label.ljust(width), style="bold")

        time_marks += f"{seg.end_time:>{width + 1}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
