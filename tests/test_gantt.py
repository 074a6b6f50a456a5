from rich.panel import Panel

from sched_sim.algorithms import schedule_fcfs, schedule_sjf
from sched_sim.gantt import build_rich_gantt, render_gantt, render_report, render_table
from sched_sim.models import Process, Segment


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5),
        Process(2, arrival_time=1, burst_time=3),
        Process(3, arrival_time=2, burst_time=8),
    ]


def test_render_gantt_plain():
    segments = [Segment(None, 0, 5), Segment(1, 5, 7), Segment(2, 7, 12)]
    text = render_gantt("First Come First Served (FCFS)", segments)
    assert text.splitlines() == [
        "=== First Come First Served (FCFS) ===",
        "Gantt Chart: | IDLE | P1 | P2 |",
        "Timeline  : 0 --- 5 --- 7 --- 12",
    ]


def test_render_gantt_empty_timeline():
    lines = render_gantt("X", []).splitlines()
    assert lines[1] == "Gantt Chart: |"
    assert lines[2] == "Timeline  : "


def test_render_table_sorted_by_pid_with_averages():
    res = schedule_sjf(
        [
            Process(1, arrival_time=0, burst_time=8),
            Process(2, arrival_time=1, burst_time=4),
            Process(3, arrival_time=2, burst_time=2),
        ]
    )
    lines = render_table(res.processes).splitlines()

    assert lines[0] == "PID     AT     BT     WT     TAT    RT"
    assert [line.split() for line in lines[1:4]] == [
        ["1", "0", "8", "0", "8", "0"],
        ["2", "1", "4", "9", "13", "9"],
        ["3", "2", "2", "6", "8", "6"],
    ]
    assert lines[4] == ""
    assert lines[5:] == [
        "Average Waiting Time: 5.00",
        "Average Turnaround Time: 9.67",
        "Average Response Time: 5.00",
    ]


def test_render_table_columns_are_fixed_width():
    res = schedule_fcfs([Process(1, arrival_time=0, burst_time=12)])
    row = render_table(res.processes).splitlines()[1]
    assert row == "1       0      12     0      12     0"


def test_render_report_example():
    text = render_report(schedule_fcfs(_procs()))
    assert text.startswith("=== First Come First Served (FCFS) ===\n")
    assert "Gantt Chart: | P1 | P2 | P3 |" in text
    assert "Timeline  : 0 --- 5 --- 8 --- 16" in text
    assert "Average Waiting Time: 3.33" in text
    assert "Average Turnaround Time: 8.67" in text
    assert "Average Response Time: 3.33" in text


def test_rich_gantt_panel_and_marks():
    panel, marks = build_rich_gantt([Segment(1, 5, 7), Segment(None, 7, 10), Segment(2, 10, 12)])
    assert isinstance(panel, Panel)
    assert marks.split() == ["5", "7", "10", "12"]

    panel, marks = build_rich_gantt([])
    assert marks == ""
