"""
CPU scheduling simulator package.

Computes non-preemptive FCFS and SJF schedules for a set of processes and
reports per-process timings, a Gantt chart and average metrics.
"""

__all__ = ["cli"]
