from __future__ import annotations

from typing import Tuple

from .models import Process


def arrival_order(p: Process) -> Tuple[int, int]:
    """Sort key: earliest arrival first, simultaneous arrivals by pid."""
    return (p.arrival_time, p.pid)


def identity_order(p: Process) -> int:
    """Sort key for display tables."""
    return p.pid
