from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class InvalidWorkloadError(ValueError):
    """Raised when the process set cannot be simulated."""


def _to_int(value) -> int:
    # int() would silently truncate JSON floats and accept booleans
    if isinstance(value, (bool, float)):
        raise TypeError(f"not an integer: {value!r}")
    return int(value)


def _validated_process(pid: int, pair: Sequence[int]) -> Process:
    try:
        arrival_time, burst_time = (_to_int(v) for v in pair)
    except (TypeError, ValueError) as exc:
        raise InvalidWorkloadError(f"Invalid input for process {pid}.") from exc

    if arrival_time < 0 or burst_time <= 0:
        raise InvalidWorkloadError(f"Invalid input for process {pid}.")

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time)


def build_processes(pairs: Iterable[Sequence[int]]) -> List[Process]:
    """
    Validate (arrival_time, burst_time) pairs and number them P1..Pn in input order.
    """
    processes = [_validated_process(pid, pair) for pid, pair in enumerate(pairs, start=1)]

    if not processes:
        raise InvalidWorkloadError("Invalid number of processes.")

    logger.debug("Accepted %d processes", len(processes))
    return processes


def read_processes(prompt: Callable[[str], str] = input) -> List[Process]:
    """
    Interactively read a process count followed by an arrival and burst time
    per process.

    Input is a stream of whitespace-separated integers, so values may share a
    line or span several. Each process is validated as soon as it is read.
    """
    buffered: List[str] = []

    def next_token(text: str) -> str:
        # Only the first line of a value gets the prompt; EOFError propagates.
        while not buffered:
            buffered.extend(prompt(text).split())
            text = ""
        return buffered.pop(0)

    try:
        n = int(next_token("Enter the number of processes: "))
    except (EOFError, ValueError) as exc:
        raise InvalidWorkloadError("Invalid number of processes.") from exc

    if n <= 0:
        raise InvalidWorkloadError("Invalid number of processes.")

    processes: List[Process] = []
    for pid in range(1, n + 1):
        try:
            pair = (next_token(f"Enter the arrival time and burst time for process {pid}: "), next_token(""))
        except EOFError as exc:
            raise InvalidWorkloadError(f"Invalid input for process {pid}.") from exc
        processes.append(_validated_process(pid, pair))

    logger.debug("Accepted %d processes", len(processes))
    return processes


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise InvalidWorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidWorkloadError(f"Malformed JSON workload: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidWorkloadError("JSON workload must be a list of process objects")

    return build_processes(_pair_from_mapping(i, entry) for i, entry in enumerate(raw, start=1))


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
    return build_processes(_pair_from_mapping(i, row) for i, row in enumerate(rows, start=1))


def _pair_from_mapping(pid: int, mapping) -> tuple:
    try:
        return (mapping["arrival_time"], mapping["burst_time"])
    except (KeyError, TypeError) as exc:
        raise InvalidWorkloadError(f"Invalid input for process {pid}.") from exc
