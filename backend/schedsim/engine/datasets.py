import json
import os
from typing import Any, Dict, List

from .models import Process

MLFQ_QUEUE_RANGE = (1, 3)


def _package_dir() -> str:
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def build_default_processes() -> List[Process]:
    return load_processes_json(os.path.join(_package_dir(), "processes.json"))


# Helper: clone process list (no runtime fields)
def clone_processes(procs: List[Process]) -> List[Process]:
    return [
        Process(
            p.pid,
            p.arrival_time,
            p.burst_time,
            initial_queue=p.initial_queue,
        )
        for p in procs
    ]


# ------------------------------
# Validation (the engine itself never checks its input)
# ------------------------------
def _require_int(item: Dict[str, Any], key: str, default: Any = None) -> int:
    value = item.get(key, default)
    if value is None:
        raise ValueError(f"{key} is required")
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer")
    if isinstance(value, float) and number != value:
        raise ValueError(f"{key} must be a whole number")
    return number


def validate_process(p: Process) -> Process:
    if not str(p.pid or "").strip():
        raise ValueError("pid is required")
    if p.arrival_time < 0:
        raise ValueError(f"{p.pid}: arrival_time must be >= 0")
    if p.burst_time < 1:
        raise ValueError(f"{p.pid}: burst_time must be >= 1")
    low, high = MLFQ_QUEUE_RANGE
    if not low <= p.initial_queue <= high:
        raise ValueError(f"{p.pid}: initial_queue must be between {low} and {high}")
    return p


def validate_processes(processes: List[Process]) -> List[Process]:
    seen = set()
    for p in processes:
        validate_process(p)
        if p.pid in seen:
            raise ValueError(f"pid '{p.pid}' already exists")
        seen.add(p.pid)
    return processes


def process_from_dict(item: Dict[str, Any]) -> Process:
    if not isinstance(item, dict):
        raise ValueError("process must be an object")

    pid = str(item.get("pid", "")).strip()
    if not pid:
        raise ValueError("pid is required")

    try:
        process = Process(
            pid=pid,
            arrival_time=_require_int(item, "arrival_time", 0),
            burst_time=_require_int(item, "burst_time"),
            initial_queue=_require_int(item, "initial_queue", 1),
        )
    except ValueError as exc:
        raise ValueError(f"{pid}: {exc}")
    return validate_process(process)


def processes_from_list(items: Any) -> List[Process]:
    if not isinstance(items, list):
        raise ValueError("processes must be an array")
    return validate_processes([process_from_dict(item) for item in items])


# ------------------------------
# Dataset loaders: presets + JSON
# ------------------------------
def load_preset(preset_id: int) -> List[Process]:
    if preset_id == 1:
        # Staggered arrivals, long job first
        return [
            Process("P1", arrival_time=0, burst_time=4),
            Process("P2", arrival_time=1, burst_time=3),
            Process("P3", arrival_time=2, burst_time=1),
        ]

    if preset_id == 2:
        # Preemption-heavy: each arrival is shorter than the running job
        return [
            Process("P1", arrival_time=0, burst_time=8),
            Process("P2", arrival_time=1, burst_time=4),
            Process("P3", arrival_time=2, burst_time=2),
        ]

    if preset_id == 3:
        return [
            Process("P1", arrival_time=0, burst_time=5),
            Process("P2", arrival_time=1, burst_time=3),
        ]

    if preset_id == 4:
        # Mixed MLFQ entry levels
        return [
            Process("P1", arrival_time=0, burst_time=9, initial_queue=1),
            Process("P2", arrival_time=1, burst_time=5, initial_queue=2),
            Process("P3", arrival_time=2, burst_time=3, initial_queue=3),
            Process("P4", arrival_time=4, burst_time=2, initial_queue=1),
        ]

    if preset_id == 5:
        # Idle gaps between arrivals
        return [
            Process("P1", arrival_time=0, burst_time=3),
            Process("P2", arrival_time=6, burst_time=2),
            Process("P3", arrival_time=8, burst_time=4),
            Process("P4", arrival_time=12, burst_time=2),
        ]

    return load_preset(1)


def load_processes_json(path: str = "processes.json") -> List[Process]:
    # Relative paths resolve from the package directory
    if not os.path.isabs(path):
        path = os.path.join(_package_dir(), path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return processes_from_list(data)
