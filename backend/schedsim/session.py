import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from schedsim.engine import (
    DEFAULT_MLFQ_QUANTUMS,
    DEFAULT_QUANTUM,
    Process,
    build_default_processes,
    clone_processes,
    load_preset,
    normalize_algorithm,
    normalize_mlfq_quantums,
    normalize_quantum,
    process_from_dict,
    processes_from_list,
    run_algorithm_once,
)
from schedsim.serializers import default_state, serialize_state

logger = logging.getLogger(__name__)

_session_lock = Lock()

base_processes: List[Process] = []
last_run: Optional[Dict[str, Any]] = None
settings: Dict[str, Any] = {
    "algorithm": "FCFS",
    "quantum": DEFAULT_QUANTUM,
    "mlfq_quantums": list(DEFAULT_MLFQ_QUANTUMS),
}
event_log: List[str] = []
EVENT_LOG_LIMIT = 200


def _safe_int(value: Any, default: int) -> int:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return int(default)
        try:
            return int(text, 10)
        except ValueError:
            return int(default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _resolve_settings(data: Dict[str, Any]) -> Dict[str, Any]:
    # Everything is resolved before anything is assigned, so a rejected
    # algorithm leaves the current settings untouched.
    algorithm = normalize_algorithm(data.get("algorithm", settings.get("algorithm", "FCFS")))
    quantum = normalize_quantum(_safe_int(data.get("quantum", settings.get("quantum")), DEFAULT_QUANTUM))
    mlfq_quantums = normalize_mlfq_quantums(data.get("mlfq_quantums", settings.get("mlfq_quantums")))
    return {"algorithm": algorithm, "quantum": quantum, "mlfq_quantums": mlfq_quantums}


def _config() -> Dict[str, Any]:
    return {
        "algorithm": settings["algorithm"],
        "quantum": int(settings["quantum"]),
        "mlfq_quantums": list(settings["mlfq_quantums"]),
    }


def _log(msg: str) -> None:
    global event_log
    event_log.append(msg)
    if len(event_log) > EVENT_LOG_LIMIT:
        event_log = event_log[-EVENT_LOG_LIMIT:]
    logger.info(msg)


def _state() -> Dict[str, Any]:
    return serialize_state(settings, base_processes, last_run, event_log)


def init_session(payload: Dict[str, Any]) -> Dict[str, Any]:
    global base_processes, last_run, event_log

    data = payload or {}
    with _session_lock:
        resolved = _resolve_settings(data)

        payload_processes = data.get("processes")
        if payload_processes is not None:
            processes = processes_from_list(payload_processes)
        elif data.get("preset") is not None:
            processes = load_preset(_safe_int(data.get("preset"), 1))
        else:
            processes = build_default_processes()

        settings.update(resolved)
        base_processes = processes
        last_run = None
        event_log = []
        _log(f"Initialized algorithm={settings['algorithm']} processes={len(base_processes)}")
        return _state()


def set_config(payload: Dict[str, Any]) -> Dict[str, Any]:
    global last_run

    data = payload or {}
    with _session_lock:
        settings.update(_resolve_settings(data))
        last_run = None
        _log(
            f"Config algorithm={settings['algorithm']} quantum={settings['quantum']} "
            f"mlfq_quantums={settings['mlfq_quantums']}"
        )
        return {"ok": True, "config": _config()}


def add_process(item: Dict[str, Any]) -> Dict[str, Any]:
    global last_run

    with _session_lock:
        process = process_from_dict(item)
        if process.pid in {p.pid for p in base_processes}:
            raise ValueError(f"pid '{process.pid}' already exists")

        base_processes.append(process)
        last_run = None
        _log(
            f"Added {process.pid} AT={process.arrival_time} BT={process.burst_time} "
            f"Q={process.initial_queue}"
        )
        return _state()


def remove_process(pid: str) -> Dict[str, Any]:
    global base_processes, last_run

    with _session_lock:
        target = str(pid or "").strip()
        if not target:
            raise ValueError("pid is required")
        remaining = [p for p in base_processes if p.pid != target]
        if len(remaining) == len(base_processes):
            raise ValueError(f"pid '{target}' is not in the session")

        base_processes = remaining
        last_run = None
        _log(f"Removed {target}")
        return _state()


def run_session() -> Dict[str, Any]:
    global last_run

    with _session_lock:
        last_run = run_algorithm_once(
            clone_processes(base_processes),
            settings["algorithm"],
            quantum=settings["quantum"],
            mlfq_quantums=settings["mlfq_quantums"],
        )
        metrics = last_run["metrics"]
        _log(
            f"Ran {settings['algorithm']} on {len(base_processes)} processes: "
            f"avg_tat={metrics['avg_tat']:.2f} avg_wt={metrics['avg_wt']:.2f} "
            f"total_time={metrics['total_time']}"
        )
        return _state()


def reset_session() -> Dict[str, Any]:
    global last_run, event_log

    with _session_lock:
        last_run = None
        event_log = []
        if not base_processes:
            return default_state(settings)
        _log("Session reset")
        return _state()


def get_state() -> Dict[str, Any]:
    with _session_lock:
        return _state()


def get_compare_processes() -> List[Process]:
    with _session_lock:
        return clone_processes(base_processes)


def get_settings() -> Dict[str, Any]:
    with _session_lock:
        return _config()
