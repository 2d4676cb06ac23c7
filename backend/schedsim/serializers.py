from typing import Any, Dict, List, Optional

from schedsim.engine import Block, Process


def _safe_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def serialize_block(block: Block) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "pid": block.pid,
        "start": int(block.start),
        "end": int(block.end),
    }
    if block.queue_level is not None:
        out["queue_level"] = int(block.queue_level)
        out["quantum_used"] = int(block.quantum_used)
    return out


def serialize_blocks(blocks: List[Block]) -> List[Dict[str, Any]]:
    return [serialize_block(b) for b in blocks]


def serialize_process(p: Process) -> Dict[str, Any]:
    return {
        "pid": p.pid,
        "arrival_time": int(p.arrival_time),
        "burst_time": int(p.burst_time),
        "initial_queue": int(p.initial_queue),
        "remaining_time": int(p.remaining_time),
        "finish_time": p.finish_time,
        "final_queue": p.final_queue,
        "state": p.state,
    }


def _per_process(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "pid": str(row.get("PID", "")),
            "at": row.get("AT"),
            "bt": row.get("BT"),
            "initial_queue": row.get("IQ"),
            "final_queue": row.get("FQ"),
            "st": row.get("ST"),
            "ct": row.get("CT"),
            "tat": row.get("TAT"),
            "wt": row.get("WT"),
            "rt": row.get("RT"),
            "done": bool(row.get("_done", False)),
        }
        for row in rows
    ]


def serialize_metrics(metrics: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "avg_tat": _safe_float(metrics.get("avg_tat", 0.0)),
        "avg_wt": _safe_float(metrics.get("avg_wt", 0.0)),
        "avg_rt": _safe_float(metrics.get("avg_rt", 0.0)),
        "total_time": int(metrics.get("total_time", 0)),
        "cpu_util": _safe_float(metrics.get("cpu_util", 0.0)),
        "throughput": _safe_float(metrics.get("throughput", 0.0)),
    }


def serialize_run(summary: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a run_algorithm_once() summary into a JSON-ready dict."""
    result = summary["result"]
    metrics = summary.get("metrics") or {}
    return {
        "algorithm": str(summary.get("algorithm", result.algorithm)),
        "processes": [serialize_process(p) for p in result.processes],
        "blocks": serialize_blocks(summary.get("blocks") or []),
        "raw_blocks": serialize_blocks(result.blocks),
        "metrics": serialize_metrics(metrics),
        "per_process": _per_process(metrics.get("per_process") or []),
        "event_log": [str(x) for x in result.event_log],
    }


def serialize_compare_row(summary: Dict[str, Any]) -> Dict[str, Any]:
    metrics = summary.get("metrics") or {}
    return {
        "algorithm": str(summary.get("algorithm", "")),
        **serialize_metrics(metrics),
        "per_process": _per_process(metrics.get("per_process") or []),
    }


def default_state(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    cfg = settings or {}
    return {
        "algorithm": str(cfg.get("algorithm", "FCFS")),
        "quantum": int(cfg.get("quantum", 2)),
        "mlfq_quantums": list(cfg.get("mlfq_quantums", [2, 4, 8])),
        "processes": [],
        "blocks": [],
        "raw_blocks": [],
        "metrics": {
            "avg_tat": 0.0,
            "avg_wt": 0.0,
            "avg_rt": 0.0,
            "total_time": 0,
            "cpu_util": 0.0,
            "throughput": 0.0,
        },
        "per_process": [],
        "event_log": [],
    }


def serialize_state(
    settings: Dict[str, Any],
    processes: List[Process],
    last_run: Optional[Dict[str, Any]] = None,
    event_log: Optional[List[str]] = None,
) -> Dict[str, Any]:
    state = default_state(settings)
    state["processes"] = [serialize_process(p) for p in processes]

    if last_run is not None:
        run = serialize_run(last_run)
        state.update(
            {
                "processes": run["processes"],
                "blocks": run["blocks"],
                "raw_blocks": run["raw_blocks"],
                "metrics": run["metrics"],
                "per_process": run["per_process"],
                "event_log": run["event_log"],
            }
        )

    if event_log:
        # Session messages first, then the transition log of the last run.
        state["event_log"] = [str(x) for x in event_log if str(x)] + state["event_log"]

    return state
