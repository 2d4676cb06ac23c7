from typing import Any, Dict, List, Optional, Sequence

from .metrics import compute_metrics
from .models import Process
from .scheduler import DEFAULT_QUANTUM, SUPPORTED_ALGOS, run_algorithm
from .timeline import merge_blocks


def run_algorithm_once(
    processes: List[Process],
    algorithm: str,
    quantum: int = DEFAULT_QUANTUM,
    mlfq_quantums: Optional[Sequence[int]] = None,
) -> Dict[str, Any]:
    """Run a full simulation on a fresh clone of `processes`, then merge the
    timeline and derive metrics from that same run."""
    result = run_algorithm(processes, algorithm, quantum=quantum, mlfq_quantums=mlfq_quantums)
    blocks = merge_blocks(result.blocks)
    return {
        "algorithm": result.algorithm,
        "result": result,
        "blocks": blocks,
        "metrics": compute_metrics(result.processes, blocks),
    }


def compare_all_algorithms(
    processes: List[Process],
    rr_quantum: int = DEFAULT_QUANTUM,
    mlfq_quantums: Optional[Sequence[int]] = None,
) -> List[Dict[str, Any]]:
    """Return one run summary per supported algorithm, each on its own clone."""
    return [
        run_algorithm_once(processes, algo, quantum=rr_quantum, mlfq_quantums=mlfq_quantums)
        for algo in SUPPORTED_ALGOS
    ]
