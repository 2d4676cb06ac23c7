from .compare import compare_all_algorithms, run_algorithm_once
from .datasets import (
    build_default_processes,
    clone_processes,
    load_preset,
    load_processes_json,
    process_from_dict,
    processes_from_list,
    validate_processes,
)
from .metrics import compute_metrics
from .models import Block, Process, ScheduleResult
from .scheduler import (
    DEFAULT_MLFQ_QUANTUMS,
    DEFAULT_QUANTUM,
    SUPPORTED_ALGOS,
    CPUScheduler,
    UnknownAlgorithmError,
    normalize_algorithm,
    normalize_mlfq_quantums,
    normalize_quantum,
    run_algorithm,
    run_fcfs,
    run_mlfq,
    run_rr,
    run_sjf,
    run_srt,
)
from .timeline import merge_blocks

__all__ = [
    "Process",
    "Block",
    "ScheduleResult",
    "CPUScheduler",
    "UnknownAlgorithmError",
    "SUPPORTED_ALGOS",
    "DEFAULT_QUANTUM",
    "DEFAULT_MLFQ_QUANTUMS",
    "normalize_algorithm",
    "normalize_quantum",
    "normalize_mlfq_quantums",
    "run_fcfs",
    "run_sjf",
    "run_srt",
    "run_rr",
    "run_mlfq",
    "run_algorithm",
    "merge_blocks",
    "compute_metrics",
    "build_default_processes",
    "clone_processes",
    "load_preset",
    "load_processes_json",
    "process_from_dict",
    "processes_from_list",
    "validate_processes",
    "run_algorithm_once",
    "compare_all_algorithms",
]
