from typing import Any, Dict, List

from .models import Block, Process
from .timeline import busy_time, first_start_per_process, total_time


def compute_metrics(processes: List[Process], blocks: List[Block]) -> Dict[str, Any]:
    """Return per-process metric rows and aggregates for one completed run.

    - `processes` and `blocks` must come from the same run; `blocks` should
      already be merged.
    - Always returns a row for every process (so the table can list all tasks).
    - Averages are computed only across completed processes; with none they
      are 0.0 rather than a division by zero.
    - total_time is the end of the last block.
    """
    first_start = first_start_per_process(blocks)
    rows = []
    completed_rows = []

    for p in processes:
        st = first_start.get(p.pid)
        ct = p.finish_time

        if ct is not None:
            tat = ct - p.arrival_time
            wt = tat - p.burst_time
            row = {
                "PID": p.pid,
                "AT": p.arrival_time,
                "BT": p.burst_time,
                "IQ": p.initial_queue,
                "FQ": p.final_queue,
                "ST": st,
                "CT": ct,
                "TAT": tat,
                "WT": wt,
                "RT": None if st is None else st - p.arrival_time,
                "_done": True,
            }
            completed_rows.append(row)
        else:
            # Not finished yet (or not started). Keep placeholders.
            row = {
                "PID": p.pid,
                "AT": p.arrival_time,
                "BT": p.burst_time,
                "IQ": p.initial_queue,
                "FQ": p.final_queue,
                "ST": st,
                "CT": None,
                "TAT": None,
                "WT": None,
                "RT": None if st is None else st - p.arrival_time,
                "_done": False,
            }

        rows.append(row)

    if completed_rows:
        avg_tat = sum(r["TAT"] for r in completed_rows) / len(completed_rows)
        avg_wt = sum(r["WT"] for r in completed_rows) / len(completed_rows)
        responded = [r["RT"] for r in completed_rows if r["RT"] is not None]
        avg_rt = (sum(responded) / len(responded)) if responded else 0.0
    else:
        avg_tat = avg_wt = avg_rt = 0.0

    makespan = total_time(blocks)
    busy = busy_time(blocks)
    cpu_util = (busy / makespan * 100.0) if makespan else 0.0
    throughput = (len(completed_rows) / makespan) if makespan > 0 else 0.0

    return {
        "per_process": rows,
        "avg_tat": float(avg_tat),
        "avg_wt": float(avg_wt),
        "avg_rt": float(avg_rt),
        "total_time": int(makespan),
        "cpu_util": float(cpu_util),
        "throughput": float(throughput),
    }
