import pytest

from schedsim.engine import Block, Process, compute_metrics, merge_blocks, run_fcfs


def test_fcfs_scenario_metrics(fcfs_workload):
    result = run_fcfs(fcfs_workload)
    metrics = compute_metrics(result.processes, merge_blocks(result.blocks))

    rows = {row["PID"]: row for row in metrics["per_process"]}
    assert [rows[pid]["TAT"] for pid in ("P1", "P2", "P3")] == [4, 6, 6]
    assert [rows[pid]["WT"] for pid in ("P1", "P2", "P3")] == [0, 3, 5]
    assert [rows[pid]["RT"] for pid in ("P1", "P2", "P3")] == [0, 3, 5]
    assert all(row["_done"] for row in metrics["per_process"])

    assert metrics["avg_tat"] == pytest.approx(16 / 3)
    assert metrics["avg_wt"] == pytest.approx(8 / 3)
    assert metrics["total_time"] == 8
    assert metrics["cpu_util"] == pytest.approx(100.0)
    assert metrics["throughput"] == pytest.approx(3 / 8)


def test_idle_time_lowers_utilization():
    result = run_fcfs([Process("P1", 0, 2), Process("P2", 5, 1)])
    metrics = compute_metrics(result.processes, merge_blocks(result.blocks))

    assert metrics["total_time"] == 6
    assert metrics["cpu_util"] == pytest.approx(50.0)
    assert metrics["avg_wt"] == 0.0


def test_empty_run_has_zero_averages():
    metrics = compute_metrics([], [])
    assert metrics == {
        "per_process": [],
        "avg_tat": 0.0,
        "avg_wt": 0.0,
        "avg_rt": 0.0,
        "total_time": 0,
        "cpu_util": 0.0,
        "throughput": 0.0,
    }


def test_unfinished_process_keeps_placeholders():
    done = Process("P1", 0, 2)
    done.remaining_time = 0
    done.finish_time = 2
    pending = Process("P2", 1, 3)

    metrics = compute_metrics([done, pending], [Block("P1", 0, 2)])

    rows = {row["PID"]: row for row in metrics["per_process"]}
    assert rows["P2"]["_done"] is False
    assert rows["P2"]["TAT"] is None and rows["P2"]["WT"] is None
    assert metrics["avg_tat"] == 2.0
    assert metrics["avg_wt"] == 0.0
