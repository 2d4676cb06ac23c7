import pytest

from schedsim.engine import SUPPORTED_ALGOS, compare_all_algorithms, run_algorithm_once


def test_run_algorithm_once_merges_and_measures(srt_workload):
    summary = run_algorithm_once(srt_workload, "SRT")

    assert summary["algorithm"] == "SRT"
    assert len(summary["result"].blocks) == 14
    assert [(b.pid, b.start, b.end) for b in summary["blocks"]] == [
        ("P1", 0, 1),
        ("P2", 1, 2),
        ("P3", 2, 4),
        ("P2", 4, 7),
        ("P1", 7, 14),
    ]
    assert summary["metrics"]["total_time"] == 14
    assert summary["metrics"]["avg_wt"] == pytest.approx((6 + 2 + 0) / 3)


def test_compare_runs_every_algorithm_on_its_own_copy(srt_workload):
    results = compare_all_algorithms(srt_workload, rr_quantum=3)

    assert [r["algorithm"] for r in results] == list(SUPPORTED_ALGOS)
    for r in results:
        assert r["metrics"]["total_time"] == 14
        assert all(p.finish_time is not None for p in r["result"].processes)

    assert all(p.finish_time is None for p in srt_workload)
    # Each summary owns distinct process objects.
    ids = [id(p) for r in results for p in r["result"].processes]
    assert len(ids) == len(set(ids))


def test_compare_orders_differ_by_algorithm(srt_workload):
    results = {r["algorithm"]: r for r in compare_all_algorithms(srt_workload)}

    assert results["FCFS"]["metrics"]["avg_wt"] == pytest.approx((0 + 7 + 10) / 3)
    assert results["SRT"]["metrics"]["avg_wt"] < results["FCFS"]["metrics"]["avg_wt"]
