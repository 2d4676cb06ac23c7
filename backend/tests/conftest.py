import pytest

from schedsim import session
from schedsim.engine import Process


@pytest.fixture(autouse=True)
def fresh_session(monkeypatch):
    monkeypatch.setattr(session, "base_processes", [])
    monkeypatch.setattr(session, "last_run", None)
    monkeypatch.setattr(session, "event_log", [])
    monkeypatch.setattr(
        session,
        "settings",
        {"algorithm": "FCFS", "quantum": 2, "mlfq_quantums": [2, 4, 8]},
    )


@pytest.fixture
def fcfs_workload():
    return [
        Process("P1", arrival_time=0, burst_time=4),
        Process("P2", arrival_time=1, burst_time=3),
        Process("P3", arrival_time=2, burst_time=1),
    ]


@pytest.fixture
def srt_workload():
    return [
        Process("P1", arrival_time=0, burst_time=8),
        Process("P2", arrival_time=1, burst_time=4),
        Process("P3", arrival_time=2, burst_time=2),
    ]
