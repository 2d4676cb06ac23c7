from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Process:
    pid: str
    arrival_time: int
    burst_time: int

    initial_queue: int = 1     # for MLFQ: 1 (highest) .. 3 (lowest)

    # Runtime state
    remaining_time: int = 0    # 0 means finished
    finish_time: Optional[int] = None
    final_queue: Optional[int] = None   # MLFQ level the process finished at

    # UI state (NEW/READY/RUNNING/DONE)
    state: str = "NEW"

    def __post_init__(self):
        self.arrival_time = int(self.arrival_time)
        self.burst_time = int(self.burst_time)
        self.initial_queue = int(self.initial_queue)
        self.remaining_time = self.burst_time

    @property
    def done(self) -> bool:
        return self.finish_time is not None


@dataclass(frozen=True)
class Block:
    """One contiguous slice of CPU time held by a single process."""

    pid: str
    start: int
    end: int

    # MLFQ only
    queue_level: Optional[int] = None
    quantum_used: Optional[int] = None

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class ScheduleResult:
    algorithm: str
    processes: List[Process]
    blocks: List[Block]          # raw, unmerged
    event_log: List[str] = field(default_factory=list)
