import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional, Sequence

from .datasets import clone_processes
from .models import Block, Process, ScheduleResult

logger = logging.getLogger(__name__)

SUPPORTED_ALGOS = ("FCFS", "SJF", "SRT", "RR", "MLFQ")
DEFAULT_QUANTUM = 2
DEFAULT_MLFQ_QUANTUMS = (2, 4, 8)
MLFQ_LEVELS = 3


class UnknownAlgorithmError(ValueError):
    """Raised for an algorithm selector outside SUPPORTED_ALGOS."""


def normalize_algorithm(algorithm) -> str:
    algo = str(algorithm or "").strip().upper()
    if algo not in SUPPORTED_ALGOS:
        raise UnknownAlgorithmError(
            f"unknown algorithm '{algorithm}' (expected one of {', '.join(SUPPORTED_ALGOS)})"
        )
    return algo


def normalize_quantum(quantum) -> int:
    try:
        value = int(quantum)
    except (TypeError, ValueError):
        return DEFAULT_QUANTUM
    return value if value >= 1 else DEFAULT_QUANTUM


def normalize_mlfq_quantums(quantums) -> List[int]:
    if quantums is None or isinstance(quantums, (str, bytes)):
        return list(DEFAULT_MLFQ_QUANTUMS)
    try:
        values = list(quantums)
    except TypeError:
        return list(DEFAULT_MLFQ_QUANTUMS)
    if len(values) != MLFQ_LEVELS:
        return list(DEFAULT_MLFQ_QUANTUMS)

    out: List[int] = []
    for value, default in zip(values, DEFAULT_MLFQ_QUANTUMS):
        try:
            q = int(value)
        except (TypeError, ValueError):
            q = default
        out.append(q if q >= 1 else default)
    return out


class CPUScheduler:
    """
    Supported algorithms:
      - FCFS (non-preemptive, arrival order; ties keep input order)
      - SJF  (non-preemptive, shortest burst among arrived processes)
      - SRT  (preemptive shortest remaining time, decided every time unit)
      - RR   (Round Robin; time quantum)
      - MLFQ (three levels with per-level quantum):
          a process enters the level named by its initial_queue,
          level 1 has strict priority over 2, 2 over 3,
          a process that uses its whole quantum and is unfinished
          drops one level (level 3 stays at 3)

    The scheduler owns `processes` and mutates them. Input must already be
    validated: burst_time >= 1, arrival_time >= 0, initial_queue in 1..3 and
    unique pids. Nothing here checks that; a non-positive burst never reaches
    remaining_time == 0 and the run does not terminate.

    When nothing is ready the clock jumps straight to the next arrival.
    """

    def __init__(
        self,
        processes: List[Process],
        algorithm: str = "FCFS",
        quantum: int = DEFAULT_QUANTUM,
        mlfq_quantums: Optional[Sequence[int]] = None,
    ):
        self.processes = processes
        self.algorithm = normalize_algorithm(algorithm)
        self.quantum = normalize_quantum(quantum)               # RR quantum (time units)
        self.mlfq_quantums = normalize_mlfq_quantums(mlfq_quantums)
        self.event_log_limit: int = 500
        self.reset()

    def reset(self):
        self.time = 0
        self.blocks: List[Block] = []
        self.completed: List[Process] = []
        self.event_log: List[str] = []
        self._admitted = set()

        for p in self.processes:
            p.remaining_time = p.burst_time
            p.finish_time = None
            p.final_queue = None
            p.state = "NEW"

    def done(self) -> bool:
        return len(self.completed) == len(self.processes)

    def _log_event(self, msg: str):
        self.event_log.append(msg)
        if len(self.event_log) > self.event_log_limit:
            self.event_log = self.event_log[-self.event_log_limit:]

    def _set_state(self, p: Process, new_state: str, detail: str = ""):
        old = p.state
        if old != new_state:
            p.state = new_state
            extra = f" {detail}" if detail else ""
            self._log_event(f"t={self.time}: {p.pid} {old} -> {new_state}{extra}")

    # -------- Shared helpers --------
    def _arrival_order(self) -> List[Process]:
        # sorted() is stable, so equal arrivals keep input order
        return sorted(self.processes, key=lambda p: p.arrival_time)

    def _admit(self, order: Iterable[Process], enqueue: Optional[Callable[[Process], None]] = None):
        for p in order:
            if p.pid not in self._admitted and p.arrival_time <= self.time:
                self._admitted.add(p.pid)
                self._set_state(p, "READY")
                if enqueue is not None:
                    enqueue(p)

    def _idle_until(self, t: int):
        if t > self.time:
            self._log_event(f"t={self.time}: CPU idle until t={t}")
            self.time = t

    def _idle_until_next_admission(self, order: Iterable[Process]):
        self._idle_until(min(p.arrival_time for p in order if p.pid not in self._admitted))

    def _execute(self, p: Process, amount: int, queue_level: Optional[int] = None):
        start = self.time
        self.time += amount
        p.remaining_time -= amount
        self.blocks.append(
            Block(
                p.pid,
                start,
                self.time,
                queue_level=queue_level,
                quantum_used=amount if queue_level is not None else None,
            )
        )

        if p.remaining_time == 0:
            p.finish_time = self.time
            if queue_level is not None:
                p.final_queue = queue_level
            self._set_state(p, "DONE")
            self.completed.append(p)

    # -------- Algorithms --------
    def _run_fcfs(self):
        order = self._arrival_order()
        ready: Deque[Process] = deque()
        while not self.done():
            self._admit(order, ready.append)
            if not ready:
                self._idle_until_next_admission(order)
                continue

            p = ready.popleft()
            self._set_state(p, "RUNNING")
            self._execute(p, p.remaining_time)

    def _run_sjf(self):
        while not self.done():
            self._admit(self.processes)
            available = [p for p in self.processes if not p.done and p.arrival_time <= self.time]
            if not available:
                self._idle_until(min(p.arrival_time for p in self.processes if not p.done))
                continue

            # min() keeps the first of equal bursts
            shortest = min(available, key=lambda p: p.burst_time)
            self._set_state(shortest, "RUNNING")
            self._execute(shortest, shortest.remaining_time)

    def _run_srt(self):
        previous: Optional[Process] = None
        while not self.done():
            self._admit(self.processes)
            available = [p for p in self.processes if p.remaining_time > 0 and p.arrival_time <= self.time]
            if not available:
                self._idle_until(min(p.arrival_time for p in self.processes if p.remaining_time > 0))
                continue

            shortest = min(available, key=lambda p: p.remaining_time)
            if previous is not None and previous is not shortest and not previous.done:
                self._set_state(previous, "READY", "(preempted)")
            self._set_state(shortest, "RUNNING")
            self._execute(shortest, 1)
            previous = shortest

    def _run_rr(self):
        order = self._arrival_order()
        ready: Deque[Process] = deque()
        while not self.done():
            self._admit(order, ready.append)
            if not ready:
                self._idle_until_next_admission(order)
                continue

            p = ready.popleft()
            self._set_state(p, "RUNNING")
            self._execute(p, min(self.quantum, p.remaining_time))

            # Arrivals during the slice queue ahead of the incumbent.
            self._admit(order, ready.append)
            if not p.done:
                self._set_state(p, "READY", "(time slice)")
                ready.append(p)

    def _run_mlfq(self):
        order = self._arrival_order()
        queues: List[Deque[Process]] = [deque() for _ in range(MLFQ_LEVELS)]

        def enqueue_initial(p: Process):
            queues[p.initial_queue - 1].append(p)

        while not self.done():
            self._admit(order, enqueue_initial)
            level = next((i for i, q in enumerate(queues) if q), None)
            if level is None:
                self._idle_until_next_admission(order)
                continue

            p = queues[level].popleft()
            quantum = self.mlfq_quantums[level]
            self._set_state(p, "RUNNING", f"(Q{level + 1})")
            self._execute(p, min(quantum, p.remaining_time), queue_level=level + 1)

            # Arrivals during the slice go to their own initial queue first.
            self._admit(order, enqueue_initial)
            if not p.done:
                # Unfinished here means the whole quantum was used.
                next_level = min(level + 1, MLFQ_LEVELS - 1)
                if next_level != level:
                    self._set_state(p, "READY", f"(demoted to Q{next_level + 1})")
                else:
                    self._set_state(p, "READY", "(time slice)")
                queues[next_level].append(p)

    def run(self) -> ScheduleResult:
        self.reset()
        runners = {
            "FCFS": self._run_fcfs,
            "SJF": self._run_sjf,
            "SRT": self._run_srt,
            "RR": self._run_rr,
            "MLFQ": self._run_mlfq,
        }
        self._log_event(f"t=0: {self.algorithm} started with {len(self.processes)} processes")
        runners[self.algorithm]()
        self._log_event(f"t={self.time}: {self.algorithm} completed")

        logger.debug(
            "%s run finished: processes=%d blocks=%d time=%d",
            self.algorithm,
            len(self.processes),
            len(self.blocks),
            self.time,
        )
        return ScheduleResult(
            algorithm=self.algorithm,
            processes=self.processes,
            blocks=list(self.blocks),
            event_log=list(self.event_log),
        )


# -------- Per-algorithm entry points (each run works on its own clone) --------
def run_fcfs(processes: List[Process]) -> ScheduleResult:
    return CPUScheduler(clone_processes(processes), "FCFS").run()


def run_sjf(processes: List[Process]) -> ScheduleResult:
    return CPUScheduler(clone_processes(processes), "SJF").run()


def run_srt(processes: List[Process]) -> ScheduleResult:
    return CPUScheduler(clone_processes(processes), "SRT").run()


def run_rr(processes: List[Process], quantum: int = DEFAULT_QUANTUM) -> ScheduleResult:
    return CPUScheduler(clone_processes(processes), "RR", quantum=quantum).run()


def run_mlfq(processes: List[Process], quantums: Optional[Sequence[int]] = DEFAULT_MLFQ_QUANTUMS) -> ScheduleResult:
    return CPUScheduler(clone_processes(processes), "MLFQ", mlfq_quantums=quantums).run()


def run_algorithm(
    processes: List[Process],
    algorithm: str,
    quantum: int = DEFAULT_QUANTUM,
    mlfq_quantums: Optional[Sequence[int]] = None,
) -> ScheduleResult:
    # Reject the selector before anything is cloned or run.
    algo = normalize_algorithm(algorithm)
    sched = CPUScheduler(
        clone_processes(processes),
        algorithm=algo,
        quantum=quantum,
        mlfq_quantums=mlfq_quantums,
    )
    return sched.run()
