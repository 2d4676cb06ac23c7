from dataclasses import replace
from typing import Dict, Iterable, List

from .models import Block


def merge_blocks(blocks: Iterable[Block]) -> List[Block]:
    """Coalesce time-adjacent blocks of the same process.

    Only the `end` of the running merged block is ever extended, so MLFQ
    annotations of a merged block are those of its first slice. The input
    blocks are left untouched.
    """
    merged: List[Block] = []
    for block in blocks:
        last = merged[-1] if merged else None
        if last is not None and last.pid == block.pid and last.end == block.start:
            merged[-1] = replace(last, end=block.end)
        else:
            merged.append(block)
    return merged


def total_time(blocks: List[Block]) -> int:
    return blocks[-1].end if blocks else 0


def busy_time(blocks: Iterable[Block]) -> int:
    return sum(b.duration for b in blocks)


def time_per_process(blocks: Iterable[Block]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for b in blocks:
        out[b.pid] = out.get(b.pid, 0) + b.duration
    return out


def first_start_per_process(blocks: Iterable[Block]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for b in blocks:
        out.setdefault(b.pid, b.start)
    return out
