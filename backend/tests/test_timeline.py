from schedsim.engine import Block, load_preset, merge_blocks, run_srt
from schedsim.engine.timeline import busy_time, first_start_per_process, time_per_process, total_time


def test_merges_adjacent_blocks_of_same_process():
    blocks = [Block("P1", 0, 1), Block("P1", 1, 2), Block("P2", 2, 3), Block("P1", 3, 4)]
    assert merge_blocks(blocks) == [Block("P1", 0, 2), Block("P2", 2, 3), Block("P1", 3, 4)]


def test_gap_between_same_process_is_kept():
    blocks = [Block("P1", 0, 2), Block("P1", 5, 6)]
    assert merge_blocks(blocks) == blocks


def test_merge_keeps_first_slice_annotations():
    blocks = [Block("P1", 0, 2, queue_level=1, quantum_used=2), Block("P1", 2, 6, queue_level=2, quantum_used=4)]
    assert merge_blocks(blocks) == [Block("P1", 0, 6, queue_level=1, quantum_used=2)]


def test_merge_does_not_touch_input():
    blocks = [Block("P1", 0, 1), Block("P1", 1, 2)]
    merge_blocks(blocks)
    assert blocks == [Block("P1", 0, 1), Block("P1", 1, 2)]


def test_merge_empty():
    assert merge_blocks([]) == []
    assert total_time([]) == 0


def test_merge_is_idempotent_and_preserves_totals():
    raw = run_srt(load_preset(2)).blocks
    merged = merge_blocks(raw)

    assert merge_blocks(merged) == merged
    assert len(merged) < len(raw)
    assert total_time(merged) == total_time(raw) == 14
    assert busy_time(merged) == busy_time(raw)
    assert time_per_process(merged) == time_per_process(raw) == {"P1": 8, "P2": 4, "P3": 2}
    assert first_start_per_process(merged) == {"P1": 0, "P2": 1, "P3": 2}
