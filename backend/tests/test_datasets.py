import json

import pytest

from schedsim.engine import (
    Process,
    build_default_processes,
    clone_processes,
    load_preset,
    load_processes_json,
    process_from_dict,
    processes_from_list,
    validate_processes,
)


def test_process_from_dict_defaults():
    p = process_from_dict({"pid": " P1 ", "burst_time": "3"})
    assert (p.pid, p.arrival_time, p.burst_time, p.initial_queue, p.remaining_time) == ("P1", 0, 3, 1, 3)


@pytest.mark.parametrize(
    "item, message",
    [
        ({"burst_time": 3}, "pid is required"),
        ({"pid": "P1"}, "burst_time is required"),
        ({"pid": "P1", "burst_time": 0}, "burst_time must be >= 1"),
        ({"pid": "P1", "burst_time": 2, "arrival_time": -1}, "arrival_time must be >= 0"),
        ({"pid": "P1", "burst_time": 2, "initial_queue": 4}, "initial_queue must be between 1 and 3"),
        ({"pid": "P1", "burst_time": "x"}, "burst_time must be an integer"),
        ({"pid": "P1", "burst_time": True}, "burst_time must be an integer"),
        ({"pid": "P1", "burst_time": 2.5}, "burst_time must be a whole number"),
    ],
)
def test_process_from_dict_rejects_bad_input(item, message):
    with pytest.raises(ValueError, match=message):
        process_from_dict(item)


def test_duplicate_pids_are_rejected():
    with pytest.raises(ValueError, match="already exists"):
        validate_processes([Process("P1", 0, 1), Process("P1", 2, 3)])


def test_processes_from_list_requires_a_list():
    with pytest.raises(ValueError):
        processes_from_list({"pid": "P1"})


def test_clone_processes_is_independent():
    original = [Process("P1", 0, 4, initial_queue=2)]
    original[0].remaining_time = 1
    original[0].finish_time = 9

    clone = clone_processes(original)

    assert clone[0] is not original[0]
    assert (clone[0].pid, clone[0].burst_time, clone[0].initial_queue) == ("P1", 4, 2)
    assert clone[0].remaining_time == 4
    assert clone[0].finish_time is None


def test_unknown_preset_falls_back_to_first():
    assert [p.pid for p in load_preset(99)] == [p.pid for p in load_preset(1)]


def test_bundled_processes_json():
    processes = build_default_processes()
    assert [p.pid for p in processes] == ["P1", "P2", "P3", "P4", "P5"]
    assert processes[2].initial_queue == 2


def test_load_processes_json_absolute_path(tmp_path):
    path = tmp_path / "workload.json"
    path.write_text(json.dumps([{"pid": "A", "arrival_time": 1, "burst_time": 2}]), encoding="utf-8")

    processes = load_processes_json(str(path))

    assert [(p.pid, p.arrival_time, p.burst_time) for p in processes] == [("A", 1, 2)]


def test_load_processes_json_validates(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"pid": "A", "burst_time": 0}]), encoding="utf-8")

    with pytest.raises(ValueError):
        load_processes_json(str(path))
