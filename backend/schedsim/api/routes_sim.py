from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from schedsim.engine import (
    SUPPORTED_ALGOS,
    Process,
    compare_all_algorithms,
    load_preset,
    normalize_quantum,
    run_algorithm_once,
    validate_processes,
)
from schedsim.serializers import serialize_compare_row, serialize_process, serialize_run
from schedsim.session import (
    add_process,
    get_compare_processes,
    get_settings,
    get_state,
    init_session,
    remove_process,
    reset_session,
    run_session,
    set_config,
)

router = APIRouter()


class ProcessIn(BaseModel):
    pid: str = Field(..., min_length=1)
    arrival_time: int = Field(0, ge=0)
    burst_time: int = Field(..., ge=1)
    initial_queue: int = Field(1, ge=1, le=3)

    def to_process(self) -> Process:
        return Process(
            pid=self.pid.strip(),
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            initial_queue=self.initial_queue,
        )


class SimulateRequest(BaseModel):
    algorithm: str = "FCFS"
    processes: List[ProcessIn] = Field(default_factory=list)
    quantum: Optional[int] = None
    mlfq_quantums: Optional[List[int]] = None


class CompareRequest(BaseModel):
    processes: Optional[List[ProcessIn]] = None
    rr_quantum: Optional[int] = None
    mlfq_quantums: Optional[List[int]] = None


def _to_processes(items: List[ProcessIn]) -> List[Process]:
    try:
        return validate_processes([item.to_process() for item in items])
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.get("/sim/algorithms")
def sim_algorithms() -> Dict[str, List[str]]:
    return {"algorithms": list(SUPPORTED_ALGOS)}


@router.post("/sim/simulate")
def sim_simulate(request: SimulateRequest) -> Dict[str, Any]:
    processes = _to_processes(request.processes)
    try:
        summary = run_algorithm_once(
            processes,
            request.algorithm,
            quantum=normalize_quantum(request.quantum),
            mlfq_quantums=request.mlfq_quantums,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return serialize_run(summary)


@router.post("/sim/compare")
def sim_compare(request: CompareRequest) -> Dict[str, Any]:
    if request.processes is not None:
        processes = _to_processes(request.processes)
    else:
        processes = get_compare_processes()

    current = get_settings()
    rr_quantum = request.rr_quantum if request.rr_quantum is not None else current["quantum"]
    mlfq_quantums = request.mlfq_quantums if request.mlfq_quantums is not None else current["mlfq_quantums"]

    results = compare_all_algorithms(
        processes,
        rr_quantum=normalize_quantum(rr_quantum),
        mlfq_quantums=mlfq_quantums,
    )
    return {"results": [serialize_compare_row(summary) for summary in results]}


@router.get("/sim/presets/{preset_id}")
def sim_preset(preset_id: int) -> Dict[str, Any]:
    return {"processes": [serialize_process(p) for p in load_preset(preset_id)]}


@router.post("/sim/init")
def sim_init(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return init_session(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/config")
def sim_config(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return set_config(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/add")
def sim_add(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    process_payload = payload.get("process") if isinstance(payload.get("process"), dict) else payload
    try:
        return add_process(process_payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/remove/{pid}")
def sim_remove(pid: str) -> Dict[str, Any]:
    try:
        return remove_process(pid)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/run")
def sim_run() -> Dict[str, Any]:
    return run_session()


@router.get("/sim/state")
def sim_state() -> Dict[str, Any]:
    return get_state()


@router.post("/sim/reset")
def sim_reset() -> Dict[str, Any]:
    return reset_session()
