import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from schedsim.session import (
    add_process,
    get_state,
    init_session,
    reset_session,
    run_session,
    set_config,
)

router = APIRouter()


async def _send_state(ws: WebSocket) -> None:
    await ws.send_json({"type": "state", "data": get_state()})


@router.websocket("/ws/state")
async def ws_state(websocket: WebSocket) -> None:
    await websocket.accept()
    await _send_state(websocket)

    try:
        while True:
            text = await websocket.receive_text()
            try:
                msg = json.loads(text)
            except ValueError:
                await websocket.send_json({"type": "error", "detail": "message must be valid JSON"})
                continue
            if not isinstance(msg, dict):
                await websocket.send_json({"type": "error", "detail": "message must be a JSON object"})
                continue

            mtype = str(msg.get("type", "")).lower()

            try:
                if mtype == "init":
                    payload = dict(msg)
                    payload.pop("type", None)
                    init_session(payload)
                elif mtype == "config":
                    set_config(msg)
                elif mtype == "add_process":
                    add_process(msg.get("process") or {})
                elif mtype == "run":
                    run_session()
                elif mtype == "reset":
                    reset_session()
                else:
                    await websocket.send_json({"type": "error", "detail": f"unknown message type '{mtype}'"})
                    continue
            except ValueError as exc:
                await websocket.send_json({"type": "error", "detail": str(exc)})
                continue

            await _send_state(websocket)
    except WebSocketDisconnect:
        return
