"""WebSocket route handlers"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import json
import logging

from app.core.state import get_ws_state

router = APIRouter()
logger = logging.getLogger(__name__)

@router.websocket("/ws")
async def events_websocket(websocket: WebSocket):
    """
    Broadcast channel for refresh and simulation events.
    Clients only listen; a {"type": "ping"} gets a pong back.
    """
    manager = get_ws_state(websocket).manager
    await manager.connect(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except ValueError:
                continue

            if isinstance(data, dict) and data.get("type") == "ping":
                await websocket.send_json({"event": "pong", "data": {}})

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
