"""WebSocket connection manager and event broadcaster"""

from typing import Any, Deque, Dict, List, Set
from fastapi import WebSocket
from collections import deque
from datetime import datetime, timezone
import asyncio
import logging

logger = logging.getLogger(__name__)

# Event names
REFRESH_WALLET = "refresh-wallet"
REFRESH_BALANCE = "refresh-balance"
PERK_REDEEMED = "perk-redeemed"
NEW_DEAL_ADDED = "new-deal-added"
TEST_MONTH_UPDATE = "test-month-update"
TRIGGER_AI_ROAST = "trigger-ai-roast"
TEST_COMPLETE = "test-complete"
TEST_STOPPED = "test-stopped"

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()

class ConnectionManager:
    """Manages WebSocket connections. Broadcast only, no per-user targeting."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []
        self._send_lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket):
        """Accept new connection"""
        await websocket.accept()
        self.active_connections.append(websocket)

        logger.info(f"Client connected via WebSocket ({len(self.active_connections)} active)")

        await websocket.send_json({
            "event": "connection",
            "data": {"status": "connected"},
            "timestamp": _timestamp()
        })

    def disconnect(self, websocket: WebSocket):
        """Remove connection"""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info(f"Client disconnected from WebSocket ({len(self.active_connections)} active)")

    async def broadcast(self, message: Dict[str, Any]):
        """Send message to every connected client, dropping dead sockets"""
        async with self._send_lock:
            disconnected = []
            for connection in list(self.active_connections):
                try:
                    await connection.send_json(message)
                except Exception as e:
                    logger.debug(f"Dropping WebSocket after send failure: {e}")
                    disconnected.append(connection)

            for conn in disconnected:
                self.disconnect(conn)

class EventBroadcaster:
    """
    Fire-and-forget publish of named events.

    Delivery is at-most-once: a client that is not connected when the event
    fires misses it and is expected to refetch over HTTP.
    """

    def __init__(self, manager: ConnectionManager, history_limit: int = 200):
        self.manager = manager
        self.recent_events: Deque[Dict[str, Any]] = deque(maxlen=history_limit)
        self._pending: Set[asyncio.Task] = set()

    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        message = {"event": event, "data": payload, "timestamp": _timestamp()}
        self.recent_events.append(message)
        logger.info(f"Emitted {event} to all clients: {payload}")

        if not self.manager.active_connections:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop, {event} not delivered")
            return

        task = loop.create_task(self.manager.broadcast(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def recent(self, limit: int = None, event: str = None) -> List[Dict[str, Any]]:
        events = [e for e in self.recent_events if event is None or e["event"] == event]
        if limit is not None:
            events = events[-limit:]
        return events
