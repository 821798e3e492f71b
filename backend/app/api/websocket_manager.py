"""
WebSocket Manager - live snapshots for tournaments and notifications.

Clients connect to a channel ("tournaments", "tournament:<id>",
"notifications:<user_id>"), receive the current snapshot right away and then
every change the services publish on that channel.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List

from fastapi import WebSocket, WebSocketDisconnect

from backend.app.core.events import change_events

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        # Maps channel -> List of connected WebSockets
        self.active_connections: Dict[str, List[WebSocket]] = {}
        change_events.subscribe(self.broadcast)

    async def connect(self, websocket: WebSocket, channel: str):
        await websocket.accept()
        self.active_connections.setdefault(channel, []).append(websocket)

    def disconnect(self, websocket: WebSocket, channel: str):
        if channel in self.active_connections:
            if websocket in self.active_connections[channel]:
                self.active_connections[channel].remove(websocket)
            if not self.active_connections[channel]:
                del self.active_connections[channel]

    async def broadcast(self, channel: str, message: Dict[str, Any]):
        """Send message to every client subscribed to channel"""
        for connection in self.active_connections.get(channel, [])[:]:
            try:
                await connection.send_json(message)
            except Exception:
                # Dead connection, forget it
                self.disconnect(connection, channel)

    async def handle_channel(self, websocket: WebSocket, channel: str, snapshot: Callable[[], Awaitable[Dict[str, Any]]]):
        """Send the initial snapshot, then keep the socket open until the client leaves."""
        await self.connect(websocket, channel)
        try:
            await websocket.send_json(await snapshot())
            while True:
                # Clients only send keep-alives; updates flow server -> client
                await websocket.receive_text()
        except WebSocketDisconnect:
            pass
        except Exception as e:
            logger.warning("WebSocket on %s closed: %s", channel, e)
        finally:
            self.disconnect(websocket, channel)


# Singleton instance
manager = ConnectionManager()
