"""WebSocket push channel for dashboard clients.

Clients receive OOB-swap HTML fragments: once on connect (if data is
already available) and again after every tracker refresh.
"""

from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from gastracker.dashboard.updates import render_update_fragments
from gastracker.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


class DashboardHub:
    """Tracks open dashboard sockets and fans fragments out to them."""

    def __init__(self) -> None:
        self.connections: list[WebSocket] = []

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.connections.append(ws)
        log.info("dashboard_ws_connected", total=len(self.connections))

    def disconnect(self, ws: WebSocket) -> None:
        """Forget ``ws``. Safe to call for a socket that is already gone."""
        if ws not in self.connections:
            return
        self.connections.remove(ws)
        log.info("dashboard_ws_disconnected", total=len(self.connections))

    async def broadcast(self, html: str) -> None:
        """Send ``html`` to every client, dropping sockets that fail."""
        for ws in self.connections.copy():
            # The endpoint may have dropped it while an earlier send was awaited
            if ws not in self.connections:
                continue
            try:
                await ws.send_text(html)
            except Exception as e:
                self.disconnect(ws)
                log.warning(
                    "dashboard_ws_send_failed",
                    error=str(e),
                    remaining=len(self.connections),
                )


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Register the client and sync it with the latest snapshot."""
    hub: DashboardHub = websocket.app.state.hub
    await hub.connect(websocket)

    try:
        if websocket.app.state.tracker.snapshot is not None:
            await websocket.send_text(render_update_fragments(websocket.app))
        while True:
            # Client messages are ignored; reading keeps disconnects detectable
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
