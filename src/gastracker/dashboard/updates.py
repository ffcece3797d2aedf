"""Push freshly refreshed data to connected dashboard clients.

Registered as the tracker's refresh callback. Renders each network's
price, chart and summary-card partials and broadcasts them as OOB-swap
HTML fragments, so every client updates whatever network it is viewing.
"""

from __future__ import annotations

from fastapi import FastAPI

from gastracker.dashboard.views import network_context
from gastracker.logging import get_logger
from gastracker.models import TrackerSnapshot

log = get_logger(__name__)

_PARTIALS = (
    ("price", "partials/price_panel.html"),
    ("chart", "partials/chart.html"),
    ("card", "partials/network_card.html"),
)


def render_update_fragments(app: FastAPI) -> str:
    """Render every per-network partial wrapped in OOB swap divs."""
    env = app.state.templates.env
    tracker = app.state.tracker
    settings = app.state.settings

    fragments = []
    for ctx in (network_context(tracker, settings, n) for n in tracker.snapshot.readings):
        for prefix, template in _PARTIALS:
            html = env.get_template(template).render(**ctx)
            fragments.append(
                f'<div id="{prefix}-{ctx["network"].value}" hx-swap-oob="true">{html}</div>'
            )

    html = env.get_template("partials/status.html").render(
        loading=tracker.is_loading,
        refreshed_at=tracker.snapshot.refreshed_at,
        refresh_interval=settings.dashboard.refresh_interval,
    )
    fragments.append(f'<div id="status-line" hx-swap-oob="true">{html}</div>')

    return "\n".join(fragments)


async def broadcast_snapshot(app: FastAPI, snapshot: TrackerSnapshot) -> None:
    """Broadcast the latest data to all WebSocket clients, if any are connected."""
    hub = app.state.hub
    if not hub.connections:
        return

    payload = render_update_fragments(app)
    await hub.broadcast(payload)
    log.debug(
        "dashboard_update_broadcast",
        clients=len(hub.connections),
        refreshed_at=snapshot.refreshed_at,
    )
