"""Template context builders shared by page routes and WebSocket updates."""

from __future__ import annotations

from fastapi import HTTPException

from gastracker.chart.scaler import chart_geometry
from gastracker.config import AppSettings
from gastracker.models import Network
from gastracker.tracker import GasTracker


def parse_network(name: str) -> Network:
    """Resolve a network name from a URL, raising 404 when unknown."""
    try:
        return Network(name.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown network: {name}") from None


def network_context(tracker: GasTracker, settings: AppSettings, network: Network) -> dict:
    """Reading and chart geometry for one network."""
    return {
        "network": network,
        "reading": tracker.get_reading(network),
        "view": chart_geometry(
            tracker.get_series(network),
            window_size=settings.chart.window_size,
            min_body=settings.chart.min_body_height,
        ),
        "loading": tracker.is_loading,
    }


def dashboard_context(tracker: GasTracker, settings: AppSettings, selected: Network) -> dict:
    """Full page context: every network plus the current selection."""
    snapshot = tracker.snapshot
    return {
        "networks": [network_context(tracker, settings, n) for n in Network],
        "selected": selected,
        "loading": tracker.is_loading,
        "refreshed_at": snapshot.refreshed_at if snapshot is not None else None,
        "refresh_interval": settings.dashboard.refresh_interval,
    }
