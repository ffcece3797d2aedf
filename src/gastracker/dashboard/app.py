"""FastAPI dashboard application factory with Jinja2 templates and WebSocket hub."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from gastracker.config import AppSettings
from gastracker.dashboard.routes import api, pages, ws
from gastracker.dashboard.routes.ws import DashboardHub
from gastracker.tracker import GasTracker

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _format_time(value: int | None) -> str:
    """Millisecond timestamp to local wall-clock time (e.g., '14:05:09')."""
    if value is None:
        return "N/A"
    return datetime.fromtimestamp(value / 1000).astimezone().strftime("%H:%M:%S")


def _format_hour_minute(value: int | None) -> str:
    """Millisecond timestamp to local hour and minute (e.g., '14:05')."""
    if value is None:
        return "N/A"
    return datetime.fromtimestamp(value / 1000).astimezone().strftime("%H:%M")


def _format_gwei(value: float | None) -> str:
    """Gas price for display: whole numbers without decimals, others to 2 places."""
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:.2f}"


def create_dashboard_app(
    tracker: GasTracker,
    settings: AppSettings,
    lifespan: Any = None,
) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        tracker: Tracker whose snapshot the pages and API read.
        settings: Application settings (chart window, refresh interval).
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to start and stop the tracker.

    Returns:
        Configured FastAPI application with templates, WebSocket hub, and routes.
    """
    app = FastAPI(
        title="Gas Price Tracker",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["format_time"] = _format_time
    templates.env.filters["format_hm"] = _format_hour_minute
    templates.env.filters["format_gwei"] = _format_gwei
    app.state.templates = templates

    app.state.hub = DashboardHub()
    app.state.tracker = tracker
    app.state.settings = settings

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")
    app.include_router(ws.router)

    return app
