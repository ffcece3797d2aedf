"""Page routes serving the main dashboard HTML template."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from gastracker.dashboard.views import dashboard_context, parse_network

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(request: Request, network: str = "ethereum") -> HTMLResponse:
    """Main dashboard page for the selected network (?network=, default ethereum)."""
    templates: Jinja2Templates = request.app.state.templates
    selected = parse_network(network)

    context = dashboard_context(
        request.app.state.tracker, request.app.state.settings, selected
    )
    return templates.TemplateResponse(request, "index.html", context)
