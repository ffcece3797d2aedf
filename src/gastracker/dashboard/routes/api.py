"""JSON API endpoints for readings, series, chart geometry and refresh control."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from gastracker.chart.scaler import chart_geometry
from gastracker.dashboard.views import parse_network
from gastracker.logging import get_logger
from gastracker.models import BarGeometry, ChartView, GasReading, Network

log = get_logger(__name__)

router = APIRouter()


def _reading_to_dict(network: Network, reading: GasReading | None) -> dict:
    if reading is None:
        return {"network": network.value, "gas_price": None, "timestamp": None, "is_fallback": None}
    return {
        "network": network.value,
        "gas_price": reading.gas_price,
        "timestamp": reading.timestamp,
        "is_fallback": reading.is_fallback,
    }


def _bar_to_dict(bar: BarGeometry) -> dict:
    return {
        **bar.point.to_dict(),
        "is_up": bar.is_up,
        "body_top": bar.body_top,
        "body_height": bar.body_height,
        "wick_top": bar.wick_top,
        "wick_bottom": bar.wick_bottom,
        "wick_length": bar.wick_length,
    }


def _view_to_dict(network: Network, view: ChartView) -> dict:
    price_range = view.price_range
    return {
        "network": network.value,
        "total_points": view.total_points,
        "range": (
            {"min": price_range.min, "max": price_range.max}
            if price_range is not None
            else None
        ),
        "axis_labels": list(view.axis_labels),
        "bars": [_bar_to_dict(bar) for bar in view.bars],
    }


@router.get("/networks")
async def get_networks(request: Request) -> JSONResponse:
    """Current reading for every network, in display order."""
    tracker = request.app.state.tracker
    result = [_reading_to_dict(n, tracker.get_reading(n)) for n in Network]
    return JSONResponse(content=result)


@router.get("/networks/{network}/series")
async def get_series(request: Request, network: str) -> JSONResponse:
    """Full synthetic OHLC history for one network."""
    net = parse_network(network)
    tracker = request.app.state.tracker
    points = tracker.get_series(net)
    return JSONResponse(content={
        "network": net.value,
        "points": [p.to_dict() for p in points],
    })


@router.get("/networks/{network}/chart")
async def get_chart(
    request: Request,
    network: str,
    window: int | None = Query(default=None, ge=1, le=500),
) -> JSONResponse:
    """Render geometry for one network's chart (heights in percent)."""
    net = parse_network(network)
    tracker = request.app.state.tracker
    chart_settings = request.app.state.settings.chart

    view = chart_geometry(
        tracker.get_series(net),
        window_size=window if window is not None else chart_settings.window_size,
        min_body=chart_settings.min_body_height,
    )
    return JSONResponse(content=_view_to_dict(net, view))


@router.get("/status")
async def get_status(request: Request) -> JSONResponse:
    """Tracker status: loading flag, last refresh time and interval."""
    tracker = request.app.state.tracker
    snapshot = tracker.snapshot
    return JSONResponse(content={
        "loading": tracker.is_loading,
        "running": tracker.is_running,
        "refreshed_at": snapshot.refreshed_at if snapshot is not None else None,
        "refresh_interval": tracker.refresh_interval,
    })


@router.post("/refresh")
async def trigger_refresh(request: Request) -> JSONResponse:
    """Run a refresh cycle now. Skipped if one is already in flight."""
    tracker = request.app.state.tracker
    snapshot = await tracker.refresh()
    log.info("refresh_triggered_via_api")
    return JSONResponse(content={
        "refreshed_at": snapshot.refreshed_at if snapshot is not None else None,
    })
