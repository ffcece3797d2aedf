"""Entry point for the gas price tracker.

Wires all components together, optionally embeds the FastAPI dashboard,
and starts the tracker. When the dashboard is enabled (default), the
tracker and dashboard share a single asyncio event loop via uvicorn's
programmatic API and FastAPI's lifespan context manager.

Component wiring order (in _build_components):
1. GasPriceSource (Etherscan gas oracle)
2. SeriesGenerator (synthetic history)
3. GasTracker (refresh loop and snapshot)
"""

import asyncio
import signal
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

import uvicorn
from fastapi import FastAPI

from gastracker.chart.series import SeriesGenerator
from gastracker.config import AppSettings
from gastracker.logging import get_logger, setup_logging
from gastracker.sources.etherscan import EtherscanGasSource
from gastracker.tracker import GasTracker


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build the source, generator and tracker from settings.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    logger = get_logger("gastracker.main")

    source = EtherscanGasSource(settings.source)
    generator = SeriesGenerator(settings.series, settings.networks)
    tracker = GasTracker(settings, source, generator)

    live = [n.value for n, ns in settings.networks.items() if ns.use_source]
    logger.info(
        "components_built",
        live_networks=live,
        seed=settings.series.seed,
        fetch_timeout=settings.source.fetch_timeout,
    )

    return {
        "source": source,
        "generator": generator,
        "tracker": tracker,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the tracker with the dashboard and stop it on shutdown.

    The tracker pushes each refreshed snapshot to WebSocket clients.
    """
    from gastracker.dashboard.updates import broadcast_snapshot

    logger = get_logger("gastracker.main")
    tracker: GasTracker = app.state.tracker

    tracker.set_refresh_callback(partial(broadcast_snapshot, app))
    await tracker.start()

    logger.info("lifespan_started", refresh_interval=tracker.refresh_interval)

    yield

    await tracker.stop()
    tracker.set_refresh_callback(None)
    await app.state.source.close()

    logger.info("gas_tracker_stopped")


async def _run_headless(components: dict[str, Any]) -> None:
    """Run the tracker without a web server until SIGINT/SIGTERM."""
    logger = get_logger("gastracker.main")
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)

    tracker: GasTracker = components["tracker"]
    try:
        await tracker.start()
        await stop_event.wait()
    finally:
        await tracker.stop()
        await components["source"].close()
        logger.info("gas_tracker_stopped")


async def run() -> None:
    """Run the gas price tracker.

    When dashboard is enabled (DASHBOARD_ENABLED=true, the default):
    - Creates the FastAPI dashboard app with lifespan
    - Runs tracker and dashboard in a single asyncio event loop via uvicorn

    When dashboard is disabled (DASHBOARD_ENABLED=false):
    - Runs the tracker alone, logging each refresh
    """
    settings = AppSettings()

    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("gastracker.main")

    components = _build_components(settings)

    if settings.dashboard.enabled:
        from gastracker.dashboard.app import create_dashboard_app

        app = create_dashboard_app(components["tracker"], settings, lifespan=lifespan)
        app.state.source = components["source"]

        logger.info(
            "starting_with_dashboard",
            host=settings.dashboard.host,
            port=settings.dashboard.port,
        )

        config = uvicorn.Config(
            app,
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            log_level="warning",  # Suppress uvicorn access logs
        )
        server = uvicorn.Server(config)
        await server.serve()
    else:
        logger.info("starting_without_dashboard")
        await _run_headless(components)


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
