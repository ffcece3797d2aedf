"""Gas tracker -- periodic refresh of live readings and synthetic histories.

Each refresh cycle:
  1. READ: One gas price per network. Networks configured with
     use_source=True ask the live source (bounded by fetch_timeout);
     the rest, and any failed fetch, get a synthetic fallback price.
  2. GENERATE: Expand every reading into a fresh synthetic OHLC history.
  3. PUBLISH: Replace the shared snapshot with a single assignment, so
     readers see either the previous cycle or the new one, never a mix.

Cycles are serialized by a lock. A refresh requested while one is in
flight is skipped rather than queued.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable

import structlog

from gastracker.chart.series import SeriesGenerator
from gastracker.config import AppSettings
from gastracker.exceptions import SourceUnavailableError
from gastracker.logging import get_logger
from gastracker.models import GasReading, Network, OHLCPoint, TrackerSnapshot, now_ms
from gastracker.sources.client import GasPriceSource
from gastracker.sources.fallback import fallback_reading

logger = get_logger(__name__)

RefreshCallback = Callable[[TrackerSnapshot], Awaitable[None]]


class GasTracker:
    """Owns the refresh loop and the latest TrackerSnapshot.

    Args:
        settings: Application-wide settings.
        source: Live gas price source, or None to run fully synthetic.
        generator: Synthetic series generator.
        rng: Random source for fallback prices. Seeded from
            ``settings.series.seed`` when omitted.
        clock: Returns the current time in Unix milliseconds.
    """

    def __init__(
        self,
        settings: AppSettings,
        source: GasPriceSource | None,
        generator: SeriesGenerator,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._settings = settings
        self._source = source
        self._generator = generator
        self._rng = rng if rng is not None else random.Random(settings.series.seed)
        self._clock = clock
        self._snapshot: TrackerSnapshot | None = None
        self._cycle_lock = asyncio.Lock()
        self._cycle_count = 0
        self._on_refresh: RefreshCallback | None = None
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def refresh_interval(self) -> float:
        return self._settings.dashboard.refresh_interval

    @property
    def snapshot(self) -> TrackerSnapshot | None:
        """Latest published snapshot, None until the first cycle completes."""
        return self._snapshot

    @property
    def is_loading(self) -> bool:
        return self._snapshot is None

    @property
    def is_running(self) -> bool:
        return self._running

    def set_refresh_callback(self, callback: RefreshCallback | None) -> None:
        """Register a coroutine awaited with each newly published snapshot."""
        self._on_refresh = callback

    def get_reading(self, network: Network) -> GasReading | None:
        if self._snapshot is None:
            return None
        return self._snapshot.readings.get(network)

    def get_series(self, network: Network) -> list[OHLCPoint]:
        """Return a copy of the network's series; callers may not mutate the snapshot."""
        if self._snapshot is None:
            return []
        return list(self._snapshot.series.get(network, []))

    async def start(self) -> None:
        """Begin refreshing in the background. The first cycle runs immediately."""
        if self._running:
            logger.warning("tracker_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("tracker_started", refresh_interval=self.refresh_interval)

    async def stop(self) -> None:
        """Stop the refresh loop and wait for it to exit."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("tracker_stopped")

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("tracker_refresh_error", exc_info=True)
            if self._running:
                await asyncio.sleep(self.refresh_interval)

    async def refresh(self) -> TrackerSnapshot | None:
        """Run one refresh cycle unless one is already in flight.

        Returns:
            The newly published snapshot, or the current one if the cycle
            was skipped.
        """
        if self._cycle_lock.locked():
            logger.debug("tracker_refresh_skipped", reason="cycle_in_flight")
            return self._snapshot

        async with self._cycle_lock:
            self._cycle_count += 1
            with structlog.contextvars.bound_contextvars(refresh_cycle=self._cycle_count):
                snapshot = await self._refresh_cycle()
            self._snapshot = snapshot

        if self._on_refresh is not None:
            try:
                await self._on_refresh(snapshot)
            except Exception:
                logger.warning("tracker_refresh_callback_error", exc_info=True)

        return snapshot

    async def _refresh_cycle(self) -> TrackerSnapshot:
        readings: dict[Network, GasReading] = {}
        for network in Network:
            readings[network] = await self._read_network(network)

        now = self._clock()
        series = {
            network: self._generator.generate_for(network, reading.gas_price, now=now)
            for network, reading in readings.items()
        }

        snapshot = TrackerSnapshot(readings=readings, series=series, refreshed_at=now)
        logger.info(
            "tracker_refreshed",
            prices={n.value: r.gas_price for n, r in readings.items()},
            fallbacks=[n.value for n, r in readings.items() if r.is_fallback],
        )
        return snapshot

    async def _read_network(self, network: Network) -> GasReading:
        """Fetch a live reading when configured, falling back to a synthetic one."""
        network_settings = self._settings.network(network)

        if network_settings.use_source and self._source is not None:
            try:
                return await asyncio.wait_for(
                    self._source.fetch_price(network),
                    timeout=self._settings.source.fetch_timeout,
                )
            except SourceUnavailableError as e:
                logger.warning("gas_source_unavailable", network=network.value, error=str(e))
            except asyncio.TimeoutError:
                logger.warning(
                    "gas_source_timeout",
                    network=network.value,
                    timeout=self._settings.source.fetch_timeout,
                )

        return fallback_reading(self._rng, network_settings)
