"""
Main application orchestrator for the OzBargain Deal Notifier.

Wires the fetcher, extractor, notifier and scrape service into scheduled
jobs, runs the health server alongside the scheduler and handles graceful
shutdown.
"""

import asyncio
import functools
import signal
import sys
from typing import List, Optional
from zoneinfo import ZoneInfo

from .components.deal_extractor import DealExtractor
from .components.page_fetcher import PageFetcher
from .components.webhook_notifier import DiscordWebhookNotifier
from .interfaces import IClock
from .models.config import Configuration
from .scheduler import DealScheduler, ScheduledJob, SystemClock, trigger_from_config
from .services.health_server import HealthServer
from .services.scrape_service import ScrapeService
from .utils.error_handling import get_error_tracker
from .utils.logging import get_logger


class ApplicationOrchestrator:
    """
    Coordinates all system components.

    Builds components from the configuration, starts the scheduler and the
    health server, and stops both on shutdown.
    """

    def __init__(
        self,
        config: Configuration,
        scrape_service: Optional[ScrapeService] = None,
        clock: Optional[IClock] = None,
    ):
        """
        Initialize the application orchestrator.

        Args:
            config: Validated configuration
            scrape_service: Prebuilt scrape service; built from config if None
            clock: Scheduler time source; system clock if None
        """
        self.config = config
        self.logger = get_logger("orchestrator")
        self._shutdown_event = asyncio.Event()

        if scrape_service is None:
            self.notifier = DiscordWebhookNotifier(
                config.webhook_url, timeout=config.request_timeout
            )
            scrape_service = ScrapeService(
                fetcher=PageFetcher(
                    timeout=config.request_timeout, user_agent=config.user_agent
                ),
                extractor=DealExtractor(site_origin=config.site_origin),
                notifier=self.notifier,
            )
        else:
            self.notifier = None

        self.scrape_service = scrape_service
        self.timezone = ZoneInfo(config.timezone) if config.timezone else None
        self.scheduler = DealScheduler(
            self._build_jobs(), clock=clock or SystemClock(self.timezone)
        )
        self.health_server = HealthServer(host=config.host, port=config.port)

    def _build_jobs(self) -> List[ScheduledJob]:
        return [
            ScheduledJob(
                name=job.name,
                trigger=trigger_from_config(job.trigger, self.timezone),
                run=functools.partial(self.scrape_service.run_job, job),
                run_on_startup=job.run_on_startup,
            )
            for job in self.config.jobs
        ]

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()
        if sys.platform != "win32":
            for signum in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(signum, self._signal_handler, signum)
        else:
            signal.signal(
                signal.SIGINT,
                lambda signum, frame: loop.call_soon_threadsafe(
                    self._signal_handler, signum
                ),
            )

    def _signal_handler(self, signum: int) -> None:
        """Handle shutdown signals."""
        self.logger.info(
            "Received shutdown signal, initiating graceful shutdown",
            extra={"signal": signum},
        )
        self._shutdown_event.set()

    async def start(self) -> None:
        """Start the scheduler (including startup runs) and the health server."""
        self.logger.info("Starting OzBargain Deal Notifier")

        if self.notifier is not None and self.config.webhook_url:
            loop = asyncio.get_running_loop()
            reachable = await loop.run_in_executor(None, self.notifier.test_connection)
            if not reachable:
                self.logger.warning("Discord webhook is not reachable at startup")

        await self.scheduler.start()
        await self.health_server.start()

    async def shutdown(self) -> None:
        """Stop the health server and the scheduler."""
        self.logger.info("Shutting down")
        await self.health_server.stop()
        await self.scheduler.stop(wait=False)
        self.logger.info(
            "Shutdown complete", extra={"errors": get_error_tracker().get_error_stats()}
        )

    def request_shutdown(self) -> None:
        """Ask a running orchestrator to stop."""
        self._shutdown_event.set()

    async def run(self) -> None:
        """Run until a shutdown signal arrives."""
        self._setup_signal_handlers()
        await self.start()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.shutdown()
