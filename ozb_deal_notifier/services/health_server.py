"""
Health check HTTP server.

Serves ``GET /`` and ``GET /healthz`` so a hosting platform can tell the
process is alive. The response does not reflect scrape or delivery health.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from aiohttp import web

from ..utils.logging import get_logger

HEALTH_MESSAGE = "OzBargain Scraper is running"


def build_health_response(
    message: str = HEALTH_MESSAGE, data: Optional[Any] = None
) -> Dict[str, Any]:
    """Build the health response body; ``data`` is omitted when None."""
    response: Dict[str, Any] = {
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if data is not None:
        response["data"] = data
    return response


async def health_handler(request: web.Request) -> web.Response:
    """Report that the process is running."""
    return web.json_response(build_health_response())


def create_app() -> web.Application:
    """Create the health check application."""
    app = web.Application()
    app.router.add_get("/", health_handler)
    app.router.add_get("/healthz", health_handler)
    return app


class HealthServer:
    """Runs the health check application on the current event loop."""

    def __init__(self, host: str = "0.0.0.0", port: int = 8080):
        self.host = host
        self.port = port
        self._runner: Optional[web.AppRunner] = None
        self.logger = get_logger("health_server")

    async def start(self) -> None:
        """Bind and start serving."""
        if self._runner is not None:
            return

        self._runner = web.AppRunner(create_app(), access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        self.logger.info(f"Starting server on port {self.port}", extra={"host": self.host})

    async def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._runner is None:
            return

        await self._runner.cleanup()
        self._runner = None
        self.logger.info("Health server stopped")
