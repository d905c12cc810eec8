"""
Service layer for the OzBargain Deal Notifier.

This module contains the services that load configuration, run scrape
jobs and serve health checks.
"""

from .config_manager import ConfigurationManager
from .health_server import HealthServer
from .scrape_service import ScrapeService

__all__ = [
    "ConfigurationManager",
    "HealthServer",
    "ScrapeService",
]
