"""
Scrape service for the OzBargain Deal Notifier.

Runs the fetch -> extract -> notify pass for each feed of a job. A failure
in one feed is logged and recorded, and the remaining feeds still run.
"""

from typing import List

from ..interfaces import IDealExtractor, INotifier, IPageFetcher
from ..models.config import FeedConfig, JobConfig
from ..models.delivery import FeedResult
from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    FetchError,
    ParseError,
    get_error_tracker,
)
from ..utils.logging import get_logger


class ScrapeService:
    """Coordinates fetching, extraction and notification for feeds."""

    def __init__(
        self,
        fetcher: IPageFetcher,
        extractor: IDealExtractor,
        notifier: INotifier,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.notifier = notifier
        self.logger = get_logger("scrape_service")

    def scrape_feed(self, feed: FeedConfig) -> FeedResult:
        """
        Scrape one feed and post its deals.

        Args:
            feed: Feed to scrape

        Returns:
            FeedResult describing what happened; never raises for
            fetch, parse or delivery failures
        """
        result = FeedResult(category=feed.category, url=feed.url)
        context = {"category": feed.category, "url": feed.url}

        try:
            body = self.fetcher.fetch(feed.url)
        except FetchError as e:
            self._record(e, ErrorCategory.NETWORK, context)
            result.error_message = str(e)
            return result

        try:
            deals = self.extractor.extract(body, feed.category)
        except ParseError as e:
            self._record(e, ErrorCategory.PARSING, context)
            result.error_message = str(e)
            return result

        result.deals_found = len(deals)
        self.logger.info(f"Found {len(deals)} deals", extra=context)

        result.delivery = self.notifier.notify(deals, feed.mode)
        return result

    def run_job(self, job: JobConfig) -> List[FeedResult]:
        """
        Scrape every feed of a job in order.

        Args:
            job: Job whose feeds should be scraped

        Returns:
            One FeedResult per feed
        """
        self.logger.info(f"Scraping {job.name}...", extra={"feeds": len(job.feeds)})

        results = [self.scrape_feed(feed) for feed in job.feeds]

        failed = [r for r in results if not r.success]
        self.logger.info(
            f"Finished {job.name}",
            extra={
                "feeds": len(results),
                "failed_feeds": len(failed),
                "deals_found": sum(r.deals_found for r in results),
            },
        )
        return results

    def _record(self, error: Exception, category: ErrorCategory, context: dict):
        self.logger.error(f"Error scraping feed: {error}", extra=context)
        get_error_tracker().record_error(
            component="scrape_service",
            category=category,
            severity=ErrorSeverity.MEDIUM,
            message=str(error),
            exception=error,
            context=context,
        )
