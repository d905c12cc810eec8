"""
Page fetching component for the OzBargain Deal Notifier.

Retrieves deals-block pages over HTTP. There is no retry adapter: a failed
fetch skips that feed until the next scheduled run.
"""

import logging
from typing import Optional

import requests

from ..utils.error_handling import FetchError


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "OzBargain-Deal-Notifier/1.0"


class PageFetcher:
    """Fetches raw page bodies with a shared HTTP session."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize page fetcher.

        Args:
            timeout: Request timeout in seconds, None for no timeout
            user_agent: User-Agent header sent with every request
            session: HTTP session to use; a new one is created if omitted
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def fetch(self, url: str) -> bytes:
        """
        Fetch a page body.

        Args:
            url: Page URL

        Returns:
            Raw response body

        Raises:
            FetchError: On network failure or a non-success status
        """
        logger.debug(f"Fetching deals page: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.content

        except requests.exceptions.Timeout as e:
            raise FetchError(url, f"timeout ({e})") from e

        except requests.exceptions.ConnectionError as e:
            raise FetchError(url, f"connection error ({e})") from e

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise FetchError(url, f"HTTP error {status_code}", status_code) from e

        except requests.exceptions.RequestException as e:
            raise FetchError(url, str(e)) from e
