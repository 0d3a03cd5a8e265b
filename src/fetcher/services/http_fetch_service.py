# src/fetcher/services/http_fetch_service.py
import logging
import time
from typing import Optional

import requests

from fetcher.model import FetchError, FetchResult

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "FaleProxy/1.0 (+https://github.com/faleproxy)"


class HttpFetchService:
    """
    Thin synchronous wrapper around a requests.Session for page fetching.
    Every failure (bad URL, connection error, timeout, non-2xx status) is
    surfaced as a FetchError carrying the underlying error text.
    """

    def __init__(
            self,
            timeout: float = 15.0,
            user_agent: str = DEFAULT_USER_AGENT,
            session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session

    def __enter__(self):
        self._get_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _get_session(self) -> requests.Session:
        """Initializes or returns the shared requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({'User-Agent': self.user_agent})
            logger.debug("HttpFetchService: Session initialized.")
        return self._session

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("HttpFetchService: Session closed.")

    def fetch(self, url: str) -> FetchResult:
        """
        Downloads the document at `url` and decodes it to text.

        Raises:
            FetchError: If the request fails or the server answers with 4xx/5xx.
        """
        session = self._get_session()
        start = time.perf_counter()

        try:
            response = session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.warning("HTTP %s while fetching %s", status, url)
            raise FetchError(url, f"Request failed with status code {status}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request for %s failed: %s", url, e)
            raise FetchError(url, str(e)) from e

        # requests assumes ISO-8859-1 for text/* without a charset
        if response.encoding is None or 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = response.apparent_encoding

        elapsed = round(time.perf_counter() - start, 4)
        logger.info("Fetched %s (%s) in %.3fs", url, response.status_code, elapsed)

        return FetchResult(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            content_type=response.headers.get('Content-Type'),
            content=response.text or "",
            elapsed_time=elapsed,
        )
