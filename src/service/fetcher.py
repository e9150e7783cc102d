"""HTTP page fetcher for the conversion request handler.

Fetching is a collaborator of the converter, not part of it: the fetcher
downloads the page, follows redirects and hands the final URL and decoded
HTML to the caller. Rate limits and temporary outages are retried with the
backoff in retry_logic; nothing inside the converter ever retries.
"""

import logging
from typing import Optional

import requests
from requests.exceptions import Timeout, ConnectTimeout, ReadTimeout, ConnectionError, RequestException

from .errors import FetchError
from .models import FetchedPage
from .retry_logic import retry_on_transient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_USER_AGENT = "getmd/0.1 (+https://pypi.org/project/getmd/)"


class PageFetcher:
    """Fetches HTML pages over HTTP(S) with requests.

    Attributes:
        session: requests.Session used for all fetches
        timeout: Per-request timeout in seconds
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch(self, url: str) -> FetchedPage:
        """Fetch a page, retrying 429/503 responses.

        Args:
            url: Absolute http(s) URL

        Returns:
            FetchedPage with the final URL and decoded HTML

        Raises:
            FetchError: If the request fails or returns a non-2xx status
            RetryExhaustedError: If 429/503 responses persist after retries
        """
        return retry_on_transient(self._fetch_once, url)

    def _fetch_once(self, url: str) -> FetchedPage:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(
                url,
                headers={'User-Agent': self.user_agent, 'Accept': 'text/html,*/*;q=0.8'},
                timeout=self.timeout,
                allow_redirects=True,
            )
        except (Timeout, ConnectTimeout, ReadTimeout) as e:
            raise FetchError(url, f"timed out after {self.timeout}s") from e
        except ConnectionError as e:
            raise FetchError(url, "connection failed") from e
        except RequestException as e:
            raise FetchError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        final_url = response.url or url
        logger.debug(f"OK {final_url} ({len(response.text)} chars)")
        return FetchedPage(url=final_url, html=response.text, status_code=response.status_code)
