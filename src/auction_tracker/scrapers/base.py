"""
Base Scraper

Shared HTTP session handling for the listing scrapers.
"""
import time
from typing import List, Optional

import requests

from config.settings import settings
from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class BaseScraper:
    """
    Common plumbing for source scrapers.

    Subclasses implement fetch_properties(); a failed request is logged and
    returns None so that one bad page never aborts a source.
    """

    source_name = "unknown"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        delay_seconds: Optional[float] = None
    ):
        """
        Args:
            base_url: Override the source base URL (for testing)
            timeout: Request timeout in seconds
            delay_seconds: Pause between requests
        """
        self.base_url = (base_url or self.default_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.delay_seconds = delay_seconds if delay_seconds is not None else settings.request_delay_seconds
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
        })
        logger.info("scraper_initialized", source=self.source_name, base_url=self.base_url)

    def default_base_url(self) -> str:
        return ""

    def fetch_properties(self) -> List[AuctionProperty]:
        raise NotImplementedError

    def fetch_text(self, url: str, encoding: Optional[str] = None, **kwargs) -> Optional[str]:
        """
        GET a URL and return its body.

        Args:
            url: Absolute URL
            encoding: Force response encoding (e.g. latin-1 CSV)

        Returns:
            Response text or None on any request failure
        """
        try:
            response = self.session.get(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(
                "page_request_failed",
                source=self.source_name,
                url=url,
                error=str(e),
                error_type=type(e).__name__
            )
            return None

        if encoding:
            response.encoding = encoding

        logger.debug("page_fetched", source=self.source_name, url=url, status_code=response.status_code)
        return response.text

    def absolute_url(self, href: str) -> str:
        if href.startswith("http"):
            return href
        if not href.startswith("/"):
            href = "/" + href
        return f"{self.base_url}{href}"

    def pause(self):
        """Be polite between requests."""
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
