"""Rate-limited HTTP client for legislation.gov.au.

Legislation text is fetched in two steps:

1. The OData API (``api.prod.legislation.gov.au/v1``) gives the latest
   version's dates, register id and compilation number.
2. The EPUB XHTML rendition is served at a URL derived from those dates::

    /{titleId}/{start}/{retrospectiveStart}/text/original/epub/OEBPS/document_1/document_1.html

The register sometimes answers with its single-page-app shell instead of the
XHTML; that is reported as a 404 with ``shell=True``.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from leg2json.constants import (
    API_BASE,
    DEFAULT_ACCEPT,
    MAX_RETRIES,
    MIN_DELAY_SECONDS,
    REQUEST_TIMEOUT,
    SHELL_SIGNATURE,
    USER_AGENT,
    WWW_BASE,
)
from leg2json.exceptions import FetchError
from leg2json.models import VersionInfo

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    status: int
    body: str
    content_type: str = ""
    version_info: Optional[VersionInfo] = None
    shell: bool = False

    @property
    def ok(self) -> bool:
        return self.status == 200


def _format_date(iso_datetime: str) -> str:
    return iso_datetime.split("T")[0]


def build_epub_html_url(title_id: str, start: str, retrospective_start: str) -> str:
    """Construct the EPUB XHTML URL for a title version."""
    return (
        f"{WWW_BASE}/{title_id}/{_format_date(start)}/{_format_date(retrospective_start)}"
        f"/text/original/epub/OEBPS/document_1/document_1.html"
    )


def is_shell_page(body: str) -> bool:
    """Check if the body is the register's app shell rather than legislation."""
    return SHELL_SIGNATURE in body


class RegisterClient:
    """HTTP client with a minimum delay between requests and retry on 429/5xx."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        user_agent: str = USER_AGENT,
        min_delay: float = MIN_DELAY_SECONDS,
        max_retries: int = MAX_RETRIES,
        timeout: float = REQUEST_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session or requests.Session()
        self.user_agent = user_agent
        self.min_delay = min_delay
        self.max_retries = max_retries
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock
        self._last_request: Optional[float] = None

    def _rate_limit(self) -> None:
        now = self._clock()
        if self._last_request is not None:
            elapsed = now - self._last_request
            if elapsed < self.min_delay:
                self._sleep(self.min_delay - elapsed)
        self._last_request = self._clock()

    @staticmethod
    def _backoff(attempt: int) -> float:
        return float(2 ** (attempt + 1))

    def get(self, url: str, accept: str = DEFAULT_ACCEPT) -> FetchResult:
        """
        Fetch a URL.

        Retries up to ``max_retries`` times on 429/5xx responses and network
        errors with exponential backoff (2s, 4s, 8s). When retries run out the
        last response is returned as is.

        Raises:
            FetchError: If every attempt failed with a network error
        """
        self._rate_limit()
        headers = {"User-Agent": self.user_agent, "Accept": accept}

        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.get(url, headers=headers, timeout=self.timeout)
            except requests.RequestException as e:
                if attempt < self.max_retries:
                    backoff = self._backoff(attempt)
                    logger.warning(f"{type(e).__name__} for {url}, retrying in {backoff:.0f}s")
                    self._sleep(backoff)
                    continue
                raise FetchError(url, attempt + 1, e) from e

            if (response.status_code == 429 or response.status_code >= 500) and attempt < self.max_retries:
                backoff = self._backoff(attempt)
                logger.warning(f"HTTP {response.status_code} for {url}, retrying in {backoff:.0f}s")
                self._sleep(backoff)
                continue

            return FetchResult(
                status=response.status_code,
                body=response.text,
                content_type=response.headers.get("content-type", ""),
            )

        raise FetchError(url, self.max_retries + 1)

    def fetch_version_info(self, title_id: str) -> Optional[VersionInfo]:
        """Latest version metadata for a title, or None if the API has none."""
        version_url = f"{API_BASE}/versions/find(titleId='{title_id}',asAtSpecification='latest')"
        result = self.get(version_url, accept="application/json")
        if result.status != 200:
            logger.info(f"Version API returned HTTP {result.status} for {title_id}")
            return None

        data = json.loads(result.body)

        title_result = self.get(f"{API_BASE}/titles('{title_id}')", accept="application/json")
        if title_result.status == 200:
            data["makingDate"] = json.loads(title_result.body).get("makingDate")

        data.setdefault("titleId", title_id)
        return VersionInfo.model_validate(data)

    def fetch_legislation_html(self, title_id: str) -> FetchResult:
        """Fetch the latest EPUB XHTML for a title along with its version metadata."""
        version_info = self.fetch_version_info(title_id)
        if version_info is None or not version_info.start:
            return FetchResult(status=404, body="", version_info=version_info)

        url = build_epub_html_url(
            version_info.title_id,
            version_info.start,
            version_info.retrospective_start or version_info.start,
        )
        result = self.get(url)
        result.version_info = version_info

        if result.status == 200 and is_shell_page(result.body):
            logger.warning(f"Got app shell instead of EPUB content for {title_id}")
            return FetchResult(status=404, body="", version_info=version_info, shell=True)

        return result
