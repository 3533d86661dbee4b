"""
Blocking HTTP GET wrapper used by the resolver and the availability prober.

The fetcher never interprets status codes: it reports them in a
``RawResponse`` and leaves the decision to the caller. Transport problems
(DNS, connect, timeout) propagate as ``requests.RequestException``.
"""

import logging
from typing import Optional

import requests
from pydantic import BaseModel

from ...settings import settings

logger = logging.getLogger(__name__)


class RawResponse(BaseModel):
    """
    Status code and body of a single fetch attempt.
    """

    url: str
    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, BOM stripped, undecodable bytes replaced."""
        return self.body.decode("utf-8-sig", errors="replace")

    @property
    def is_blank(self) -> bool:
        """True for empty or whitespace-only bodies."""
        return not self.text.strip()


class HttpFetcher:
    """
    Issues single GET requests through a ``requests.Session``.

    A session passed in by the caller is left open; a session created here is
    closed by ``close()`` or on leaving a ``with`` block.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.headers = {"User-Agent": user_agent or settings.user_agent}
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def get(self, url: str) -> RawResponse:
        """
        GET a URL and return its status and raw body.

        Raises:
            requests.RequestException: On transport failure.
        """
        self.logger.debug(f"GET {url} (timeout={self.timeout}s)")
        with self.session.get(url, timeout=self.timeout, headers=self.headers) as r:
            return RawResponse(url=url, status_code=r.status_code, body=r.content)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout})"
