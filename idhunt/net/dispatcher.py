"""
idhunt/net/dispatcher.py
HTTP dispatcher for idhunt.

This is the single choke point for outbound HTTP traffic. One call issues
exactly one GET and returns the status code; redirects are never followed,
because a redirect is itself the session-expiry signal the loop reacts to.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from idhunt.config import TransportConfig
from idhunt.errors import wrap_transport_error

logger = logging.getLogger(__name__)

QUERY_PARAM = "fileId"


def build_url(path: str, file_id: str) -> str:
    """Append the identifier query to the target path verbatim."""
    return f"{path}?{QUERY_PARAM}={file_id}"


class HttpDispatcher:
    """
    Thin synchronous wrapper over ``httpx.Client``.

    The client is created once and reused for the whole run so connections
    are pooled. Use as a context manager, or call ``close()``.
    """

    def __init__(self, config: Optional[TransportConfig] = None, client: Optional[httpx.Client] = None):
        self.config = config or TransportConfig()
        self.client = client or httpx.Client(
            follow_redirects=False,
            verify=self.config.verify_tls,
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    def send(self, url: str, cookie: str) -> int:
        """
        Issue one GET and return the response status code.

        Raises:
            TransportError: the request never got an HTTP response
        """
        try:
            # Raw UTF-8 bytes: the credential is opaque and sent verbatim.
            response = self.client.get(url, headers={"Cookie": cookie.encode("utf-8")}, follow_redirects=False)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise wrap_transport_error(exc, url) from exc

        logger.debug("GET %s -> %d", url, response.status_code)
        return response.status_code

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HttpDispatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
