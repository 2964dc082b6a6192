"""Transport boundary: the capability that actually talks to the network.

The pipeline only needs ``send(method, url, headers, body)`` and a response
exposing status, headers and decoders. ``RequestsTransport`` is the default
implementation, backed by a ``requests.Session``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Protocol

import requests

from .config import HttpClientConfig
from .errors import HttpClientError, HttpConnectionError, RequestTimeoutError

logger = logging.getLogger(__name__)


class TransportResponse(Protocol):
    status_code: int
    reason: str
    headers: Mapping[str, str]

    @property
    def text(self) -> str: ...

    @property
    def content(self) -> bytes: ...

    def json(self) -> Any: ...


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, Any],
        body: str | None,
    ) -> TransportResponse: ...

    def close(self) -> None: ...


class RequestsTransport:
    """Transport running blocking ``requests`` calls off the event loop."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()
        self._session = requests.Session()
        if self._config.user_agent:
            self._session.headers["User-Agent"] = self._config.user_agent
        self._session.headers.update(self._config.default_headers)

    def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, Any],
        body: str | None,
    ) -> requests.Response:
        try:
            return self._session.request(
                method,
                url,
                headers={key: str(value) for key, value in headers.items()},
                data=body,
                timeout=self._config.timeout,
                verify=self._config.verify_tls,
            )
        except requests.exceptions.Timeout as exc:
            raise RequestTimeoutError(str(exc)) from exc
        except requests.exceptions.ConnectionError as exc:
            raise HttpConnectionError(str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise HttpClientError(str(exc)) from exc

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, Any],
        body: str | None,
    ) -> requests.Response:
        logger.debug("sending %s %s", method, url)
        return await asyncio.to_thread(self._send, method, url, headers, body)

    def close(self) -> None:
        self._session.close()
