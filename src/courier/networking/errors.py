"""Error types raised by the courier networking layer."""

from __future__ import annotations

from typing import Any


class HttpClientError(Exception):
    """Base class for every failure raised by the HTTP client."""


class RequestTimeoutError(HttpClientError):
    """The transport gave up waiting for the server."""


class HttpConnectionError(HttpClientError):
    """The transport could not reach the server."""


class HttpError(HttpClientError):
    """A response arrived with a status outside the 2xx range.

    Attributes:
        status_code: HTTP status code reported by the server.
        message: Status text (reason phrase) of the response.
        response: Decoded error body.
    """

    def __init__(self, status_code: int, message: str, response: Any) -> None:
        super().__init__(message)
        self._status_code = status_code
        self._message = message
        self._response = response

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def message(self) -> str:
        return self._message

    @property
    def response(self) -> Any:
        return self._response

    def __repr__(self) -> str:
        return f"HttpError({self._status_code!r}, {self._message!r})"
