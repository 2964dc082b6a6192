"""Asynchronous HTTP client built on the courier request pipeline.

Every call goes through the same steps: the configured header resolver and
interceptors shape the request, the transport sends it, and the response is
either decoded or turned into an ``HttpError``. Failures of the dispatch
stage pass through the configured error translator, if any.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from .config import Configuration, HttpClientConfig
from .errors import HttpError
from .query import build_url
from .refactor import refactor_request
from .transport import RequestsTransport, Transport, TransportResponse
from .types import DecodePolicy, Method, RequestSpec

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"
APPLICATION_JSON = "application/json"


class HttpClient:
    """Core HTTP client (async).

    The client owns no pipeline policy of its own: interceptors, the global
    header resolver and the error translator live in the ``Configuration``
    it is given, which several clients may share.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        configuration: Configuration | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Create a new HttpClient.

        Args:
            config: Transport and decoding policy.
            configuration: Shared pipeline policy; a private empty one is
                created when omitted.
            transport: Network capability; defaults to ``RequestsTransport``.
        """
        self._config = config or HttpClientConfig()
        self._configuration = (
            configuration if configuration is not None else Configuration()
        )
        self._transport = (
            transport
            if transport is not None
            else RequestsTransport(self._config)
        )

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @staticmethod
    def _json_or_empty(response: TransportResponse) -> Any:
        try:
            return response.json()
        except ValueError:
            logger.debug("response body is not valid JSON, using {}")
            return {}

    def _decode(self, response: TransportResponse) -> Any:
        """Decode a successful response body according to the policy."""
        if self._config.decode_policy is DecodePolicy.JSON:
            return self._json_or_empty(response)

        content_type = response.headers.get("Content-Type")
        media_type = content_type.split(";")[0].strip() if content_type else ""
        if media_type == OCTET_STREAM:
            return response.content
        if media_type == APPLICATION_JSON:
            return self._json_or_empty(response)
        return response.text

    async def _dispatch(
        self,
        method: Method,
        url: str,
        headers: Mapping[str, Any],
        payload: Mapping[str, Any] | None,
    ) -> Any:
        body = json.dumps(payload) if payload is not None else None
        response = await self._transport.send(method.value, url, headers, body)

        status = response.status_code
        logger.debug("%s %s -> %d", method.value, url, status)
        if status < 200 or status >= 300:
            raise HttpError(status, response.reason, response.json())

        return self._decode(response)

    async def send(self, spec: RequestSpec) -> Any:
        """Run the pipeline for ``spec`` and return the decoded body.

        Raises:
            HttpError: The server answered outside the 2xx range.
            HttpClientError: The transport failed.
            Exception: Whatever a resolver raised, or whatever the error
                translator returned for a dispatch failure.
        """
        refactored = await refactor_request(
            self._configuration, spec, body_mode=self._config.body_mode
        )
        url = build_url(
            spec.url, spec.query_params, encode=self._config.encode_query
        )

        try:
            return await self._dispatch(
                spec.method, url, refactored.headers, refactored.payload
            )
        except Exception as exc:
            catch_error = self._configuration.catch_error
            if catch_error is None:
                raise
            translated = catch_error(exc)
            logger.warning(
                "%s %s failed with %s, raising %s",
                spec.method.value,
                url,
                type(exc).__name__,
                type(translated).__name__,
            )
            if translated is exc:
                raise
            raise translated from exc

    async def request(
        self,
        method: Method | str,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request with an arbitrary method."""
        return await self.send(
            RequestSpec(
                method=Method(method),
                url=url,
                headers=headers,
                payload=payload,
                query_params=query_params,
            )
        )

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP GET request.

        Args:
            url: Absolute URL to request.
            headers: Per-request headers, applied over every other source.
            query_params: Query parameters appended to ``url``.

        Returns:
            The decoded response body.
        """
        return await self.request(
            Method.GET, url, headers=headers, query_params=query_params
        )

    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP POST request.

        Args:
            url: Absolute URL to request.
            headers: Per-request headers, applied over every other source.
            payload: JSON body fields, applied over interceptor fields.
            query_params: Query parameters appended to ``url``.

        Returns:
            The decoded response body.
        """
        return await self.request(
            Method.POST,
            url,
            headers=headers,
            payload=payload,
            query_params=query_params,
        )

    async def put(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP PUT request."""
        return await self.request(
            Method.PUT,
            url,
            headers=headers,
            payload=payload,
            query_params=query_params,
        )

    async def destroy(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP DELETE request."""
        return await self.request(
            Method.DELETE,
            url,
            headers=headers,
            payload=payload,
            query_params=query_params,
        )

    async def patch(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP PATCH request."""
        return await self.request(
            Method.PATCH,
            url,
            headers=headers,
            payload=payload,
            query_params=query_params,
        )

    async def options(
        self,
        url: str,
        *,
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform an HTTP OPTIONS request."""
        return await self.request(
            Method.OPTIONS,
            url,
            headers=headers,
            payload=payload,
            query_params=query_params,
        )

    def close(self) -> None:
        """Release the transport's resources."""
        self._transport.close()
