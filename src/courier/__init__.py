"""Process-wide request pipeline.

The functions here share one ``Configuration`` and one lazily created
``HttpClient``. Code that needs isolated policy should build its own
``HttpClient`` with its own ``Configuration`` instead.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .networking import (
    AddHeader,
    AddPayload,
    BodyMode,
    Configuration,
    DecodePolicy,
    HttpClient,
    HttpClientConfig,
    HttpClientError,
    HttpConnectionError,
    HttpError,
    Interceptor,
    Method,
    RequestTimeoutError,
    ResolveHeader,
    ResolveInterceptor,
)
from .networking.types import (
    ErrorTranslator,
    HeaderResolver,
    InterceptorResolver,
)

configuration = Configuration()

_client: HttpClient | None = None


def client() -> HttpClient:
    """Return the default client, creating it on first use."""
    global _client
    if _client is None:
        _client = HttpClient(configuration=configuration)
    return _client


def config(
    *,
    interceptors: Iterable[InterceptorResolver] | None = None,
    headers: HeaderResolver | None = None,
    catch_error: ErrorTranslator | None = None,
) -> None:
    """Set the process-wide pipeline policy; see ``Configuration.set``."""
    configuration.set(
        interceptors=interceptors, headers=headers, catch_error=catch_error
    )


def interceptor(resolver: InterceptorResolver) -> InterceptorResolver:
    """Register an interceptor resolver; usable as a decorator."""
    return configuration.add_interceptor(resolver)


def reset() -> None:
    """Clear the configuration and drop the default client."""
    global _client
    configuration.reset()
    if _client is not None:
        _client.close()
        _client = None


async def get(
    url: str,
    *,
    headers: Mapping[str, Any] | None = None,
    query_params: Mapping[str, Any] | None = None,
) -> Any:
    return await client().get(url, headers=headers, query_params=query_params)


async def post(url: str, **request_options: Any) -> Any:
    return await client().post(url, **request_options)


async def put(url: str, **request_options: Any) -> Any:
    return await client().put(url, **request_options)


async def destroy(url: str, **request_options: Any) -> Any:
    return await client().destroy(url, **request_options)


async def patch(url: str, **request_options: Any) -> Any:
    return await client().patch(url, **request_options)


async def options(url: str, **request_options: Any) -> Any:
    return await client().options(url, **request_options)


__all__ = [
    "AddHeader",
    "AddPayload",
    "BodyMode",
    "Configuration",
    "DecodePolicy",
    "HttpClient",
    "HttpClientConfig",
    "HttpClientError",
    "HttpConnectionError",
    "HttpError",
    "Interceptor",
    "Method",
    "RequestTimeoutError",
    "ResolveHeader",
    "ResolveInterceptor",
    "client",
    "config",
    "configuration",
    "destroy",
    "get",
    "interceptor",
    "options",
    "patch",
    "post",
    "put",
    "reset",
]
