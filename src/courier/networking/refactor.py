"""Resolution of the final headers and payload of an outgoing request."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any

from .config import Configuration
from .interceptor import Interceptor
from .types import (
    AddHeader,
    BodyMode,
    InterceptorResolver,
    RefactorResult,
    RequestSpec,
    ResolveHeader,
    ResolveInterceptor,
    ResolverResult,
)

logger = logging.getLogger(__name__)


async def resolve(result: ResolverResult) -> Any:
    """Await ``result`` when a resolver returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


async def refactor_headers(
    configuration: Configuration, spec: RequestSpec
) -> dict[str, Any]:
    """Run the global header resolver, if any, and collect what it sets."""
    resolver = configuration.headers
    result_headers: dict[str, Any] = {}
    if resolver is None:
        return result_headers

    def header(key: str, value: Any) -> None:
        result_headers[key] = value

    returned = await resolve(
        resolver(ResolveHeader(method=spec.method, url=spec.url, header=header))
    )
    for contribution in returned or ():
        if not isinstance(contribution, AddHeader):
            raise TypeError(
                f"header resolver may only return AddHeader, got {contribution!r}"
            )
        header(contribution.key, contribution.value)

    return result_headers


async def _intercept(
    resolver: InterceptorResolver,
    spec: RequestSpec,
    interceptor: Interceptor,
) -> None:
    returned = await resolve(
        resolver(
            ResolveInterceptor(
                method=spec.method, url=spec.url, interceptor=interceptor
            )
        )
    )
    for contribution in returned or ():
        interceptor.apply(contribution)


async def refactor_request(
    configuration: Configuration,
    spec: RequestSpec,
    *,
    body_mode: BodyMode = BodyMode.OPTIONAL,
) -> RefactorResult:
    """Merge global headers, interceptor output and call-site values.

    The header resolver finishes before any interceptor starts. Interceptors
    are all launched before any of them is awaited and share one
    accumulator; the first failure propagates.
    """
    global_headers = await refactor_headers(configuration, spec)

    interceptor = Interceptor()
    resolvers = list(configuration.interceptors)
    logger.debug(
        "running %d interceptor(s) for %s %s",
        len(resolvers),
        spec.method.value,
        spec.url,
    )
    await asyncio.gather(
        *(_intercept(resolver, spec, interceptor) for resolver in resolvers)
    )

    return interceptor.build(
        global_headers, spec.headers, spec.payload, body_mode=body_mode
    )
