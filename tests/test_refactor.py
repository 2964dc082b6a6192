import asyncio

import pytest

from courier.networking.config import Configuration
from courier.networking.refactor import (
    refactor_headers,
    refactor_request,
    resolve,
)
from courier.networking.types import (
    AddHeader,
    AddPayload,
    BodyMode,
    Method,
    RequestSpec,
)


def _spec(**kwargs):
    return RequestSpec(method=Method.POST, url="http://example.com", **kwargs)


@pytest.mark.asyncio
async def test_resolve_handles_sync_and_async_values():
    async def later():
        return "async"

    assert await resolve(None) is None
    assert await resolve(["sync"]) == ["sync"]
    assert await resolve(later()) == "async"


@pytest.mark.asyncio
async def test_headers_without_resolver_are_empty():
    assert await refactor_headers(Configuration(), _spec()) == {}


@pytest.mark.asyncio
async def test_header_resolver_receives_method_and_url():
    seen = []
    configuration = Configuration()

    def headers(resolve_header):
        seen.append((resolve_header.method, resolve_header.url))
        resolve_header.header("Authorization", "Bearer token")

    configuration.set(headers=headers)

    result = await refactor_headers(configuration, _spec())

    assert result == {"Authorization": "Bearer token"}
    assert seen == [(Method.POST, "http://example.com")]


@pytest.mark.asyncio
async def test_async_header_resolver_is_awaited():
    configuration = Configuration()

    async def headers(resolve_header):
        await asyncio.sleep(0)
        resolve_header.header("X-Async", "yes")

    configuration.set(headers=headers)

    assert await refactor_headers(configuration, _spec()) == {"X-Async": "yes"}


@pytest.mark.asyncio
async def test_header_resolver_may_return_contributions():
    configuration = Configuration()
    configuration.set(headers=lambda _resolve: [AddHeader("X-Tenant", "acme")])

    assert await refactor_headers(configuration, _spec()) == {
        "X-Tenant": "acme"
    }


@pytest.mark.asyncio
async def test_header_resolver_rejects_payload_contributions():
    configuration = Configuration()
    configuration.set(headers=lambda _resolve: [AddPayload("id", 1)])

    with pytest.raises(TypeError):
        await refactor_headers(configuration, _spec())


@pytest.mark.asyncio
async def test_precedence_across_all_tiers():
    configuration = Configuration()

    def headers(resolve_header):
        resolve_header.header("k", "global")
        resolve_header.header("g", "global")

    def intercept(resolve_interceptor):
        resolve_interceptor.interceptor.header("k", "interceptor")
        resolve_interceptor.interceptor.header("i", "interceptor")

    configuration.set(headers=headers, interceptors=[intercept])

    result = await refactor_request(configuration, _spec(headers={"k": "call"}))

    assert result.headers == {"k": "call", "g": "global", "i": "interceptor"}


@pytest.mark.asyncio
async def test_without_interceptors_only_global_and_call_headers():
    configuration = Configuration()
    configuration.set(headers=lambda r: r.header("g", "1"))

    result = await refactor_request(configuration, _spec(headers={"c": "2"}))

    assert result.headers == {"g": "1", "c": "2"}
    assert result.payload is None


@pytest.mark.asyncio
async def test_header_resolver_completes_before_interceptors_start():
    events = []
    configuration = Configuration()

    async def headers(_resolve):
        events.append("headers:start")
        await asyncio.sleep(0)
        events.append("headers:end")

    def intercept(_resolve):
        events.append("interceptor")

    configuration.set(headers=headers, interceptors=[intercept])

    await refactor_request(configuration, _spec())

    assert events == ["headers:start", "headers:end", "interceptor"]


@pytest.mark.asyncio
async def test_interceptors_are_all_launched_before_completion():
    events = []
    configuration = Configuration()

    def make(name):
        async def intercept(resolve_interceptor):
            events.append(f"{name}:start")
            await asyncio.sleep(0)
            resolve_interceptor.interceptor.payload(name, True)
            events.append(f"{name}:end")

        return intercept

    configuration.set(interceptors=[make("a"), make("b")])

    result = await refactor_request(configuration, _spec())

    assert events[:2] == ["a:start", "b:start"]
    assert result.payload == {"a": True, "b": True}


@pytest.mark.asyncio
async def test_interceptors_share_one_accumulator():
    accumulators = []
    configuration = Configuration()

    def intercept(resolve_interceptor):
        accumulators.append(resolve_interceptor.interceptor)

    configuration.set(interceptors=[intercept, intercept])

    await refactor_request(configuration, _spec())

    assert len(accumulators) == 2
    assert accumulators[0] is accumulators[1]


@pytest.mark.asyncio
async def test_each_request_gets_a_fresh_accumulator():
    accumulators = []
    configuration = Configuration()
    configuration.add_interceptor(
        lambda resolve_interceptor: accumulators.append(
            resolve_interceptor.interceptor
        )
    )

    await refactor_request(configuration, _spec())
    await refactor_request(configuration, _spec())

    assert accumulators[0] is not accumulators[1]


@pytest.mark.asyncio
async def test_returned_contributions_are_folded():
    configuration = Configuration()

    async def intercept(_resolve):
        return [AddHeader("X-Trace", 42), AddPayload("trace", 42)]

    configuration.add_interceptor(intercept)

    result = await refactor_request(configuration, _spec(payload={"a": 1}))

    assert result.headers == {"X-Trace": "42"}
    assert result.payload == {"trace": 42, "a": 1}


@pytest.mark.asyncio
async def test_call_payload_overrides_interceptor_payload():
    configuration = Configuration()
    configuration.add_interceptor(
        lambda r: r.interceptor.payload("owner", "interceptor")
    )

    result = await refactor_request(
        configuration, _spec(payload={"owner": "call"})
    )

    assert result.payload == {"owner": "call"}


@pytest.mark.asyncio
async def test_required_body_mode_materializes_payload():
    result = await refactor_request(
        Configuration(), _spec(), body_mode=BodyMode.REQUIRED
    )

    assert result.payload == {}


@pytest.mark.asyncio
async def test_interceptor_failure_propagates():
    configuration = Configuration()

    async def broken(_resolve):
        raise RuntimeError("interceptor failed")

    configuration.set(interceptors=[lambda r: None, broken])

    with pytest.raises(RuntimeError, match="interceptor failed"):
        await refactor_request(configuration, _spec())


@pytest.mark.asyncio
async def test_header_resolver_failure_skips_interceptors():
    called = []
    configuration = Configuration()

    def headers(_resolve):
        raise ValueError("no token")

    configuration.set(
        headers=headers, interceptors=[lambda r: called.append(r)]
    )

    with pytest.raises(ValueError, match="no token"):
        await refactor_request(configuration, _spec())
    assert called == []
