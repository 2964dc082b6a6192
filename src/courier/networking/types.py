"""Value types shared across the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Iterable,
    Mapping,
    Union,
)

if TYPE_CHECKING:
    from .interceptor import Interceptor


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"


class BodyMode(str, Enum):
    """How a missing payload is represented after the merge.

    ``OPTIONAL`` leaves the payload out entirely; ``REQUIRED`` always
    materializes a (possibly empty) mapping.
    """

    OPTIONAL = "optional"
    REQUIRED = "required"


class DecodePolicy(str, Enum):
    """How successful response bodies are decoded."""

    JSON = "json"
    CONTENT_TYPE = "content_type"


@dataclass(frozen=True)
class RequestSpec:
    """Everything the caller supplied for one request."""

    method: Method
    url: str
    headers: Mapping[str, Any] | None = None
    payload: Mapping[str, Any] | None = None
    query_params: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class RefactorResult:
    """Final headers and payload handed to the transport."""

    headers: dict[str, Any]
    payload: dict[str, Any] | None = None


@dataclass(frozen=True)
class AddHeader:
    key: str
    value: Any


@dataclass(frozen=True)
class AddPayload:
    key: str
    value: Any


Contribution = Union[AddHeader, AddPayload]


@dataclass(frozen=True)
class ResolveHeader:
    """Argument passed to the global header resolver."""

    method: Method
    url: str
    header: Callable[[str, Any], None]


@dataclass(frozen=True)
class ResolveInterceptor:
    """Argument passed to each interceptor resolver."""

    method: Method
    url: str
    interceptor: Interceptor


# A resolver may return nothing, an awaitable, or the contributions it wants
# folded into the request (optionally behind an awaitable).
ResolverResult = Union[
    None,
    Iterable[Contribution],
    Awaitable[Union[None, Iterable[Contribution]]],
]
HeaderResolver = Callable[[ResolveHeader], ResolverResult]
InterceptorResolver = Callable[[ResolveInterceptor], ResolverResult]
ErrorTranslator = Callable[[Exception], Exception]
