from .client import HttpClient
from .config import Configuration, HttpClientConfig
from .errors import (
    HttpClientError,
    HttpConnectionError,
    HttpError,
    RequestTimeoutError,
)
from .interceptor import Interceptor
from .query import build_url
from .transport import RequestsTransport, Transport, TransportResponse
from .types import (
    AddHeader,
    AddPayload,
    BodyMode,
    DecodePolicy,
    Method,
    RefactorResult,
    RequestSpec,
    ResolveHeader,
    ResolveInterceptor,
)

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
    "RefactorResult",
    "RequestSpec",
    "RequestTimeoutError",
    "RequestsTransport",
    "ResolveHeader",
    "ResolveInterceptor",
    "Transport",
    "TransportResponse",
    "build_url",
]
