"""Configuration for the HttpClient and its request pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .types import (
    BodyMode,
    DecodePolicy,
    ErrorTranslator,
    HeaderResolver,
    InterceptorResolver,
)


def _default_headers() -> Mapping[str, str]:
    """Return immutable empty default headers mapping."""

    return MappingProxyType({})


@dataclass(frozen=True)
class HttpClientConfig:
    """Per-client transport and decoding policy."""

    user_agent: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    verify_tls: bool = True
    connect_timeout_seconds: float | None = None
    read_timeout_seconds: float | None = None
    timeout_seconds: float | None = None
    body_mode: BodyMode = BodyMode.OPTIONAL
    decode_policy: DecodePolicy = DecodePolicy.CONTENT_TYPE
    encode_query: bool = False

    def __post_init__(self) -> None:
        has_connect_timeout = self.connect_timeout_seconds is not None
        has_read_timeout = self.read_timeout_seconds is not None
        if has_connect_timeout != has_read_timeout:
            raise ValueError(
                "connect_timeout_seconds and read_timeout_seconds "
                "must be set together"
            )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")
        if (
            self.connect_timeout_seconds is not None
            and self.connect_timeout_seconds <= 0
        ):
            raise ValueError(
                "connect_timeout_seconds must be > 0 when provided"
            )
        if (
            self.read_timeout_seconds is not None
            and self.read_timeout_seconds <= 0
        ):
            raise ValueError("read_timeout_seconds must be > 0 when provided")

        # Accept plain strings for the enum-valued fields.
        object.__setattr__(self, "body_mode", BodyMode(self.body_mode))
        object.__setattr__(
            self, "decode_policy", DecodePolicy(self.decode_policy)
        )

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers)),
        )

    @property
    def timeout(self) -> float | tuple[float, float] | None:
        """Timeout value in the shape the transport expects."""
        if (
            self.connect_timeout_seconds is not None
            and self.read_timeout_seconds is not None
        ):
            return (self.connect_timeout_seconds, self.read_timeout_seconds)
        return self.timeout_seconds


class Configuration:
    """Pipeline policy shared by every client that holds a reference to it.

    Holds the interceptor chain, the global header resolver and the error
    translator. Requests only read it; changes are expected to happen
    between requests.
    """

    def __init__(self) -> None:
        self.interceptors: list[InterceptorResolver] = []
        self.headers: HeaderResolver | None = None
        self.catch_error: ErrorTranslator | None = None

    def set(
        self,
        *,
        interceptors: Iterable[InterceptorResolver] | None = None,
        headers: HeaderResolver | None = None,
        catch_error: ErrorTranslator | None = None,
    ) -> None:
        """Replace the pipeline policy.

        ``headers`` and ``catch_error`` are always overwritten, so omitting
        one unsets it. The interceptor chain is only replaced when
        ``interceptors`` is given; pass an empty sequence to clear it.
        """
        self.catch_error = catch_error
        self.headers = headers
        if interceptors is not None:
            self.interceptors = list(interceptors)

    def add_interceptor(
        self, resolver: InterceptorResolver
    ) -> InterceptorResolver:
        """Append ``resolver`` to the chain and return it unchanged."""
        self.interceptors.append(resolver)
        return resolver

    def reset(self) -> None:
        """Drop every resolver and the translator."""
        self.interceptors = []
        self.headers = None
        self.catch_error = None
