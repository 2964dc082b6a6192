"""Per-request accumulator for interceptor contributions."""

from __future__ import annotations

from typing import Any, Mapping

from .types import AddHeader, AddPayload, BodyMode, Contribution, RefactorResult


class Interceptor:
    """Collects headers and payload fields contributed by interceptors.

    One instance is created for every outgoing request and shared by all the
    interceptor resolvers of that request. Interceptors run concurrently, so
    contributions to the same key resolve as last write wins.
    """

    def __init__(self) -> None:
        self._headers: dict[str, str] = {}
        self._payload: dict[str, Any] | None = None

    def header(self, key: str, value: Any) -> None:
        """Contribute a header; the value is stored as its string form."""
        self._headers[key] = str(value)

    def payload(self, key: str, value: Any) -> None:
        """Contribute a payload field, keeping the value as given."""
        if self._payload is None:
            self._payload = {}
        self._payload[key] = value

    def apply(self, contribution: Contribution) -> None:
        """Fold a returned contribution into the accumulator."""
        if isinstance(contribution, AddHeader):
            self.header(contribution.key, contribution.value)
        elif isinstance(contribution, AddPayload):
            self.payload(contribution.key, contribution.value)
        else:
            raise TypeError(
                f"unsupported interceptor contribution: {contribution!r}"
            )

    def build(
        self,
        global_headers: Mapping[str, Any],
        headers: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        *,
        body_mode: BodyMode = BodyMode.OPTIONAL,
    ) -> RefactorResult:
        """Merge global, intercepted and call-site values.

        Later tiers overwrite earlier ones key by key: global headers, then
        interceptor headers, then ``headers``. The payload merges interceptor
        fields under ``payload``.
        """
        merged_headers: dict[str, Any] = {**global_headers, **self._headers}
        if headers:
            merged_headers.update(headers)

        merged_payload: dict[str, Any] | None = None
        if self._payload is not None or payload is not None:
            merged_payload = {**(self._payload or {}), **(payload or {})}
        elif body_mode is BodyMode.REQUIRED:
            merged_payload = {}

        return RefactorResult(headers=merged_headers, payload=merged_payload)
