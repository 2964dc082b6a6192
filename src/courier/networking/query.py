"""Query string construction."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote


def build_url(
    base: str,
    query_params: Mapping[str, Any] | None = None,
    *,
    encode: bool = False,
) -> str:
    """Append ``query_params`` to ``base`` as ``key=value`` pairs.

    Values are rendered with ``str()`` in the mapping's iteration order. Keys
    and values are left as-is unless ``encode`` is set, in which case both are
    percent-encoded.
    """
    if query_params is None:
        return base

    pairs = []
    for key, value in query_params.items():
        key, value = str(key), str(value)
        if encode:
            key, value = quote(key, safe=""), quote(value, safe="")
        pairs.append(f"{key}={value}")

    return f"{base}?{'&'.join(pairs)}"
