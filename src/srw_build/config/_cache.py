"""Memoization of fully resolved (looked-up, expanded, decorated) values."""

from __future__ import annotations

import json
from typing import Any

from ._types import UNDEFINED, DecorationOptions

CACHE_KEY_PREFIX = "cache"


def _serialize(part: Any) -> str:
    if isinstance(part, DecorationOptions):
        part = part.model_dump(exclude_none=True)
    return json.dumps(part, sort_keys=True)


def build_cache_key(*parts: Any) -> str:
    """Compose a key from the index and JSON text of each part.

    >>> build_cache_key("paths", "public", None)
    'cache__0_"paths"__1_"public"__2_null'
    """
    key = CACHE_KEY_PREFIX
    for index, part in enumerate(parts):
        key += f"__{index}_{_serialize(part)}"
    return key


class ValueCache:
    """Unbounded cache; configuration is immutable after load."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(
        self, namespace: str | None, key: str, options: DecorationOptions | None = None
    ) -> Any:
        """Return the cached value, or ``UNDEFINED`` on a miss.

        Falsy cached values read back as a miss.
        """
        value = self._entries.get(build_cache_key(namespace, key, options))
        return value if value else UNDEFINED

    def put(
        self,
        namespace: str | None,
        key: str,
        options: DecorationOptions | None,
        value: Any,
    ) -> None:
        self._entries[build_cache_key(namespace, key, options)] = value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self._entries
