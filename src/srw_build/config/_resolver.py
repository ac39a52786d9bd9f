"""Orchestrates cache, store, placeholder expansion and decoration."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from ._cache import ValueCache
from ._placeholders import PlaceholderResolver
from ._store import ConfigStore
from ._types import UNDEFINED, DecorationOptions

_log = logging.getLogger("srw_build.config")

OptionsArg = DecorationOptions | Mapping[str, Any] | None


def build_index(namespace: str | None, key: str) -> str:
    """Prefix *key* with *namespace* when one is given."""
    if namespace:
        return f"{namespace}.{key}"
    return key


def decorate(value: Any, options: DecorationOptions | None) -> Any:
    """Apply ``pre``/``post`` to a scalar, or to each element of a list.

    Mappings are returned undecorated.
    """
    if options is None or isinstance(value, Mapping):
        return value
    if isinstance(value, list):
        return [options.apply(item) for item in value]
    return options.apply(value)


def detach(value: Any) -> Any:
    """Return a copy of a resolved list or mapping so callers cannot alter cached entries."""
    if isinstance(value, (list, Mapping)):
        return copy.deepcopy(value)
    return value


def as_text(value: Any) -> str:
    """Render a resolved value the way string concatenation would."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ",".join(as_text(item) for item in value)
    return str(value)


class ConfigResolver:
    """Turns a namespace, key and optional decoration into a final value."""

    def __init__(
        self,
        store: ConfigStore,
        placeholders: PlaceholderResolver | None = None,
        cache: ValueCache | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.logger = logger or _log
        self.placeholders = placeholders or PlaceholderResolver(store, logger=self.logger)
        self.cache = cache if cache is not None else ValueCache()

    def resolve(self, namespace: str | None, key: str, options: OptionsArg = None) -> Any:
        """Return the resolved value at ``namespace.key``.

        Raises ``ResolutionError`` if the path does not exist.
        """
        decoration = DecorationOptions.coerce(options)

        cached = self.cache.get(namespace, key, decoration)
        if cached is not UNDEFINED:
            return detach(cached)

        index = build_index(namespace, key)
        self.logger.debug('Resolving "%s"', index)

        value = self.store.lookup(index)
        value = self.placeholders.expand(value, index)
        value = decorate(value, decoration)

        self.cache.put(namespace, key, decoration, value)
        return detach(value)

    def concat(self, namespace: str | None, *keys: str) -> str:
        """Resolve each key under *namespace* and join the results."""
        return "".join(as_text(self.resolve(namespace, key)) for key in keys)
