"""Test utilities for the config module."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Iterator
from unittest.mock import MagicMock, patch

from ._facade import ConfigFacade, build_facade
from ._store import ConfigStore


def config_from_mapping(tree: Mapping[str, Any] | None = None, **namespaces: Any) -> ConfigFacade:
    """Build a facade over an in-memory tree.

    Usage::

        cfg = config_from_mapping(paths={"public": "web/"})
        assert cfg.path("public") == "web/"
    """
    data = dict(tree or {})
    data.update(namespaces)
    return build_facade(ConfigStore.from_mapping(data))


@contextmanager
def record_lookups(facade: ConfigFacade) -> Iterator[MagicMock]:
    """Wrap the store's ``lookup`` in a recording mock while the context is active.

    Usage::

        with record_lookups(cfg) as lookup:
            cfg.path("public")
        assert lookup.call_args_list == [call("paths.public")]
    """
    store = facade.resolver.store
    with patch.object(store, "lookup", wraps=store.lookup) as lookup:
        yield lookup
