"""Domain-named accessors over ``ConfigResolver`` and the composition root.

Usage::

    cfg = load_config(".srw-build.json")
    cfg.path("public.scripts")                       # "web/js/"
    cfg.path("public.scripts", {"post": "app.js"})   # "web/js/app.js"
    cfg.files("plugins.fonts", "app.fonts")          # one flat list
    cfg.build_path("public.root", "public.styles")   # concatenated text
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ._cache import ValueCache
from ._placeholders import PlaceholderResolver
from ._resolver import ConfigResolver, OptionsArg
from ._store import ConfigStore

GLOBS = "globs"
PATHS = "paths"
FILES = "files"
OPTIONS = "options"

NAMESPACES = (GLOBS, PATHS, FILES, OPTIONS)


def _flatten(values: list[Any]) -> list[Any]:
    flat: list[Any] = []
    for value in values:
        if isinstance(value, list):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


class ConfigFacade:
    """The surface task code consumes: globs, paths, files and options."""

    def __init__(self, resolver: ConfigResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> ConfigResolver:
        return self._resolver

    # -- Single values ------------------------------------------------------

    def glob(self, key: str, options: OptionsArg = None) -> Any:
        return self._resolver.resolve(GLOBS, key, options)

    def path(self, key: str, options: OptionsArg = None) -> Any:
        return self._resolver.resolve(PATHS, key, options)

    def file(self, key: str, options: OptionsArg = None) -> Any:
        return self._resolver.resolve(FILES, key, options)

    def option(self, key: str, options: OptionsArg = None) -> Any:
        return self._resolver.resolve(OPTIONS, key, options)

    # -- Collections --------------------------------------------------------

    def globs(self, *keys: str) -> list[Any]:
        return _flatten([self.glob(key) for key in keys])

    def paths(self, *keys: str) -> list[Any]:
        return _flatten([self.path(key) for key in keys])

    def files(self, *keys: str) -> list[Any]:
        return _flatten([self.file(key) for key in keys])

    def options(self, *keys: str) -> list[Any]:
        return _flatten([self.option(key) for key in keys])

    # -- Concatenation ------------------------------------------------------

    def build_glob(self, *keys: str) -> str:
        return self._resolver.concat(GLOBS, *keys)

    def build_path(self, *keys: str) -> str:
        return self._resolver.concat(PATHS, *keys)

    def build_file(self, *keys: str) -> str:
        return self._resolver.concat(FILES, *keys)

    def build_option(self, *keys: str) -> str:
        return self._resolver.concat(OPTIONS, *keys)


def build_facade(store: ConfigStore, logger: logging.Logger | None = None) -> ConfigFacade:
    """Wire a resolver, placeholder expander and cache around a loaded store."""
    placeholders = PlaceholderResolver(store, logger=logger)
    resolver = ConfigResolver(store, placeholders, ValueCache(), logger=logger)
    return ConfigFacade(resolver)


def load_config(
    path: str | Path | None = None,
    *,
    logger: logging.Logger | None = None,
    default_file: str | Path | None = None,
) -> ConfigFacade:
    """Load configuration once at startup and return the accessor facade.

    Raises ``ConfigLoadError`` when neither *path* nor the bundled default
    can be loaded.
    """
    store = ConfigStore(logger=logger, default_file=default_file)
    store.load(path)
    return build_facade(store, logger=logger)
