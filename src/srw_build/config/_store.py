"""Holds the active configuration tree and performs raw dotted-path lookups.

Load order:
1. The caller's file (or ``.srw-build.json`` when none is given / not a file)
2. The default document bundled with this package
3. Log at CRITICAL and raise ``ConfigLoadError``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ._repository import ConfigSource, JsonFileSource, MappingSource
from ._types import ConfigError, ConfigLoadError, ConfigTree, ResolutionError

USER_CONFIG_FILE = ".srw-build.json"
DEFAULT_CONFIG_FILE = Path(__file__).with_name("default-config.json")

_log = logging.getLogger("srw_build.config")


class ConfigStore:
    """Owns exactly one active ConfigTree, loaded through a fallback chain."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        default_file: str | Path | None = None,
    ) -> None:
        self.logger = logger or _log
        self.default_file = Path(default_file) if default_file else DEFAULT_CONFIG_FILE
        self._tree: ConfigTree | None = None
        self._source: ConfigSource | None = None

    @classmethod
    def from_mapping(
        cls, tree: Mapping[str, Any], logger: logging.Logger | None = None
    ) -> ConfigStore:
        store = cls(logger=logger)
        store.load_sources(MappingSource(tree))
        return store

    # -- Loading ------------------------------------------------------------

    def load(self, primary_path: str | Path | None = None) -> ConfigTree:
        """Load the user's config file, falling back to the bundled default."""
        if primary_path is None or not Path(primary_path).is_file():
            primary_path = USER_CONFIG_FILE

        return self.load_sources(
            JsonFileSource(primary_path, label="user"),
            JsonFileSource(self.default_file, label="default"),
        )

    def load_sources(self, *sources: ConfigSource) -> ConfigTree:
        """Activate the first source that reads successfully."""
        for source in sources:
            try:
                tree = source.read()
            except ConfigLoadError as exc:
                self.logger.error(
                    'Unable to load %s config file "%s": %s',
                    source.label,
                    source.describe(),
                    exc.reason,
                )
                continue

            self._tree = tree
            self._source = source
            self.logger.info(
                'Loaded %s configuration file: "%s"', source.label, source.describe()
            )
            return tree

        attempted = ", ".join(f'{s.label} "{s.describe()}"' for s in sources)
        self.logger.critical(
            "Could not load any configuration file (attempted: %s).", attempted
        )
        raise ConfigLoadError(attempted or "<no sources>", "all configuration sources failed")

    # -- State --------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    @property
    def source(self) -> ConfigSource | None:
        return self._source

    @property
    def tree(self) -> ConfigTree:
        if self._tree is None:
            raise ConfigError("Configuration has not been loaded.")
        return self._tree

    # -- Lookup -------------------------------------------------------------

    def lookup(self, path: str) -> Any:
        """Walk the active tree one dotted segment at a time.

        Absent segments and falsy values (``""``, ``0``, ``[]``, ``{}``,
        ``false``, ``null``) are both reported as not found.
        """
        current: Any = self.tree
        for segment in path.split("."):
            current = current.get(segment) if isinstance(current, Mapping) else None
            if not current:
                raise ResolutionError(path, segment)
        return current
