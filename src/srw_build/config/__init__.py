"""Hierarchical configuration for build tasks.

Loads a JSON document once, resolves dotted paths with ``${...}``
placeholder expansion and ``pre``/``post`` decoration, and caches every
resolved value for the life of the process.
"""

from ._cache import ValueCache
from ._facade import ConfigFacade, build_facade, load_config
from ._placeholders import PlaceholderResolver
from ._repository import ConfigSource, JsonFileSource, MappingSource
from ._resolver import ConfigResolver
from ._store import ConfigStore
from ._testing import config_from_mapping, record_lookups
from ._types import (
    UNDEFINED,
    ConfigError,
    ConfigLoadError,
    DecorationOptions,
    InvalidOptionsError,
    ResolutionError,
)

__all__ = [
    # Core
    "load_config",
    "ConfigFacade",
    "ConfigResolver",
    "ConfigStore",
    "PlaceholderResolver",
    "ValueCache",
    "build_facade",
    "DecorationOptions",
    "UNDEFINED",
    # Errors
    "ConfigError",
    "ConfigLoadError",
    "InvalidOptionsError",
    "ResolutionError",
    # Sources
    "ConfigSource",
    "JsonFileSource",
    "MappingSource",
    # Testing
    "config_from_mapping",
    "record_lookups",
]
