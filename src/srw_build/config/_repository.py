"""Config source protocol with JSON-file and in-memory implementations."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from ._types import ConfigLoadError, ConfigTree

_TREE_ADAPTER: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


@runtime_checkable
class ConfigSource(Protocol):
    """Abstraction over where a raw configuration tree comes from.

    ``label`` is the context name a source is reported under (``user``,
    ``default``, ...).
    """

    label: str

    def describe(self) -> str:
        ...

    def read(self) -> ConfigTree:
        ...


class JsonFileSource:
    """Reads a JSON document whose root must be an object."""

    def __init__(self, path: str | Path, label: str = "user") -> None:
        self.path = Path(path)
        self.label = label

    def describe(self) -> str:
        return str(self.path)

    def read(self) -> ConfigTree:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise ConfigLoadError(self.describe(), f"[{type(exc).__name__}] {exc}") from exc

        try:
            return _TREE_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise ConfigLoadError(
                self.describe(), f"[{first['type']}] {first['msg']}"
            ) from exc

    def __repr__(self) -> str:
        return f"JsonFileSource({str(self.path)!r}, label={self.label!r})"


class MappingSource:
    """Dict-backed config source for tests and embedding callers.

    >>> MappingSource({"paths": {"public": "web/"}}).read()
    {'paths': {'public': 'web/'}}
    """

    def __init__(self, data: Mapping[str, Any] | None = None, label: str = "memory") -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))
        self.label = label

    def describe(self) -> str:
        return "<memory>"

    def read(self) -> ConfigTree:
        return copy.deepcopy(self._data)

    # -- Mutation helper for test setup -------------------------------------

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
