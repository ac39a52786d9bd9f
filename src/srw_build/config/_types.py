"""Foundation types for the config module.

Provides the absent-value sentinel, exception classes, and the
``DecorationOptions`` model applied to resolved values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

ConfigTree = dict[str, Any]


# ---------------------------------------------------------------------------
# Sentinel
# ---------------------------------------------------------------------------


class _Undefined:
    """Sentinel for absent values (distinct from ``None`` and ``""``)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors."""


class ConfigLoadError(ConfigError):
    """Raised when a configuration source cannot be read or parsed."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        self.source = source
        self.reason = reason
        message = f"Unable to load configuration from {source}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidOptionsError(ConfigError):
    """Raised when decoration options passed by a caller are malformed."""

    def __init__(self, options: Any, reason: str) -> None:
        self.options = options
        self.reason = reason
        super().__init__(f"Invalid decoration options {options!r}: {reason}")


class ResolutionError(ConfigError):
    """Raised when a dotted path does not resolve to a present value."""

    def __init__(self, path: str, segment: str) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Resolution error for index ({path}) at fragment {segment}")


# ---------------------------------------------------------------------------
# Decoration
# ---------------------------------------------------------------------------


class DecorationOptions(BaseModel):
    """Text prepended (``pre``) and appended (``post``) to each resolved scalar."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pre: str | None = None
    post: str | None = None

    @classmethod
    def coerce(
        cls, options: DecorationOptions | Mapping[str, Any] | None
    ) -> DecorationOptions | None:
        """Normalise caller-supplied options; empty options become ``None``.

        Raises ``InvalidOptionsError`` when *options* is not a mapping of strings.
        """
        if options is None:
            return None
        if not isinstance(options, DecorationOptions):
            try:
                options = cls.model_validate(dict(options))
            except (TypeError, ValueError, ValidationError) as exc:
                raise InvalidOptionsError(options, str(exc)) from exc
        if not options.pre and not options.post:
            return None
        return options

    def apply(self, value: Any) -> str:
        text = str(value)
        if self.pre:
            text = self.pre + text
        if self.post:
            text = text + self.post
        return text
