"""Expansion of ``${dotted.path}`` placeholders embedded in config strings.

A placeholder is resolved through the store (not the value cache) and the
result is expanded in turn, so chains like ``a -> ${b} -> ${c}`` collapse to
the final leaf. Expansion never raises: a placeholder whose target is missing,
cyclic, too deep, or not a scalar is left in the string verbatim.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ._store import ConfigStore
from ._types import UNDEFINED, ResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([a-z.-]+)\}", re.IGNORECASE)
MAX_ITERATIONS = 20

_log = logging.getLogger("srw_build.config")


class PlaceholderResolver:
    """Expands placeholders over strings, lists and nested mappings."""

    def __init__(
        self,
        store: ConfigStore,
        max_iterations: int = MAX_ITERATIONS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.max_iterations = max_iterations
        self.logger = logger or _log

    def expand(self, value: Any, path: str | None = None) -> Any:
        """Return *value* with every resolvable placeholder substituted.

        *path* is where *value* was found; placeholders leading back to it
        are treated as cycles. Targets are resolved at most once per call.
        """
        return self._expand(value, (path,) if path else (), {})

    # -- Shape dispatch -----------------------------------------------------

    def _expand(self, value: Any, trail: tuple[str, ...], memo: dict[str, Any]) -> Any:
        if isinstance(value, Mapping):
            return {key: self._expand(item, trail, memo) for key, item in value.items()}
        if isinstance(value, list):
            return [self._expand(item, trail, memo) for item in value]
        if isinstance(value, str):
            return self._expand_scalar(value, trail, memo)
        return value

    def _expand_scalar(self, text: str, trail: tuple[str, ...], memo: dict[str, Any]) -> str:
        given_up: set[str] = set()

        for _ in range(self.max_iterations):
            match = self._next_placeholder(text, given_up)
            if match is None:
                break

            token, path = match.group(0), match.group(1)
            replacement = self._resolve_target(path, trail, memo)
            if replacement is UNDEFINED:
                given_up.add(token)
                continue

            text = text.replace(token, replacement)
            # Tokens surviving a nested expansion were already given up on there.
            given_up.update(m.group(0) for m in PLACEHOLDER_PATTERN.finditer(replacement))

        return text

    @staticmethod
    def _next_placeholder(text: str, given_up: set[str]) -> re.Match[str] | None:
        for match in PLACEHOLDER_PATTERN.finditer(text):
            if match.group(0) not in given_up:
                return match
        return None

    # -- Nested resolution --------------------------------------------------

    def _resolve_target(self, path: str, trail: tuple[str, ...], memo: dict[str, Any]) -> Any:
        """Resolve a placeholder path to replacement text, or ``UNDEFINED``.

        Outcomes that do not depend on *trail* are kept in *memo*: missing or
        non-scalar targets, and text with no placeholders left.
        """
        if path in trail:
            self.logger.debug('Placeholder cycle at "%s" (via %s)', path, " -> ".join(trail))
            return UNDEFINED
        if path in memo:
            return memo[path]
        if len(trail) >= self.max_iterations:
            self.logger.debug('Placeholder chain too deep at "%s"', path)
            return UNDEFINED

        try:
            raw = self.store.lookup(path)
        except ResolutionError as exc:
            self.logger.debug("Placeholder target missing: %s", exc)
            memo[path] = UNDEFINED
            return UNDEFINED

        value = self._expand(raw, trail + (path,), memo)

        if isinstance(value, str):
            if not PLACEHOLDER_PATTERN.search(value):
                memo[path] = value
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            memo[path] = str(value)
            return memo[path]

        self.logger.debug(
            'Placeholder "%s" resolves to %s, not a scalar', path, type(value).__name__
        )
        memo[path] = UNDEFINED
        return UNDEFINED
