"""Immutable translation bundle.

A TranslationBundle is the loaded key to string table for one identifier.
Bundles are never mutated; the resolver swaps in a new instance on each
completed load, so readers always see one whole bundle.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from uilocale.constants import MISSING_TRANSLATION

__all__ = ["TranslationBundle"]


class TranslationBundle(Mapping[str, str]):
    """Read-only mapping of translation keys to localized strings.

    Example:
        >>> bundle = TranslationBundle("fr", {"hello": "Bonjour"})
        >>> bundle.translate("hello")
        'Bonjour'
        >>> bundle.translate("missing")
        '⛔️ Missing translation'
    """

    __slots__ = ("_identifier", "_messages", "_missing")

    def __init__(
        self,
        identifier: str,
        messages: Mapping[str, str] | None = None,
        *,
        missing: str = MISSING_TRANSLATION,
    ) -> None:
        """Initialize bundle.

        Args:
            identifier: Bundle identifier ("fr" or "fr-FR"); empty for the
                placeholder bundle used before the first load
            messages: Key to string mapping; copied, so later changes to the
                source do not leak into the bundle
            missing: Sentinel returned by translate() for absent keys
        """
        self._identifier = identifier
        self._messages: Mapping[str, str] = MappingProxyType(dict(messages or {}))
        self._missing = missing

    @classmethod
    def empty(cls, *, missing: str = MISSING_TRANSLATION) -> TranslationBundle:
        """Placeholder bundle for the period before any load completes."""
        return cls("", None, missing=missing)

    @property
    def identifier(self) -> str:
        """Identifier this bundle was loaded for."""
        return self._identifier

    @property
    def missing(self) -> str:
        """Sentinel returned for absent keys."""
        return self._missing

    def translate(self, key: str) -> str:
        """Look up a key, degrading to the missing-translation sentinel.

        Empty strings count as missing. Never raises.
        """
        if not isinstance(key, str):
            return self._missing
        value = self._messages.get(key)
        if not value or not isinstance(value, str):
            return self._missing
        return value

    def __getitem__(self, key: str) -> str:
        return self._messages[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"TranslationBundle(identifier={self._identifier!r}, messages={len(self)})"
