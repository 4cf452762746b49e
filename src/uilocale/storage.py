"""Durable key-value persistence for the active selection.

Defines the minimal store contract the resolver depends on, two stores
(in-memory and JSON file), and the codec for the persisted
``{"language": ..., "locale": ...}`` value.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from threading import RLock
from typing import Protocol

from uilocale.diagnostics import ErrorTemplate, PersistedSelectionError

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "decode_selection",
    "encode_selection",
]

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol for a durable string key-value store.

    Writes overwrite the whole value; there are no partial updates.
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


class MemoryStore:
    """In-process store; durable only for the lifetime of the object.

    Example:
        >>> store = MemoryStore()
        >>> store.set("language", '{"language": "fr", "locale": ""}')
        >>> store.get("language")
        '{"language": "fr", "locale": ""}'
    """

    __slots__ = ("_data",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __repr__(self) -> str:
        return f"MemoryStore(keys={sorted(self._data)!r})"


class JsonFileStore:
    """Store backed by a single JSON object file.

    Every set() rewrites the file through a temporary file and os.replace,
    so readers never observe a half-written value. A missing file reads as
    an empty store; an unreadable one is logged and treated as empty.

    Example:
        >>> store = JsonFileStore("~/.config/myapp/settings.json")
        >>> store.set("language", '{"language": "de", "locale": ""}')

    Attributes:
        path: Location of the JSON file
    """

    __slots__ = ("_lock", "path")

    def __init__(self, path: str | Path) -> None:
        """Initialize store.

        Args:
            path: JSON file location; "~" is expanded. Parent directories are
                created on first write.
        """
        self.path = Path(path).expanduser()
        self._lock = RLock()

    def __repr__(self) -> str:
        return f"JsonFileStore(path={str(self.path)!r})"

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise


def encode_selection(language: str, locale: str) -> str:
    """Serialize a selection for the store.

    Example:
        >>> encode_selection("fr", "FR")
        '{"language": "fr", "locale": "FR"}'
    """
    return json.dumps({"language": language, "locale": locale})


def decode_selection(raw: str) -> tuple[str, str]:
    """Deserialize a stored selection.

    A missing or null locale decodes as the empty string.

    Returns:
        Tuple of (language, locale)

    Raises:
        PersistedSelectionError: If raw is not a JSON object with a string
            language and an optional string locale
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistedSelectionError(
            ErrorTemplate.persisted_selection_invalid(raw, "not valid JSON")
        ) from e
    if not isinstance(data, dict):
        raise PersistedSelectionError(
            ErrorTemplate.persisted_selection_invalid(raw, "expected a JSON object")
        )
    language = data.get("language")
    locale = data.get("locale") or ""
    if not isinstance(language, str) or not language:
        raise PersistedSelectionError(
            ErrorTemplate.persisted_selection_invalid(raw, "missing language")
        )
    if not isinstance(locale, str):
        raise PersistedSelectionError(
            ErrorTemplate.persisted_selection_invalid(raw, "locale is not a string")
        )
    return language, locale
