"""Bundle loading infrastructure for LocaleResolver.

Provides the protocol for translation bundle loaders, an explicit registry
of identifier-to-loader entries, a directory-backed loader, and the tagged
result of a load with fallback.

Components:
    BundleLoader - Protocol for loading bundles by identifier (structural typing)
    BundleRegistry - Explicit identifier -> loader function table
    PathBundleLoader - JSON bundles from a directory, indexed at construction
    BundleLoadResult - Immutable, tagged outcome of a load (requested or fallback)
    load_with_fallback - Two-step try-requested, then try-default control flow

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TypeAlias

from uilocale.bundle import TranslationBundle
from uilocale.constants import MISSING_TRANSLATION
from uilocale.diagnostics import (
    BundleLoadError,
    BundleNotFoundError,
    ErrorTemplate,
    FatalBundleLoadError,
)
from uilocale.enums import LoadStatus

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "BundleLoader",
    # Concrete loaders
    "BundleRegistry",
    "PathBundleLoader",
    # Load results
    "BundleLoadResult",
    "load_with_fallback",
    # Type aliases
    "BundleFactory",
    "Messages",
]

logger = logging.getLogger(__name__)

Messages: TypeAlias = Mapping[str, str]
"""Raw key to string table as produced by a loader."""

BundleFactory: TypeAlias = Callable[[], Messages | Awaitable[Messages]]
"""Zero-argument callable returning a table, synchronously or as an awaitable."""


class BundleLoader(Protocol):
    """Protocol for loading translation bundles by identifier.

    Identifiers are effective tags: "en" or "en-US". Implementations raise
    BundleNotFoundError for unknown identifiers; any other exception is
    treated as a load failure by the resolver.

    Example:
        >>> class StaticLoader:
        ...     async def load(self, identifier: str) -> Mapping[str, str]:
        ...         return {"title": f"Title ({identifier})"}
        ...
        >>> resolver = LocaleResolver(loader=StaticLoader())
    """

    async def load(self, identifier: str) -> Messages:
        """Load the bundle for an identifier.

        Args:
            identifier: Bundle identifier ("en" or "en-US")

        Returns:
            Key to string mapping

        Raises:
            BundleNotFoundError: If no bundle exists for the identifier
            BundleLoadError: If the bundle exists but cannot be decoded
        """
        ...


def _validate_messages(identifier: str, data: object) -> dict[str, str]:
    """Check that loaded data is a flat string table.

    Raises:
        BundleLoadError: If data is not a mapping of str to str
    """
    if not isinstance(data, Mapping):
        reason = f"expected a mapping, got {type(data).__name__}"
        raise BundleLoadError(ErrorTemplate.bundle_load_failed(identifier, reason))
    messages: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            reason = f"entry {key!r} is not a string to string pair"
            raise BundleLoadError(ErrorTemplate.bundle_load_failed(identifier, reason))
        messages[key] = value
    return messages


class BundleRegistry:
    """Explicit table of bundle identifiers and the functions that load them.

    Every loadable identifier is registered up front, so the set of bundles
    the application can ever request is auditable and no path or module
    name is built from user-controlled input.

    Example:
        >>> registry = BundleRegistry()
        >>> registry.register_messages("en-US", {"hello": "Hello"})
        >>> registry.register("fr", lambda: {"hello": "Bonjour"})
        >>> sorted(registry.identifiers)
        ['en-US', 'fr']
    """

    __slots__ = ("_factories",)

    def __init__(self, factories: Mapping[str, BundleFactory] | None = None) -> None:
        """Initialize registry.

        Args:
            factories: Initial identifier -> factory entries
        """
        self._factories: dict[str, BundleFactory] = {}
        for identifier, factory in (factories or {}).items():
            self.register(identifier, factory)

    @property
    def identifiers(self) -> frozenset[str]:
        """Registered identifiers."""
        return frozenset(self._factories)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def __repr__(self) -> str:
        return f"BundleRegistry(identifiers={sorted(self._factories)!r})"

    def register(self, identifier: str, factory: BundleFactory) -> None:
        """Register a loader function for an identifier.

        Args:
            identifier: Bundle identifier ("en" or "en-US")
            factory: Zero-argument callable returning the table, either
                directly or as an awaitable

        Raises:
            ValueError: If identifier is empty or already registered
        """
        if not identifier:
            msg = "Bundle identifier cannot be empty"
            raise ValueError(msg)
        if identifier in self._factories:
            msg = f"Bundle '{identifier}' is already registered"
            raise ValueError(msg)
        self._factories[identifier] = factory
        logger.debug("Registered bundle loader: %s", identifier)

    def register_messages(self, identifier: str, messages: Messages) -> None:
        """Register an in-memory table for an identifier."""
        snapshot = dict(messages)
        self.register(identifier, lambda: snapshot)

    async def load(self, identifier: str) -> Messages:
        """Run the registered loader for an identifier.

        Raises:
            BundleNotFoundError: If identifier is not registered
            BundleLoadError: If the loader returns something other than a
                string table
        """
        factory = self._factories.get(identifier)
        if factory is None:
            raise BundleNotFoundError(ErrorTemplate.bundle_not_found(identifier))
        data = factory()
        if inspect.isawaitable(data):
            data = await data
        return _validate_messages(identifier, data)


@dataclass(frozen=True, slots=True)
class PathBundleLoader:
    """JSON bundles from a directory, one ``<identifier>.json`` file each.

    The directory is indexed once at construction; identifiers map to the
    files found then, so load() never builds a path from its argument.
    Files are read off the event loop via asyncio.to_thread.

    Example:
        >>> loader = PathBundleLoader("i18n")
        >>> sorted(loader.identifiers)
        ['en-US', 'fr', 'fr-FR']

    Attributes:
        directory: Directory holding the bundle files
    """

    directory: str | Path
    _index: Mapping[str, Path] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Index bundle files at initialization.

        Raises:
            NotADirectoryError: If directory does not exist or is not a directory
        """
        root = Path(self.directory).resolve()
        if not root.is_dir():
            msg = f"Bundle directory not found: '{self.directory}'"
            raise NotADirectoryError(msg)
        index = {path.stem: path for path in sorted(root.glob("*.json")) if path.is_file()}
        object.__setattr__(self, "_index", index)
        logger.debug("Indexed %d bundle files in %s", len(index), root)

    @property
    def identifiers(self) -> frozenset[str]:
        """Identifiers of the bundle files found at construction."""
        return frozenset(self._index)

    def describe_path(self, identifier: str) -> str:
        """Return human-readable path for diagnostics."""
        path = self._index.get(identifier)
        return str(path) if path is not None else f"{self.directory}/<missing {identifier}>"

    async def load(self, identifier: str) -> Messages:
        """Load and decode a bundle file.

        Raises:
            BundleNotFoundError: If no file was indexed for the identifier
            BundleLoadError: If the file cannot be read or is not a JSON
                string table
        """
        path = self._index.get(identifier)
        if path is None:
            raise BundleNotFoundError(ErrorTemplate.bundle_not_found(identifier))
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            data = json.loads(text)
        except (OSError, json.JSONDecodeError) as e:
            raise BundleLoadError(ErrorTemplate.bundle_load_failed(identifier, str(e))) from e
        return _validate_messages(identifier, data)


@dataclass(frozen=True, slots=True)
class BundleLoadResult:
    """Tagged outcome of a bundle load that produced a usable bundle.

    Fatal failures never produce a result; they raise FatalBundleLoadError.

    Attributes:
        requested: Identifier that was asked for
        status: REQUESTED when that identifier loaded, FALLBACK otherwise
        bundle: The bundle now in effect
        error: The failure of the requested identifier (FALLBACK only)
    """

    requested: str
    status: LoadStatus
    bundle: TranslationBundle
    error: Exception | None = None

    @property
    def identifier(self) -> str:
        """Identifier of the bundle that actually loaded."""
        return self.bundle.identifier

    @property
    def is_fallback(self) -> bool:
        """Check if the default-locale bundle was substituted."""
        return self.status == LoadStatus.FALLBACK


async def load_with_fallback(
    loader: BundleLoader,
    requested: str,
    default: str,
    *,
    missing: str = MISSING_TRANSLATION,
) -> BundleLoadResult:
    """Load a bundle, substituting the default-locale bundle on failure.

    Args:
        loader: Bundle loader
        requested: Identifier to try first
        default: Default-locale identifier, the fallback of last resort
        missing: Sentinel for the resulting bundle's absent keys

    Returns:
        BundleLoadResult tagged REQUESTED or FALLBACK

    Raises:
        FatalBundleLoadError: If the default-locale bundle fails to load.
            The loader's exception is chained as ``__cause__``.
    """
    try:
        messages = await loader.load(requested)
    except Exception as e:  # noqa: BLE001 - any loader failure triggers fallback
        primary_error: Exception = e
        logger.warning(
            "Bundle '%s' failed to load (%s); falling back to '%s'",
            requested,
            type(e).__name__,
            default,
        )
    else:
        logger.debug("Loaded bundle '%s' (%d keys)", requested, len(messages))
        return BundleLoadResult(
            requested=requested,
            status=LoadStatus.REQUESTED,
            bundle=TranslationBundle(requested, messages, missing=missing),
        )

    diagnostic = ErrorTemplate.default_bundle_failed(requested, default)
    if requested == default:
        logger.error("Default bundle '%s' failed to load", default)
        raise FatalBundleLoadError(
            diagnostic, requested=requested, default=default
        ) from primary_error

    try:
        messages = await loader.load(default)
    except Exception as e:
        logger.error("Default bundle '%s' failed to load", default)
        raise FatalBundleLoadError(diagnostic, requested=requested, default=default) from e

    return BundleLoadResult(
        requested=requested,
        status=LoadStatus.FALLBACK,
        bundle=TranslationBundle(default, messages, missing=missing),
        error=primary_error,
    )
