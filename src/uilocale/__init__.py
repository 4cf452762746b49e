"""uilocale - UI language and locale negotiation with persistence.

Decides which language and regional locale an application's interface is
presented in, persists the choice across sessions, and lazily loads the
matching translation bundle with a fallback to the default-locale bundle.

Public API:
    LocaleResolver - Startup resolution, selection changes, bundle lookup
    ActiveSelection - Immutable (language, locale) pair
    ResolverConfig - Supported sets and seam names
    BundleRegistry - Explicit identifier -> loader table
    PathBundleLoader - JSON bundle files from a directory
    TranslationBundle - Immutable key -> string table
    MemoryStore, JsonFileStore - Durable selection stores
    UrlQueryContext - One-shot ``?lang=`` override over a URL
    DocumentAttributes - Recording presentation sink

Exceptions:
    LocaleError - Base exception class
    UnsupportedLanguageError - Language not supported
    UnsupportedLocaleError - Language-locale pair not supported
    FatalBundleLoadError - Default-locale bundle failed to load

Submodules:
    uilocale.tags - Tag parsing, system language detection, display names
    uilocale.diagnostics - Diagnostic codes and the full exception hierarchy
    uilocale.constants - Shipped language and locale sets
"""

from .bundle import TranslationBundle
from .config import DEFAULT_CONFIG, ResolverConfig
from .context import QueryContext, UrlQueryContext
from .diagnostics import (
    FatalBundleLoadError,
    LocaleError,
    UnsupportedLanguageError,
    UnsupportedLocaleError,
)
from .enums import LoadStatus, ResolutionSource, ResolverState, TextDirection
from .loading import BundleLoader, BundleLoadResult, BundleRegistry, PathBundleLoader
from .presentation import DocumentAttributes, PresentationSink
from .resolver import ActiveSelection, LocaleResolver
from .storage import JsonFileStore, KeyValueStore, MemoryStore

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("uilocale")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_CONFIG",
    "ActiveSelection",
    "BundleLoadResult",
    "BundleLoader",
    "BundleRegistry",
    "DocumentAttributes",
    "FatalBundleLoadError",
    "JsonFileStore",
    "KeyValueStore",
    "LoadStatus",
    "LocaleError",
    "LocaleResolver",
    "MemoryStore",
    "PathBundleLoader",
    "PresentationSink",
    "QueryContext",
    "ResolutionSource",
    "ResolverConfig",
    "ResolverState",
    "TextDirection",
    "TranslationBundle",
    "UnsupportedLanguageError",
    "UnsupportedLocaleError",
    "UrlQueryContext",
    "__version__",
]
