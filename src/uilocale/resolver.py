"""Language and locale resolution with persistence and lazy bundle loading.

LocaleResolver owns the active (language, locale) pair of one application
instance. Callers construct it once at startup and pass it by reference to
whatever renders the UI; there is no module-level singleton.

Startup precedence (each step short-circuits):
    1. One-shot ``?lang=`` override from the query context
    2. Selection persisted by a previous session
    3. Environment-reported preferred language, else the default language

Every step, and every later change, goes through set_selection(), which
validates, persists, notifies the presentation sink, and awaits the bundle
load. Storage and presentation therefore always agree with the returned
selection.

Concurrency:
    Runs on a single asyncio event loop. Bundles are immutable and installed
    by a single reference swap when a load completes; with overlapping
    set_selection() calls the most recently completed load wins.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from uilocale.bundle import TranslationBundle
from uilocale.config import DEFAULT_CONFIG, ResolverConfig
from uilocale.diagnostics import (
    ErrorTemplate,
    PersistedSelectionError,
    UnsupportedLanguageError,
    UnsupportedLocaleError,
)
from uilocale.enums import ResolutionSource, ResolverState, TextDirection
from uilocale.loading import BundleLoadResult, load_with_fallback
from uilocale.presentation import DocumentAttributes
from uilocale.storage import MemoryStore, decode_selection, encode_selection
from uilocale.tags import (
    LanguageOption,
    effective_tag,
    get_system_language_tag,
    language_options,
    parse_tag,
    text_direction,
)

if TYPE_CHECKING:
    from uilocale.context import QueryContext
    from uilocale.loading import BundleLoader
    from uilocale.presentation import PresentationSink
    from uilocale.storage import KeyValueStore

__all__ = ["ActiveSelection", "LocaleResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActiveSelection:
    """The language and optional locale the UI is presented in.

    Attributes:
        language: Supported language code ("fr")
        locale: Region part of a supported locale ("FR"), or empty
    """

    language: str
    locale: str = ""

    @property
    def effective_tag(self) -> str:
        """``language`` alone, or ``language-locale`` when a locale is set."""
        return effective_tag(self.language, self.locale)

    def as_dict(self) -> dict[str, str]:
        """Plain mapping form, as persisted."""
        return {"language": self.language, "locale": self.locale}


class LocaleResolver:
    """Resolve, validate, persist and present the UI language.

    Example:
        >>> registry = BundleRegistry()
        >>> registry.register_messages("ar-TN", {"title": "..."})
        >>> registry.register_messages("fr-FR", {"title": "Titre"})
        >>> resolver = LocaleResolver(registry, store=JsonFileStore("prefs.json"))
        >>> await resolver.resolve_at_startup()
        >>> await resolver.set_selection("fr", "FR")
        >>> resolver.translate("title")
        'Titre'

    Attributes:
        config: Supported sets and seam names in effect
    """

    __slots__ = (
        "_bundle",
        "_context",
        "_environment",
        "_last_load",
        "_loader",
        "_pending_loads",
        "_presentation",
        "_selection",
        "_source",
        "_store",
        "config",
    )

    def __init__(
        self,
        loader: BundleLoader,
        *,
        store: KeyValueStore | None = None,
        presentation: PresentationSink | None = None,
        context: QueryContext | None = None,
        environment: Callable[[], str | None] = get_system_language_tag,
        config: ResolverConfig = DEFAULT_CONFIG,
    ) -> None:
        """Initialize resolver. No I/O happens until resolve_at_startup().

        Args:
            loader: Bundle loader (BundleRegistry, PathBundleLoader, ...)
            store: Durable store for the selection (default: in-memory)
            presentation: Sink for lang/dir notifications (default: a
                DocumentAttributes recorder)
            context: Query context carrying the one-shot override; None
                disables the override step
            environment: Returns the runtime's preferred language tag
            config: Supported sets and seam names
        """
        self.config = config
        self._loader = loader
        self._store: KeyValueStore = store if store is not None else MemoryStore()
        self._presentation: PresentationSink = (
            presentation if presentation is not None else DocumentAttributes()
        )
        self._context = context
        self._environment = environment

        self._selection: ActiveSelection | None = None
        self._source: ResolutionSource | None = None
        self._bundle = TranslationBundle.empty(missing=config.missing_translation)
        self._last_load: BundleLoadResult | None = None
        self._pending_loads = 0

    def __repr__(self) -> str:
        tag = self._selection.effective_tag if self._selection else None
        return f"LocaleResolver(selection={tag!r}, state={self.state.value!r})"

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def supported_languages(self) -> tuple[str, ...]:
        return self.config.languages

    @property
    def supported_locales(self) -> tuple[str, ...]:
        return self.config.locales

    @property
    def default_language(self) -> str:
        return self.config.default_language

    @property
    def default_locale(self) -> str:
        return self.config.default_locale

    @property
    def presentation(self) -> PresentationSink:
        return self._presentation

    @property
    def selection(self) -> ActiveSelection | None:
        """Active selection, or None before the first successful set_selection()."""
        return self._selection

    @property
    def source(self) -> ResolutionSource | None:
        """How the active selection was obtained."""
        return self._source

    @property
    def effective_tag(self) -> str:
        """Effective tag of the active selection; empty before resolution."""
        return self._selection.effective_tag if self._selection else ""

    @property
    def text_direction(self) -> TextDirection:
        if self._selection is None:
            return TextDirection.LTR
        return text_direction(self._selection.language, self.config.rtl_languages)

    @property
    def bundle(self) -> TranslationBundle:
        """Bundle in effect; empty until the first load completes."""
        return self._bundle

    @property
    def last_load(self) -> BundleLoadResult | None:
        """Result of the most recently completed bundle load."""
        return self._last_load

    @property
    def state(self) -> ResolverState:
        if self._pending_loads:
            return ResolverState.LOADING
        if self._last_load is None:
            return ResolverState.UNINITIALIZED
        return ResolverState.READY

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def is_supported(self, language: str, locale: str = "") -> bool:
        """Check a language/locale pair without raising or changing state."""
        if language not in self.config.languages:
            return False
        return not locale or effective_tag(language, locale) in self.config.locales

    def _validate(self, language: str, locale: str) -> None:
        """Raise if the pair violates the selection invariant.

        Raises:
            UnsupportedLanguageError: If language is not supported
            UnsupportedLocaleError: If locale is non-empty and the
                language-locale tag is not supported
        """
        if language not in self.config.languages:
            raise UnsupportedLanguageError(
                ErrorTemplate.unsupported_language(language, self.config.languages)
            )
        if locale and effective_tag(language, locale) not in self.config.locales:
            raise UnsupportedLocaleError(
                ErrorTemplate.unsupported_locale(
                    effective_tag(language, locale), self.config.locales
                )
            )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def resolve_at_startup(self) -> ActiveSelection:
        """Determine, apply and return the initial selection.

        Returns:
            The active selection

        Raises:
            FatalBundleLoadError: If the default-locale bundle fails to load
        """
        selection = await self._resolve_override()
        if selection is None:
            selection = await self._resolve_persisted()
        if selection is None:
            selection = await self._resolve_environment()
        logger.info(
            "Resolved language '%s' from %s", selection.effective_tag, self._source
        )
        return selection

    async def _resolve_override(self) -> ActiveSelection | None:
        if self._context is None:
            return None
        parameter = self.config.query_parameter
        raw = self._context.get(parameter)
        if not raw or raw[:2] not in self.config.languages:
            return None

        language, locale = parse_tag(raw)
        try:
            selection: ActiveSelection | None = await self._apply(
                language, locale, ResolutionSource.OVERRIDE
            )
        except (UnsupportedLanguageError, UnsupportedLocaleError) as e:
            logger.warning("Ignoring '%s=%s': %s", parameter, raw, e.diagnostic)
            selection = None
        self._context.consume(parameter)
        return selection

    async def _resolve_persisted(self) -> ActiveSelection | None:
        raw = self._store.get(self.config.storage_key)
        if not raw:
            return None
        try:
            language, locale = decode_selection(raw)
            return await self._apply(language, locale, ResolutionSource.PERSISTED)
        except (
            PersistedSelectionError,
            UnsupportedLanguageError,
            UnsupportedLocaleError,
        ) as e:
            logger.warning("Discarding stored selection: %s", e.diagnostic)
            return None

    async def _resolve_environment(self) -> ActiveSelection:
        tag = self._environment()
        language, locale = parse_tag(tag, uppercase_region=True) if tag else ("", "")
        source = ResolutionSource.ENVIRONMENT
        if not language or language not in self.config.languages:
            logger.debug("Environment language %r unsupported; using default", tag)
            language, locale = self.config.default_language, ""
            source = ResolutionSource.DEFAULT
        elif locale and not self.is_supported(language, locale):
            logger.debug("Environment region '%s' unsupported for '%s'", locale, language)
            locale = ""
        return await self._apply(language, locale, source)

    async def set_selection(self, language: str, locale: str = "") -> ActiveSelection:
        """Validate, persist and present a selection, then load its bundle.

        Returns only after the bundle has loaded or fallen back to the
        default-locale bundle.

        Args:
            language: Supported language code
            locale: Region code, or empty for the bare language

        Returns:
            The new active selection

        Raises:
            UnsupportedLanguageError: If language is not supported
            UnsupportedLocaleError: If locale is non-empty and the
                language-locale tag is not supported
            FatalBundleLoadError: If the default-locale bundle fails to load
        """
        return await self._apply(language, locale, ResolutionSource.EXPLICIT)

    async def _apply(
        self, language: str, locale: str, source: ResolutionSource
    ) -> ActiveSelection:
        self._validate(language, locale)

        selection = ActiveSelection(language, locale)
        self._selection = selection
        self._source = source
        self._store.set(self.config.storage_key, encode_selection(language, locale))
        self._presentation.set_language_tag(selection.effective_tag)
        self._presentation.set_text_direction(self.text_direction)
        logger.debug("Selection set to '%s' (%s)", selection.effective_tag, source)

        await self.load_bundle()
        return selection

    async def load_bundle(self) -> BundleLoadResult:
        """Load the bundle for the active selection, falling back to the default.

        Before any selection exists the default-locale bundle is requested.

        Returns:
            BundleLoadResult tagged REQUESTED or FALLBACK

        Raises:
            FatalBundleLoadError: If the default-locale bundle fails to load
        """
        requested = self.effective_tag or self.config.default_locale
        self._pending_loads += 1
        try:
            result = await load_with_fallback(
                self._loader,
                requested,
                self.config.default_locale,
                missing=self.config.missing_translation,
            )
        finally:
            self._pending_loads -= 1
        self._bundle = result.bundle
        self._last_load = result
        return result

    def translate(self, key: str) -> str:
        """Look up a key in the current bundle; never raises.

        Returns:
            The translation, or the missing-translation sentinel when the key
            is absent or no bundle has loaded yet
        """
        return self._bundle.translate(key)

    t = translate

    def language_options(self, display_locale: str | None = None) -> tuple[LanguageOption, ...]:
        """Picker entries for the supported languages, in configured order.

        Args:
            display_locale: Tag to render display names in; defaults to the
                active effective tag, or native names before resolution
        """
        target = display_locale or self.effective_tag or None
        return language_options(self.config.languages, target, self.config.rtl_languages)
