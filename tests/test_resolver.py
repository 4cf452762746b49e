"""Tests for LocaleResolver selection changes, bundle loading and lookup."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import TypeAlias

import pytest

from uilocale import (
    ActiveSelection,
    BundleRegistry,
    DocumentAttributes,
    FatalBundleLoadError,
    LoadStatus,
    LocaleResolver,
    MemoryStore,
    ResolutionSource,
    ResolverConfig,
    ResolverState,
    TextDirection,
    UnsupportedLanguageError,
    UnsupportedLocaleError,
)
from uilocale.constants import MISSING_TRANSLATION
from uilocale.diagnostics import DiagnosticCode

ResolverFactory: TypeAlias = Callable[..., LocaleResolver]


class TestResolverBasics:
    """Construction and read-only accessors."""

    def test_defaults_come_from_config(self, make_resolver: ResolverFactory) -> None:
        """Default language and locale are the first configured entries."""
        resolver = make_resolver()

        assert resolver.default_language == "ar"
        assert resolver.default_locale == "ar-TN"
        assert resolver.supported_languages[0] == "ar"
        assert "en-US" in resolver.supported_locales

    def test_initial_state(self, make_resolver: ResolverFactory) -> None:
        """Nothing is selected or loaded before resolution."""
        resolver = make_resolver()

        assert resolver.selection is None
        assert resolver.source is None
        assert resolver.effective_tag == ""
        assert resolver.text_direction == TextDirection.LTR
        assert resolver.last_load is None
        assert resolver.state == ResolverState.UNINITIALIZED
        assert len(resolver.bundle) == 0

    def test_translate_before_any_load_returns_sentinel(
        self, make_resolver: ResolverFactory
    ) -> None:
        """Lookups against the placeholder bundle degrade to the sentinel."""
        resolver = make_resolver()

        assert resolver.translate("title") == MISSING_TRANSLATION
        assert resolver.t("title") == MISSING_TRANSLATION

    def test_repr(self, make_resolver: ResolverFactory) -> None:
        """repr shows selection and state."""
        resolver = make_resolver()
        assert repr(resolver) == "LocaleResolver(selection=None, state='uninitialized')"

        asyncio.run(resolver.set_selection("fr", "FR"))
        assert repr(resolver) == "LocaleResolver(selection='fr-FR', state='ready')"


class TestSetSelection:
    """set_selection validation and side effects."""

    def test_valid_language_only(
        self, make_resolver: ResolverFactory, store: MemoryStore, document: DocumentAttributes
    ) -> None:
        """Bare language is persisted, presented and its bundle loaded."""
        resolver = make_resolver()

        selection = asyncio.run(resolver.set_selection("fr"))

        assert selection == ActiveSelection("fr", "")
        assert json.loads(store.get("language") or "") == {"language": "fr", "locale": ""}
        assert document.lang == "fr"
        assert document.dir == TextDirection.LTR
        assert resolver.translate("save") == "Enregistrer"
        assert resolver.source == ResolutionSource.EXPLICIT

    def test_valid_language_and_locale(
        self, make_resolver: ResolverFactory, document: DocumentAttributes
    ) -> None:
        """language-locale becomes the effective tag."""
        resolver = make_resolver()

        asyncio.run(resolver.set_selection("en", "US"))

        assert resolver.effective_tag == "en-US"
        assert document.lang == "en-US"
        assert resolver.bundle.identifier == "en-US"
        assert resolver.last_load is not None
        assert resolver.last_load.status == LoadStatus.REQUESTED

    def test_rtl_language_sets_rtl_direction(
        self, make_resolver: ResolverFactory, document: DocumentAttributes
    ) -> None:
        """Arabic and Hebrew are presented right-to-left."""
        resolver = make_resolver()

        asyncio.run(resolver.set_selection("ar", "TN"))
        assert document.dir == TextDirection.RTL

        asyncio.run(resolver.set_selection("de"))
        assert document.dir == TextDirection.LTR

    def test_forward_listed_rtl_language(self) -> None:
        """fa is in the RTL set ahead of the shipped languages and renders RTL once supported."""
        registry = BundleRegistry({"fa-IR": lambda: {"k": "v"}})
        document = DocumentAttributes()
        config = ResolverConfig(languages=("fa",), locales=("fa-IR",))
        resolver = LocaleResolver(registry, presentation=document, config=config)

        asyncio.run(resolver.set_selection("fa", "IR"))

        assert document.dir == TextDirection.RTL

    def test_unsupported_language_raises(self, make_resolver: ResolverFactory) -> None:
        """Unknown language fails with UnsupportedLanguageError and no side effects."""
        resolver = make_resolver()

        with pytest.raises(UnsupportedLanguageError, match='Language "xx" is not supported') as exc:
            asyncio.run(resolver.set_selection("xx"))

        assert exc.value.diagnostic is not None
        assert exc.value.diagnostic.code == DiagnosticCode.UNSUPPORTED_LANGUAGE
        assert resolver.selection is None

    def test_unsupported_locale_raises(
        self, make_resolver: ResolverFactory, store: MemoryStore
    ) -> None:
        """fr-CA fails with UnsupportedLocaleError and does not persist."""
        resolver = make_resolver()

        with pytest.raises(UnsupportedLocaleError, match='Locale "fr-CA" is not supported'):
            asyncio.run(resolver.set_selection("fr", "CA"))

        assert store.get("language") is None

    def test_locale_for_other_language_raises(self, make_resolver: ResolverFactory) -> None:
        """Locales validate as full tags: de-US is not supported even though US is."""
        resolver = make_resolver()

        with pytest.raises(UnsupportedLocaleError):
            asyncio.run(resolver.set_selection("de", "US"))

    def test_validation_errors_are_value_errors(self, make_resolver: ResolverFactory) -> None:
        """Both validation errors can be caught as ValueError."""
        resolver = make_resolver()

        with pytest.raises(ValueError, match="not supported"):
            asyncio.run(resolver.set_selection("zz"))

    def test_failed_call_keeps_previous_selection(self, make_resolver: ResolverFactory) -> None:
        """A rejected change leaves the prior selection and bundle in place."""
        resolver = make_resolver()
        asyncio.run(resolver.set_selection("de"))

        with pytest.raises(UnsupportedLocaleError):
            asyncio.run(resolver.set_selection("de", "AT"))

        assert resolver.selection == ActiveSelection("de", "")
        assert resolver.translate("save") == "Speichern"

    def test_idempotent(self, make_resolver: ResolverFactory, store: MemoryStore) -> None:
        """Repeating a call yields the same selection and stored value."""
        resolver = make_resolver()

        first = asyncio.run(resolver.set_selection("en", "GB"))
        stored_once = store.get("language")
        second = asyncio.run(resolver.set_selection("en", "GB"))

        assert first == second == resolver.selection
        assert store.get("language") == stored_once

    def test_bundle_replaced_not_merged(self, make_resolver: ResolverFactory) -> None:
        """Keys present only in the previous bundle disappear after a change."""
        resolver = make_resolver()
        asyncio.run(resolver.set_selection("fr", "FR"))
        assert "empty" in resolver.bundle

        asyncio.run(resolver.set_selection("de"))

        assert "empty" not in resolver.bundle
        assert resolver.translate("empty") == MISSING_TRANSLATION


class TestLoadBundle:
    """load_bundle fallback behavior."""

    def test_missing_bundle_falls_back_to_default_locale(
        self, make_resolver: ResolverFactory
    ) -> None:
        """ja-JP is supported but has no bundle: default-locale strings are served."""
        resolver = make_resolver()

        asyncio.run(resolver.set_selection("ja", "JP"))

        result = resolver.last_load
        assert result is not None
        assert result.status == LoadStatus.FALLBACK
        assert result.is_fallback
        assert result.requested == "ja-JP"
        assert result.identifier == "ar-TN"
        assert resolver.translate("save") == "حفظ"
        assert resolver.effective_tag == "ja-JP"

    def test_load_before_selection_requests_default(
        self, make_resolver: ResolverFactory
    ) -> None:
        """Without a selection the default-locale bundle is requested."""
        resolver = make_resolver()

        result = asyncio.run(resolver.load_bundle())

        assert result.status == LoadStatus.REQUESTED
        assert result.identifier == "ar-TN"
        assert resolver.state == ResolverState.READY

    def test_default_failure_is_fatal(self, make_resolver: ResolverFactory) -> None:
        """Default-locale bundle failure raises with the loader error chained."""
        registry = BundleRegistry({"de": lambda: {"save": "Speichern"}})
        resolver = make_resolver(loader=registry)

        with pytest.raises(FatalBundleLoadError) as exc:
            asyncio.run(resolver.set_selection("fr"))

        assert exc.value.requested == "fr"
        assert exc.value.default == "ar-TN"
        assert exc.value.__cause__ is not None
        assert resolver.state == ResolverState.UNINITIALIZED

    def test_sentinel_is_configurable(self, registry: BundleRegistry) -> None:
        """ResolverConfig.missing_translation replaces the default sentinel."""
        config = ResolverConfig(missing_translation="??")
        resolver = LocaleResolver(registry, config=config, environment=lambda: None)

        asyncio.run(resolver.set_selection("de"))

        assert resolver.translate("nope") == "??"

    def test_empty_string_translation_is_missing(self, make_resolver: ResolverFactory) -> None:
        """Empty values count as missing translations."""
        resolver = make_resolver()
        asyncio.run(resolver.set_selection("fr", "FR"))

        assert resolver.translate("empty") == MISSING_TRANSLATION


class TestOverlappingSelections:
    """Concurrent set_selection calls on one event loop."""

    def test_last_completed_load_wins(self, store: MemoryStore) -> None:
        """A slow first load finishing last determines the visible bundle."""

        class GatedLoader:
            def __init__(self) -> None:
                self.gate = asyncio.Event()

            async def load(self, identifier: str) -> dict[str, str]:
                if identifier == "fr":
                    await self.gate.wait()
                return {"title": identifier}

        async def scenario() -> tuple[str, str]:
            loader = GatedLoader()
            resolver = LocaleResolver(loader, store=store, environment=lambda: None)
            slow = asyncio.create_task(resolver.set_selection("fr"))
            await asyncio.sleep(0)
            await resolver.set_selection("de")
            after_fast = resolver.translate("title")
            loader.gate.set()
            await slow
            return after_fast, resolver.translate("title")

        after_fast, after_slow = asyncio.run(scenario())

        assert after_fast == "de"
        assert after_slow == "fr"

    def test_bundle_is_never_mixed(self, store: MemoryStore) -> None:
        """The visible bundle always equals exactly one loaded table."""
        tables = {
            "de": {"a": "de-a", "b": "de-b"},
            "fr": {"a": "fr-a", "c": "fr-c"},
            "ar-TN": {"a": "ar-a"},
        }

        class YieldingLoader:
            async def load(self, identifier: str) -> dict[str, str]:
                await asyncio.sleep(0)
                return tables[identifier]

        async def scenario() -> LocaleResolver:
            resolver = LocaleResolver(YieldingLoader(), store=store, environment=lambda: None)
            await asyncio.gather(
                resolver.set_selection("fr"),
                resolver.set_selection("de"),
                resolver.set_selection("fr"),
            )
            return resolver

        resolver = asyncio.run(scenario())

        assert dict(resolver.bundle) in tables.values()
        assert resolver.state == ResolverState.READY


class TestLanguageOptions:
    """Babel-backed picker entries."""

    def test_options_cover_supported_languages_in_order(
        self, make_resolver: ResolverFactory
    ) -> None:
        """One option per supported language, configured order preserved."""
        resolver = make_resolver()

        options = resolver.language_options("en")

        assert [o.code for o in options] == list(resolver.supported_languages)

    def test_display_names(self, make_resolver: ResolverFactory) -> None:
        """Native and localized names come from CLDR."""
        resolver = make_resolver()

        by_code = {o.code: o for o in resolver.language_options("en")}

        assert by_code["fr"].native_name == "français"
        assert by_code["de"].display_name == "German"
        assert by_code["he"].direction == TextDirection.RTL

    def test_defaults_to_active_language(self, make_resolver: ResolverFactory) -> None:
        """Without an explicit display locale names follow the active selection."""
        resolver = make_resolver()
        asyncio.run(resolver.set_selection("de", "DE"))

        by_code = {o.code: o for o in resolver.language_options()}

        assert by_code["fr"].display_name == "Französisch"
