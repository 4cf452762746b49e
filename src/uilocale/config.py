"""Resolver configuration.

Provides a single frozen dataclass that carries the supported sets and the
names used at the resolver's seams. ``DEFAULT_CONFIG`` mirrors the values in
``uilocale.constants``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from uilocale.constants import (
    MISSING_TRANSLATION,
    QUERY_PARAMETER,
    RTL_LANGUAGES,
    STORAGE_KEY,
    SUPPORTED_LANGUAGES,
    SUPPORTED_LOCALES,
    TAG_SEPARATOR,
)

__all__ = ["DEFAULT_CONFIG", "ResolverConfig"]


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for LocaleResolver.

    All fields have defaults; ``ResolverConfig()`` reproduces the shipped
    language and locale sets.

    Attributes:
        languages: Supported language codes; the first is the default language.
        locales: Supported "language-REGION" tags; the first is the default locale.
        rtl_languages: Languages rendered right-to-left. Need not be supported.
        storage_key: Key of the persisted selection in the durable store.
        query_parameter: Name of the one-shot override parameter.
        missing_translation: Sentinel returned for absent translation keys.

    Example:
        >>> config = ResolverConfig(languages=("en", "fr"), locales=("en-US", "fr-FR"))
        >>> config.default_language, config.default_locale
        ('en', 'en-US')
    """

    languages: tuple[str, ...] = SUPPORTED_LANGUAGES
    locales: tuple[str, ...] = SUPPORTED_LOCALES
    rtl_languages: frozenset[str] = RTL_LANGUAGES
    storage_key: str = STORAGE_KEY
    query_parameter: str = QUERY_PARAMETER
    missing_translation: str = MISSING_TRANSLATION

    def __post_init__(self) -> None:
        """Normalize collections and validate values at construction time.

        Raises:
            ValueError: If either supported set is empty, contains duplicates,
                a language contains the tag separator, a locale lacks a
                region, or a name field is empty.
        """
        object.__setattr__(self, "languages", tuple(self.languages))
        object.__setattr__(self, "locales", tuple(self.locales))
        object.__setattr__(self, "rtl_languages", frozenset(self.rtl_languages))

        if not self.languages:
            msg = "languages must not be empty"
            raise ValueError(msg)
        if not self.locales:
            msg = "locales must not be empty"
            raise ValueError(msg)
        if len(set(self.languages)) != len(self.languages):
            msg = "languages must not contain duplicates"
            raise ValueError(msg)
        if len(set(self.locales)) != len(self.locales):
            msg = "locales must not contain duplicates"
            raise ValueError(msg)
        for language in self.languages:
            if not language or TAG_SEPARATOR in language:
                msg = f"Invalid language code: {language!r}"
                raise ValueError(msg)
        for locale in self.locales:
            language, sep, region = locale.partition(TAG_SEPARATOR)
            if not (language and sep and region):
                msg = f"Locale must have the form 'language-REGION', got: {locale!r}"
                raise ValueError(msg)
        if not self.storage_key:
            msg = "storage_key must not be empty"
            raise ValueError(msg)
        if not self.query_parameter:
            msg = "query_parameter must not be empty"
            raise ValueError(msg)

    @property
    def default_language(self) -> str:
        """First supported language."""
        return self.languages[0]

    @property
    def default_locale(self) -> str:
        """First supported locale; also the identifier of the fallback bundle."""
        return self.locales[0]


DEFAULT_CONFIG = ResolverConfig()
