"""Shared constants for uilocale.

Single source of truth for the supported language and locale sets, the
right-to-left language set, and the fixed names used at the library's
external seams (storage key, query parameter, missing-translation sentinel).

Ordering matters: the first entry of SUPPORTED_LANGUAGES is the default
language and the first entry of SUPPORTED_LOCALES is the default locale.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Supported sets
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_LOCALES",
    "RTL_LANGUAGES",
    # External names
    "STORAGE_KEY",
    "QUERY_PARAMETER",
    "TAG_SEPARATOR",
    # Fallback strings
    "MISSING_TRANSLATION",
]

# ============================================================================
# SUPPORTED SETS
# ============================================================================

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "ar",
    "ca",
    "da",
    "de",
    "el",
    "en",
    "es",
    "fr",
    "he",
    "id",
    "ja",
    "ko",
    "nl",
    "pt",
    "ru",
    "uk",
    "zh",
    "no",
)

SUPPORTED_LOCALES: tuple[str, ...] = (
    "ar-TN",
    "ca-ES",
    "da-DK",
    "de-DE",
    "el-GR",
    "en-GB",
    "en-US",
    "es-ES",
    "fr-FR",
    "he-IL",
    "id-ID",
    "ja-JP",
    "ko-KR",
    "nl-NL",
    "pt-BR",
    "ru-RU",
    "uk-UA",
    "zh-CN",
    "no-NO",
)

# Not a subset of SUPPORTED_LANGUAGES: fa and ur are listed ahead of support.
RTL_LANGUAGES: frozenset[str] = frozenset({"ar", "fa", "he", "ur"})

# ============================================================================
# EXTERNAL NAMES
# ============================================================================

# Key under which the serialized selection lives in the durable store.
STORAGE_KEY: str = "language"

# One-shot override parameter, e.g. ?lang=fr-FR
QUERY_PARAMETER: str = "lang"

TAG_SEPARATOR: str = "-"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

MISSING_TRANSLATION: str = "⛔️ Missing translation"
