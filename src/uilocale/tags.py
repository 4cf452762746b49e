"""Language tag utilities.

Centralizes the handling of ``language[-REGION]`` tags used throughout the
codebase: splitting, joining into an effective tag, region normalization,
text direction lookup, system locale detection, and Babel-backed display
names for language pickers.

Python 3.13+. Uses Babel for CLDR display names.
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError

from uilocale.constants import RTL_LANGUAGES, TAG_SEPARATOR
from uilocale.enums import TextDirection

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

__all__ = [
    "LanguageOption",
    "display_name",
    "effective_tag",
    "get_babel_locale",
    "get_system_language_tag",
    "language_options",
    "normalize_region",
    "parse_tag",
    "text_direction",
]

logger = logging.getLogger(__name__)

_PSEUDO_LOCALES = frozenset({"C", "POSIX"})


def parse_tag(tag: str, *, uppercase_region: bool = False) -> tuple[str, str]:
    """Split a ``language[-REGION]`` tag into its language and locale parts.

    Only the first two subtags are kept, so script or variant subtags past
    the region are ignored. A missing region yields an empty locale.

    Args:
        tag: Tag such as "fr", "fr-FR" or "en-us"
        uppercase_region: Uppercase the locale part (some platforms report
            lowercase regions)

    Returns:
        Tuple of (language, locale); locale may be empty

    Example:
        >>> parse_tag("fr-FR")
        ('fr', 'FR')
        >>> parse_tag("en-us", uppercase_region=True)
        ('en', 'US')
        >>> parse_tag("de")
        ('de', '')
    """
    parts = tag.split(TAG_SEPARATOR)
    language = parts[0]
    locale = parts[1] if len(parts) > 1 else ""
    if uppercase_region:
        locale = normalize_region(locale)
    return language, locale


def normalize_region(locale: str) -> str:
    """Uppercase a region code ("us" -> "US"); empty stays empty."""
    return locale.upper()


def effective_tag(language: str, locale: str) -> str:
    """Join language and locale into the tag presented to the UI.

    Example:
        >>> effective_tag("fr", "FR")
        'fr-FR'
        >>> effective_tag("fr", "")
        'fr'
    """
    if locale:
        return f"{language}{TAG_SEPARATOR}{locale}"
    return language


def text_direction(
    language: str, rtl_languages: Collection[str] = RTL_LANGUAGES
) -> TextDirection:
    """Return the text direction for a language code."""
    return TextDirection.RTL if language in rtl_languages else TextDirection.LTR


def get_system_language_tag() -> str | None:
    """Detect the preferred language tag from the OS and environment.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Encoding suffixes are stripped and POSIX underscores become hyphens, so
    "de_DE.UTF-8" is reported as "de-DE". Region case is preserved as found.
    The "C" and "POSIX" pseudo-locales are ignored.

    Returns:
        Detected tag, or None if nothing usable is configured.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_language_tag()
        'de-DE'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in _PSEUDO_LOCALES:
            return _to_tag(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in _PSEUDO_LOCALES:
            tag = _to_tag(value)
            if tag:
                return tag

    logger.debug("No system language configured")
    return None


def _to_tag(posix_locale: str) -> str:
    """Convert "de_DE.UTF-8" or "sr_RS@latin" to "de-DE" / "sr-RS"."""
    code = posix_locale.split(".")[0].split("@")[0]
    return code.replace("_", TAG_SEPARATOR)


@functools.lru_cache(maxsize=128)
def get_babel_locale(tag: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        tag: Language tag (BCP-47 "en-US" or POSIX "en_US")

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If the locale has no CLDR data
        ValueError: If the tag format is invalid
    """
    return Locale.parse(tag.replace(TAG_SEPARATOR, "_"))


def display_name(tag: str, display_locale: str | None = None) -> str:
    """Human-readable name for a language tag.

    Args:
        tag: Language tag to name
        display_locale: Tag of the language to render the name in. Defaults
            to the tag itself, which yields the native name.

    Returns:
        Display name from CLDR, or the tag itself when Babel has no data.

    Example:
        >>> display_name("fr")
        'français'
        >>> display_name("de", "en")
        'German'
    """
    try:
        locale = get_babel_locale(tag)
        target = get_babel_locale(display_locale) if display_locale else locale
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No display name for '%s': %s", tag, e)
        return tag
    name = locale.get_display_name(target)
    return name if name else tag


@dataclass(frozen=True, slots=True)
class LanguageOption:
    """One entry of a language picker.

    Attributes:
        code: Language code as configured ("fr")
        native_name: Name in the language itself ("français")
        display_name: Name in the display language ("French")
        direction: Text direction of the language
    """

    code: str
    native_name: str
    display_name: str
    direction: TextDirection


def language_options(
    languages: Iterable[str],
    display_locale: str | None = None,
    rtl_languages: Collection[str] = RTL_LANGUAGES,
) -> tuple[LanguageOption, ...]:
    """Build picker entries for languages, in the given order.

    Args:
        languages: Language codes to describe
        display_locale: Tag to render display_name in; native names when None
        rtl_languages: Languages rendered right-to-left

    Returns:
        Tuple of LanguageOption, one per language
    """
    return tuple(
        LanguageOption(
            code=code,
            native_name=display_name(code),
            display_name=display_name(code, display_locale),
            direction=text_direction(code, rtl_languages),
        )
        for code in languages
    )
