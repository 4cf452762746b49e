"""Enumerations for uilocale type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they can be handed straight to
presentation sinks and log records.

Python 3.13+.
"""

from enum import StrEnum


class TextDirection(StrEnum):
    """Text direction reported to the presentation sink.

    StrEnum provides automatic string conversion: str(TextDirection.RTL) == "rtl"
    """

    LTR = "ltr"
    """Left-to-right scripts (Latin, Cyrillic, CJK, ...)"""

    RTL = "rtl"
    """Right-to-left scripts (Arabic, Hebrew, ...)"""


class LoadStatus(StrEnum):
    """Outcome of a bundle load that produced a usable bundle."""

    REQUESTED = "requested"
    """The bundle for the effective tag was loaded as requested"""

    FALLBACK = "fallback"
    """The requested bundle failed; the default-locale bundle was loaded"""


class ResolutionSource(StrEnum):
    """Which startup step produced the active selection."""

    OVERRIDE = "override"
    """One-shot ?lang= query parameter"""

    PERSISTED = "persisted"
    """Selection restored from the durable store"""

    ENVIRONMENT = "environment"
    """Runtime-reported preferred language tag"""

    DEFAULT = "default"
    """Environment preference missing or unsupported; default language used"""

    EXPLICIT = "explicit"
    """Set directly by the caller after startup"""


class ResolverState(StrEnum):
    """Lifecycle of a LocaleResolver."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


__all__ = [
    "LoadStatus",
    "ResolutionSource",
    "ResolverState",
    "TextDirection",
]
