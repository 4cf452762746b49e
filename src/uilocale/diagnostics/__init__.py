"""Diagnostic system for uilocale errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    BundleLoadError,
    BundleNotFoundError,
    FatalBundleLoadError,
    LocaleError,
    PersistedSelectionError,
    UnsupportedLanguageError,
    UnsupportedLocaleError,
)
from .templates import ErrorTemplate

__all__ = [
    "BundleLoadError",
    "BundleNotFoundError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FatalBundleLoadError",
    "LocaleError",
    "PersistedSelectionError",
    "UnsupportedLanguageError",
    "UnsupportedLocaleError",
]
