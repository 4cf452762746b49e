"""uilocale exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object; the
diagnostic, when given, is kept on the instance for programmatic access.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "BundleLoadError",
    "BundleNotFoundError",
    "FatalBundleLoadError",
    "LocaleError",
    "PersistedSelectionError",
    "UnsupportedLanguageError",
    "UnsupportedLocaleError",
]


class LocaleError(Exception):
    """Base exception for all uilocale errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class UnsupportedLanguageError(LocaleError, ValueError):
    """Language code is not in the supported language set.

    Raised synchronously by set_selection before any state changes.
    """


class UnsupportedLocaleError(LocaleError, ValueError):
    """Non-empty locale forms a language-locale pair outside the supported set."""


class BundleNotFoundError(LocaleError, LookupError):
    """No bundle is registered or stored under the requested identifier.

    Recovered internally by falling back to the default-locale bundle.
    """


class BundleLoadError(LocaleError):
    """Bundle exists but could not be read or decoded.

    Recovered internally by falling back to the default-locale bundle.
    """


class FatalBundleLoadError(LocaleError):
    """Default-locale bundle failed to load; no further fallback exists.

    The underlying failure is available as ``__cause__``.

    Attributes:
        requested: Identifier that was originally requested
        default: Default-locale identifier that also failed
    """

    def __init__(self, message: str | Diagnostic, *, requested: str, default: str) -> None:
        """Initialize FatalBundleLoadError.

        Args:
            message: Error message string OR Diagnostic object
            requested: Identifier that was originally requested
            default: Default-locale identifier that also failed
        """
        super().__init__(message)
        self.requested = requested
        self.default = default


class PersistedSelectionError(LocaleError, ValueError):
    """Stored selection cannot be decoded into a language/locale pair."""
