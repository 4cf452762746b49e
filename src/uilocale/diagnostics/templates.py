"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


def _preview(codes: Iterable[str], limit: int = 8) -> str:
    items = list(codes)
    shown = ", ".join(items[:limit])
    if len(items) > limit:
        shown += f", ... ({len(items) - limit} more)"
    return shown


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here so exception constructors stay free
    of formatting logic and messages can be asserted on in tests.
    """

    @staticmethod
    def unsupported_language(language: str, supported: Iterable[str]) -> Diagnostic:
        """Language not in the supported set.

        Args:
            language: The rejected language code
            supported: Supported language codes, in order

        Returns:
            Diagnostic for UNSUPPORTED_LANGUAGE
        """
        msg = f'Language "{language}" is not supported.'
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LANGUAGE,
            message=msg,
            hint=f"Use one of: {_preview(supported)}",
            tag=language,
        )

    @staticmethod
    def unsupported_locale(tag: str, supported: Iterable[str]) -> Diagnostic:
        """Language-locale pair not in the supported set.

        Args:
            tag: The rejected "language-locale" tag
            supported: Supported locale tags, in order

        Returns:
            Diagnostic for UNSUPPORTED_LOCALE
        """
        msg = f'Locale "{tag}" is not supported.'
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOCALE,
            message=msg,
            hint=f"Pass an empty locale or one of: {_preview(supported)}",
            tag=tag,
        )

    @staticmethod
    def bundle_not_found(identifier: str) -> Diagnostic:
        """No bundle registered or stored for an identifier.

        Args:
            identifier: Bundle identifier ("en" or "en-US")

        Returns:
            Diagnostic for BUNDLE_NOT_FOUND
        """
        msg = f"No translation bundle for '{identifier}'"
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_NOT_FOUND,
            message=msg,
            hint="Register a loader for this identifier or add its bundle file",
            tag=identifier,
        )

    @staticmethod
    def bundle_load_failed(identifier: str, reason: str) -> Diagnostic:
        """Bundle present but unreadable.

        Args:
            identifier: Bundle identifier
            reason: Short description of the underlying failure

        Returns:
            Diagnostic for BUNDLE_LOAD_FAILED
        """
        msg = f"Failed to load translation bundle '{identifier}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_LOAD_FAILED,
            message=msg,
            hint="Bundles must decode to a mapping of string keys to string values",
            tag=identifier,
        )

    @staticmethod
    def default_bundle_failed(requested: str, default: str) -> Diagnostic:
        """Fallback-of-last-resort bundle failed.

        Args:
            requested: Identifier originally requested
            default: Default-locale identifier that also failed

        Returns:
            Diagnostic for DEFAULT_BUNDLE_FAILED
        """
        msg = (
            f"Default translation bundle '{default}' failed to load "
            f"(requested '{requested}')"
        )
        return Diagnostic(
            code=DiagnosticCode.DEFAULT_BUNDLE_FAILED,
            message=msg,
            hint="The default-locale bundle must always be available",
            tag=default,
        )

    @staticmethod
    def persisted_selection_invalid(raw: str, reason: str) -> Diagnostic:
        """Stored selection value cannot be decoded.

        Args:
            raw: The stored value (truncated for display)
            reason: Short description of the decoding failure

        Returns:
            Diagnostic for PERSISTED_SELECTION_INVALID
        """
        shown = raw if len(raw) <= 60 else raw[:57] + "..."
        msg = f"Stored selection {shown!r} is invalid: {reason}"
        return Diagnostic(
            code=DiagnosticCode.PERSISTED_SELECTION_INVALID,
            message=msg,
            severity="warning",
        )
