"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
uilocale exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Validation errors (unsupported language or locale)
        2000-2999: Bundle loading errors
        3000-3999: Persistence errors
    """

    # Validation errors (1000-1999)
    UNSUPPORTED_LANGUAGE = 1001
    UNSUPPORTED_LOCALE = 1002

    # Bundle loading errors (2000-2999)
    BUNDLE_NOT_FOUND = 2001
    BUNDLE_LOAD_FAILED = 2002
    DEFAULT_BUNDLE_FAILED = 2003

    # Persistence errors (3000-3999)
    PERSISTED_SELECTION_INVALID = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        tag: Language tag or bundle identifier the error refers to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    tag: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[UNSUPPORTED_LANGUAGE]: Language "xx" is not supported.
              --> xx
              = help: Use one of: ar, ca, da, ...

        Returns:
            Formatted error message
        """
        parts = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.tag:
            parts.append(f"  --> {self.tag}")
        if self.hint:
            parts.append(f"  = help: {self.hint}")
        return "\n".join(parts)
