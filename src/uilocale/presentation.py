"""Presentation sink notified of language tag and text direction changes.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from uilocale.enums import TextDirection

__all__ = ["DocumentAttributes", "PresentationSink"]


class PresentationSink(Protocol):
    """Receives the effective tag and text direction on every selection change.

    A browser host would write these to ``<html lang=... dir=...>``.
    """

    def set_language_tag(self, tag: str) -> None: ...

    def set_text_direction(self, direction: TextDirection) -> None: ...


@dataclass(slots=True)
class DocumentAttributes:
    """Recording sink holding the last ``lang`` and ``dir`` values.

    Attributes:
        lang: Last effective tag, empty before the first selection
        dir: Last text direction
    """

    lang: str = ""
    dir: TextDirection = TextDirection.LTR

    def set_language_tag(self, tag: str) -> None:
        self.lang = tag

    def set_text_direction(self, direction: TextDirection) -> None:
        self.dir = direction
