"""Query context carrying the one-shot ``lang`` override.

The resolver reads the override parameter once, then consumes it: the
parameter is removed and the context is sent to a redirect target built
from whatever parameters remain.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

__all__ = ["QueryContext", "UrlQueryContext"]

logger = logging.getLogger(__name__)


class QueryContext(Protocol):
    """Protocol for the current request or page query parameters."""

    def get(self, name: str) -> str | None:
        """Return the first value of a parameter, or None if absent."""
        ...

    def consume(self, name: str) -> str:
        """Remove a parameter and redirect to what remains.

        Returns:
            The redirect target
        """
        ...


class UrlQueryContext:
    """QueryContext over a URL such as a browser location.

    consume() drops the parameter and computes the redirect target: the same
    URL with the remaining query when any parameters are left, otherwise the
    bare origin. The target is recorded on
    ``redirected_to`` and handed to the optional ``navigate`` callback.

    Example:
        >>> ctx = UrlQueryContext("https://app.example/edit?lang=fr-FR&foo=bar")
        >>> ctx.get("lang")
        'fr-FR'
        >>> ctx.consume("lang")
        'https://app.example/edit?foo=bar'
        >>> UrlQueryContext("https://app.example/?lang=de").consume("lang")
        'https://app.example'
    """

    __slots__ = ("_navigate", "_params", "_parts", "redirected_to")

    def __init__(self, url: str, navigate: Callable[[str], object] | None = None) -> None:
        """Initialize context.

        Args:
            url: Current URL
            navigate: Called with the redirect target when a parameter is consumed
        """
        self._parts = urlsplit(url)
        self._params: list[tuple[str, str]] = parse_qsl(
            self._parts.query, keep_blank_values=True
        )
        self._navigate = navigate
        self.redirected_to: str | None = None

    @property
    def origin(self) -> str:
        """Scheme and host of the URL, e.g. "https://app.example"."""
        return urlunsplit((self._parts.scheme, self._parts.netloc, "", "", ""))

    @property
    def url(self) -> str:
        """Current URL with its present parameters."""
        return urlunsplit(self._parts._replace(query=urlencode(self._params)))

    def get(self, name: str) -> str | None:
        for key, value in self._params:
            if key == name:
                return value
        return None

    def consume(self, name: str) -> str:
        self._params = [(key, value) for key, value in self._params if key != name]
        if self._params:
            target = urlunsplit(self._parts._replace(query=urlencode(self._params)))
        else:
            target = self.origin
        self.redirected_to = target
        logger.info("Redirecting to %s after consuming '%s'", target, name)
        if self._navigate is not None:
            self._navigate(target)
        return target

    def __repr__(self) -> str:
        return f"UrlQueryContext(url={self.url!r})"
