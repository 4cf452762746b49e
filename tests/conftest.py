"""Pytest configuration for the uilocale test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 200 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Shared fixtures build a LocaleResolver over in-memory collaborators so tests
can inspect what was persisted, presented and loaded.
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from uilocale import (
    BundleRegistry,
    DocumentAttributes,
    LocaleResolver,
    MemoryStore,
    QueryContext,
)

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FIXTURES
# =============================================================================

BUNDLES: dict[str, dict[str, str]] = {
    "ar-TN": {"title": "محول SVG", "save": "حفظ"},
    "en-US": {"title": "SVGcode", "save": "Save"},
    "en": {"title": "SVGcode (en)", "save": "Save"},
    "fr": {"title": "SVGcode (fr)", "save": "Enregistrer"},
    "fr-FR": {"title": "SVGcode", "save": "Enregistrer", "empty": ""},
    "de": {"title": "SVGcode (de)", "save": "Speichern"},
    "he-IL": {"title": "SVGcode (he)"},
}


@pytest.fixture
def registry() -> BundleRegistry:
    """Registry with an in-memory table per identifier in BUNDLES."""
    reg = BundleRegistry()
    for identifier, messages in BUNDLES.items():
        reg.register_messages(identifier, messages)
    return reg


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def document() -> DocumentAttributes:
    return DocumentAttributes()


@pytest.fixture
def make_resolver(
    registry: BundleRegistry, store: MemoryStore, document: DocumentAttributes
) -> Callable[..., LocaleResolver]:
    """Factory for resolvers sharing the fixture registry, store and document.

    Keyword arguments override the defaults; ``environment`` defaults to a
    callable returning None so tests never depend on the host locale.
    """

    def factory(
        *,
        context: QueryContext | None = None,
        environment: Callable[[], str | None] = lambda: None,
        **kwargs: object,
    ) -> LocaleResolver:
        kwargs.setdefault("store", store)
        kwargs.setdefault("presentation", document)
        return LocaleResolver(
            kwargs.pop("loader", registry),  # type: ignore[arg-type]
            context=context,
            environment=environment,
            **kwargs,  # type: ignore[arg-type]
        )

    return factory
