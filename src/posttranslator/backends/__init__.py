"""Translation backends and their factory."""

from __future__ import annotations

from posttranslator.backends.base import TranslationBackend, TranslationResult
from posttranslator.errors import BackendConfigurationError

BACKEND_NAMES = ("google", "deepl", "dummy")


def create_backend(
    name: str,
    *,
    api_key: str | None = None,
    timeout: float | None = None,
) -> TranslationBackend:
    """Create a translation backend instance by name."""
    normalized = (name or "google").strip().lower()

    if normalized == "dummy":
        from posttranslator.backends.dummy import DummyBackend
        return DummyBackend()
    if normalized == "deepl":
        if not api_key:
            raise BackendConfigurationError(
                "DeepL API key required. Use --api-key or set DEEPL_API_KEY."
            )
        from posttranslator.backends.deepl import DeepLBackend
        return DeepLBackend(api_key)
    if normalized == "google":
        from posttranslator.backends.google import DEFAULT_TIMEOUT, GoogleBackend
        return GoogleBackend(timeout=timeout if timeout is not None else DEFAULT_TIMEOUT)
    raise BackendConfigurationError(
        f"Unknown translation backend '{name}'. Choose one of: {', '.join(BACKEND_NAMES)}."
    )


__all__ = [
    "BACKEND_NAMES",
    "TranslationBackend",
    "TranslationResult",
    "create_backend",
]
