"""Abstract base class for translation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from posttranslator.core.constants import DEFAULT_PROVIDER_REGION


@dataclass(frozen=True)
class TranslationResult:
    """Translated text plus the source language the provider detected."""

    text: str
    source_language: str


class TranslationBackend(ABC):
    """Interface for translation backends."""

    name = "base"

    @abstractmethod
    def translate_query(
        self,
        query: str,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> TranslationResult:
        """Translate a non-empty query.

        Args:
            query: Text to translate; may contain newline-separated lines.
            target_locale: Target locale code (e.g. "fr", "zh-TW").
            provider_region: Provider-specific region, e.g. a Google TLD.

        Returns:
            TranslationResult with the translated text and detected source language.

        Raises:
            ProviderError: if the upstream call fails or answers with an error status.
        """
        ...

    def translate(
        self,
        query: str,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> TranslationResult:
        """Translate a query. An empty query never reaches the provider."""
        if not query:
            return TranslationResult(text="", source_language="")
        return self.translate_query(query, target_locale, provider_region)
