"""Dummy translation backend for testing: prefixes every line with a [XX] tag."""

from __future__ import annotations

from posttranslator.backends.base import TranslationBackend, TranslationResult
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION, LINE_SEPARATOR


class DummyBackend(TranslationBackend):
    """Test backend that tags each line with the target locale.

    Example: "Hello\\nworld" -> "[FR] Hello\\n[FR] world"
    """

    name = "dummy"

    def __init__(self, source_language: str = "en") -> None:
        self.source_language = source_language

    def translate_query(
        self,
        query: str,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> TranslationResult:
        tag = f"[{target_locale.upper()}]"
        lines = [f"{tag} {line}" for line in query.split(LINE_SEPARATOR)]
        return TranslationResult(
            text=LINE_SEPARATOR.join(lines),
            source_language=self.source_language,
        )
