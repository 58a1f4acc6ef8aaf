"""DeepL API translation backend."""

from __future__ import annotations

import logging

from posttranslator.backends.base import TranslationBackend, TranslationResult
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION
from posttranslator.errors import BackendConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class DeepLBackend(TranslationBackend):
    """Translation backend using the DeepL API. The provider region is ignored."""

    name = "deepl"

    def __init__(self, api_key: str) -> None:
        try:
            import deepl
        except ImportError:
            raise BackendConfigurationError(
                "DeepL backend requires the 'deepl' package. "
                "Install it with: pip install posttranslator[deepl]"
            ) from None
        self._deepl = deepl
        self._translator = deepl.Translator(api_key)

    def translate_query(
        self,
        query: str,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> TranslationResult:
        logger.debug("DeepL request (to=%s, %d chars)", target_locale, len(query))
        try:
            result = self._translator.translate_text(
                query,
                target_lang=target_locale.upper(),
                preserve_formatting=True,
            )
        except (self._deepl.DeepLException, ConnectionError, TimeoutError) as exc:
            raise ProviderError(f"DeepL request failed: {exc}") from exc

        # translate_text returns a list only when given a list
        if isinstance(result, list):
            result = result[0]
        return TranslationResult(
            text=result.text,
            source_language=(result.detected_source_lang or "").lower(),
        )
