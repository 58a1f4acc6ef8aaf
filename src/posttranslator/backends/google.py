"""Google Translate web endpoint backend."""

from __future__ import annotations

import logging

import requests

from posttranslator.backends.base import TranslationBackend, TranslationResult
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION
from posttranslator.errors import ProviderError

logger = logging.getLogger(__name__)

# The region is the Google TLD ("com", "co.jp", ...)
ENDPOINT = "https://translate.google.{region}/translate_a/single"
DEFAULT_TIMEOUT = 10.0


class GoogleBackend(TranslationBackend):
    """Translation backend using Google's public `translate_a/single` endpoint.

    The source language is always auto-detected; the detected code is read
    back from the response.
    """

    name = "google"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def translate_query(
        self,
        query: str,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> TranslationResult:
        url = ENDPOINT.format(region=provider_region)
        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": target_locale,
            "dt": "t",
            "q": query,
        }
        logger.debug("POST %s (to=%s, %d chars)", url, target_locale, len(query))
        try:
            response = self._session.post(url, data=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ProviderError(f"Translation request failed: {exc}") from exc

        if response.status_code != 200:
            raise ProviderError(
                f"Translation provider returned HTTP {response.status_code}"
            )

        try:
            return _parse_payload(response.json())
        except (ValueError, TypeError, IndexError, KeyError) as exc:
            raise ProviderError(f"Unexpected translation payload: {exc}") from exc


def _parse_payload(payload: list) -> TranslationResult:
    """Extract text and detected language from the nested-list response.

    Shape: `[[[translated, original, ...], ...], None, "en", ...]`. Sentences
    come back as separate segments and are concatenated in order.
    """
    segments = payload[0] or []
    text = "".join(segment[0] for segment in segments if segment and segment[0])
    source = payload[2] if len(payload) > 2 and isinstance(payload[2], str) else ""
    return TranslationResult(text=text, source_language=source)
