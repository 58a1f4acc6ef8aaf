"""Shared test fixtures for posttranslator tests."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from posttranslator.backends.base import TranslationBackend, TranslationResult
from posttranslator.errors import ProviderError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingBackend(TranslationBackend):
    """Backend that records every upstream call.

    By default each line becomes "[TO] line". `responses` maps a query to a
    canned text, `languages` maps a query to its detected language, and any
    query in `fail_on` raises ProviderError.
    """

    name = "recording"

    def __init__(
        self,
        responses: dict[str, str] | None = None,
        languages: dict[str, str] | None = None,
        source_language: str = "en",
        fail_on: set[str] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.languages = languages or {}
        self.source_language = source_language
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def translate_query(self, query, target_locale, provider_region="com"):
        with self._lock:
            self.calls.append((query, target_locale, provider_region))
        if query in self.fail_on:
            raise ProviderError(f"upstream refused {query!r}")
        if query in self.responses:
            text = self.responses[query]
        else:
            tag = f"[{target_locale.upper()}]"
            text = "\n".join(f"{tag} {line}" for line in query.split("\n"))
        return TranslationResult(
            text=text,
            source_language=self.languages.get(query, self.source_language),
        )

    @property
    def queries(self) -> list[str]:
        return [query for query, _, _ in self.calls]


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def make_backend():
    """Factory for backends with canned responses or failures."""
    return RecordingBackend


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def status_html(fixtures_dir: Path) -> str:
    return (fixtures_dir / "status.html").read_text(encoding="utf-8")


@pytest.fixture
def tmp_cache(tmp_path: Path):
    """Create a temporary response cache."""
    from posttranslator.translation.cache import ResponseCache
    cache = ResponseCache(db_path=tmp_path / "test_cache.db")
    yield cache
    cache.close()
