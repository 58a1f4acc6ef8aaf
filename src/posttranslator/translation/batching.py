"""Batch strategies: one joined upstream call, or one concurrent call per run."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from posttranslator.backends.base import TranslationBackend
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION, LINE_SEPARATOR
from posttranslator.errors import (
    AlignmentMismatch,
    AllRunsFailed,
    NothingToTranslate,
    ProviderError,
)
from posttranslator.translation.extractor import Run

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass
class BatchOutcome:
    """Result of translating a list of runs.

    `translations` is aligned with the runs; a slot is None when that run's
    call failed. `languages` holds one detected-language sample per
    successful upstream call.
    """

    translations: list[str | None] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def translated_count(self) -> int:
        return sum(1 for t in self.translations if t is not None)


class BatchStrategy(ABC):
    """How runs are turned into upstream calls."""

    # Whether runs are extracted per line (True) or per node (False)
    split_lines = True

    @abstractmethod
    def translate(
        self,
        runs: list[Run],
        backend: TranslationBackend,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> BatchOutcome:
        ...


class BatchedStrategy(BatchStrategy):
    """Join every run into one newline-separated query and make exactly one call."""

    split_lines = True

    def translate(
        self,
        runs: list[Run],
        backend: TranslationBackend,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> BatchOutcome:
        if not runs:
            raise NothingToTranslate()

        query = LINE_SEPARATOR.join(run.query for run in runs)
        result = backend.translate(query, target_locale, provider_region)

        lines = result.text.split(LINE_SEPARATOR)
        if len(lines) != len(runs):
            raise AlignmentMismatch(expected=len(runs), received=len(lines))

        # The whole batch counts as a single language sample
        return BatchOutcome(translations=list(lines), languages=[result.source_language])


class UnbatchedStrategy(BatchStrategy):
    """One call per run, all issued concurrently; waits for every call to finish."""

    split_lines = False

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self.max_workers = max(1, max_workers)

    def translate(
        self,
        runs: list[Run],
        backend: TranslationBackend,
        target_locale: str,
        provider_region: str = DEFAULT_PROVIDER_REGION,
    ) -> BatchOutcome:
        if not runs:
            raise NothingToTranslate()

        def _translate_one(run: Run) -> tuple[str | None, str | None, str | None]:
            try:
                result = backend.translate(run.query, target_locale, provider_region)
            except ProviderError as exc:
                return None, None, str(exc)
            return result.text, result.source_language, None

        workers = min(self.max_workers, len(runs))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_translate_one, runs))

        outcome = BatchOutcome()
        for run, (text, language, error) in zip(runs, results):
            outcome.translations.append(text)
            if error is not None:
                logger.warning("Run %r failed: %s", run.query, error)
                outcome.errors.append(error)
            else:
                outcome.languages.append(language or "")

        if outcome.translated_count == 0:
            raise AllRunsFailed()
        return outcome


def select_strategy(batch: bool, max_workers: int = DEFAULT_MAX_WORKERS) -> BatchStrategy:
    """Pick the strategy once per request."""
    if batch:
        return BatchedStrategy()
    return UnbatchedStrategy(max_workers=max_workers)
