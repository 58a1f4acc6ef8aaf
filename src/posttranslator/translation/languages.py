"""Aggregate detected source languages into a ranked percentage breakdown."""

from __future__ import annotations

from dataclasses import dataclass

import langcodes

from posttranslator.backends.base import TranslationBackend
from posttranslator.core.constants import (
    DEFAULT_PROVIDER_REGION,
    UNKNOWN_LANGUAGE,
    UNKNOWN_LANGUAGE_PHRASE,
)

# Regional Chinese variants collapse to a script bucket
_SIMPLIFIED_CHINESE = {"zh-cn", "zh-sg"}
_TRADITIONAL_CHINESE = {"zh-hk", "zh-tw"}


@dataclass
class LanguageShare:
    """One bucket of the source-language mixture."""

    language: str
    percentage: str
    display_name: str
    count: int = 0

    def to_dict(self) -> dict[str, str]:
        return {
            "language": self.language,
            "percentage": self.percentage,
            "displayName": self.display_name,
        }


def normalize_code(code: str) -> str:
    lowered = code.lower()
    if lowered in _SIMPLIFIED_CHINESE:
        return "zh-Hans"
    if lowered in _TRADITIONAL_CHINESE:
        return "zh-Hant"
    return code


def display_name(code: str, locale: str) -> str:
    """Name of a language written in `locale`, e.g. ("de", "fr") -> "allemand".

    Malformed tags fall back to the code itself.
    """
    if not code or code == UNKNOWN_LANGUAGE:
        return UNKNOWN_LANGUAGE_PHRASE
    try:
        return langcodes.Language.get(normalize_code(code)).display_name(locale)
    except ValueError:
        return code


def tally(languages: list[str]) -> dict[str, int]:
    """Count occurrences in first-seen order. An empty code counts as unknown."""
    counts: dict[str, int] = {}
    for code in languages:
        key = code or UNKNOWN_LANGUAGE
        counts[key] = counts.get(key, 0) + 1
    return counts


def format_percentage(count: int, total: int) -> str:
    """Percentage with at most one decimal. A real occurrence never rounds to 0."""
    # Round half up, matching how the breakdown has always been displayed
    permille = max(int(count * 1000 / total + 0.5), 1)
    whole, tenth = divmod(permille, 10)
    if tenth:
        return f"{whole}.{tenth}%"
    return f"{whole}%"


def aggregate(languages: list[str], locale: str) -> list[LanguageShare]:
    """Rank languages by count (ties keep first-seen order) with display names in `locale`.

    An empty sample list yields a single 100% unknown bucket.
    """
    counts = tally(languages)
    if not counts:
        return [
            LanguageShare(
                language=UNKNOWN_LANGUAGE,
                percentage="100%",
                display_name=display_name(UNKNOWN_LANGUAGE, locale),
            )
        ]

    total = len(languages)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        LanguageShare(
            language=code,
            percentage=format_percentage(count, total),
            display_name=display_name(code, locale),
            count=count,
        )
        for code, count in ranked
    ]


def resolve_unknown(
    shares: list[LanguageShare],
    backend: TranslationBackend,
    locale: str,
    provider_region: str = DEFAULT_PROVIDER_REGION,
) -> bool:
    """Render the unknown bucket's name by translating the phrase into `locale`.

    Returns:
        True if an unknown bucket was found and renamed.
    """
    for share in shares:
        if share.language == UNKNOWN_LANGUAGE:
            result = backend.translate(UNKNOWN_LANGUAGE_PHRASE, locale, provider_region)
            share.display_name = result.text
            return True
    return False
