"""Tests for source-language aggregation."""

import pytest

from posttranslator.translation.languages import (
    LanguageShare,
    aggregate,
    display_name,
    format_percentage,
    normalize_code,
    resolve_unknown,
    tally,
)


class TestFormatPercentage:
    @pytest.mark.parametrize("count,total,expected", [
        (1, 1, "100%"),
        (1, 2, "50%"),
        (2, 3, "66.7%"),
        (1, 3, "33.3%"),
        (1, 8, "12.5%"),
    ])
    def test_one_decimal_at_most(self, count, total, expected):
        assert format_percentage(count, total) == expected

    def test_tiny_share_never_zero(self):
        assert format_percentage(1, 5000) == "0.1%"


class TestNormalizeCode:
    @pytest.mark.parametrize("code,expected", [
        ("zh-CN", "zh-Hans"),
        ("zh-sg", "zh-Hans"),
        ("zh-TW", "zh-Hant"),
        ("zh-hk", "zh-Hant"),
        ("ja", "ja"),
    ])
    def test_chinese_variants_collapse(self, code, expected):
        assert normalize_code(code) == expected


class TestDisplayName:
    def test_english_in_english(self):
        assert display_name("en", "en") == "English"

    def test_written_in_target_locale(self):
        assert display_name("de", "fr") == "allemand"

    def test_unknown_uses_phrase(self):
        assert display_name("unknown", "fr") == "Unknown language"
        assert display_name("", "fr") == "Unknown language"


class TestAggregate:
    def test_percentages_and_order(self):
        shares = aggregate(["en", "fr", "en"], "en")
        assert [(s.language, s.percentage) for s in shares] == [
            ("en", "66.7%"),
            ("fr", "33.3%"),
        ]
        assert shares[0].count == 2

    def test_ties_keep_first_seen_order(self):
        shares = aggregate(["fr", "en", "en", "fr", "de"], "en")
        assert [s.language for s in shares] == ["fr", "en", "de"]

    def test_empty_samples_give_unknown_bucket(self):
        shares = aggregate([], "en")
        assert len(shares) == 1
        assert shares[0].language == "unknown"
        assert shares[0].percentage == "100%"

    def test_empty_code_counts_as_unknown(self):
        assert tally(["", "en", ""]) == {"unknown": 2, "en": 1}

    def test_to_dict_keys(self):
        share = LanguageShare(language="en", percentage="100%", display_name="English")
        assert share.to_dict() == {
            "language": "en",
            "percentage": "100%",
            "displayName": "English",
        }


class TestResolveUnknown:
    def test_phrase_translated_into_locale(self, make_backend):
        backend = make_backend(responses={"Unknown language": "Langue inconnue"})
        shares = aggregate([], "fr")
        assert resolve_unknown(shares, backend, "fr", "co.uk")
        assert shares[0].display_name == "Langue inconnue"
        assert backend.calls == [("Unknown language", "fr", "co.uk")]

    def test_no_unknown_bucket_no_call(self, backend):
        shares = aggregate(["en"], "en")
        assert not resolve_unknown(shares, backend, "en")
        assert backend.calls == []
