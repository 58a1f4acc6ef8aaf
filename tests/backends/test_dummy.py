"""Tests for the dummy backend."""

from posttranslator.backends.dummy import DummyBackend


class TestDummyBackend:
    def test_tags_each_line(self):
        result = DummyBackend().translate("Hello\nworld", "fr")
        assert result.text == "[FR] Hello\n[FR] world"
        assert result.source_language == "en"

    def test_line_count_preserved(self):
        result = DummyBackend().translate("a\nb\nc", "ja")
        assert len(result.text.split("\n")) == 3

    def test_custom_source_language(self):
        assert DummyBackend(source_language="de").translate("Hallo", "en").source_language == "de"

    def test_empty_query(self):
        result = DummyBackend().translate("", "fr")
        assert result.text == ""
        assert result.source_language == ""
