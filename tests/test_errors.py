"""Tests for the error taxonomy and its response payloads."""

from posttranslator.errors import (
    AlignmentMismatch,
    AllRunsFailed,
    EmptyContent,
    EmptyTargetLocale,
    PostTranslatorError,
    ProviderError,
    error_payload,
)


class TestErrorPayload:
    def test_empty_content(self):
        assert error_payload(EmptyContent()) == {"message": "Empty Content", "emptyContent": True}

    def test_empty_to(self):
        assert error_payload(EmptyTargetLocale()) == {"message": "Empty To", "emptyTo": True}

    def test_all_failed(self):
        assert error_payload(AllRunsFailed()) == {
            "message": "All translation failed",
            "allRunsFailed": True,
        }

    def test_provider_message_kept(self):
        payload = error_payload(ProviderError("HTTP 503"))
        assert payload["message"] == "HTTP 503"
        assert payload["providerError"] is True

    def test_alignment_counts(self):
        exc = AlignmentMismatch(expected=3, received=2)
        assert (exc.expected, exc.received) == (3, 2)
        assert str(exc) == "Translated text has 2 lines, expected 3"
        assert isinstance(exc, PostTranslatorError)
