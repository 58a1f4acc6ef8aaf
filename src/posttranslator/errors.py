"""Error definitions for the post translation pipeline."""

from __future__ import annotations


class PostTranslatorError(Exception):
    """Base exception for all custom errors.

    `flag` names the boolean key reported alongside the message in an
    error payload.
    """

    flag = "error"


class EmptyContent(PostTranslatorError):
    """Raised when the request carries no HTML content."""

    flag = "emptyContent"

    def __init__(self, message: str = "Empty Content") -> None:
        super().__init__(message)


class EmptyTargetLocale(PostTranslatorError):
    """Raised when the request does not name a target locale."""

    flag = "emptyTo"

    def __init__(self, message: str = "Empty To") -> None:
        super().__init__(message)


class NothingToTranslate(PostTranslatorError):
    """Raised when extraction produced zero runs.

    The pipeline treats this as a warning: the content is returned untouched.
    """

    flag = "nothingToTranslate"

    def __init__(self, message: str = "Nothing to translate") -> None:
        super().__init__(message)


class ProviderError(PostTranslatorError):
    """Raised when the upstream translation call fails or returns an error status."""

    flag = "providerError"


class AllRunsFailed(PostTranslatorError):
    """Raised in unbatched mode when every concurrent call failed."""

    flag = "allRunsFailed"

    def __init__(self, message: str = "All translation failed") -> None:
        super().__init__(message)


class AlignmentMismatch(PostTranslatorError):
    """Raised when a batched result does not have one line per run sent."""

    flag = "alignmentMismatch"

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Translated text has {received} lines, expected {expected}"
        )
        self.expected = expected
        self.received = received


class BackendConfigurationError(PostTranslatorError):
    """Raised when a translation backend is unknown or misconfigured."""

    flag = "backendConfiguration"


def error_payload(exc: PostTranslatorError) -> dict[str, object]:
    """Build the `{"message": ..., <flag>: True}` body for a failed request."""
    return {"message": str(exc), exc.flag: True}
