"""Shared pipeline logic for translating one HTML post.

Used by the CLI (cli.py) and by any service embedding the package. The
phases are: parse -> bypass annotation -> walk -> extract runs -> batch
translate -> reassemble -> bypass cleanup -> language aggregation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from posttranslator.backends.base import TranslationBackend
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION
from posttranslator.core.fragment import Fragment
from posttranslator.errors import EmptyContent, EmptyTargetLocale, NothingToTranslate
from posttranslator.reporting.formatters import to_json
from posttranslator.reporting.report import TranslationReport
from posttranslator.translation import bypass
from posttranslator.translation.batching import DEFAULT_MAX_WORKERS, select_strategy
from posttranslator.translation.cache import ResponseCache, make_cache_key
from posttranslator.translation.extractor import Run, extract_runs, walk
from posttranslator.translation.languages import LanguageShare, aggregate, resolve_unknown
from posttranslator.translation.patcher import apply_translations

logger = logging.getLogger(__name__)


@dataclass
class TranslationRequest:
    """What the surrounding service asks for."""

    content: str
    target_locale: str
    provider_region: str = DEFAULT_PROVIDER_REGION
    batch: bool = True
    document_id: object = None
    edited_at: object = None
    # Locale the language names are written in; defaults to the target locale
    display_locale: str | None = None

    @property
    def names_locale(self) -> str:
        return self.display_locale or self.target_locale

    def cache_key(self) -> str | None:
        if self.document_id is None:
            return None
        return make_cache_key(
            self.document_id,
            self.edited_at,
            self.target_locale,
            self.provider_region,
            self.batch,
        )


@dataclass
class TranslationResponse:
    """Translated HTML plus the source-language breakdown."""

    text: str
    from_languages: list[LanguageShare] = field(default_factory=list)
    to: str = ""

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "from": [share.to_dict() for share in self.from_languages],
            "to": self.to,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> TranslationResponse:
        shares = [
            LanguageShare(
                language=item["language"],
                percentage=item["percentage"],
                display_name=item["displayName"],
            )
            for item in data.get("from", [])
        ]
        return cls(text=data["text"], from_languages=shares, to=data["to"])


def validate_request(request: TranslationRequest) -> None:
    if not request.content:
        raise EmptyContent()
    if not request.target_locale:
        raise EmptyTargetLocale()


def prepare_runs(content: str, batch: bool = True) -> tuple[Fragment, list[Run], int]:
    """Parse, annotate and extract without translating.

    Returns:
        (fragment, runs, number of bypassed elements)
    """
    fragment = Fragment.parse(content)
    bypassed = bypass.annotate(fragment)
    strategy = select_strategy(batch)
    runs = extract_runs(fragment, walk(fragment), split_lines=strategy.split_lines)
    return fragment, runs, bypassed


def translate_content(
    request: TranslationRequest,
    backend: TranslationBackend,
    *,
    cache: ResponseCache | None = None,
    report: TranslationReport | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    include_content: bool = False,
) -> TranslationResponse:
    """Translate one HTML post, preserving its markup.

    Args:
        request: Content, target locale and provider options.
        backend: Upstream translation backend.
        cache: Optional response cache; used only when the request names a document.
        report: Report to fill in; a fresh one is used when omitted.
        max_workers: Fan-out limit for unbatched mode.
        include_content: Keep the request content in the success log line.

    Raises:
        PostTranslatorError subclasses for invalid requests and failed translations.
    """
    validate_request(request)

    if report is None:
        report = TranslationReport()
    report.to = request.target_locale
    report.status = request.document_id
    report.edit = request.edited_at
    report.batch = request.batch
    report.tld = request.provider_region
    report.backend = backend.name

    key = request.cache_key() if cache is not None else None
    if key is not None:
        cached = cache.get(key)
        if cached is not None:
            report.from_cache = True
            report.finish()
            logger.info("[cache] %s", to_json(report, indent=None))
            return TranslationResponse.from_dict(json.loads(cached))

    try:
        response = _translate(request, backend, report, max_workers)
    except Exception as exc:
        report.error = str(exc)
        report.content = request.content
        report.finish()
        logger.error("[error] %s", to_json(report, indent=None))
        raise

    if include_content:
        report.content = request.content
    report.finish()
    logger.info("[success] %s", to_json(report, indent=None))

    if key is not None:
        cache.put(key, response.to_json())
    return response


def _translate(
    request: TranslationRequest,
    backend: TranslationBackend,
    report: TranslationReport,
    max_workers: int,
) -> TranslationResponse:
    fragment = Fragment.parse(request.content)
    report.bypassed = bypass.annotate(fragment)

    strategy = select_strategy(request.batch, max_workers)
    nodes = walk(fragment)
    runs = extract_runs(fragment, nodes, split_lines=strategy.split_lines)
    report.total_nodes = len(nodes)
    report.total_runs = len(runs)

    languages: list[str] = []
    try:
        outcome = strategy.translate(
            runs, backend, request.target_locale, request.provider_region,
        )
    except NothingToTranslate as exc:
        report.errors.append(str(exc))
    else:
        report.errors.extend(outcome.errors)
        report.nodes_translated = apply_translations(fragment, runs, outcome.translations)
        languages = outcome.languages

    bypass.cleanup(fragment)

    shares = aggregate(languages, request.names_locale)
    resolve_unknown(shares, backend, request.names_locale, request.provider_region)

    return TranslationResponse(
        text=fragment.to_html(),
        from_languages=shares,
        to=request.target_locale,
    )
