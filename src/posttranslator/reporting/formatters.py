"""Output formatters for translation reports."""

from __future__ import annotations

import json
from pathlib import Path

from posttranslator.reporting.report import TranslationReport


def to_json(report: TranslationReport, indent: int | None = 2) -> str:
    """Format report as JSON string."""
    return json.dumps(report.to_dict(), indent=indent, default=str, ensure_ascii=False)


def to_markdown(report: TranslationReport) -> str:
    """Format report as Markdown."""
    lines = [
        "# Translation Report",
        "",
        "| Field | Value |",
        "|-------|-------|",
        f"| Document | `{report.status}` |",
        f"| Edited at | {report.edit} |",
        f"| Target language | {report.to} |",
        f"| Backend | {report.backend} |",
        f"| Region | {report.tld} |",
        f"| Batched | {report.batch} |",
        f"| From cache | {report.from_cache} |",
        "",
        "## Statistics",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Text nodes | {report.total_nodes} |",
        f"| Runs sent | {report.total_runs} |",
        f"| Nodes translated | {report.nodes_translated} |",
        f"| Bypassed elements | {report.bypassed} |",
        f"| Duration | {report.duration_seconds:.1f}s |",
    ]

    if report.error:
        lines.extend(["", "## Failure", "", report.error])

    if report.errors:
        lines.extend([
            "",
            "## Warnings",
            "",
        ])
        for err in report.errors:
            lines.append(f"- {err}")

    return "\n".join(lines) + "\n"


def save_report(report: TranslationReport, path: str | Path) -> None:
    """Save report to file, auto-detecting format from extension."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".md", ".markdown"):
        content = to_markdown(report)
    else:
        content = to_json(report)

    path.write_text(content, encoding="utf-8")
