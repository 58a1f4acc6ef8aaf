"""CLI interface for posttranslator using Typer."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from posttranslator import __version__
from posttranslator.backends import BACKEND_NAMES, create_backend
from posttranslator.core.constants import DEFAULT_PROVIDER_REGION
from posttranslator.errors import PostTranslatorError, error_payload
from posttranslator.translation.batching import DEFAULT_MAX_WORKERS

app = typer.Typer(
    name="posttranslator",
    help="Translate HTML social-media posts while preserving their markup.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _read_content(file: Path) -> str:
    if str(file) == "-":
        return sys.stdin.read()
    if not file.exists():
        err_console.print(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)
    return file.read_text(encoding="utf-8")


def _emit(payload: dict, output: Path | None) -> None:
    """Write JSON to --output, or to stdout without rich markup processing."""
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
    else:
        typer.echo(text)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"posttranslator {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="LOG_LEVEL", help="Logging level: DEBUG, INFO, WARNING, ERROR.",
    ),
) -> None:
    """posttranslator: Translate HTML posts through an upstream translation provider."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def translate(
    file: Path = typer.Argument(
        ..., help="HTML file holding the post content, or - for stdin.",
    ),
    to: str = typer.Option(
        ..., "--to", "-t",
        help="Target locale (e.g. fr, ja, zh-TW).",
    ),
    display_locale: str | None = typer.Option(
        None, "--display-locale",
        help="Locale for language names. Defaults to the target locale.",
    ),
    backend_name: str = typer.Option(
        "google", "--backend", "-b",
        envvar="TRANSLATION_BACKEND", help=f"Backend: {', '.join(BACKEND_NAMES)}.",
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k",
        envvar="DEEPL_API_KEY", help="DeepL API key.",
    ),
    tld: str = typer.Option(
        DEFAULT_PROVIDER_REGION, "--tld",
        envvar="TRANSLATION_GOOGLE_TLD", help="Provider region (Google TLD).",
    ),
    batch: bool = typer.Option(
        True, "--batch/--no-batch",
        envvar="TRANSLATION_BATCH",
        help="Send all runs in one call, or one concurrent call per text node.",
    ),
    document_id: str | None = typer.Option(
        None, "--document-id",
        help="Post identifier; enables the response cache.",
    ),
    edited_at: str | None = typer.Option(
        None, "--edited-at",
        help="Post edit timestamp, part of the cache key.",
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Disable the response cache.",
    ),
    cache_db: Path | None = typer.Option(
        None, "--cache-db",
        envvar="TRANSLATION_CACHE_DB", help="Path to the SQLite response cache.",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help="Write the response JSON to this file instead of stdout.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-r",
        help="Save the diagnostic report to file (json/md).",
    ),
    include_content: bool = typer.Option(
        False, "--include-content",
        help="Log the request content on success too.",
    ),
    timeout: float = typer.Option(
        10.0, "--timeout",
        envvar="TRANSLATION_TIMEOUT", help="Upstream request timeout in seconds.",
    ),
    max_workers: int = typer.Option(
        DEFAULT_MAX_WORKERS, "--max-workers",
        envvar="TRANSLATION_MAX_WORKERS", help="Concurrent calls in --no-batch mode.",
    ),
) -> None:
    """Translate an HTML post and print the JSON response."""
    from posttranslator.pipeline import TranslationRequest, translate_content
    from posttranslator.reporting.formatters import save_report
    from posttranslator.reporting.report import TranslationReport
    from posttranslator.translation.cache import ResponseCache

    content = _read_content(file)

    try:
        backend = create_backend(backend_name, api_key=api_key, timeout=timeout)
    except PostTranslatorError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from None

    request = TranslationRequest(
        content=content,
        target_locale=to,
        provider_region=tld,
        batch=batch,
        document_id=document_id,
        edited_at=edited_at,
        display_locale=display_locale,
    )

    cache = None
    if not no_cache and document_id is not None:
        cache = ResponseCache(cache_db)

    diagnostic = TranslationReport()
    try:
        response = translate_content(
            request,
            backend,
            cache=cache,
            report=diagnostic,
            max_workers=max_workers,
            include_content=include_content,
        )
    except PostTranslatorError as exc:
        _emit(error_payload(exc), output)
        raise typer.Exit(1) from None
    finally:
        if cache is not None:
            cache.close()
        if report is not None:
            save_report(diagnostic, report)

    _emit(response.to_dict(), output)


@app.command()
def scan(
    file: Path = typer.Argument(..., help="HTML file to scan, or - for stdin."),
    batch: bool = typer.Option(
        True, "--batch/--no-batch",
        help="Show runs as the batched (per line) or unbatched (per node) mode sends them.",
    ),
) -> None:
    """List the runs that would be sent upstream."""
    from posttranslator.pipeline import prepare_runs

    content = _read_content(file)
    fragment, runs, bypassed = prepare_runs(content, batch=batch)

    console.print(
        f"Found [green]{len(runs)}[/green] runs, "
        f"[yellow]{bypassed}[/yellow] bypassed elements\n"
    )

    table = Table(title=f"Translatable runs in {file.name}")
    table.add_column("Group", style="dim")
    table.add_column("Node", style="dim")
    table.add_column("Lead")
    table.add_column("Trail")
    table.add_column("Text")

    for run in runs:
        table.add_row(
            str(run.group_index),
            str(run.node_index),
            "yes" if run.leading_space else "",
            "yes" if run.trailing_space else "",
            run.query[:60],
        )

    console.print(table)


@app.command(name="cache-info")
def cache_info(
    cache_db: Path | None = typer.Option(
        None, "--cache-db", envvar="TRANSLATION_CACHE_DB",
        help="Path to the SQLite response cache.",
    ),
) -> None:
    """Show response cache statistics."""
    from posttranslator.translation.cache import ResponseCache

    cache = ResponseCache(cache_db)
    count = cache.count()
    console.print(f"Cached responses: [green]{count}[/green]")
    console.print(f"Cache location: [dim]{cache.path}[/dim]")
    cache.close()


@app.command(name="cache-clear")
def cache_clear(
    cache_db: Path | None = typer.Option(
        None, "--cache-db", envvar="TRANSLATION_CACHE_DB",
        help="Path to the SQLite response cache.",
    ),
    expired_only: bool = typer.Option(
        False, "--expired-only", help="Only drop entries past their expiry.",
    ),
) -> None:
    """Clear the response cache."""
    from posttranslator.translation.cache import ResponseCache

    cache = ResponseCache(cache_db)
    deleted = cache.purge_expired() if expired_only else cache.clear()
    console.print(f"Cleared [yellow]{deleted}[/yellow] cached responses.")
    cache.close()


if __name__ == "__main__":
    app()
