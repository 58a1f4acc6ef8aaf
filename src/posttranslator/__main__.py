"""Allow running as python -m posttranslator."""

from posttranslator.cli import app

app()
