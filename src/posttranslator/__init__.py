"""posttranslator: translate HTML social-media posts while keeping their markup."""

__version__ = "0.3.0"
