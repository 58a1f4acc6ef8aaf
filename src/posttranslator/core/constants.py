"""Constants for HTML post fragments as rendered by Mastodon-style servers."""

from enum import Enum

# Elements whose children may hold translatable text. Everything else
# (code, pre, script, style, img, br, ...) is opaque and never descended into.
TRANSLATABLE_TAGS = frozenset({
    "div", "em", "span", "a",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "p",
    "i", "strong", "b", "del", "s", "blockquote",
})

# Class added to subtrees that must never be sent upstream
BYPASS_CLASS = "translation-bypass"

# Wrapper class for the "#" of a hashtag link
HASH_CHAR_CLASS = "hash_char"

# Markup produced by the server's link formatter
BYPASS_SELECTORS = (
    "a span.invisible",     # scheme and tail of shortened links
    "a span.ellipsis",      # visible middle part of shortened links
    "a.u-url.mention.status-link",  # @user mentions
)

HASHTAG_SELECTOR = "a.mention.hashtag"

UNKNOWN_LANGUAGE = "unknown"

# Text sent upstream to render the display name of the unknown bucket
UNKNOWN_LANGUAGE_PHRASE = "Unknown language"

DEFAULT_PROVIDER_REGION = "com"

# Separator between runs in a batched query and between lines of one node
LINE_SEPARATOR = "\n"


class NodeKind(Enum):
    """Category of a fragment node, resolved once when the arena is built."""
    TEXT = "text"
    CONTAINER = "container"
    OPAQUE = "opaque"
