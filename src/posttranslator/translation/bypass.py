"""Mark subtrees that must never be translated, and unmark them afterwards.

Follows an annotate/cleanup pattern: link decorations, mentions and the "#"
of hashtags get the bypass class before the tree is walked; the class is
stripped again once translated text has been written back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import NavigableString, Tag

from posttranslator.core.constants import (
    BYPASS_CLASS,
    BYPASS_SELECTORS,
    HASH_CHAR_CLASS,
    HASHTAG_SELECTOR,
)
from posttranslator.core.fragment import Fragment

logger = logging.getLogger(__name__)


def _add_class(element: Tag, name: str) -> bool:
    classes = list(element.get("class") or [])
    if name in classes:
        return False
    element["class"] = [*classes, name]
    return True


def _first_hash(element: Tag) -> NavigableString | None:
    for string in element.find_all(string=True):
        if type(string) is NavigableString and "#" in string:
            return string
    return None


def _wrap_hash_char(fragment: Fragment, link: Tag) -> bool:
    """Move the first "#" of a hashtag link into its own bypass span."""
    if link.select_one(f"span.{HASH_CHAR_CLASS}") is not None:
        return False
    string = _first_hash(link)
    if string is None:
        return False

    text = str(string)
    pos = text.index("#")
    wrapper = fragment.new_tag("span", classes=[HASH_CHAR_CLASS, BYPASS_CLASS])
    wrapper.string = "#"

    pieces: list[NavigableString | Tag] = []
    if text[:pos]:
        pieces.append(NavigableString(text[:pos]))
    pieces.append(wrapper)
    if text[pos + 1:]:
        pieces.append(NavigableString(text[pos + 1:]))
    string.replace_with(*pieces)
    return True


def annotate(fragment: Fragment, selectors: Iterable[str] = BYPASS_SELECTORS) -> int:
    """Add the bypass class to every element matching any selector.

    Hashtag links additionally get their "#" wrapped so only the tag word is
    translated. The arena is rebuilt afterwards.

    Returns:
        Number of elements newly marked, wrappers included.
    """
    marked = 0
    selector = ", ".join(selectors)
    if selector:
        for element in fragment.select(selector):
            if _add_class(element, BYPASS_CLASS):
                marked += 1

    for link in fragment.select(HASHTAG_SELECTOR):
        if _wrap_hash_char(fragment, link):
            marked += 1

    fragment.reindex()
    logger.debug("Marked %d element(s) for bypass", marked)
    return marked


def cleanup(fragment: Fragment) -> int:
    """Strip every bypass marker. Running it twice is a no-op."""
    touched = 0
    for element in fragment.root.find_all(class_=BYPASS_CLASS):
        classes = [c for c in element.get("class") or [] if c != BYPASS_CLASS]
        if classes:
            element["class"] = classes
        else:
            del element["class"]
        touched += 1
    return touched
