"""Apply translations back to the fragment's text nodes."""

from __future__ import annotations

import re

from posttranslator.core.constants import LINE_SEPARATOR
from posttranslator.core.fragment import Fragment
from posttranslator.errors import AlignmentMismatch
from posttranslator.translation.extractor import Run

# Some providers leave a space after a full-width colon at the end of a line
_RE_FULLWIDTH_COLON_SPACE = re.compile(r"：\s$")


def normalize_line(text: str, leading_space: bool, trailing_space: bool) -> str:
    """Re-apply the spaces trimmed at extraction to one translated line."""
    result = text.strip()
    result = f"{' ' if leading_space else ''}{result}{' ' if trailing_space else ''}"
    return _RE_FULLWIDTH_COLON_SPACE.sub("：", result)


def merge_groups(runs: list[Run], translations: list[str | None]) -> dict[int, tuple[int, str]]:
    """Build the new text for each source node.

    Lines of the same group are joined with a line break in encounter order.
    Runs without a translation are left out; a group with none is absent.

    Returns:
        Mapping of group_index -> (node_index, text).
    """
    if len(runs) != len(translations):
        raise AlignmentMismatch(expected=len(runs), received=len(translations))

    merged: dict[int, tuple[int, str]] = {}
    for run, translated in zip(runs, translations):
        if translated is None:
            continue
        line = normalize_line(translated, run.leading_space, run.trailing_space)
        if run.group_index in merged:
            node_index, text = merged[run.group_index]
            merged[run.group_index] = (node_index, f"{text}{LINE_SEPARATOR}{line}")
        else:
            merged[run.group_index] = (run.node_index, line)
    return merged


def apply_translations(
    fragment: Fragment,
    runs: list[Run],
    translations: list[str | None],
) -> int:
    """Write translated text into the fragment, one write per node.

    Alignment is checked before anything is written, so a mismatch leaves
    the fragment untouched.

    Returns:
        Number of text nodes rewritten.
    """
    merged = merge_groups(runs, translations)
    for node_index, text in merged.values():
        fragment.set_text(node_index, text)
    return len(merged)
