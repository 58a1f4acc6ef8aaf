"""Walk a parsed fragment and extract translatable runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from posttranslator.core.constants import BYPASS_CLASS, LINE_SEPARATOR, NodeKind
from posttranslator.core.fragment import Fragment


@dataclass
class QualifiedNode:
    """A text node selected by the walker, with options inherited from its ancestors."""

    node_index: int
    options: dict[str, object] = field(default_factory=dict)


@dataclass
class Run:
    """One trimmed line of text bound to the arena index of its source node.

    `group_index` is the position of the source node in the walker output;
    runs sharing it are merged back into that node.
    """

    node_index: int
    query: str
    leading_space: bool = False
    trailing_space: bool = False
    group_index: int = 0


def walk(
    fragment: Fragment,
    start: int = Fragment.ROOT,
    options: dict[str, object] | None = None,
) -> list[QualifiedNode]:
    """Collect qualifying text nodes in document order.

    Containers carrying the bypass class are skipped without visiting any of
    their descendants. Opaque elements are never entered. `options` are
    inherited by every collected node below `start`.
    """
    results: list[QualifiedNode] = []
    _walk_node(fragment, start, results, options)
    return results


def _walk_node(
    fragment: Fragment,
    index: int,
    results: list[QualifiedNode],
    outer_options: dict[str, object] | None,
) -> None:
    kind = fragment.kind(index)
    if kind is NodeKind.TEXT:
        if fragment.text(index).strip():
            results.append(QualifiedNode(index, dict(outer_options or {})))
    elif kind is NodeKind.CONTAINER:
        if fragment.has_class(index, BYPASS_CLASS):
            return
        for child in fragment.children(index):
            _walk_node(fragment, child, results, outer_options)


def split_query(line: str) -> tuple[str, bool, bool]:
    """Trim exactly one leading and one trailing space.

    Returns:
        (query, leading_space, trailing_space)
    """
    leading = line.startswith(" ")
    if leading:
        line = line[1:]
    trailing = line.endswith(" ")
    if trailing:
        line = line[:-1]
    return line, leading, trailing


def extract_runs(
    fragment: Fragment,
    nodes: list[QualifiedNode],
    *,
    split_lines: bool = True,
) -> list[Run]:
    """Turn qualifying nodes into runs.

    With `split_lines`, each newline-separated line of a node becomes its own
    run; otherwise the whole node text is a single run. Blank lines produce
    no run.
    """
    runs: list[Run] = []
    for group_index, qualified in enumerate(nodes):
        text = fragment.text(qualified.node_index)
        lines = text.split(LINE_SEPARATOR) if split_lines else [text]
        for line in lines:
            query, leading, trailing = split_query(line)
            if not query.strip():
                continue
            runs.append(
                Run(
                    node_index=qualified.node_index,
                    query=query,
                    leading_space=leading,
                    trailing_space=trailing,
                    group_index=group_index,
                )
            )
    return runs
