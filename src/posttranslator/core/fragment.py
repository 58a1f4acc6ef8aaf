"""Parsed HTML fragment with an index-addressed node arena.

The fragment is touched by three phases (bypass annotation, extraction and
reassembly). Runs refer to text nodes by arena index rather than by object,
so replacing a text node during reassembly keeps every other reference valid.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

from posttranslator.core.constants import TRANSLATABLE_TAGS, NodeKind

# The content is wrapped in a synthetic root so top-level text is reachable
_WRAPPER = "<div>{}</div>"


@dataclass
class Node:
    """One arena slot.

    `element` is swapped when the text of a TEXT node is rewritten; index,
    kind, parent and children never change until the arena is rebuilt.
    """

    index: int
    kind: NodeKind
    element: PageElement
    parent: int | None = None
    children: list[int] = field(default_factory=list)


def classify(element: PageElement) -> NodeKind:
    """Resolve the category of a parsed element."""
    if isinstance(element, Tag):
        if element.name in TRANSLATABLE_TAGS:
            return NodeKind.CONTAINER
        return NodeKind.OPAQUE
    # Comment, CData, Doctype etc. subclass NavigableString; only plain text counts
    if type(element) is NavigableString:
        return NodeKind.TEXT
    return NodeKind.OPAQUE


class Fragment:
    """An HTML fragment parsed once per request and serialized back at the end."""

    ROOT = 0

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup
        self.root: Tag = soup.contents[0]  # type: ignore[assignment]
        self.nodes: list[Node] = []
        self.reindex()

    @classmethod
    def parse(cls, content: str) -> Fragment:
        return cls(BeautifulSoup(_WRAPPER.format(content), "html.parser"))

    def reindex(self) -> None:
        """Rebuild the arena in document order. Call after structural edits."""
        self.nodes = []
        stack: list[tuple[PageElement, int | None]] = [(self.root, None)]
        while stack:
            element, parent = stack.pop()
            node = Node(index=len(self.nodes), kind=classify(element), element=element, parent=parent)
            self.nodes.append(node)
            if parent is not None:
                self.nodes[parent].children.append(node.index)
            if isinstance(element, Tag):
                # Reversed so children pop off the stack in document order
                for child in reversed(element.contents):
                    stack.append((child, node.index))

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def kind(self, index: int) -> NodeKind:
        return self.nodes[index].kind

    def children(self, index: int) -> list[int]:
        return self.nodes[index].children

    def tag_name(self, index: int) -> str | None:
        element = self.nodes[index].element
        return element.name if isinstance(element, Tag) else None

    def classes(self, index: int) -> list[str]:
        element = self.nodes[index].element
        if not isinstance(element, Tag):
            return []
        return list(element.get("class") or [])

    def has_class(self, index: int, name: str) -> bool:
        return name in self.classes(index)

    def text(self, index: int) -> str:
        return str(self.nodes[index].element)

    def set_text(self, index: int, value: str) -> None:
        """Replace the content of a text node in place."""
        node = self.nodes[index]
        if node.kind is not NodeKind.TEXT:
            raise ValueError(f"Node {index} is not a text node ({node.kind.value})")
        replacement = NavigableString(value)
        node.element.replace_with(replacement)
        node.element = replacement

    def new_tag(self, name: str, classes: list[str] | None = None) -> Tag:
        attrs = {"class": list(classes)} if classes else {}
        return self._soup.new_tag(name, attrs=attrs)

    def select(self, selector: str) -> list[Tag]:
        """CSS selection below the synthetic root."""
        return list(self.root.select(selector))

    def tags(self) -> list[Tag]:
        return [node.element for node in self.nodes if isinstance(node.element, Tag)]

    def to_html(self) -> str:
        return self.root.decode_contents()
