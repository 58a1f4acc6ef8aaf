"""Tests for the fragment node arena."""

import pytest

from posttranslator.core.constants import NodeKind
from posttranslator.core.fragment import Fragment, classify


class TestFragmentParse:
    def test_root_is_synthetic_container(self):
        fragment = Fragment.parse("<p>Hi</p>")
        assert fragment.kind(Fragment.ROOT) is NodeKind.CONTAINER
        assert fragment.tag_name(Fragment.ROOT) == "div"

    def test_arena_in_document_order(self):
        fragment = Fragment.parse("<p>Hi <em>there</em></p><p>you</p>")
        texts = [fragment.text(n.index) for n in fragment if n.kind is NodeKind.TEXT]
        assert texts == ["Hi ", "there", "you"]

    def test_children_and_parent_links(self):
        fragment = Fragment.parse("<p>Hi</p>")
        (p_index,) = fragment.children(Fragment.ROOT)
        assert fragment.tag_name(p_index) == "p"
        (text_index,) = fragment.children(p_index)
        assert fragment.nodes[text_index].parent == p_index
        assert fragment.text(text_index) == "Hi"

    def test_top_level_text_is_reachable(self):
        fragment = Fragment.parse("plain text")
        (index,) = fragment.children(Fragment.ROOT)
        assert fragment.kind(index) is NodeKind.TEXT

    def test_round_trip_serialization(self):
        html = '<p>Hello <a href="https://example.com" class="a b">link</a><br/>bye</p>'
        assert Fragment.parse(html).to_html() == html

    def test_len(self):
        fragment = Fragment.parse("<p>Hi</p>")
        assert len(fragment) == 3


class TestClassify:
    @pytest.mark.parametrize("tag", ["p", "span", "a", "blockquote", "h3", "li", "del"])
    def test_translatable_tags_are_containers(self, tag):
        fragment = Fragment.parse(f"<{tag}>x</{tag}>")
        (index,) = fragment.children(Fragment.ROOT)
        assert fragment.kind(index) is NodeKind.CONTAINER

    @pytest.mark.parametrize("html", [
        "<code>x = 1</code>",
        "<pre>text</pre>",
        "<script>alert(1)</script>",
        "<img src='a.png'/>",
        "<!-- note -->",
    ])
    def test_other_nodes_are_opaque(self, html):
        fragment = Fragment.parse(html)
        (index,) = fragment.children(Fragment.ROOT)
        assert fragment.kind(index) is NodeKind.OPAQUE

    def test_classify_plain_string(self):
        fragment = Fragment.parse("<p>x</p>")
        text_node = fragment.nodes[-1]
        assert classify(text_node.element) is NodeKind.TEXT


class TestSetText:
    def test_set_text_replaces_content(self):
        fragment = Fragment.parse("<p>Hello <b>world</b></p>")
        index = next(n.index for n in fragment if n.kind is NodeKind.TEXT)
        fragment.set_text(index, "Bonjour ")
        assert fragment.to_html() == "<p>Bonjour <b>world</b></p>"

    def test_indices_survive_replacement(self):
        fragment = Fragment.parse("<p>one</p><p>two</p>")
        first, second = [n.index for n in fragment if n.kind is NodeKind.TEXT]
        fragment.set_text(first, "un")
        fragment.set_text(second, "deux")
        fragment.set_text(first, "uno")
        assert fragment.text(first) == "uno"
        assert fragment.to_html() == "<p>uno</p><p>deux</p>"

    def test_text_is_escaped_on_output(self):
        fragment = Fragment.parse("<p>x</p>")
        index = fragment.nodes[-1].index
        fragment.set_text(index, "a < b & c")
        assert fragment.to_html() == "<p>a &lt; b &amp; c</p>"

    def test_set_text_on_element_raises(self):
        fragment = Fragment.parse("<p>x</p>")
        with pytest.raises(ValueError):
            fragment.set_text(Fragment.ROOT, "nope")


class TestSelection:
    def test_select_and_classes(self):
        fragment = Fragment.parse('<p><span class="invisible extra">x</span></p>')
        (span,) = fragment.select("span.invisible")
        assert span.get("class") == ["invisible", "extra"]
        index = next(n.index for n in fragment if n.element is span)
        assert fragment.has_class(index, "extra")
        assert not fragment.has_class(index, "missing")

    def test_classes_of_text_node_empty(self):
        fragment = Fragment.parse("<p>x</p>")
        assert fragment.classes(fragment.nodes[-1].index) == []
