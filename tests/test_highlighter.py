from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

import pytest

from markdown_highlighter.bitmap import StyleBitmap
from markdown_highlighter.config import ConfigError, HighlightConfig
from markdown_highlighter.exceptions import WrongThreadError
from markdown_highlighter.highlighter import (
    DISPATCH_TABLE,
    StyleProjector,
    compute_highlighting,
    highlight,
)
from markdown_highlighter.nodes import Node, NodeKind
from markdown_highlighter.styles import StyleClass, StyleSpan


def _root(*children: Node, end: int = 0) -> Node:
    return Node(NodeKind.ROOT, 0, end, children)


def _strong(start: int, end: int, *children: Node) -> Node:
    return Node(NodeKind.STRONG_EMPH_SUPER, start, end, children, strong=True)


def _em(start: int, end: int, *children: Node) -> Node:
    return Node(NodeKind.STRONG_EMPH_SUPER, start, end, children, strong=False)


def _header(level: int, start: int, end: int, *children: Node) -> Node:
    return Node(NodeKind.HEADER, start, end, children, level=level)


def test_plain_paragraph_is_unstyled():
    root = _root(Node(NodeKind.PARA, 0, 5, (Node(NodeKind.TEXT, 0, 5),)), end=5)

    assert compute_highlighting(root, 5) == [StyleSpan((), 5)]


def test_single_header():
    root = _root(_header(1, 0, 4, Node(NodeKind.TEXT, 2, 4)), end=7)

    assert compute_highlighting(root, 7) == [StyleSpan(("h1",), 4), StyleSpan((), 3)]


def test_strong_inside_header_composes():
    root = _root(_header(2, 0, 10, _strong(2, 6)), end=10)

    assert compute_highlighting(root, 10) == [
        StyleSpan(("h2",), 2),
        StyleSpan(("strong", "h2"), 4),
        StyleSpan(("h2",), 4),
    ]


def test_emphasis_covers_whole_node():
    root = _root(Node(NodeKind.PARA, 0, 6, (_em(0, 6, Node(NodeKind.TEXT, 1, 5)),)), end=6)

    assert compute_highlighting(root, 6) == [StyleSpan(("em",), 6)]


def test_header_range_is_clipped_to_text_length():
    root = _root(_header(1, 0, 6), end=6)

    assert compute_highlighting(root, 4) == [StyleSpan(("h1",), 4)]


def test_unstyled_variant_leaves_text_plain():
    root = Node(NodeKind.BULLET_LIST, 0, 3)

    assert compute_highlighting(root, 3) == [StyleSpan((), 3)]


def test_empty_text_yields_single_empty_span():
    assert compute_highlighting(_root(), 0) == [StyleSpan((), 0)]


@pytest.mark.parametrize("level", [0, 7])
def test_degenerate_header_is_skipped_with_children(level: int):
    root = _root(_header(level, 0, 6, _strong(0, 3)), end=6)

    assert compute_highlighting(root, 6) == [StyleSpan((), 6)]


def test_strong_emphasis_does_not_descend_into_children():
    nested_header = _header(1, 0, 2)
    root = _root(_strong(0, 4, nested_header), end=4)

    assert compute_highlighting(root, 4) == [StyleSpan(("strong",), 4)]


def test_reserved_variants_do_not_descend():
    root = _root(
        Node(NodeKind.BLOCK_QUOTE, 0, 6, (Node(NodeKind.PARA, 0, 6, (_strong(0, 6),)),)),
        end=6,
    )

    assert compute_highlighting(root, 6) == [StyleSpan((), 6)]


def test_super_and_para_containers_descend():
    root = _root(Node(NodeKind.SUPER, 0, 6, (Node(NodeKind.PARA, 0, 6, (_em(1, 3),)),)), end=6)

    assert compute_highlighting(root, 6) == [
        StyleSpan((), 1),
        StyleSpan(("em",), 2),
        StyleSpan((), 3),
    ]


def test_unknown_kind_is_inert():
    root = _root(Node("footnote", 0, 4, (_strong(0, 4),)), end=4)

    assert compute_highlighting(root, 4) == [StyleSpan((), 4)]


def test_string_kinds_are_resolved():
    root = Node("root", 0, 3, (Node("header", 0, 3, level=3),))

    assert compute_highlighting(root, 3) == [StyleSpan(("h3",), 3)]


def test_duck_typed_nodes_are_accepted():
    @dataclass
    class ParsedNode:
        kind: str
        start: int
        end: int
        children: list = field(default_factory=list)
        strong: bool = False

    root = ParsedNode("root", 0, 4, [ParsedNode("strong_emph_super", 1, 3, strong=True)])

    assert compute_highlighting(root, 4) == [
        StyleSpan((), 1),
        StyleSpan(("strong",), 2),
        StyleSpan((), 1),
    ]


def test_disabled_styles_are_not_painted():
    root = _root(_header(2, 0, 10, _strong(2, 6)), end=10)
    config = HighlightConfig(disabled_styles=("h2",))

    assert compute_highlighting(root, 10, config) == [
        StyleSpan((), 2),
        StyleSpan(("strong",), 4),
        StyleSpan((), 4),
    ]


def test_unknown_disabled_style_is_rejected():
    with pytest.raises(ConfigError):
        compute_highlighting(_root(), 0, HighlightConfig(disabled_styles=("blink",)))


def test_dispatch_table_covers_every_kind():
    assert set(DISPATCH_TABLE) == set(NodeKind)


def test_projector_paints_only_through_bitmap():
    bitmap = StyleBitmap(4)
    StyleProjector(bitmap, frozenset({StyleClass.EM})).visit(_root(_em(0, 4), end=4))

    assert bitmap.compress() == [StyleSpan((), 4)]


class FakeTextArea:
    def __init__(self, length: int):
        self.length = length
        self.applied: list[tuple[int, list[StyleSpan]]] = []

    def get_length(self) -> int:
        return self.length

    def set_style_spans(self, start: int, spans: list[StyleSpan]) -> None:
        self.applied.append((start, spans))


def test_highlight_applies_spans_from_offset_zero():
    text_area = FakeTextArea(7)

    highlight(text_area, _root(_header(1, 0, 4), end=7))

    assert text_area.applied == [(0, [StyleSpan(("h1",), 4), StyleSpan((), 3)])]


def test_highlight_accepts_owner_thread():
    text_area = FakeTextArea(2)

    highlight(text_area, _root(end=2), owner_thread=threading.current_thread())

    assert text_area.applied == [(0, [StyleSpan((), 2)])]


def test_highlight_rejects_foreign_thread():
    text_area = FakeTextArea(2)
    owner = threading.Thread(target=lambda: None, name="ui-thread")

    with pytest.raises(WrongThreadError):
        highlight(text_area, _root(end=2), owner_thread=owner)

    assert text_area.applied == []


def test_unknown_kind_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="markdown_highlighter.highlighter"):
        compute_highlighting(_root(Node("footnote", 0, 1), end=1), 1)

    assert "unknown kind 'footnote'" in caplog.text


@pytest.mark.parametrize("level", [[1], "2", 1.0, None])
def test_header_with_non_integer_level_is_inert(level):
    @dataclass
    class ParsedHeader:
        level: object
        kind: str = "header"
        start: int = 0
        end: int = 4
        children: list = field(default_factory=list)

    header = ParsedHeader(level, children=[Node(NodeKind.STRONG_EMPH_SUPER, 0, 2, strong=True)])

    assert compute_highlighting(_root(header, end=4), 4) == [StyleSpan((), 4)]
