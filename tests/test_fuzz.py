from __future__ import annotations

import os

import pytest
from markdown_highlighter.highlighter import compute_highlighting
from markdown_highlighter.nodes import Node, NodeKind
from markdown_highlighter.styles import spans_length

atheris = pytest.importorskip("atheris")

KINDS = list(NodeKind)


def _consume_node(provider, text_length: int, depth: int) -> Node:
    kind = KINDS[provider.ConsumeIntInRange(0, len(KINDS) - 1)]
    start = provider.ConsumeIntInRange(0, text_length + 2)
    end = provider.ConsumeIntInRange(start, text_length + 2)
    children: list[Node] = []
    if depth < 4:
        for _ in range(provider.ConsumeIntInRange(0, 3)):
            if provider.remaining_bytes() == 0:
                break
            children.append(_consume_node(provider, text_length, depth + 1))
    return Node(
        kind,
        start,
        end,
        tuple(children),
        level=provider.ConsumeIntInRange(0, 7),
        strong=provider.ConsumeBool(),
    )


def test_compute_highlighting_with_fuzzed_trees():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    rounds = 0

    while provider.remaining_bytes() > 0 and rounds < 64:
        text_length = provider.ConsumeIntInRange(0, 200)
        root = Node(NodeKind.ROOT, 0, text_length, (_consume_node(provider, text_length, 0),))
        spans = compute_highlighting(root, text_length)

        assert spans_length(spans) == text_length
        for previous, current in zip(spans, spans[1:]):
            assert previous.style_classes != current.style_classes
        rounds += 1

    assert rounds  # ensure we exercised the loop
