"""Markdown syntax highlighting over a parsed AST.

Each styled node sets its style bit on every character it covers, then the
per-character masks are collapsed into spans. Overlapping styles (emphasis
inside a header, for example) compose through the bitwise union.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from .bitmap import StyleBitmap
from .config import HighlightConfig
from .exceptions import WrongThreadError
from .nodes import MarkdownNode, NodeKind
from .styles import StyleClass, StyleSpan, check_style_class_width

logger = logging.getLogger(__name__)


class StyleProjector:
    """Walks an AST and paints node styles onto a `StyleBitmap`.

    Args:
        bitmap: Bitmap receiving the paints.
        disabled_styles: Styles whose paints are dropped.
    """

    def __init__(
        self, bitmap: StyleBitmap, disabled_styles: frozenset[StyleClass] = frozenset()
    ):
        self.bitmap = bitmap
        self.disabled_styles = disabled_styles

    def visit(self, node: MarkdownNode) -> None:
        kind = NodeKind.resolve(getattr(node, "kind", None))
        if kind is None:
            logger.debug("Skipping node of unknown kind %r", getattr(node, "kind", None))
            return
        DISPATCH_TABLE[kind](self, node)

    def visit_children(self, node: MarkdownNode) -> None:
        for child in getattr(node, "children", None) or ():
            self.visit(child)

    def paint(self, node: MarkdownNode, style: StyleClass) -> None:
        if style in self.disabled_styles:
            return
        self.bitmap.paint(node.start, node.end, style)


NodeHandler = Callable[[StyleProjector, MarkdownNode], None]


def _visit_container(projector: StyleProjector, node: MarkdownNode) -> None:
    projector.visit_children(node)


def _visit_header(projector: StyleProjector, node: MarkdownNode) -> None:
    level = getattr(node, "level", None)
    style = StyleClass.for_header_level(level) if isinstance(level, int) else None
    if style is None:
        return
    projector.paint(node, style)
    projector.visit_children(node)


def _visit_strong_emph(projector: StyleProjector, node: MarkdownNode) -> None:
    # The whole node range is painted, so children add nothing.
    style = StyleClass.STRONG if getattr(node, "strong", False) else StyleClass.EM
    projector.paint(node, style)


def _visit_reserved(projector: StyleProjector, node: MarkdownNode) -> None:
    """Recognized variant without a style yet."""


# One entry per NodeKind. A variant that gains a style and can contain
# styled children must paint and then recurse, as headers do.
DISPATCH_TABLE: dict[NodeKind, NodeHandler] = {
    NodeKind.ABBREVIATION: _visit_reserved,
    NodeKind.ANCHOR_LINK: _visit_reserved,
    NodeKind.AUTO_LINK: _visit_reserved,
    NodeKind.BLOCK_QUOTE: _visit_reserved,
    NodeKind.BULLET_LIST: _visit_reserved,
    NodeKind.CODE: _visit_reserved,
    NodeKind.DEFINITION_LIST: _visit_reserved,
    NodeKind.DEFINITION: _visit_reserved,
    NodeKind.DEFINITION_TERM: _visit_reserved,
    NodeKind.EXP_IMAGE: _visit_reserved,
    NodeKind.EXP_LINK: _visit_reserved,
    NodeKind.HEADER: _visit_header,
    NodeKind.HTML_BLOCK: _visit_reserved,
    NodeKind.INLINE_HTML: _visit_reserved,
    NodeKind.LIST_ITEM: _visit_reserved,
    NodeKind.MAIL_LINK: _visit_reserved,
    NodeKind.ORDERED_LIST: _visit_reserved,
    NodeKind.PARA: _visit_container,
    NodeKind.QUOTED: _visit_reserved,
    NodeKind.REFERENCE: _visit_reserved,
    NodeKind.REF_IMAGE: _visit_reserved,
    NodeKind.REF_LINK: _visit_reserved,
    NodeKind.ROOT: _visit_container,
    NodeKind.SIMPLE: _visit_reserved,
    NodeKind.SPECIAL_TEXT: _visit_reserved,
    NodeKind.STRIKE: _visit_reserved,
    NodeKind.STRONG_EMPH_SUPER: _visit_strong_emph,
    NodeKind.TABLE_BODY: _visit_reserved,
    NodeKind.TABLE_CAPTION: _visit_reserved,
    NodeKind.TABLE_CELL: _visit_reserved,
    NodeKind.TABLE_COLUMN: _visit_reserved,
    NodeKind.TABLE_HEADER: _visit_reserved,
    NodeKind.TABLE: _visit_reserved,
    NodeKind.TABLE_ROW: _visit_reserved,
    NodeKind.VERBATIM: _visit_reserved,
    NodeKind.WIKI_LINK: _visit_reserved,
    NodeKind.TEXT: _visit_reserved,
    NodeKind.SUPER: _visit_container,
    NodeKind.NODE: _visit_reserved,
}


def compute_highlighting(
    root: MarkdownNode, text_length: int, config: HighlightConfig | None = None
) -> list[StyleSpan]:
    """Compute the style spans for a text of `text_length` characters.

    Args:
        root: Root of the parsed Markdown AST.
        text_length: Number of characters in the highlighted text. Node
            offsets past this length are clipped.
        config: Configuration selecting disabled styles. Defaults to a new
            `HighlightConfig` when omitted.

    Returns:
        list[StyleSpan]: Maximal spans in text order, with lengths summing to
            `text_length`. A zero length yields a single empty span.

    Raises:
        StyleClassOverflowError: If `StyleClass` no longer fits a style mask.
        ConfigError: If the configuration names an unknown style.
        ValueError: If `text_length` is negative.

    Examples:
        root = Node(NodeKind.ROOT, 0, 4, (Node(NodeKind.HEADER, 0, 4, level=1),))
        compute_highlighting(root, 4)  # [StyleSpan(("h1",), 4)]
    """
    check_style_class_width()
    config = config or HighlightConfig()

    bitmap = StyleBitmap(text_length)
    StyleProjector(bitmap, config.disabled_style_classes()).visit(root)
    spans = bitmap.compress()

    logger.debug("Computed %d style spans over %d characters", len(spans), text_length)
    return spans


class StyleSpansTarget(Protocol):
    """Text view that displays style spans."""

    def get_length(self) -> int: ...

    def set_style_spans(self, start: int, spans: list[StyleSpan]) -> None: ...


def highlight(
    text_area: StyleSpansTarget,
    root: MarkdownNode,
    config: HighlightConfig | None = None,
    owner_thread: threading.Thread | None = None,
) -> None:
    """Recompute and apply the highlighting of `text_area`.

    Args:
        text_area: View whose whole text is restyled from offset 0.
        root: AST parsed from the text area's content.
        config: Optional highlighting configuration.
        owner_thread: Thread that owns `text_area`; when given, calls from any
            other thread are rejected.

    Raises:
        WrongThreadError: If called off `owner_thread`.

    Examples:
        highlight(editor, parse(editor.text), owner_thread=ui_thread)
    """
    if owner_thread is not None and threading.current_thread() is not owner_thread:
        raise WrongThreadError(
            f"highlight() must run on {owner_thread.name}, "
            f"not {threading.current_thread().name}"
        )

    spans = compute_highlighting(root, text_area.get_length(), config)
    text_area.set_style_spans(0, spans)
