"""
markdown-highlighter: style spans for highlighting Markdown text.

Turns a parsed Markdown AST into run-length style spans that a rich-text
view can apply to its content.

CLI Usage:
    markdown-highlighter doc.ast.json --text doc.md

Library Usage:
    from markdown_highlighter import Node, NodeKind, compute_highlighting

    root = Node(NodeKind.ROOT, 0, 7, (Node(NodeKind.HEADER, 0, 4, level=1),))
    spans = compute_highlighting(root, 7)
    # [StyleSpan(("h1",), 4), StyleSpan((), 3)]
"""

from .bitmap import StyleBitmap, translate_mask
from .config import ConfigError, HighlightConfig
from .exceptions import (
    AstFormatError,
    HighlightError,
    StyleClassOverflowError,
    UnknownStyleClassError,
    WrongThreadError,
)
from .highlighter import StyleSpansTarget, compute_highlighting, highlight
from .nodes import MarkdownNode, Node, NodeKind, node_from_dict
from .styles import StyleClass, StyleSpan, spans_length

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "compute_highlighting",
    "highlight",
    "StyleBitmap",
    "translate_mask",
    # Data models
    "MarkdownNode",
    "Node",
    "NodeKind",
    "StyleClass",
    "StyleSpan",
    "StyleSpansTarget",
    "node_from_dict",
    # Utilities
    "spans_length",
    "HighlightConfig",
    # Exceptions
    "AstFormatError",
    "ConfigError",
    "HighlightError",
    "StyleClassOverflowError",
    "UnknownStyleClassError",
    "WrongThreadError",
    # Version
    "__version__",
]
