"""AST nodes consumed by the highlighter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .exceptions import AstFormatError


class NodeKind(Enum):
    """Node variants produced by the Markdown parser.

    Every variant the highlighter knows about is listed here, styled or not.
    Kinds outside this enumeration are treated as inert.
    """

    ABBREVIATION = "abbreviation"
    ANCHOR_LINK = "anchor_link"
    AUTO_LINK = "auto_link"
    BLOCK_QUOTE = "block_quote"
    BULLET_LIST = "bullet_list"
    CODE = "code"
    DEFINITION_LIST = "definition_list"
    DEFINITION = "definition"
    DEFINITION_TERM = "definition_term"
    EXP_IMAGE = "exp_image"
    EXP_LINK = "exp_link"
    HEADER = "header"
    HTML_BLOCK = "html_block"
    INLINE_HTML = "inline_html"
    LIST_ITEM = "list_item"
    MAIL_LINK = "mail_link"
    ORDERED_LIST = "ordered_list"
    PARA = "para"
    QUOTED = "quoted"
    REFERENCE = "reference"
    REF_IMAGE = "ref_image"
    REF_LINK = "ref_link"
    ROOT = "root"
    SIMPLE = "simple"
    SPECIAL_TEXT = "special_text"
    STRIKE = "strike"
    STRONG_EMPH_SUPER = "strong_emph_super"
    TABLE_BODY = "table_body"
    TABLE_CAPTION = "table_caption"
    TABLE_CELL = "table_cell"
    TABLE_COLUMN = "table_column"
    TABLE_HEADER = "table_header"
    TABLE = "table"
    TABLE_ROW = "table_row"
    VERBATIM = "verbatim"
    WIKI_LINK = "wiki_link"
    TEXT = "text"
    SUPER = "super"
    NODE = "node"

    @classmethod
    def resolve(cls, kind: object) -> NodeKind | None:
        """Map a member or its string value to a `NodeKind`, or None if unknown.

        Examples:
            NodeKind.resolve("header")  # NodeKind.HEADER
            NodeKind.resolve("footnote")  # None
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(kind)
        except ValueError:
            return None


class MarkdownNode(Protocol):
    """Capabilities the highlighter reads from an AST node.

    `level` is only consulted on headers and `strong` only on
    strong/emphasis nodes; other nodes may omit them.
    """

    kind: NodeKind | str
    start: int
    end: int
    children: Sequence[MarkdownNode]


@dataclass(frozen=True)
class Node:
    """Plain AST node.

    Attributes:
        kind: Node variant, a `NodeKind` or the string of an unknown variant.
        start: Offset of the first character covered by the node.
        end: Offset one past the last character covered by the node.
        children: Child nodes in document order.
        level: Header level, for header nodes.
        strong: True for strong emphasis, False for plain emphasis.
    """

    kind: NodeKind | str
    start: int
    end: int
    children: tuple[Node, ...] = ()
    level: int | None = None
    strong: bool = False


def node_from_dict(data: object, _path: tuple[int, ...] = ()) -> Node:
    """Build a `Node` tree from its JSON form.

    Args:
        data: Mapping with ``kind``, ``start`` and ``end`` keys and optional
            ``children``, ``level`` and ``strong`` keys.

    Returns:
        Node: Root of the loaded tree. Unknown kind strings are kept verbatim.

    Raises:
        AstFormatError: If a node is not a mapping, lacks a kind or offsets, or
            carries values of the wrong type.

    Examples:
        node_from_dict({"kind": "header", "start": 0, "end": 4, "level": 1})
    """
    if not isinstance(data, Mapping):
        raise AstFormatError("node must be an object", _path)

    kind = data.get("kind")
    if not isinstance(kind, str) or not kind:
        raise AstFormatError("`kind` must be a non-empty string", _path)

    start = data.get("start")
    end = data.get("end")
    _ensure_offset("start", start, _path)
    _ensure_offset("end", end, _path)

    level = data.get("level")
    if level is not None and (isinstance(level, bool) or not isinstance(level, int)):
        raise AstFormatError("`level` must be an integer", _path)

    strong = data.get("strong", False)
    if not isinstance(strong, bool):
        raise AstFormatError("`strong` must be a boolean", _path)

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise AstFormatError("`children` must be a list", _path)

    children = tuple(
        node_from_dict(child, (*_path, index)) for index, child in enumerate(raw_children)
    )
    resolved = NodeKind.resolve(kind)

    return Node(
        kind=resolved if resolved is not None else kind,
        start=start,
        end=end,
        children=children,
        level=level,
        strong=strong,
    )


def _ensure_offset(key: str, value: object, path: tuple[int, ...]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AstFormatError(f"`{key}` must be an integer", path)
