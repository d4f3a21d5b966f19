"""Typed markdown AST consumed by the compiler.

The tree mirrors the mdast shape produced by remark: every node has a
``type`` tag, container nodes hold ``children``, and leaves carry a
``value``.  Only the node types the compiler interprets get their own model;
any other tag validates to the generic ``Node`` so unknown content is carried
through instead of being rejected at load time.

Nodes are frozen pydantic models.  ``load_document`` builds a tree from the
JSON-compatible dict that remark emits:

    {"type": "root", "children": [{"type": "heading", "depth": 4, ...}, ...]}
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


class Point(BaseModel):
    """A single location in the source markdown."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: int
    column: int
    offset: int | None = None


class Position(BaseModel):
    """Source span of a node."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    start: Point
    end: Point


class Node(BaseModel):
    """Generic AST node.

    ``children`` is ``None`` for leaves and a tuple for containers; the
    distinction matters to the text renderer, which renders a container's
    children but a leaf itself.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    children: tuple["Node", ...] | None = None
    position: Position | None = None

    @field_validator("children", mode="before")
    @classmethod
    def _build_children(cls, value):
        if value is None:
            return None
        return tuple(parse_node(child) if isinstance(child, dict) else child for child in value)

    @property
    def line(self) -> int | None:
        """Starting line of the node in the source document, when known."""
        return self.position.start.line if self.position else None


# ── Block nodes ──────────────────────────────────────────────────────────────


class Root(Node):
    type: Literal["root"] = "root"
    children: tuple[Node, ...] = ()


class Heading(Node):
    type: Literal["heading"] = "heading"
    depth: int
    children: tuple[Node, ...] = ()


class Paragraph(Node):
    type: Literal["paragraph"] = "paragraph"
    children: tuple[Node, ...] = ()


class Table(Node):
    """A table; the first row is the header row."""

    type: Literal["table"] = "table"
    children: tuple[Node, ...] = ()

    @property
    def header(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def rows(self) -> tuple[Node, ...]:
        return self.children[1:]


class TableRow(Node):
    type: Literal["tableRow"] = "tableRow"
    children: tuple[Node, ...] = ()


class TableCell(Node):
    type: Literal["tableCell"] = "tableCell"
    children: tuple[Node, ...] = ()


class Code(Node):
    """Fenced or indented code block."""

    type: Literal["code"] = "code"
    lang: str | None = None
    value: str = ""


class List(Node):
    type: Literal["list"] = "list"
    ordered: bool = False
    children: tuple[Node, ...] = ()


class ListItem(Node):
    type: Literal["listItem"] = "listItem"
    children: tuple[Node, ...] = ()


# ── Inline nodes ─────────────────────────────────────────────────────────────


class Text(Node):
    type: Literal["text"] = "text"
    value: str


class InlineCode(Node):
    type: Literal["inlineCode"] = "inlineCode"
    value: str


class Strong(Node):
    type: Literal["strong"] = "strong"
    children: tuple[Node, ...] = ()


class Emphasis(Node):
    type: Literal["emphasis"] = "emphasis"
    children: tuple[Node, ...] = ()


class Link(Node):
    type: Literal["link"] = "link"
    url: str = ""
    title: str | None = None
    children: tuple[Node, ...] = ()


class LinkReference(Node):
    """Reference-style link, e.g. ``[[Tag Object](#tagObject)]``."""

    type: Literal["linkReference"] = "linkReference"
    identifier: str = ""
    label: str | None = None
    children: tuple[Node, ...] = ()


class Break(Node):
    type: Literal["break"] = "break"


NODE_TYPES: dict[str, type[Node]] = {
    "root": Root,
    "heading": Heading,
    "paragraph": Paragraph,
    "table": Table,
    "tableRow": TableRow,
    "tableCell": TableCell,
    "code": Code,
    "list": List,
    "listItem": ListItem,
    "text": Text,
    "inlineCode": InlineCode,
    "strong": Strong,
    "emphasis": Emphasis,
    "link": Link,
    "linkReference": LinkReference,
    "break": Break,
}


def parse_node(data: dict) -> Node:
    """Validate an mdast-shaped dict into the matching node model."""
    node_cls = NODE_TYPES.get(data.get("type"), Node)
    return node_cls.model_validate(data)


def load_document(data: dict) -> Root:
    """Build a typed document tree from a remark ``root`` dict."""
    if data.get("type") != "root":
        raise ValueError(f"Expected a 'root' node, got {data.get('type')!r}")
    return Root.model_validate(data)
