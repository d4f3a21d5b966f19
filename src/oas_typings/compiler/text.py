"""Render AST nodes back to flat markdown-flavoured text.

Used everywhere the compiler needs a node's visible text: heading names,
marker detection, descriptions, examples and table cells.  Inline formatting
that matters to downstream documentation (strong emphasis, links, inline
code, code blocks, list items) is kept in markdown form; everything else is
flattened to its text.
"""

from collections.abc import Iterable

from oas_typings.compiler.errors import MalformedInlineNode
from oas_typings.document.nodes import Code, InlineCode, Link, ListItem, Node, Strong, Text


def render_text(node: Node) -> str:
    """Render a node's children, or the node itself when it is a leaf.

    Any failure while rendering is re-raised as MalformedInlineNode naming
    the node type, so a broken document fails with a locatable message.
    """
    parts = node.children if node.children is not None else (node,)
    try:
        return render_nodes(parts)
    except Exception as err:  # pylint: disable=broad-exception-caught
        raise MalformedInlineNode(node.type, err, node.line) from err


def render_nodes(nodes: Iterable[Node]) -> str:
    """Concatenate the rendered text of a node sequence."""
    return "".join(_render_one(node) for node in nodes)


def _render_one(node: Node) -> str:
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Strong):
        return f"**{render_text(node)}**"
    if isinstance(node, ListItem):
        return f" + {render_text(node)}\n"
    if isinstance(node, Code):
        body = "\n".join("  " + line for line in node.value.split("\n"))
        return f"```{node.lang or ''}\n{body}\n```"
    if isinstance(node, Link):
        title = f" {node.title}" if node.title else ""
        return f"[{render_text(node)}]({node.url}{title})"
    if isinstance(node, InlineCode):
        return f"`{node.value}`"
    # Unknown containers contribute their text; unknown leaves contribute nothing
    return render_text(node) if node.children is not None else ""
