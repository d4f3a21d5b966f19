"""Reconstruct a TypeExpr from the inline tokens of a "Type" table cell.

Authors of the OpenAPI document write types as a mix of inline code, links,
reference-style links and bare punctuation, for example:

    `string`
    [Server Object](#serverObject)
    [[Tag Object](#tagObject)]
    Map[`string`, [Path Item Object](#pathItemObject)]
    [Schema Object](#schemaObject) \\| [Reference Object](#referenceObject)

Several of these shapes are prefixes of each other, so the cell is matched
against TYPE_RULES in order and the first rule whose guard accepts the token
sequence builds the result.  The last rule (union) is the fallback; when it
cannot find at least two alternatives the cell is reported as unparsable.
"""

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple

from oas_typings.compiler.errors import UnparsableTypeExpression
from oas_typings.compiler.naming import interface_name
from oas_typings.compiler.text import render_nodes, render_text
from oas_typings.compiler.types import (
    ANY,
    ArrayType,
    LiteralType,
    MapType,
    ReferenceType,
    RuntimeExpressionType,
    TypeExpr,
    UnionType,
)
from oas_typings.config import DEFAULT_CONFIG, CompilerConfig
from oas_typings.document.nodes import InlineCode, Link, LinkReference, Node, Text

logger = logging.getLogger(__name__)

Tokens = tuple[Node, ...]


class TypeRule(NamedTuple):
    """One entry of the ordered dispatch table."""

    name: str
    matches: Callable[[Tokens, CompilerConfig], bool]
    build: Callable[[Tokens, CompilerConfig], TypeExpr]


# ── Token helpers ────────────────────────────────────────────────────────────


def _significant(nodes: Sequence[Node]) -> Tokens:
    """Drop whitespace-only text tokens."""
    return tuple(node for node in nodes if not (isinstance(node, Text) and not node.value.strip()))


def _is_text(node: Node, value: str) -> bool:
    return isinstance(node, Text) and node.value.strip() == value


def _single(tokens: Tokens, node_type: type[Node]) -> bool:
    return len(tokens) == 1 and isinstance(tokens[0], node_type)


def _strip_leading_comma(tokens: Tokens) -> Tokens:
    """Remove the comma separating a map key from its value."""
    if not tokens or not isinstance(tokens[0], Text):
        return tokens
    stripped = tokens[0].value.strip()
    if stripped == ",":
        return tokens[1:]
    if stripped.startswith(","):
        return (Text(value=stripped[1:].strip()),) + tokens[1:]
    return tokens


def _strip_closing_bracket(tokens: Tokens) -> Tokens:
    """Remove the ']' closing a ``Map[`` form."""
    if not tokens or not isinstance(tokens[-1], Text):
        return tokens
    stripped = tokens[-1].value.rstrip()
    if stripped.strip() == "]":
        return tokens[:-1]
    if stripped.endswith("]"):
        return tokens[:-1] + (Text(value=stripped[:-1]),)
    return tokens


def _parse_part(nodes: Sequence[Node], config: CompilerConfig, whole: Tokens, part: str) -> TypeExpr:
    """Parse a nested part of a composite type; an empty part is an error."""
    result = parse_type_expression(nodes, config)
    if result is None:
        raise UnparsableTypeExpression(render_nodes(whole), f"empty {part}")
    return result


# ── Rules, in priority order ─────────────────────────────────────────────────


def _is_any(tokens: Tokens, config: CompilerConfig) -> bool:
    return _single(tokens, Text) and tokens[0].value.strip() == config.any_type_word


def _is_inline_code(tokens: Tokens, _config: CompilerConfig) -> bool:
    return _single(tokens, InlineCode)


def _build_literal(tokens: Tokens, _config: CompilerConfig) -> TypeExpr:
    return LiteralType(name=tokens[0].value)


def _is_reference_array(tokens: Tokens, _config: CompilerConfig) -> bool:
    return _single(tokens, LinkReference) and len(tokens[0].children) == 1


def _build_reference_array(tokens: Tokens, config: CompilerConfig) -> TypeExpr:
    return ArrayType(of=_parse_part(tokens[0].children, config, tokens, "array item type"))


def _is_runtime_expression(tokens: Tokens, config: CompilerConfig) -> bool:
    if not _single(tokens, Link) or len(tokens[0].children) != 1:
        return False
    child = tokens[0].children[0]
    return isinstance(child, (Text, InlineCode)) and child.value == config.runtime_expression_placeholder


def _is_reference(tokens: Tokens, _config: CompilerConfig) -> bool:
    return _single(tokens, Link)


def _build_reference(tokens: Tokens, config: CompilerConfig) -> TypeExpr:
    return ReferenceType(name=interface_name(render_text(tokens[0]), config.reference_prefix))


def _is_bracketed(tokens: Tokens, _config: CompilerConfig) -> bool:
    return len(tokens) >= 2 and _is_text(tokens[0], "[") and _is_text(tokens[-1], "]")


def _build_bracketed(tokens: Tokens, config: CompilerConfig) -> TypeExpr:
    return ArrayType(of=_parse_part(tokens[1:-1], config, tokens, "array item type"))


def _is_map(tokens: Tokens, _config: CompilerConfig) -> bool:
    return len(tokens) >= 2 and isinstance(tokens[0], Text) and tokens[0].value.startswith("Map")


def _build_map(tokens: Tokens, config: CompilerConfig) -> TypeExpr:
    opener = tokens[1]
    if isinstance(opener, LinkReference):
        # Map[`string`, [X](#x)] parsed as "Map" + one reference-style link
        key_tokens = opener.children[:1]
        value_tokens = opener.children[1:]
    else:
        key_tokens = (opener,)
        value_tokens = _strip_closing_bracket(tokens[2:])
    value_tokens = _strip_leading_comma(_significant(value_tokens))
    return MapType(
        key=_parse_part(key_tokens, config, tokens, "map key type"),
        value=_parse_part(value_tokens, config, tokens, "map value type"),
    )


def _build_union(tokens: Tokens, config: CompilerConfig) -> TypeExpr:
    groups: list[list[Node]] = [[]]
    for token in tokens:
        if _is_text(token, "|"):
            groups.append([])
        else:
            groups[-1].append(token)
    groups = [group for group in groups if group]

    if len(groups) < 2:
        raise UnparsableTypeExpression(render_nodes(tokens))
    return UnionType(alternatives=tuple(_parse_part(group, config, tokens, "union alternative") for group in groups))


TYPE_RULES: tuple[TypeRule, ...] = (
    TypeRule("any", _is_any, lambda _tokens, _config: ANY),
    TypeRule("literal", _is_inline_code, _build_literal),
    TypeRule("reference-array", _is_reference_array, _build_reference_array),
    TypeRule("runtime-expression", _is_runtime_expression, lambda _tokens, _config: RuntimeExpressionType()),
    TypeRule("reference", _is_reference, _build_reference),
    TypeRule("bracketed-array", _is_bracketed, _build_bracketed),
    TypeRule("map", _is_map, _build_map),
    TypeRule("union", lambda _tokens, _config: True, _build_union),
)


# ── Public API ───────────────────────────────────────────────────────────────


def parse_type_expression(nodes: Sequence[Node], config: CompilerConfig = DEFAULT_CONFIG) -> TypeExpr | None:
    """Parse a token sequence into a TypeExpr.

    Returns None when the sequence holds nothing but whitespace (an untyped
    field).  Raises UnparsableTypeExpression when no rule can make sense of
    the tokens.
    """
    tokens = _significant(nodes)
    if not tokens:
        return None

    for rule in TYPE_RULES:
        if rule.matches(tokens, config):
            logger.debug("Type rule %r matched %r", rule.name, render_nodes(tokens))
            return rule.build(tokens, config)

    # Unreachable: the union rule accepts everything
    raise UnparsableTypeExpression(render_nodes(tokens))


def parse_type_cell(cell: Node, config: CompilerConfig = DEFAULT_CONFIG) -> TypeExpr | None:
    """Parse the contents of one "Type" table cell."""
    return parse_type_expression(cell.children or (), config)
