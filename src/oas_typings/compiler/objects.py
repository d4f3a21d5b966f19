"""Compile one object section into an ObjectDescriptor.

Blocks inside a section are read in order and classified by their rendered
text:

  - "Fixed Fields" / "Patterned Fields"  the next block is the field table
  - the extension sentence               the object accepts ``x-`` fields
  - "<Object name> Example"              everything after it is example content
  - a code block                         example content starts here too
  - anything else                        description prose, until the first marker

The cursor over the block list is passed explicitly between the helpers;
``_SectionParts`` only accumulates results.
"""

import logging
from collections.abc import Sequence
from enum import Enum

from oas_typings.compiler.models import FieldSpec, ObjectDescriptor, Section
from oas_typings.compiler.naming import interface_name
from oas_typings.compiler.tables import extract_fields
from oas_typings.compiler.text import render_text
from oas_typings.compiler.types import ANY, widen_with_any
from oas_typings.config import DEFAULT_CONFIG, CompilerConfig
from oas_typings.document.nodes import Code, Node, Table

logger = logging.getLogger(__name__)


class Marker(Enum):
    FIXED_FIELDS = "fixed_fields"
    PATTERNED_FIELDS = "patterned_fields"
    EXTENSION = "extension"
    EXAMPLE = "example"


def classify_marker(text: str, title: str, config: CompilerConfig = DEFAULT_CONFIG) -> Marker | None:
    """Match a block's rendered text against the marker vocabulary."""
    if text == config.fixed_fields_marker:
        return Marker.FIXED_FIELDS
    if text == config.patterned_fields_marker:
        return Marker.PATTERNED_FIELDS
    if text == config.extension_marker:
        return Marker.EXTENSION
    if text.rstrip(":") == title + config.example_suffix:
        return Marker.EXAMPLE
    return None


class _SectionParts:
    """Accumulated pieces of one object section."""

    def __init__(self):
        self.descriptions: list[str] = []
        self.examples: list[str] = []
        self.fixed_fields: list[FieldSpec] = []
        self.patterned_fields: list[FieldSpec] = []
        self.is_extensible = False
        self.in_description = True
        self.in_examples = False

    def start_examples(self):
        self.in_description = False
        self.in_examples = True


def _take_table(blocks: Sequence[Node], pos: int, title: str, config: CompilerConfig) -> tuple[list[FieldSpec], int]:
    """Read the table following a field marker at ``pos``; return (fields, next position)."""
    following = blocks[pos + 1] if pos + 1 < len(blocks) else None
    if not isinstance(following, Table):
        logger.warning("%s: field marker %r is not followed by a table", title, render_text(blocks[pos]))
        return [], pos + 1
    return extract_fields(following, config), pos + 2


def _consume(blocks: Sequence[Node], pos: int, parts: _SectionParts, title: str, config: CompilerConfig) -> int:
    """Handle the block at ``pos`` and return the position of the next unread block."""
    block = blocks[pos]
    text = render_text(block)

    if parts.in_examples:
        parts.examples.append(text)
        return pos + 1

    marker = classify_marker(text, title, config)
    if marker is Marker.FIXED_FIELDS:
        parts.in_description = False
        parts.fixed_fields, pos = _take_table(blocks, pos, title, config)
        return pos
    if marker is Marker.PATTERNED_FIELDS:
        parts.in_description = False
        parts.patterned_fields, pos = _take_table(blocks, pos, title, config)
        return pos
    if marker is Marker.EXTENSION:
        parts.in_description = False
        parts.is_extensible = True
        return pos + 1
    if marker is Marker.EXAMPLE:
        parts.start_examples()
        return pos + 1

    # Code samples never appear inside a plain description
    if isinstance(block, Code):
        parts.start_examples()
        parts.examples.append(text)
    elif parts.in_description:
        parts.descriptions.append(text)
    return pos + 1


def apply_extensibility(patterned_fields: Sequence[FieldSpec], config: CompilerConfig = DEFAULT_CONFIG) -> list[FieldSpec]:
    """Model the ``x-`` extension point of an extensible object.

    Without declared patterned fields a single ``extension`` field of type Any
    is added.  Declared patterned fields are renamed, documented and widened
    to also accept Any instead.
    """
    if not patterned_fields:
        return [
            FieldSpec(
                name_pattern=config.extension_field_name,
                type=ANY,
                required=False,
                description=config.extension_note,
            )
        ]
    return [
        field.model_copy(
            update={
                "name_pattern": field.name_pattern + config.extension_pattern_suffix,
                "type": widen_with_any(field.type),
                "description": "\n".join([field.description, config.extension_note]),
            }
        )
        for field in patterned_fields
    ]


def compile_section(section: Section, config: CompilerConfig = DEFAULT_CONFIG) -> ObjectDescriptor:
    """Build the ObjectDescriptor for one object section."""
    parts = _SectionParts()
    pos = 0
    while pos < len(section.blocks):
        pos = _consume(section.blocks, pos, parts, section.title, config)

    patterned_fields = parts.patterned_fields
    if parts.is_extensible:
        patterned_fields = apply_extensibility(patterned_fields, config)

    descriptor = ObjectDescriptor(
        name=interface_name(section.title, config.reference_prefix),
        title=section.title,
        description="\n".join(parts.descriptions),
        example="\n\n".join(parts.examples) if parts.examples else None,
        is_extensible=parts.is_extensible,
        fixed_fields=tuple(parts.fixed_fields),
        patterned_fields=tuple(patterned_fields),
    )
    logger.debug(
        "Compiled %s: %d fixed, %d patterned fields%s",
        descriptor.name,
        len(descriptor.fixed_fields),
        len(descriptor.patterned_fields),
        " (extensible)" if descriptor.is_extensible else "",
    )
    return descriptor
