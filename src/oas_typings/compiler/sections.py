"""Split the document's top-level blocks into object sections.

An object section starts at a heading of the watched depth whose text ends
with the object suffix ("#### Info Object") and runs up to, but not
including, the next heading at that depth or shallower.  Deeper headings
("##### Fixed Fields") belong to the section.
"""

import logging
from collections.abc import Sequence

from oas_typings.compiler.errors import MalformedInlineNode
from oas_typings.compiler.models import Section
from oas_typings.compiler.text import render_text
from oas_typings.config import DEFAULT_CONFIG, CompilerConfig
from oas_typings.document.nodes import Heading, Node

logger = logging.getLogger(__name__)


def _is_boundary(block: Node, depth: int) -> bool:
    return isinstance(block, Heading) and block.depth <= depth


def _section_end(blocks: Sequence[Node], start: int, depth: int) -> int:
    """Index of the first block after ``start`` that closes the section."""
    return next((i for i in range(start + 1, len(blocks)) if _is_boundary(blocks[i], depth)), len(blocks))


def _object_title(block: Node, config: CompilerConfig) -> str | None:
    """Return the heading text when the block opens an object section."""
    if not (isinstance(block, Heading) and block.depth == config.heading_depth):
        return None
    try:
        title = render_text(block)
    except MalformedInlineNode as err:
        logger.warning("Skipping heading that cannot be rendered: %s", err)
        return None
    return title if title.endswith(config.object_suffix) else None


def segment_sections(blocks: Sequence[Node], config: CompilerConfig = DEFAULT_CONFIG) -> list[Section]:
    """Group top-level blocks into object sections, in document order."""
    sections = []
    for index, block in enumerate(blocks):
        title = _object_title(block, config)
        if title is None:
            continue
        end = _section_end(blocks, index, config.heading_depth)
        sections.append(Section(heading=block, title=title, blocks=tuple(blocks[index + 1 : end])))
        logger.debug("Section %r spans %d blocks", title, end - index - 1)

    logger.info("Found %d object sections in %d blocks", len(sections), len(blocks))
    return sections
