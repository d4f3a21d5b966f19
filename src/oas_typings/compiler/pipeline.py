"""Compile a whole document into a CompileReport.

One outcome is recorded per object section.  A CompileError in one section
is logged and recorded so the remaining sections still compile and every
problem in the document shows up in a single run.
"""

import logging

from oas_typings.compiler.errors import CompileError
from oas_typings.compiler.models import CompileReport, SectionOutcome
from oas_typings.compiler.objects import compile_section
from oas_typings.compiler.sections import segment_sections
from oas_typings.config import DEFAULT_CONFIG, CompilerConfig
from oas_typings.document.nodes import Root, load_document

logger = logging.getLogger(__name__)


def compile_document(document: Root, config: CompilerConfig = DEFAULT_CONFIG) -> CompileReport:
    """Compile every object section of a parsed document."""
    outcomes = []
    for section in segment_sections(document.children, config):
        try:
            descriptor = compile_section(section, config)
        except CompileError as err:
            logger.warning("Failed to compile %s: %s", section.title, err)
            outcomes.append(SectionOutcome(title=section.title, line=section.heading.line, error=str(err), exception=err))
            continue
        outcomes.append(SectionOutcome(title=section.title, line=section.heading.line, descriptor=descriptor))

    report = CompileReport(outcomes=tuple(outcomes))
    logger.info("Compiled %d objects (%d failed)", len(report.descriptors), len(report.failures))
    return report


def compile_mdast(data: dict, config: CompilerConfig = DEFAULT_CONFIG) -> CompileReport:
    """Compile a remark ``root`` dict, as produced by ``remark().parse(...)``."""
    return compile_document(load_document(data), config)
