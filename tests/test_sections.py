"""Unit tests for object section segmentation."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from oas_typings.compiler.sections import segment_sections
from oas_typings.config import CompilerConfig
from oas_typings.document.nodes import Code, Heading, Paragraph, Text


def heading(depth: int, title: str) -> Heading:
    return Heading(depth=depth, children=(Text(value=title),))


def para(value: str) -> Paragraph:
    return Paragraph(children=(Text(value=value),))


class TestSegmentSections:

    def test_no_object_headings(self):
        blocks = [heading(1, "OpenAPI Specification"), para("Intro."), heading(4, "Data Types")]
        assert segment_sections(blocks) == []

    def test_empty_document(self):
        assert segment_sections([]) == []

    def test_sections_in_document_order(self):
        blocks = [
            heading(3, "Schema"),
            heading(4, "OpenAPI Object"),
            para("Root object."),
            heading(4, "Info Object"),
            para("Metadata."),
            Code(lang="json", value="{}"),
        ]
        sections = segment_sections(blocks)
        assert [section.title for section in sections] == ["OpenAPI Object", "Info Object"]
        assert sections[0].blocks == (para("Root object."),)
        assert sections[1].blocks == (para("Metadata."), Code(lang="json", value="{}"))

    def test_deeper_headings_stay_inside(self):
        blocks = [heading(4, "Info Object"), heading(5, "Fixed Fields"), para("table here")]
        (section,) = segment_sections(blocks)
        assert section.blocks == (heading(5, "Fixed Fields"), para("table here"))

    def test_shallower_heading_closes_section(self):
        blocks = [heading(4, "Info Object"), para("Inside."), heading(3, "Other"), para("Outside.")]
        (section,) = segment_sections(blocks)
        assert section.blocks == (para("Inside."),)

    def test_non_object_heading_at_watched_depth_closes_section(self):
        blocks = [heading(4, "Info Object"), para("Inside."), heading(4, "Data Types"), para("Outside.")]
        (section,) = segment_sections(blocks)
        assert section.blocks == (para("Inside."),)

    def test_object_heading_at_other_depth_ignored(self):
        blocks = [heading(3, "Info Object"), para("Not a section.")]
        assert segment_sections(blocks) == []

    def test_custom_depth_and_suffix(self):
        config = CompilerConfig(heading_depth=2, object_suffix="Schema")
        blocks = [heading(2, "Pet Schema"), para("A pet."), heading(2, "Pet Object")]
        (section,) = segment_sections(blocks, config)
        assert section.title == "Pet Schema"
        assert section.blocks == (para("A pet."),)

    def test_heading_node_kept(self):
        blocks = [heading(4, "Info Object")]
        (section,) = segment_sections(blocks)
        assert section.heading == heading(4, "Info Object")
        assert section.blocks == ()

    def test_unrenderable_heading_skipped(self, caplog):
        broken = Text.model_construct(type="text", value=None, children=None, position=None)
        blocks = [Heading(depth=4, children=(broken,)), para("Orphan."), heading(4, "Info Object")]
        sections = segment_sections(blocks)
        assert [section.title for section in sections] == ["Info Object"]
        assert "cannot be rendered" in caplog.text
