"""Tests for whole-document compilation.

Documents are written as remark-style mdast dicts, the same shape the
upstream markdown parser hands to the compiler.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from oas_typings.compiler.errors import UnparsableTypeExpression
from oas_typings.compiler.models import CompileReport
from oas_typings.compiler.pipeline import compile_document, compile_mdast
from oas_typings.compiler.types import ANY, ArrayType, LiteralType, MapType, ReferenceType
from oas_typings.document.nodes import Root


def t(value: str) -> dict:
    return {"type": "text", "value": value}


def ic(value: str) -> dict:
    return {"type": "inlineCode", "value": value}


def link(label: str, url: str) -> dict:
    return {"type": "link", "url": url, "title": None, "children": [t(label)]}


def heading(depth: int, *children) -> dict:
    return {"type": "heading", "depth": depth, "children": list(children)}


def para(*children) -> dict:
    return {"type": "paragraph", "children": list(children)}


def table(*rows) -> dict:
    return {
        "type": "table",
        "children": [{"type": "tableRow", "children": [{"type": "tableCell", "children": list(cell)} for cell in row]} for row in rows],
    }


def line(n: int) -> dict:
    return {"start": {"line": n, "column": 1, "offset": 0}, "end": {"line": n, "column": 30, "offset": 29}}


EXTENSION = para(
    t("This object MAY be extended with "),
    link("Specification Extensions", "#specificationExtensions"),
    t("."),
)

FIXED_HEADER = [[t("Field Name")], [t("Type")], [t("Description")]]
PATTERNED_HEADER = [[t("Field Pattern")], [t("Type")], [t("Description")]]


def _openapi_document() -> dict:
    """A trimmed-down excerpt of the OpenAPI 3.0 specification document."""
    return {
        "type": "root",
        "children": [
            heading(1, t("OpenAPI Specification")),
            para(t("The OpenAPI Specification (OAS) defines a standard interface.")),
            heading(3, t("Schema")),
            {**heading(4, {"type": "html", "value": '<a name="oasObject"></a>'}, t("OpenAPI Object")), "position": line(10)},
            para(t("This is the root document object.")),
            heading(5, t("Fixed Fields")),
            table(
                FIXED_HEADER,
                [
                    [{"type": "html", "value": '<a name="oasVersion"></a>'}, t("openapi")],
                    [ic("string")],
                    [{"type": "strong", "children": [t("REQUIRED")]}, t(". The semantic version number.")],
                ],
                [
                    [t("servers")],
                    [t("["), link("Server Object", "#serverObject"), t("]")],
                    [t("An array of Server Objects.")],
                ],
                [
                    [t("paths")],
                    [link("Paths Object", "#pathsObject")],
                    [{"type": "strong", "children": [t("REQUIRED")]}, t(". The available paths.")],
                ],
            ),
            EXTENSION,
            {**heading(4, t("Paths Object")), "position": line(40)},
            para(t("Holds the relative paths to the individual endpoints.")),
            heading(5, t("Patterned Fields")),
            table(
                PATTERNED_HEADER,
                [[t("/{path}")], [link("Path Item Object", "#pathItemObject")], [t("A relative path.")]],
            ),
            EXTENSION,
            heading(5, t("Paths Object Example")),
            {"type": "code", "lang": "json", "value": '{\n  "/pets": {}\n}'},
            {**heading(4, t("Server Object")), "position": line(60)},
            para(t("An object representing a Server.")),
            heading(5, t("Fixed Fields")),
            table(
                FIXED_HEADER,
                [
                    [t("variables")],
                    [t("Map["), ic("string"), t(", "), link("Server Variable Object", "#serverVariableObject"), t("]")],
                    [t("A map between a variable name and its value.")],
                ],
            ),
            heading(4, t("Data Types")),
            para(t("Primitive data types in the OAS.")),
        ],
    }


class TestCompileMdast:

    def test_objects_in_document_order(self):
        report = compile_mdast(_openapi_document())
        assert report.ok
        assert [descriptor.name for descriptor in report.descriptors] == ["IOpenApiObject", "IPathsObject", "IServerObject"]

    def test_openapi_object(self):
        report = compile_mdast(_openapi_document())
        root = report.get("IOpenApiObject")
        assert root.description == "This is the root document object."
        assert root.is_extensible is True
        assert [(f.name_pattern, f.required) for f in root.fixed_fields] == [("openapi", True), ("servers", False), ("paths", True)]
        assert root.fixed_fields[0].description == "The semantic version number."
        assert root.fixed_fields[1].type == ArrayType(of=ReferenceType(name="IServerObject"))
        assert root.fixed_fields[2].type == ReferenceType(name="IPathsObject")
        (extension,) = root.patterned_fields
        assert extension.name_pattern == "extension"
        assert extension.type == ANY

    def test_paths_object(self):
        paths = compile_mdast(_openapi_document()).get("IPathsObject")
        (field,) = paths.patterned_fields
        assert field.name_pattern == "pathAndExtension"
        assert field.type.alternatives == (ReferenceType(name="IPathItemObject"), ANY)
        assert paths.example == '```json\n  {\n    "/pets": {}\n  }\n```'

    def test_server_object_map_field(self):
        server = compile_mdast(_openapi_document()).get("IServerObject")
        (field,) = server.fixed_fields
        assert field.type == MapType(key=LiteralType(name="string"), value=ReferenceType(name="IServerVariableObject"))
        assert server.is_extensible is False
        assert server.patterned_fields == ()

    def test_unknown_name_lookup(self):
        assert compile_mdast(_openapi_document()).get("IDataTypes") is None

    def test_report_serialises_to_json(self):
        report = compile_mdast(_openapi_document())
        payload = json.loads(report.model_dump_json())
        first = payload["outcomes"][0]
        assert first["title"] == "OpenAPI Object"
        assert first["line"] == 10
        assert first["descriptor"]["fixed_fields"][1]["type"] == {
            "kind": "array",
            "of": {"kind": "reference", "name": "IServerObject"},
        }
        assert "exception" not in first


class TestCompileDocument:

    def test_no_object_headings(self):
        document = Root(children=())
        report = compile_document(document)
        assert report.outcomes == ()
        assert report.descriptors == []
        assert report.ok

    def test_prose_only_document(self):
        report = compile_mdast({"type": "root", "children": [heading(2, t("Introduction")), para(t("Hello."))]})
        assert report.descriptors == []


class TestFailureIsolation:

    def _document_with_bad_section(self) -> dict:
        return {
            "type": "root",
            "children": [
                {**heading(4, t("Broken Object")), "position": line(5)},
                heading(5, t("Fixed Fields")),
                table(FIXED_HEADER, [[t("bad")], [ic("string"), t(" or "), ic("number")], [t("Oops.")]]),
                heading(4, t("Contact Object")),
                para(t("Contact information.")),
            ],
        }

    def test_other_sections_still_compile(self, caplog):
        report = compile_mdast(self._document_with_bad_section())
        assert not report.ok
        assert [outcome.title for outcome in report.outcomes] == ["Broken Object", "Contact Object"]
        assert [descriptor.name for descriptor in report.descriptors] == ["IContactObject"]
        assert "Failed to compile Broken Object" in caplog.text

    def test_failure_details(self):
        (failure,) = compile_mdast(self._document_with_bad_section()).failures
        assert failure.title == "Broken Object"
        assert failure.line == 5
        assert failure.descriptor is None
        assert "`string` or `number`" in failure.error
        assert isinstance(failure.exception, UnparsableTypeExpression)

    def test_raise_for_errors(self):
        report = compile_mdast(self._document_with_bad_section())
        with pytest.raises(UnparsableTypeExpression):
            report.raise_for_errors()

    def test_raise_for_errors_when_clean(self):
        CompileReport().raise_for_errors()
