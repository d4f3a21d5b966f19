"""Extract FieldSpec records from Fixed Fields and Patterned Fields tables.

Expected table shapes in the OpenAPI document:

    | Field Name | Type | Description |
    | Field Pattern | Type | Description |

Column roles come from the camel-cased header text.  ``description`` and
``type`` get special treatment; a ``fieldPattern`` cell is normalised to a
placeholder identifier; every other column is kept verbatim.
"""

import logging

from oas_typings.compiler.models import FieldSpec
from oas_typings.compiler.naming import camel_case, pattern_name
from oas_typings.compiler.text import render_text
from oas_typings.compiler.type_parser import parse_type_cell
from oas_typings.config import DEFAULT_CONFIG, CompilerConfig
from oas_typings.document.nodes import Node, Table

logger = logging.getLogger(__name__)

DESCRIPTION_COLUMN = "description"
TYPE_COLUMN = "type"
FIELD_PATTERN_COLUMN = "fieldPattern"
FIELD_NAME_COLUMN = "fieldName"


def column_roles(table: Table) -> list[str]:
    """Return the camel-cased header names of a table, left to right."""
    if table.header is None:
        return []
    return [camel_case(render_text(cell)) for cell in table.header.children or ()]


def split_required(description: str, config: CompilerConfig = DEFAULT_CONFIG) -> tuple[bool, str]:
    """Split the '**REQUIRED**. ' prefix off a description.

    '**REQUIRED**. Foo bar' -> (True, 'Foo bar')
    """
    if description.startswith(config.required_marker):
        return True, description[len(config.required_marker) :]
    return False, description


def _row_to_field(row: Node, roles: list[str], config: CompilerConfig) -> FieldSpec:
    """Fold one data row's cells into a FieldSpec according to their column roles."""
    cells = row.children or ()
    if len(cells) > len(roles):
        logger.warning("Table row has %d cells but only %d columns; ignoring the extra cells", len(cells), len(roles))

    record: dict = {}
    attributes: dict[str, str] = {}
    for role, cell in zip(roles, cells):
        if role == DESCRIPTION_COLUMN:
            record["required"], record["description"] = split_required(render_text(cell), config)
        elif role == TYPE_COLUMN:
            record["type"] = parse_type_cell(cell, config)
        elif role == FIELD_PATTERN_COLUMN:
            record["name_pattern"] = pattern_name(render_text(cell))
        else:
            attributes[role] = render_text(cell)

    if "name_pattern" not in record:
        record["name_pattern"] = attributes.get(FIELD_NAME_COLUMN, "")
    return FieldSpec(attributes=attributes, **record)


def extract_fields(table: Table, config: CompilerConfig = DEFAULT_CONFIG) -> list[FieldSpec]:
    """Turn every data row of a field table into a FieldSpec, in row order.

    A table with only a header row yields an empty list.
    """
    roles = column_roles(table)
    fields = [_row_to_field(row, roles, config) for row in table.rows]
    logger.debug("Extracted %d fields from table with columns %s", len(fields), roles)
    return fields
