"""Document vocabulary and settings for the OpenAPI typings compiler.

The compiler recognises object sections, field tables and marker sentences by
their literal text in the OpenAPI specification markdown.  All of that text
lives here so a different edition of the document can be compiled by
overriding a few values, either directly or through ``OAS_TYPINGS_*``
environment variables (a ``.env`` file at the project root is honoured).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

ENV_PREFIX = "OAS_TYPINGS_"

EXTENSION_NOTE = (
    "Allows extensions to the OpenAPI Schema. The field name MUST begin with `x-`, for example, "
    "`x-internal-id`. The value can be `null`, a primitive, an array or an object. "
    "Can have any valid JSON format value."
)


class CompilerConfig(BaseModel):
    """Marker vocabulary and naming conventions used while compiling a document."""

    model_config = ConfigDict(frozen=True)

    # Section segmentation
    heading_depth: int = Field(default=4, ge=1, le=6)
    object_suffix: str = "Object"

    # Marker sentences inside a section
    fixed_fields_marker: str = "Fixed Fields"
    patterned_fields_marker: str = "Patterned Fields"
    extension_marker: str = "This object MAY be extended with [Specification Extensions](#specificationExtensions)."
    example_suffix: str = " Example"

    # Table cells
    required_marker: str = "**REQUIRED**. "
    any_type_word: str = "Any"
    runtime_expression_placeholder: str = "{expression}"

    # Naming
    reference_prefix: str = "I"
    extension_field_name: str = "extension"
    extension_pattern_suffix: str = "AndExtension"
    extension_note: str = EXTENSION_NOTE


DEFAULT_CONFIG = CompilerConfig()

# Environment variable suffix -> CompilerConfig field
_ENV_FIELDS = {
    "HEADING_DEPTH": "heading_depth",
    "OBJECT_SUFFIX": "object_suffix",
    "REFERENCE_PREFIX": "reference_prefix",
}


def load_config(**overrides) -> CompilerConfig:
    """Build a CompilerConfig from ``OAS_TYPINGS_*`` environment variables.

    Keyword overrides win over the environment.  Values are validated by
    pydantic, so a malformed ``OAS_TYPINGS_HEADING_DEPTH`` raises a
    ``ValidationError`` here rather than misbehaving later.
    """
    values = {}
    for env_suffix, field_name in _ENV_FIELDS.items():
        raw = os.getenv(ENV_PREFIX + env_suffix)
        if raw is not None:
            values[field_name] = raw
    values.update(overrides)
    return CompilerConfig(**values)
