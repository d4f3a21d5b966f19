"""Pydantic models handed from the compiler to the declaration emitter."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from oas_typings.compiler.types import TypeExpr
from oas_typings.document.nodes import Heading, Node


class FieldSpec(BaseModel):
    """One row of a Fixed Fields or Patterned Fields table.

    ``name_pattern`` is the literal field name for fixed fields and a
    placeholder identifier for patterned fields.  ``type`` is None for fields
    the document leaves untyped.  ``attributes`` keeps the remaining columns
    (e.g. ``fieldName``) verbatim as (camel-cased header, text) pairs in
    column order; a dict is accepted on construction.
    """

    model_config = ConfigDict(frozen=True)

    name_pattern: str
    type: TypeExpr | None = None
    required: bool = False
    description: str = ""
    attributes: tuple[tuple[str, str], ...] = ()

    @field_validator("attributes", mode="before")
    @classmethod
    def _freeze_attributes(cls, value):
        if isinstance(value, dict):
            return tuple(value.items())
        return value

    def attribute(self, name: str, default: str | None = None) -> str | None:
        """Return the verbatim text of a named extra column."""
        return next((text for column, text in self.attributes if column == name), default)


class ObjectDescriptor(BaseModel):
    """A documented schema object, ready for emission."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    description: str = ""
    example: str | None = None
    is_extensible: bool = False
    fixed_fields: tuple[FieldSpec, ...] = ()
    patterned_fields: tuple[FieldSpec, ...] = ()


class Section(BaseModel):
    """An object heading and the blocks up to the next heading at the same or shallower depth."""

    model_config = ConfigDict(frozen=True)

    heading: Heading
    title: str
    blocks: tuple[Node, ...] = ()


class SectionOutcome(BaseModel):
    """Result of compiling one section: a descriptor or an error message, never both."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str
    line: int | None = None
    descriptor: ObjectDescriptor | None = None
    error: str | None = None
    exception: Exception | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _exactly_one_result(self) -> "SectionOutcome":
        if (self.descriptor is None) == (self.error is None):
            raise ValueError("A section outcome needs exactly one of descriptor or error")
        return self


class CompileReport(BaseModel):
    """Every section outcome of one document, in document order."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcomes: tuple[SectionOutcome, ...] = ()

    @property
    def descriptors(self) -> list[ObjectDescriptor]:
        return [outcome.descriptor for outcome in self.outcomes if outcome.descriptor is not None]

    @property
    def failures(self) -> list[SectionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.error is not None]

    @property
    def ok(self) -> bool:
        return not self.failures

    def get(self, name: str) -> ObjectDescriptor | None:
        """Look up a compiled descriptor by identifier, e.g. 'IInfoObject'."""
        return next((descriptor for descriptor in self.descriptors if descriptor.name == name), None)

    def raise_for_errors(self):
        """Raise the first collected compile error, if any."""
        for outcome in self.failures:
            if outcome.exception is not None:
                raise outcome.exception
            raise ValueError(f"{outcome.title}: {outcome.error}")
