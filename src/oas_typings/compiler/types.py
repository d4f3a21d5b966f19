"""Type expressions reconstructed from the "Type" column of field tables.

A TypeExpr is one of a closed set of frozen pydantic models discriminated on
``kind``.  ``str()`` gives a compact, target-neutral notation used in log
messages and error reports:

    Any, string, IServerObject, RuntimeExpression, [string],
    Map[string, IPathItemObject], ISchemaObject | IReferenceObject
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class _TypeBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class AnyType(_TypeBase):
    """Unconstrained value."""

    kind: Literal["any"] = "any"

    def __str__(self) -> str:
        return "Any"


class LiteralType(_TypeBase):
    """Primitive or keyword type quoted as inline code, e.g. `string`."""

    kind: Literal["literal"] = "literal"
    name: str

    def __str__(self) -> str:
        return self.name


class ReferenceType(_TypeBase):
    """Reference to another documented object by its identifier."""

    kind: Literal["reference"] = "reference"
    name: str

    def __str__(self) -> str:
        return self.name


class RuntimeExpressionType(_TypeBase):
    """A string holding a runtime expression evaluated against a live HTTP message."""

    kind: Literal["runtimeExpression"] = "runtimeExpression"

    def __str__(self) -> str:
        return "RuntimeExpression"


class ArrayType(_TypeBase):
    kind: Literal["array"] = "array"
    of: "TypeExpr"

    def __str__(self) -> str:
        return f"[{self.of}]"


class MapType(_TypeBase):
    kind: Literal["map"] = "map"
    key: "TypeExpr"
    value: "TypeExpr"

    def __str__(self) -> str:
        return f"Map[{self.key}, {self.value}]"


class UnionType(_TypeBase):
    """Two or more alternatives, in document order."""

    kind: Literal["union"] = "union"
    alternatives: tuple["TypeExpr", ...]

    @field_validator("alternatives")
    @classmethod
    def _at_least_two(cls, value):
        if len(value) < 2:
            raise ValueError(f"A union needs at least two alternatives, got {len(value)}")
        return value

    def __str__(self) -> str:
        return " | ".join(str(alternative) for alternative in self.alternatives)


TypeExpr = Annotated[
    Union[AnyType, LiteralType, ReferenceType, RuntimeExpressionType, ArrayType, MapType, UnionType],
    Field(discriminator="kind"),
]

for _model in (ArrayType, MapType, UnionType):
    _model.model_rebuild()

TYPE_EXPR_ADAPTER = TypeAdapter(TypeExpr)

ANY = AnyType()


def widen_with_any(type_expr: TypeExpr | None) -> TypeExpr:
    """Widen a type so that it also admits any value.

    Untyped becomes Any; a type already admitting Any is returned unchanged;
    a union gains Any as its last alternative.
    """
    if type_expr is None or isinstance(type_expr, AnyType):
        return ANY
    if isinstance(type_expr, UnionType):
        if any(isinstance(alternative, AnyType) for alternative in type_expr.alternatives):
            return type_expr
        return UnionType(alternatives=type_expr.alternatives + (ANY,))
    return UnionType(alternatives=(type_expr, ANY))
