"""Errors raised while compiling a document into object descriptors."""


class CompileError(ValueError):
    """Base class for problems in the source document that stop one section compiling."""


class MalformedInlineNode(CompileError):
    """A node could not be rendered to text."""

    def __init__(self, node_type: str, cause: Exception, line: int | None = None):
        self.node_type = node_type
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"Unexpected content for token {node_type!r}{where}: {cause}")


class UnparsableTypeExpression(CompileError):
    """A type cell did not match any known type form."""

    def __init__(self, cell_text: str, reason: str = "no type form matched"):
        self.cell_text = cell_text
        self.reason = reason
        super().__init__(f"Cannot parse type expression {cell_text!r}: {reason}")
