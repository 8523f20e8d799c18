from __future__ import annotations


class DecodeError(Exception):
    """Base class for failures while decoding a PageGraph document."""

    def __init__(
        self, message: str, code: str = "EDECODE", element_id: str | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.element_id = element_id


class MalformedDocumentError(DecodeError):
    """Not well-formed XML, or not shaped like a GraphML graph document."""

    def __init__(
        self,
        message: str,
        element_id: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, code="EMALFORMED", element_id=element_id)
        self.line = line
        self.column = column


class UnclassifiableElementError(DecodeError):
    def __init__(self, element_id: str, kind: str, element: str = "node") -> None:
        super().__init__(
            f"Unknown {element} kind '{kind}' on {element} '{element_id}'",
            code="EUNCLASSIFIABLE",
            element_id=element_id,
        )
        self.kind = kind
        self.element = element


class MissingRequiredFieldError(DecodeError):
    def __init__(self, element_id: str, kind: str | None, field: str) -> None:
        super().__init__(
            f"Element '{element_id}' of kind '{kind}' is missing required field '{field}'",
            code="EMISSING_FIELD",
            element_id=element_id,
        )
        self.kind = kind
        self.field = field


class DuplicateIdentifierError(DecodeError):
    def __init__(self, identifier: str, element: str = "node") -> None:
        super().__init__(
            f"Duplicate {element} identifier '{identifier}'",
            code="EDUP_ID",
            element_id=identifier,
        )
        self.identifier = identifier
        self.element = element


class DanglingEdgeReferenceError(DecodeError):
    def __init__(self, edge_id: str, node_id: str) -> None:
        super().__init__(
            f"Edge '{edge_id}' references missing node '{node_id}'",
            code="EDANGLING_EDGE",
            element_id=edge_id,
        )
        self.node_id = node_id


class NodeNotFoundError(LookupError):
    """Raised by graph traversals given an identifier the graph does not hold."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node '{node_id}' not found")
        self.code = "ENOT_FOUND"
        self.node_id = node_id


class AnalysisError(ValueError):
    """A provenance analysis was asked about a node it does not apply to."""

    def __init__(self, message: str, node_id: str | None = None) -> None:
        super().__init__(message)
        self.code = "EANALYSIS"
        self.node_id = node_id
