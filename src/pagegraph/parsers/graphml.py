from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from typing import Any

from pagegraph.config import DEFAULT_OPTIONS, DecodeOptions
from pagegraph.errors import MalformedDocumentError
from pagegraph.graph.model import Graph
from pagegraph.parsers.assemble import GraphAssembler
from pagegraph.parsers.attributes import (
    AttributeValue,
    KeyDeclaration,
    decode_value,
    scalar_type_for,
)
from pagegraph.parsers.classify import (
    RawElement,
    classify_edge,
    classify_node,
    element_timestamp,
)
from pagegraph.utils import get_logger

logger = get_logger(__name__)


def _local_name(tag: str) -> str:
    # "{http://graphml.graphdrawing.org/xmlns}node" -> "node"
    return tag.rsplit("}", 1)[-1]


def _children(parent: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in parent if isinstance(c.tag, str) and _local_name(c.tag) == name]


class PageGraphParser:
    """Parse a PageGraph GraphML document into a typed, read-only Graph."""

    def __init__(self, options: DecodeOptions = DEFAULT_OPTIONS) -> None:
        self.options = options

    def parse(self, source: Any) -> Graph:
        root = self._load_document(source)
        if _local_name(root.tag) != "graphml":
            raise MalformedDocumentError(
                f"Expected a <graphml> root element, found <{_local_name(root.tag)}>"
            )
        keys = self._read_keys(root)
        graph_el = self._find_graph(root)

        assembler = GraphAssembler()
        for child in graph_el:
            if not isinstance(child.tag, str):
                continue  # comments, processing instructions
            tag = _local_name(child.tag)
            if tag == "node":
                element = self._read_element(child, "node", keys)
                assembler.add_node(
                    element.id,
                    classify_node(element, self.options),
                    element_timestamp(element, self.options),
                )
            elif tag == "edge":
                element = self._read_element(child, "edge", keys)
                assembler.add_edge(
                    element.id,
                    element.source,
                    element.target,
                    classify_edge(element, self.options),
                    element_timestamp(element, self.options),
                )

        metadata = self._read_data(graph_el, "graph", keys)[1]
        graph = assembler.build(metadata=metadata)
        logger.info(
            f"Decoded PageGraph with {len(graph.nodes)} nodes and {len(graph.edges)} edges"
        )
        return graph

    def _load_document(self, source: Any) -> ET.Element:
        try:
            if isinstance(source, (bytes, bytearray, memoryview)):
                return ET.fromstring(bytes(source))
            if isinstance(source, (str, os.PathLike)):
                return ET.parse(os.fspath(source)).getroot()
            if hasattr(source, "read"):
                return ET.parse(source).getroot()
        except ET.ParseError as exc:
            line, column = exc.position
            raise MalformedDocumentError(
                "Document is not well-formed XML", line=line, column=column
            ) from exc
        raise TypeError("Unsupported source type for PageGraph parser")

    def _read_keys(self, root: ET.Element) -> dict[str, KeyDeclaration]:
        keys: dict[str, KeyDeclaration] = {}
        for key_el in _children(root, "key"):
            key_id = key_el.get("id")
            if not key_id:
                raise MalformedDocumentError("<key> element without an id")
            if key_id in keys:
                raise MalformedDocumentError(f"Duplicate <key> id '{key_id}'")
            name = key_el.get("attr.name") or key_id
            try:
                scalar_type = scalar_type_for(
                    key_el.get("attr.type"), name, self.options.timestamp_key
                )
            except KeyError:
                raise MalformedDocumentError(
                    f"<key> '{key_id}' has unsupported attr.type '{key_el.get('attr.type')}'"
                ) from None
            defaults = _children(key_el, "default")
            keys[key_id] = KeyDeclaration(
                id=key_id,
                name=name,
                domain=key_el.get("for", "all"),
                scalar_type=scalar_type,
                default=(defaults[0].text or "") if defaults else None,
            )
        logger.debug(f"Read {len(keys)} GraphML key declarations")
        return keys

    def _find_graph(self, root: ET.Element) -> ET.Element:
        graphs = _children(root, "graph")
        if len(graphs) != 1:
            raise MalformedDocumentError(
                f"Expected exactly one <graph> element, found {len(graphs)}"
            )
        return graphs[0]

    def _read_data(
        self,
        element: ET.Element,
        domain: str,
        keys: dict[str, KeyDeclaration],
        element_id: str | None = None,
    ) -> tuple[dict[str, str], dict[str, AttributeValue]]:
        raw: dict[str, str] = {}
        declared: dict[str, KeyDeclaration] = {}
        for data_el in _children(element, "data"):
            key_id = data_el.get("key")
            decl = keys.get(key_id) if key_id else None
            if decl is None or not decl.applies_to(domain):
                raise MalformedDocumentError(
                    f"<data> references undeclared {domain} key '{key_id}'",
                    element_id=element_id,
                )
            if decl.name in raw:
                raise MalformedDocumentError(
                    f"Attribute '{decl.name}' given twice", element_id=element_id
                )
            raw[decl.name] = data_el.text or ""
            declared[decl.name] = decl
        for decl in keys.values():
            if decl.default is not None and decl.applies_to(domain) and decl.name not in raw:
                raw[decl.name] = decl.default
                declared[decl.name] = decl
        values = {
            name: decode_value(text, declared[name].scalar_type) for name, text in raw.items()
        }
        return raw, values

    def _read_element(
        self, element: ET.Element, kind: str, keys: dict[str, KeyDeclaration]
    ) -> RawElement:
        element_id = element.get("id")
        if not element_id:
            raise MalformedDocumentError(f"<{kind}> element without an id")
        source = target = None
        if kind == "edge":
            source = element.get("source")
            target = element.get("target")
            if not source or not target:
                raise MalformedDocumentError(
                    f"<edge> '{element_id}' needs both source and target",
                    element_id=element_id,
                )
        raw, values = self._read_data(element, kind, keys, element_id)
        return RawElement(
            element=kind,
            id=element_id,
            raw=raw,
            values=values,
            source=source,
            target=target,
        )


def decode(source: Any, *, strict: bool = True) -> Graph:
    """Decode a PageGraph document from bytes or a binary stream."""
    if isinstance(source, (str, os.PathLike)):
        raise TypeError("decode() takes bytes or a binary stream; use decode_file() for paths")
    return PageGraphParser(DecodeOptions(strict=strict)).parse(source)


def decode_file(path: str | os.PathLike[str], *, strict: bool = True) -> Graph:
    """Open a PageGraph .graphml file and decode it."""
    with open(path, "rb") as stream:
        return PageGraphParser(DecodeOptions(strict=strict)).parse(stream)
