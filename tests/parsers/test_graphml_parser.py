from __future__ import annotations

import io
from pathlib import Path

import pytest

from pagegraph import (
    DanglingEdgeReferenceError,
    DecodeOptions,
    DuplicateIdentifierError,
    MalformedDocumentError,
    MissingRequiredFieldError,
    PageGraphParser,
    UnclassifiableElementError,
    decode,
    decode_file,
)
from pagegraph.graph.types import (
    HtmlElement,
    RequestStart,
    Resource,
    Structure,
    TextNode,
    UnknownNode,
)

KEYS = """
  <key id="d0" for="node" attr.name="node type" attr.type="string"/>
  <key id="d1" for="node" attr.name="tag name" attr.type="string"/>
  <key id="d2" for="node" attr.name="is deleted" attr.type="boolean">
    <default>false</default>
  </key>
  <key id="d3" for="node" attr.name="node id" attr.type="int"/>
  <key id="d4" for="node" attr.name="url" attr.type="string"/>
  <key id="d5" for="all" attr.name="timestamp" attr.type="long"/>
  <key id="d6" for="node" attr.name="flavor" attr.type="string"/>
  <key id="e0" for="edge" attr.name="edge type" attr.type="string"/>
  <key id="e1" for="edge" attr.name="request id" attr.type="int"/>
  <key id="e2" for="edge" attr.name="request type" attr.type="string"/>
  <key id="g0" for="graph" attr.name="version" attr.type="string"/>
"""


def document(body: str, keys: str = KEYS, namespaced: bool = True) -> bytes:
    xmlns = ' xmlns="http://graphml.graphdrawing.org/xmlns"' if namespaced else ""
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<graphml{xmlns}>{keys}"
        f'<graph id="G" edgedefault="directed">{body}</graph>'
        f"</graphml>"
    ).encode("utf-8")


DIV_AND_TEXT = """
  <data key="g0">0.7.2</data>
  <node id="n1"><data key="d0">HTML element</data><data key="d1">div</data>
    <data key="d2">true</data><data key="d3">12</data><data key="d5">100</data></node>
  <node id="n2"><data key="d0">text node</data></node>
  <edge id="e1" source="n1" target="n2"><data key="e0">structure</data></edge>
"""


def test_div_with_text_child_and_filter() -> None:
    g = decode(document(DIV_AND_TEXT))
    assert list(g.nodes) == ["n1", "n2"]
    div = g.node("n1")
    assert div.node_type == HtmlElement(tag_name="div", is_deleted=True, node_id=12)
    assert div.timestamp == 100
    assert isinstance(g.node("n2").node_type, TextNode)
    assert g.edge("e1").edge_type == Structure()
    assert g.metadata == {"version": "0.7.2"}

    matches = g.filter_nodes(
        lambda t: isinstance(t, HtmlElement) and t.tag_name == "div" and t.is_deleted
    )
    assert [n.id for n in matches] == ["n1"]


def test_key_default_applies_when_data_absent() -> None:
    body = '<node id="n1"><data key="d0">HTML element</data><data key="d1">p</data></node>'
    g = decode(document(body))
    assert g.node("n1").node_type.is_deleted is False


def test_unconsumed_attributes_are_kept_as_extras() -> None:
    body = """
      <node id="n1"><data key="d0">HTML element</data><data key="d1">span</data>
        <data key="d6">vanilla</data></node>
    """
    g = decode(document(body))
    assert dict(g.node("n1").node_type.attributes) == {"flavor": "vanilla"}


def test_document_without_namespace_is_accepted() -> None:
    g = decode(document(DIV_AND_TEXT, namespaced=False))
    assert len(g) == 2


def test_request_edge_decoding() -> None:
    body = """
      <node id="n1"><data key="d0">HTML element</data><data key="d1">script</data></node>
      <node id="n2"><data key="d0">resource</data><data key="d4">https://cdn.test/a.js</data></node>
      <edge id="e1" source="n1" target="n2"><data key="e0">request start</data>
        <data key="e1">4</data><data key="e2">script</data><data key="d5">7</data></edge>
    """
    g = decode(document(body))
    assert g.node("n2").node_type == Resource(url="https://cdn.test/a.js")
    e = g.edge("e1")
    assert e.edge_type == RequestStart(request_id=4, request_type="script")
    assert e.timestamp == 7


def test_dangling_edge_reference() -> None:
    body = """
      <node id="n1"><data key="d0">parser</data></node>
      <edge id="e1" source="n1" target="n99"><data key="e0">create node</data></edge>
    """
    with pytest.raises(DanglingEdgeReferenceError) as exc:
        decode(document(body))
    assert exc.value.node_id == "n99"


UNKNOWN_KIND = """
  <node id="n1"><data key="d0">HTML element</data><data key="d1">div</data></node>
  <node id="n2"><data key="d0">hologram</data><data key="d6">mint</data></node>
  <edge id="e1" source="n1" target="n2"><data key="e0">structure</data></edge>
"""


def test_unknown_kind_strict_fails() -> None:
    with pytest.raises(UnclassifiableElementError) as exc:
        decode(document(UNKNOWN_KIND))
    assert exc.value.element_id == "n2"
    assert exc.value.kind == "hologram"


def test_unknown_kind_lenient_keeps_node() -> None:
    g = decode(document(UNKNOWN_KIND), strict=False)
    unknown = g.node("n2").node_type
    assert isinstance(unknown, UnknownNode)
    assert unknown.kind == "hologram"
    # declared defaults are part of the raw mapping
    assert dict(unknown.attributes) == {
        "node type": "hologram",
        "flavor": "mint",
        "is deleted": "false",
    }
    html = g.filter_nodes(lambda t: isinstance(t, HtmlElement))
    assert [n.id for n in html] == ["n1"]
    # nothing dropped
    assert len(g.nodes) == 2 and len(g.edges) == 1


def test_duplicate_node_identifier() -> None:
    body = """
      <node id="n1"><data key="d0">parser</data></node>
      <node id="n1"><data key="d0">extensions</data></node>
    """
    with pytest.raises(DuplicateIdentifierError) as exc:
        decode(document(body))
    assert exc.value.identifier == "n1"


def test_missing_required_field() -> None:
    body = '<node id="n5"><data key="d0">resource</data></node>'
    with pytest.raises(MissingRequiredFieldError) as exc:
        decode(document(body))
    assert exc.value.element_id == "n5"
    assert exc.value.field == "url"


def test_malformed_xml_reports_position() -> None:
    with pytest.raises(MalformedDocumentError) as exc:
        decode(b"<graphml><graph>\n<node id='n1'></graph></graphml>")
    assert exc.value.code == "EMALFORMED"
    assert exc.value.line == 2


@pytest.mark.parametrize(
    "payload",
    [
        b"<graph/>",
        b"<graphml/>",
        document('<node><data key="d0">parser</data></node>'),
        document('<edge id="e1" source="n1"><data key="e0">structure</data></edge>'),
        document('<node id="n1"><data key="zz">parser</data></node>'),
        document('<node id="n1"><data key="e0">structure</data></node>'),
        document('<node id="n1"><data key="d0">parser</data><data key="d0">parser</data></node>'),
        document("", keys='<key id="k" for="node" attr.name="x" attr.type="complex"/>'),
    ],
)
def test_structurally_malformed_documents(payload: bytes) -> None:
    with pytest.raises(MalformedDocumentError):
        decode(payload)


def test_decode_from_stream_and_file(tmp_path: Path) -> None:
    payload = document(DIV_AND_TEXT)
    from_stream = decode(io.BytesIO(payload))
    path = tmp_path / "page.graphml"
    path.write_bytes(payload)
    from_file = decode_file(path)
    from_str_path = PageGraphParser().parse(str(path))
    for g in (from_stream, from_file, from_str_path):
        assert [n.node_type for n in g.nodes.values()] == [
            n.node_type for n in from_stream.nodes.values()
        ]


def test_parser_rejects_unsupported_source() -> None:
    with pytest.raises(TypeError):
        PageGraphParser().parse(12345)


def test_decode_rejects_text_and_paths(tmp_path: Path) -> None:
    with pytest.raises(TypeError, match="decode_file"):
        decode(document(DIV_AND_TEXT).decode())
    with pytest.raises(TypeError, match="decode_file"):
        decode(tmp_path / "page.graphml")


def test_lenient_options_object() -> None:
    parser = PageGraphParser(DecodeOptions(strict=False))
    g = parser.parse(document(UNKNOWN_KIND))
    assert isinstance(g.node("n2").node_type, UnknownNode)


def test_edges_reference_existing_nodes() -> None:
    g = decode(document(DIV_AND_TEXT))
    for e in g.edges.values():
        assert e.source in g.nodes
        assert e.target in g.nodes
