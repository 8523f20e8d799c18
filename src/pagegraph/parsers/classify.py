from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from pagegraph.config import DEFAULT_OPTIONS, DecodeOptions
from pagegraph.errors import MissingRequiredFieldError, UnclassifiableElementError
from pagegraph.graph.model import Timestamp
from pagegraph.graph.types import (
    EDGE_KINDS,
    NODE_KINDS,
    EdgeType,
    NodeType,
    UnknownEdge,
    UnknownNode,
)
from pagegraph.parsers.attributes import AttributeValue, DecodeFailed, coerce
from pagegraph.utils import get_logger

logger = get_logger(__name__)


@dataclass
class RawElement:
    """
    One <node> or <edge> as found in the document: raw strings keyed by
    attribute name (document order, declared defaults included) plus their
    decoded values. Only lives until classification.
    """

    element: str
    id: str
    raw: dict[str, str] = field(default_factory=dict)
    values: dict[str, AttributeValue] = field(default_factory=dict)
    source: str | None = None
    target: str | None = None


@dataclass(frozen=True)
class _FieldSpec:
    name: str
    source: str
    scalar: type
    required: bool


@lru_cache(maxsize=None)
def _field_specs(variant_cls: type) -> tuple[tuple[_FieldSpec, ...], str | None]:
    out: list[_FieldSpec] = []
    extras_name: str | None = None
    for f in fields(variant_cls):
        if f.metadata.get("extras"):
            extras_name = f.name
            continue
        out.append(
            _FieldSpec(
                name=f.name,
                source=f.metadata.get("source") or f.name.replace("_", " "),
                scalar=f.metadata["scalar"],
                required=f.default is MISSING,
            )
        )
    return tuple(out), extras_name


def _build_variant(
    variant_cls: type, element: RawElement, kind: str, reserved: set[str]
) -> Any:
    field_specs, extras_name = _field_specs(variant_cls)
    kwargs: dict[str, Any] = {}
    consumed = set(reserved)
    for fs in field_specs:
        consumed.add(fs.source)
        value = element.values.get(fs.source)
        if value is not None:
            value = coerce(value, fs.scalar)
        if value is None or isinstance(value, DecodeFailed):
            if fs.required:
                raise MissingRequiredFieldError(element.id, kind, fs.source)
            if value is not None:
                logger.debug(
                    f"{element.element} '{element.id}': dropping undecodable "
                    f"'{fs.source}' value {value.raw!r}"
                )
            continue
        kwargs[fs.name] = value
    if extras_name is not None:
        kwargs[extras_name] = MappingProxyType(
            {k: v for k, v in element.values.items() if k not in consumed}
        )
    return variant_cls(**kwargs)


def _classify(
    element: RawElement,
    table: dict[str, type],
    unknown_cls: type,
    kind_key: str,
    options: DecodeOptions,
) -> Any:
    kind_value = element.values.get(kind_key)
    if kind_value is None:
        raise MissingRequiredFieldError(element.id, None, kind_key)
    kind = coerce(kind_value, str)
    variant_cls = table.get(kind)
    if variant_cls is None:
        if options.strict:
            raise UnclassifiableElementError(element.id, kind, element.element)
        logger.warning(
            f"{element.element} '{element.id}': unknown kind '{kind}', "
            f"keeping as {unknown_cls.__name__}"
        )
        return unknown_cls(kind=kind, attributes=MappingProxyType(dict(element.raw)))
    try:
        return _build_variant(
            variant_cls, element, kind, {kind_key, options.timestamp_key}
        )
    except MissingRequiredFieldError as exc:
        if options.strict:
            raise
        logger.warning(f"{exc}; keeping as {unknown_cls.__name__}")
        return unknown_cls(kind=kind, attributes=MappingProxyType(dict(element.raw)))


def classify_node(element: RawElement, options: DecodeOptions = DEFAULT_OPTIONS) -> NodeType:
    return _classify(element, NODE_KINDS, UnknownNode, options.node_kind_key, options)


def classify_edge(element: RawElement, options: DecodeOptions = DEFAULT_OPTIONS) -> EdgeType:
    return _classify(element, EDGE_KINDS, UnknownEdge, options.edge_kind_key, options)


def element_timestamp(
    element: RawElement, options: DecodeOptions = DEFAULT_OPTIONS
) -> Timestamp | None:
    """The element's timestamp, or None when absent or undecodable."""
    value = element.values.get(options.timestamp_key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        if isinstance(value, DecodeFailed):
            logger.debug(
                f"{element.element} '{element.id}': ignoring undecodable timestamp {value.raw!r}"
            )
        return None
    return value
