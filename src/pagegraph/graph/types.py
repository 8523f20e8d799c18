"""
Closed sets of PageGraph node and edge variants.

Each variant is a frozen dataclass registered under the kind tag PageGraph
writes into the "node type" / "edge type" attribute. Fields are declared with
attr(): the first argument is the scalar type the field holds, a field without
a default is required, and the source attribute name defaults to the field
name with underscores replaced by spaces ("tag_name" <- "tag name").
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar, Union

NODE_KINDS: dict[str, type] = {}
EDGE_KINDS: dict[str, type] = {}

_T = TypeVar("_T", bound=type)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def node_kind(kind: str) -> Callable[[_T], _T]:
    def wrapper(cls: _T) -> _T:
        NODE_KINDS[kind] = cls
        cls.KIND = kind
        return cls

    return wrapper


def edge_kind(kind: str) -> Callable[[_T], _T]:
    def wrapper(cls: _T) -> _T:
        EDGE_KINDS[kind] = cls
        cls.KIND = kind
        return cls

    return wrapper


def attr(scalar: type, *, source: str | None = None, default: Any = MISSING) -> Any:
    metadata = {"scalar": scalar, "source": source}
    if default is MISSING:
        return field(metadata=metadata)
    return field(default=default, metadata=metadata)


def extras() -> Any:
    """Receives every decoded attribute no other field of the variant consumes."""
    return field(default_factory=lambda: _EMPTY, metadata={"extras": True}, hash=False)


# ---------------- node variants ----------------


@node_kind("HTML element")
@dataclass(frozen=True)
class HtmlElement:
    tag_name: str = attr(str)
    is_deleted: bool = attr(bool, default=False)
    node_id: int | None = attr(int, default=None)
    attributes: Mapping[str, Any] = extras()


@node_kind("text node")
@dataclass(frozen=True)
class TextNode:
    is_deleted: bool = attr(bool, default=False)
    node_id: int | None = attr(int, default=None)
    text: str | None = attr(str, default=None)


@node_kind("DOM root")
@dataclass(frozen=True)
class DomRoot:
    is_deleted: bool = attr(bool, default=False)
    node_id: int | None = attr(int, default=None)
    url: str | None = attr(str, default=None)
    tag_name: str | None = attr(str, default=None)


@node_kind("frame owner")
@dataclass(frozen=True)
class FrameOwner:
    tag_name: str | None = attr(str, default=None)
    is_deleted: bool = attr(bool, default=False)
    node_id: int | None = attr(int, default=None)


@node_kind("remote frame")
@dataclass(frozen=True)
class RemoteFrame:
    frame_id: str = attr(str)


@node_kind("script")
@dataclass(frozen=True)
class Script:
    script_type: str = attr(str, default="unknown")
    source: str = attr(str, default="")
    script_id: int | None = attr(int, default=None)
    url: str | None = attr(str, default=None)


@node_kind("storage")
@dataclass(frozen=True)
class Storage:
    storage_type: str = attr(str, default="")


@node_kind("local storage")
@dataclass(frozen=True)
class LocalStorage:
    pass


@node_kind("session storage")
@dataclass(frozen=True)
class SessionStorage:
    pass


@node_kind("cookie jar")
@dataclass(frozen=True)
class CookieJar:
    pass


@node_kind("web API")
@dataclass(frozen=True)
class WebApi:
    method: str = attr(str)


@node_kind("JS builtin")
@dataclass(frozen=True)
class JsBuiltin:
    method: str = attr(str)


@node_kind("resource")
@dataclass(frozen=True)
class Resource:
    url: str = attr(str)


@node_kind("parser")
@dataclass(frozen=True)
class Parser:
    pass


@node_kind("extensions")
@dataclass(frozen=True)
class Extensions:
    pass


@node_kind("ad filter")
@dataclass(frozen=True)
class AdFilter:
    rule: str = attr(str)


@node_kind("tracker filter")
@dataclass(frozen=True)
class TrackerFilter:
    pass


@node_kind("fingerprinting filter")
@dataclass(frozen=True)
class FingerprintingFilter:
    pass


@node_kind("Brave Shields")
@dataclass(frozen=True)
class BraveShields:
    pass


@node_kind("shieldsAds shield")
@dataclass(frozen=True)
class AdsShield:
    pass


@node_kind("trackers shield")
@dataclass(frozen=True)
class TrackersShield:
    pass


@node_kind("javascript shield")
@dataclass(frozen=True)
class JavascriptShield:
    pass


@node_kind("fingerprinting shield")
@dataclass(frozen=True)
class FingerprintingShield:
    pass


@dataclass(frozen=True)
class UnknownNode:
    """A node whose kind is not in NODE_KINDS. attributes holds the raw strings verbatim."""

    kind: str
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY, hash=False)


# ---------------- edge variants ----------------


@edge_kind("structure")
@dataclass(frozen=True)
class Structure:
    pass


@edge_kind("create node")
@dataclass(frozen=True)
class CreateNode:
    pass


@edge_kind("insert node")
@dataclass(frozen=True)
class InsertNode:
    parent: int | None = attr(int, default=None)
    before: int | None = attr(int, default=None)


@edge_kind("remove node")
@dataclass(frozen=True)
class RemoveNode:
    pass


@edge_kind("delete node")
@dataclass(frozen=True)
class DeleteNode:
    pass


@edge_kind("set attribute")
@dataclass(frozen=True)
class SetAttribute:
    key: str = attr(str)
    value: str | None = attr(str, default=None)
    is_style: bool = attr(bool, default=False)


@edge_kind("delete attribute")
@dataclass(frozen=True)
class DeleteAttribute:
    key: str = attr(str)
    is_style: bool = attr(bool, default=False)


@edge_kind("text change")
@dataclass(frozen=True)
class TextChange:
    value: str | None = attr(str, default=None)


@edge_kind("request start")
@dataclass(frozen=True)
class RequestStart:
    request_id: int = attr(int)
    request_type: str = attr(str, default="")


@edge_kind("request complete")
@dataclass(frozen=True)
class RequestComplete:
    request_id: int = attr(int)
    status: str | None = attr(str, default=None)
    resource_type: str | None = attr(str, default=None)


@edge_kind("request error")
@dataclass(frozen=True)
class RequestError:
    request_id: int = attr(int)
    status: str | None = attr(str, default=None)


@edge_kind("execute")
@dataclass(frozen=True)
class Execute:
    pass


@edge_kind("execute from attribute")
@dataclass(frozen=True)
class ExecuteFromAttribute:
    attr_name: str | None = attr(str, default=None)


@edge_kind("js call")
@dataclass(frozen=True)
class JsCall:
    method: str | None = attr(str, default=None)
    args: str | None = attr(str, default=None)


@edge_kind("js result")
@dataclass(frozen=True)
class JsResult:
    value: str | None = attr(str, default=None)


@edge_kind("add event listener")
@dataclass(frozen=True)
class AddEventListener:
    key: str = attr(str)
    event_listener_id: int | None = attr(int, default=None)


@edge_kind("remove event listener")
@dataclass(frozen=True)
class RemoveEventListener:
    key: str = attr(str)
    event_listener_id: int | None = attr(int, default=None)


@edge_kind("event listener")
@dataclass(frozen=True)
class EventListener:
    key: str = attr(str)
    event_listener_id: int | None = attr(int, default=None)


@edge_kind("storage set")
@dataclass(frozen=True)
class StorageSet:
    key: str = attr(str)
    value: str | None = attr(str, default=None)


@edge_kind("storage read call")
@dataclass(frozen=True)
class StorageReadCall:
    key: str = attr(str)


@edge_kind("storage read result")
@dataclass(frozen=True)
class StorageReadResult:
    key: str = attr(str)
    value: str | None = attr(str, default=None)


@edge_kind("delete storage")
@dataclass(frozen=True)
class DeleteStorage:
    key: str = attr(str)


@edge_kind("clear storage")
@dataclass(frozen=True)
class ClearStorage:
    key: str | None = attr(str, default=None)


@edge_kind("storage bucket")
@dataclass(frozen=True)
class StorageBucket:
    pass


@edge_kind("cross DOM")
@dataclass(frozen=True)
class CrossDom:
    pass


@edge_kind("resource block")
@dataclass(frozen=True)
class ResourceBlock:
    pass


@edge_kind("filter")
@dataclass(frozen=True)
class Filter:
    pass


@edge_kind("shield")
@dataclass(frozen=True)
class Shield:
    pass


@dataclass(frozen=True)
class UnknownEdge:
    """An edge whose kind is not in EDGE_KINDS. attributes holds the raw strings verbatim."""

    kind: str
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY, hash=False)


NODE_VARIANTS: tuple[type, ...] = (*NODE_KINDS.values(), UnknownNode)
EDGE_VARIANTS: tuple[type, ...] = (*EDGE_KINDS.values(), UnknownEdge)

NodeType = Union[
    HtmlElement,
    TextNode,
    DomRoot,
    FrameOwner,
    RemoteFrame,
    Script,
    Storage,
    LocalStorage,
    SessionStorage,
    CookieJar,
    WebApi,
    JsBuiltin,
    Resource,
    Parser,
    Extensions,
    AdFilter,
    TrackerFilter,
    FingerprintingFilter,
    BraveShields,
    AdsShield,
    TrackersShield,
    JavascriptShield,
    FingerprintingShield,
    UnknownNode,
]

EdgeType = Union[
    Structure,
    CreateNode,
    InsertNode,
    RemoveNode,
    DeleteNode,
    SetAttribute,
    DeleteAttribute,
    TextChange,
    RequestStart,
    RequestComplete,
    RequestError,
    Execute,
    ExecuteFromAttribute,
    JsCall,
    JsResult,
    AddEventListener,
    RemoveEventListener,
    EventListener,
    StorageSet,
    StorageReadCall,
    StorageReadResult,
    DeleteStorage,
    ClearStorage,
    StorageBucket,
    CrossDom,
    ResourceBlock,
    Filter,
    Shield,
    UnknownEdge,
]


def kind_of(variant: Any) -> str:
    """The PageGraph kind tag of a node or edge variant."""
    if isinstance(variant, (UnknownNode, UnknownEdge)):
        return variant.kind
    return type(variant).KIND
