"""Conversion between diagram JSON documents and node/edge records.

Documents follow the editor's diagram schema::

    {"nodes": [{"id", "type", "position": {"x", "y"}, "data": {...}}],
     "edges": [{"id", "source", "target", ...}]}

Documents are validated with pydantic models. Coordinates must be numbers and
ids must be strings or integers; anything else raises ``ValueError``
(pydantic's ``ValidationError`` is a ``ValueError``). Unknown keys on an edge
are kept in ``EdgeRecord.data``. Writing results back only touches each
node's ``position``, so every other key survives.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from diagram_layout.ir.records import DEFAULT_TYPE, EdgeRecord, NodeRecord, Point

Identifier = Union[StrictStr, StrictInt]


class PositionModel(BaseModel):
    """Top-left corner of a node box. Missing axes default to 0."""

    model_config = ConfigDict(extra="ignore")

    x: float = Field(0.0, strict=True, description="Horizontal coordinate")
    y: float = Field(0.0, strict=True, description="Vertical coordinate")


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Identifier
    type: Optional[str] = Field(None, strict=True)
    position: Optional[PositionModel] = None
    data: Optional[dict[str, Any]] = None

    @field_validator("id")
    @classmethod
    def id_as_string(cls, v: Identifier) -> str:
        return str(v)

    def to_record(self) -> NodeRecord:
        position = self.position or PositionModel()
        return NodeRecord(
            id=str(self.id),
            type=self.type or DEFAULT_TYPE,
            position=Point(position.x, position.y),
            data=dict(self.data or {}),
        )


class EdgeModel(BaseModel):
    """An edge; keys other than id/source/target are carried as edge data."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Identifier] = None
    source: Identifier
    target: Identifier

    @field_validator("id", "source", "target")
    @classmethod
    def ids_as_strings(cls, v: Optional[Identifier]) -> Optional[str]:
        return None if v is None else str(v)

    def to_record(self) -> EdgeRecord:
        source, target = str(self.source), str(self.target)
        return EdgeRecord(
            id=str(self.id or f"{source}-{target}"),
            source=source,
            target=target,
            data=dict(self.model_extra or {}),
        )


class DiagramDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)


def node_from_dict(raw: Mapping[str, Any]) -> NodeRecord:
    return NodeModel.model_validate(raw).to_record()


def node_to_dict(node: NodeRecord) -> dict[str, Any]:
    model = NodeModel(
        id=node.id,
        type=node.type,
        position=PositionModel(x=node.position.x, y=node.position.y),
        data=dict(node.data),
    )
    return model.model_dump()


def edge_from_dict(raw: Mapping[str, Any]) -> EdgeRecord:
    return EdgeModel.model_validate(raw).to_record()


def edge_to_dict(edge: EdgeRecord) -> dict[str, Any]:
    return EdgeModel(id=edge.id, source=edge.source, target=edge.target, **edge.data).model_dump()


def load_diagram(doc: Mapping[str, Any]) -> tuple[list[NodeRecord], list[EdgeRecord]]:
    """Read nodes and edges out of a diagram document.

    Raises:
        ValueError: If the document, its node list or its edge list is malformed.
    """
    document = DiagramDocument.model_validate(doc)
    return [n.to_record() for n in document.nodes], [e.to_record() for e in document.edges]


def dump_diagram(doc: Mapping[str, Any], nodes: list[NodeRecord]) -> dict[str, Any]:
    """Copy ``doc`` with each node's position taken from the matching record.

    ``nodes`` must be in document order, as returned by ``layout_diagram``.
    """
    raw_nodes = doc.get("nodes", [])
    if len(raw_nodes) != len(nodes):
        raise ValueError(f"expected {len(raw_nodes)} node records, got {len(nodes)}")
    out = dict(doc)
    out["nodes"] = [
        {**raw, "position": PositionModel(x=node.position.x, y=node.position.y).model_dump()}
        for raw, node in zip(raw_nodes, nodes)
    ]
    return out
