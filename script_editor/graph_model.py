"""
Graph data model for the script editor: tasks, nodes, edges.

Serialised keys follow the host graph's JSON (camelCase), so a task dict can
be handed to the canvas or the backend unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .node_types import is_end_kind, is_start_kind


RENDER_KIND = "custom"


@dataclass
class Position:
    """A point in graph space."""
    x: float
    y: float

    def offset(self, dx: float = 0, dy: float = 0) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @staticmethod
    def from_dict(data: Any) -> "Position":
        if not isinstance(data, dict):
            return Position(0, 0)
        return Position(x=data.get("x", 0) or 0, y=data.get("y", 0) or 0)


@dataclass
class Node:
    id: str
    position: Position
    data: Dict[str, Any] = field(default_factory=dict)
    label: str = ""
    render_kind: str = RENDER_KIND

    @property
    def type(self) -> Optional[str]:
        """Behavioural type from `data.type`."""
        value = self.data.get("type")
        return str(value) if value is not None else None

    def is_start(self) -> bool:
        return is_start_kind(self.type)

    def is_end(self) -> bool:
        return is_end_kind(self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.render_kind,
            "label": self.label,
            "position": self.position.to_dict(),
            "data": dict(self.data),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Node":
        raw_data = data.get("data")
        return Node(
            id=str(data.get("id", "")),
            position=Position.from_dict(data.get("position")),
            data=dict(raw_data) if isinstance(raw_data, dict) else {},
            label=str(data.get("label") or ""),
            render_kind=str(data.get("type") or RENDER_KIND),
        )


def edge_id(source: str, source_handle: str, target: str, target_handle: str) -> str:
    """Deterministic edge id from its endpoints and handles."""
    return f"e-{source}-{source_handle}-{target}-{target_handle}"


@dataclass
class Edge:
    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str
    label: Optional[str] = None
    animated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandle": self.source_handle,
            "targetHandle": self.target_handle,
            "label": self.label,
            "animated": self.animated,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Edge":
        source = str(data.get("source", ""))
        target = str(data.get("target", ""))
        source_handle = str(data.get("sourceHandle") or "output")
        target_handle = str(data.get("targetHandle") or "input")
        label = data.get("label")
        return Edge(
            id=str(data.get("id") or edge_id(source, source_handle, target, target_handle)),
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
            label=str(label) if label is not None else None,
            animated=bool(data.get("animated", False)),
        )


@dataclass
class Task:
    """A named, independently editable automation graph."""
    id: str
    name: str
    hidden: bool = False
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    ui_data: Dict[str, Any] = field(default_factory=dict)
    variables: Dict[str, Any] = field(default_factory=dict)

    def repair(self) -> List[str]:
        """Bring a loaded task back to a valid graph; returns one note per fix.

        Repeated node ids keep their first node, a missing start or end node
        is seeded like a new task's skeleton, and edges whose endpoints are
        not in the node list are dropped.
        """
        notes: List[str] = []
        seen = set()
        nodes: List[Node] = []
        for node in self.nodes:
            if node.id in seen:
                notes.append(f"Dropped node with repeated id {node.id}")
                continue
            seen.add(node.id)
            nodes.append(node)

        start, end = skeleton_nodes()
        if not any(node.is_start() for node in nodes):
            start.id = _unused_id(start.id, seen)
            seen.add(start.id)
            nodes.insert(0, start)
            notes.append(f"Added missing start node {start.id}")
        if not any(node.is_end() for node in nodes):
            end.id = _unused_id(end.id, seen)
            seen.add(end.id)
            nodes.append(end)
            notes.append(f"Added missing end node {end.id}")

        edges: List[Edge] = []
        for edge in self.edges:
            if edge.source not in seen or edge.target not in seen:
                notes.append(f"Dropped edge {edge.id} with a missing endpoint")
                continue
            edges.append(edge)

        self.nodes = nodes
        self.edges = edges
        return notes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hidden": self.hidden,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "uiData": dict(self.ui_data),
            "variables": dict(self.variables),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Task":
        nodes_data = data.get("nodes", []) or []
        nodes: List[Node] = []
        if isinstance(nodes_data, list):
            for raw in nodes_data:
                if isinstance(raw, dict):
                    nodes.append(Node.from_dict(raw))

        edges_data = data.get("edges", []) or []
        edges: List[Edge] = []
        if isinstance(edges_data, list):
            for raw in edges_data:
                if isinstance(raw, dict):
                    edges.append(Edge.from_dict(raw))

        ui_data = data.get("uiData")
        variables = data.get("variables")
        return Task(
            id=str(data.get("id", "")),
            name=str(data.get("name", "Unnamed Task")),
            hidden=bool(data.get("hidden", False)),
            nodes=nodes,
            edges=edges,
            ui_data=dict(ui_data) if isinstance(ui_data, dict) else {},
            variables=dict(variables) if isinstance(variables, dict) else {},
        )


def skeleton_nodes() -> List[Node]:
    """Start/end pair every new task is seeded with."""
    return [
        Node(id="start-1", position=Position(200, 50), data={"type": "start"}, label="开始"),
        Node(id="end-1", position=Position(200, 150), data={"type": "end"}, label="结束"),
    ]


def _unused_id(base: str, used) -> str:
    candidate = base
    n = 1
    while candidate in used:
        n += 1
        candidate = f"{base.rsplit('-', 1)[0]}-{n}"
    return candidate
