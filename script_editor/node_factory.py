"""
Node creation for palette clicks and drops, including template expansion.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .connections import ConnectionValidator
from .console_log import ConsoleLog
from .flow_graph import FlowGraph
from .graph_model import Node, Position
from .handles import INPUT, OUTPUT
from .node_types import chain_out_handle, defaults_for
from .templates import get_template, is_template


DEFAULT_POSITION = Position(200, 200)
CHAIN_SPACING = 120


class NodeFactory:
    """Creates nodes in the working set and wires freshly added ones."""

    def __init__(self, graph: FlowGraph, connections: ConnectionValidator, log: ConsoleLog):
        self._graph = graph
        self._connections = connections
        self._log = log

    def create_node(
        self,
        node_type: str,
        position: Position,
        data: Optional[Dict[str, Any]] = None,
    ) -> Node:
        """Append a node with registry defaults unless explicit data is given."""
        node_data = dict(data) if data is not None else defaults_for(node_type)
        node = Node(
            id=self._graph.allocate_node_id(),
            position=Position(position.x, position.y),
            data=node_data,
            label=str(node_data.get("label") or ""),
        )
        self._graph.add_node(node)
        self._log.info(f"Added node: {node_type}")
        return node

    def add_node_to_canvas(self, node_type: str, position: Optional[Position] = None) -> Optional[Node]:
        """
        Add a node from the palette.

        Without an explicit position the node goes below the selection (or
        the last node) and is chained to the selected node when that node
        continues through a plain output. Templates expand instead and
        return None.
        """
        if is_template(node_type):
            self.expand_template(node_type, position)
            return None

        selected = self._graph.selected_node
        if position is not None:
            final_position = position
        elif selected is not None:
            final_position = selected.position.offset(dy=CHAIN_SPACING)
        elif self._graph.last_node() is not None:
            final_position = self._graph.last_node().position.offset(dy=CHAIN_SPACING)
        else:
            final_position = DEFAULT_POSITION

        new_node = self.create_node(node_type, final_position)

        if position is None and selected is not None and chain_out_handle(selected.type) == OUTPUT:
            edge = self._connections.connect(selected.id, new_node.id, OUTPUT, INPUT, show_log=False)
            if edge is not None:
                self._log.info(f"Auto-connected: {selected.id} -> {new_node.id}")

        self._graph.select_node(new_node.id)
        return new_node

    def expand_template(self, key: str, base_position: Optional[Position] = None) -> List[Node]:
        """Materialise every template node, then wire edges by list position."""
        template = get_template(key)
        if template is None:
            self._log.error(f"Unknown template: {key}")
            return []

        base = base_position or DEFAULT_POSITION
        created: List[Node] = []
        for spec in template.nodes:
            data = defaults_for(spec.type)
            data["label"] = spec.label
            created.append(self.create_node(spec.type, base.offset(spec.dx, spec.dy), data))

        for spec in template.edges:
            self._connections.connect(
                created[spec.source_idx].id,
                created[spec.target_idx].id,
                spec.resolved_source_handle,
                spec.resolved_target_handle,
                show_log=False,
            )

        self._log.success(f"Expanded template: {key}")
        return created
