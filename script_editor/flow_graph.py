"""
Working set of the task being edited: live nodes/edges, selection and the
two-step delete workflow.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .console_log import ConsoleLog
from .graph_model import Edge, Node
from .node_types import is_protected


NodeIdFactory = Callable[[], str]


def default_node_id() -> str:
    return f"node-{uuid.uuid4().hex[:12]}"


class DeleteState(Enum):
    """States of the delete-confirmation workflow."""
    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"


class FlowGraph:
    """
    The canvas-facing collections for the active task.

    `nodes` and `edges` are plain lists the canvas reads; the task manager
    swaps them out through `load()` when the active task changes.
    """

    def __init__(self, log: ConsoleLog, node_id_factory: Optional[NodeIdFactory] = None):
        self._log = log
        self._node_id_factory = node_id_factory or default_node_id
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.selected_node: Optional[Node] = None
        self._selected_ids: List[str] = []
        self.delete_state = DeleteState.IDLE
        self.nodes_to_delete: List[Node] = []

    # Lookup -----------------------------------------------------------

    def find_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def find_edge(self, edge_id: str) -> Optional[Edge]:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def has_node(self, node_id: str) -> bool:
        return self.find_node(node_id) is not None

    def last_node(self) -> Optional[Node]:
        return self.nodes[-1] if self.nodes else None

    def allocate_node_id(self) -> str:
        """Next id from the factory that is not already used in the working set."""
        while True:
            candidate = self._node_id_factory()
            if not self.has_node(candidate):
                return candidate

    # Mutation ---------------------------------------------------------

    def load(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Replace the working set with shallow copies of another task's graph."""
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.clear_selection()
        self._reset_delete()

    def add_node(self, node: Node) -> Node:
        self.nodes.append(node)
        return node

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def remove_nodes(self, node_ids: Iterable[str]) -> List[Node]:
        """Remove nodes and every edge touching them."""
        doomed = set(node_ids)
        removed = [node for node in self.nodes if node.id in doomed]
        self.nodes = [node for node in self.nodes if node.id not in doomed]
        self.edges = [
            edge for edge in self.edges
            if edge.source not in doomed and edge.target not in doomed
        ]
        self._selected_ids = [nid for nid in self._selected_ids if nid not in doomed]
        if self.selected_node is not None and self.selected_node.id in doomed:
            self.selected_node = None
        return removed

    def update_node_data(self, node_id: str, updates: Dict[str, Any]) -> bool:
        """Merge `updates` into a node's data; a `label` key also renames the node."""
        node = self.find_node(node_id)
        if node is None:
            self._log.error(f"Node not found: {node_id}")
            return False
        node.data.update(updates)
        if "label" in updates and updates["label"] is not None:
            node.label = str(updates["label"])
        return True

    # Selection --------------------------------------------------------

    @property
    def selected_nodes(self) -> List[Node]:
        """Multi-selection in working-set order."""
        chosen = set(self._selected_ids)
        return [node for node in self.nodes if node.id in chosen]

    def select_node(self, node_id: str, additive: bool = False) -> Optional[Node]:
        node = self.find_node(node_id)
        if node is None:
            self._log.warn(f"Cannot select unknown node: {node_id}")
            return None
        if not additive:
            self._selected_ids = []
        if node.id not in self._selected_ids:
            self._selected_ids.append(node.id)
        self.selected_node = node
        return node

    def clear_selection(self) -> None:
        self.selected_node = None
        self._selected_ids = []

    # Delete workflow --------------------------------------------------

    @property
    def show_delete_confirm(self) -> bool:
        return self.delete_state is DeleteState.PENDING_CONFIRMATION

    def request_delete_selected(self) -> bool:
        """Stage the deletable part of the selection; returns True if confirmation is needed."""
        deletable = [node for node in self.selected_nodes if not is_protected(node.type)]
        if not deletable:
            return False
        self.nodes_to_delete = deletable
        self.delete_state = DeleteState.PENDING_CONFIRMATION
        return True

    def confirm_delete(self) -> int:
        if self.delete_state is not DeleteState.PENDING_CONFIRMATION:
            return 0
        removed = self.remove_nodes(node.id for node in self.nodes_to_delete)
        self._log.warn(f"Deleted {len(removed)} node(s)")
        self.clear_selection()
        self._reset_delete()
        return len(removed)

    def cancel_delete(self) -> None:
        self._reset_delete()

    def _reset_delete(self) -> None:
        self.delete_state = DeleteState.IDLE
        self.nodes_to_delete = []
