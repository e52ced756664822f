"""Builds edges between nodes, rejecting connections the handle tables forbid."""

from __future__ import annotations

from typing import Optional

from .console_log import ConsoleLog
from .flow_graph import FlowGraph
from .graph_model import Edge, edge_id
from .handles import source_handle as lookup_source, target_handle as lookup_target


class ConnectionValidator:
    def __init__(self, graph: FlowGraph, log: ConsoleLog):
        self._graph = graph
        self._log = log

    def connect(
        self,
        source: str,
        target: str,
        source_handle: Optional[str],
        target_handle: Optional[str],
        *,
        show_log: bool = True,
    ) -> Optional[Edge]:
        """
        Add an edge to the working set, or log why it was refused.

        Returns the new edge, or None when the connection was rejected.
        """
        src_info = lookup_source(source_handle)
        tgt_info = lookup_target(target_handle)
        if src_info is None or tgt_info is None or source == target:
            self._log.error(f"Unsupported connection: {source_handle} -> {target_handle}")
            return None

        if not self._graph.has_node(source) or not self._graph.has_node(target):
            self._log.error(f"Connection endpoints not found: {source} -> {target}")
            return None

        new_id = edge_id(source, source_handle, target, target_handle)
        if self._graph.find_edge(new_id) is not None:
            self._log.warn(f"Connection already exists: {new_id}")
            return None

        # Plain outputs borrow the target's look, e.g. a return into loopEnd.
        info = src_info if src_info.animated else tgt_info
        edge = self._graph.add_edge(Edge(
            id=new_id,
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
            label=info.label,
            animated=info.animated,
        ))

        if show_log:
            self._log.success(f"Connected: {source} [{source_handle}] -> {target} [{target_handle}]")
        return edge
