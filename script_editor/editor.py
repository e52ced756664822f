"""
ScriptEditor - wires the editor components around one console and one
working set, the way the editor view composes them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .connections import ConnectionValidator
from .console_log import DEFAULT_MAX_LOGS, ConsoleLog
from .drag_drop import DragContext, DragHost
from .flow_graph import FlowGraph, NodeIdFactory
from .graph_model import Edge, Position, Task, skeleton_nodes
from .ids import IdProvider, UuidIdProvider
from .node_factory import NodeFactory
from .target_capture import ClickTargetCapture, Dispatcher, ListenerFactory
from .task_manager import TaskManager


DEFAULT_TASK_NAME = "Main Task"


class ScriptEditor:
    """Editor session for one script: tasks, working graph, console and drag state."""

    def __init__(
        self,
        tasks: Iterable[Task],
        id_provider: Optional[IdProvider] = None,
        *,
        max_logs: int = DEFAULT_MAX_LOGS,
        node_id_factory: Optional[NodeIdFactory] = None,
        drag_host: Optional[DragHost] = None,
        capture_dispatch: Optional[Dispatcher] = None,
        capture_listener: Optional[ListenerFactory] = None,
    ):
        self.console = ConsoleLog(max_logs, initial_message="Script Editor initialized.")
        self.graph = FlowGraph(self.console, node_id_factory)
        self.connections = ConnectionValidator(self.graph, self.console)
        self.factory = NodeFactory(self.graph, self.connections, self.console)
        self.tasks = TaskManager(self.graph, id_provider or UuidIdProvider(), self.console, tasks)
        self.drag = DragContext(self.console, drag_host)
        self.drag.register_canvas(on_add_node=self.factory.add_node_to_canvas)
        self.capture = ClickTargetCapture(self.graph, self.console, capture_dispatch, capture_listener)
        self.tasks.select_task(self.tasks.tasks[0])

    @classmethod
    async def open(
        cls,
        tasks: Optional[Iterable[Task]] = None,
        id_provider: Optional[IdProvider] = None,
        **kwargs: Any,
    ) -> "ScriptEditor":
        """Open an editor, seeding a default task when the script has none."""
        provider = id_provider or UuidIdProvider()
        task_list = list(tasks or [])
        if not task_list:
            task_id = await provider.generate_id()
            task_list.append(Task(id=task_id, name=DEFAULT_TASK_NAME, nodes=skeleton_nodes()))
        return cls(task_list, provider, **kwargs)

    def add_node(self, node_type: str, position: Optional[Position] = None):
        return self.factory.add_node_to_canvas(node_type, position)

    def connect(self, source: str, target: str, source_handle: str, target_handle: str) -> Optional[Edge]:
        return self.connections.connect(source, target, source_handle, target_handle)

    def snapshot(self) -> List[Dict[str, Any]]:
        """Serialised tasks, including unsaved edits of the active task."""
        self.tasks.flush()
        return [task.to_dict() for task in self.tasks.tasks]


    def capture_target(self, node_id: str) -> bool:
        """Fill a click or swipe node's coordinates from the next clicks on screen."""
        return self.capture.start(node_id)
