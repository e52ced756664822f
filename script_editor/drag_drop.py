"""
Drag-and-drop between the node palette and the canvas.

The palette and the canvas share nothing but one `DragContext` instance,
constructed by the editor and handed to both. The palette only calls
`drag_start`; the canvas registers its node-creation callback and
coordinate transform and handles `drag_over` / `drag_leave` / `drop`.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from .console_log import ConsoleLog
from .graph_model import Position


DRAG_DATA_FORMAT = "application/x-script-node"
DEFAULT_DROP_POSITION = Position(200, 200)

AddNodeCallback = Callable[[str, Position], Union[Any, Awaitable[Any]]]
CoordinateTransform = Callable[[Position], Position]


@dataclass
class DragEvent:
    """Pointer event as delivered by the host UI."""
    client_x: float = 0
    client_y: float = 0
    drop_effect: Optional[str] = None
    effect_allowed: Optional[str] = None
    data: Dict[str, str] = field(default_factory=dict)


class DragHost:
    """Document-level side effects of a drag; the default does nothing."""

    def set_text_selection(self, enabled: bool) -> None:
        pass

    def add_global_drop_listener(self, listener: Callable[[], None]) -> None:
        pass

    def remove_global_drop_listener(self, listener: Callable[[], None]) -> None:
        pass


class DragContext:
    """Shared drag state; each field has one writer path."""

    def __init__(self, log: ConsoleLog, host: Optional[DragHost] = None):
        self._log = log
        self._host = host or DragHost()
        self.dragged_type: Optional[str] = None
        self.is_drag_over = False
        self.is_dragging = False
        self._on_add_node: Optional[AddNodeCallback] = None
        self._to_graph_space: Optional[CoordinateTransform] = None

    def register_canvas(
        self,
        on_add_node: Optional[AddNodeCallback] = None,
        to_graph_space: Optional[CoordinateTransform] = None,
    ) -> None:
        """Called by the canvas surface; the latest registration wins."""
        if on_add_node is not None:
            self._on_add_node = on_add_node
        if to_graph_space is not None:
            self._to_graph_space = to_graph_space

    # Palette side -----------------------------------------------------

    def drag_start(self, node_type: str, event: Optional[DragEvent] = None) -> None:
        if event is not None:
            event.data[DRAG_DATA_FORMAT] = node_type
            event.effect_allowed = "move"
        self.dragged_type = node_type
        self._set_dragging(True)
        # Drops outside any canvas still have to reset the state.
        # Only one listener per context, even if a drag restarts.
        self._host.remove_global_drop_listener(self.drag_end)
        self._host.add_global_drop_listener(self.drag_end)

    # Canvas side ------------------------------------------------------

    def drag_over(self, event: DragEvent) -> None:
        if self.dragged_type:
            self.is_drag_over = True
            event.drop_effect = "move"

    def drag_leave(self) -> None:
        self.is_drag_over = False

    def drag_end(self) -> None:
        self._set_dragging(False)
        self.is_drag_over = False
        self.dragged_type = None
        self._host.remove_global_drop_listener(self.drag_end)

    async def drop(self, event: DragEvent) -> Any:
        """Create the dragged node at the drop point; returns the callback's result."""
        position = DEFAULT_DROP_POSITION
        if self._to_graph_space is not None:
            position = self._to_graph_space(Position(event.client_x, event.client_y))

        node_type = self.dragged_type
        self.drag_end()

        if self._on_add_node is None or not node_type:
            self._log.warn("Drop ignored: no node type dragged or no canvas registered")
            return None

        result = self._on_add_node(node_type, position)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _set_dragging(self, dragging: bool) -> None:
        if self.is_dragging != dragging:
            self._host.set_text_selection(not dragging)
        self.is_dragging = dragging
