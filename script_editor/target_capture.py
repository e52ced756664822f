"""
Target Capture - fills a node's screen coordinates from real mouse clicks.

A click node takes one point (`x`/`y`); a swipe node takes two, its start and
then its end. The pynput listener runs on its own thread, so every write to
the graph goes through `dispatch`, which runs it on the editor's thread.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from .console_log import ConsoleLog
from .flow_graph import FlowGraph
from .node_types import NodeType

try:
    from pynput import mouse  # type: ignore
except Exception:  # pragma: no cover - environment dependent
    mouse = None  # type: ignore


_log = logging.getLogger(__name__)

ClickHandler = Callable[[float, float, Any, bool], bool]
ListenerFactory = Callable[[ClickHandler], Any]
# Runs a callable on the editor's thread.
Dispatcher = Callable[[Callable[[], None]], None]

# Data fields filled by each captured click, in capture order.
TARGET_FIELDS: Dict[str, List[Tuple[str, str]]] = {
    NodeType.CLICK.value: [("x", "y")],
    NodeType.SWIPE.value: [("startX", "startY"), ("endX", "endY")],
}


def _call_now(fn: Callable[[], None]) -> None:
    fn()


def _pynput_listener(on_click: ClickHandler) -> Any:
    if mouse is None:
        raise RuntimeError("pynput mouse backend not available; target capture is disabled.")
    return mouse.Listener(on_click=on_click)


def screen_point(x: float, y: float) -> Tuple[int, int]:
    """
    Position of a click in the coordinate system pyautogui clicks in.

    pynput and pyautogui can disagree under DPI scaling, so the cursor is
    re-read through pyautogui and clamped to the screen; without a display
    the listener's own coordinates are used.
    """
    try:
        import pyautogui  # type: ignore
        cx, cy = pyautogui.position()
        width, height = pyautogui.size()
    except Exception as exc:
        _log.debug("pyautogui unavailable, using listener coordinates: %s", exc)
        return int(x), int(y)
    return max(0, min(int(cx), int(width) - 1)), max(0, min(int(cy), int(height) - 1))


class ClickTargetCapture:
    """Captures on-screen clicks straight into a click or swipe node."""

    def __init__(
        self,
        graph: FlowGraph,
        log: ConsoleLog,
        dispatch: Optional[Dispatcher] = None,
        listener_factory: Optional[ListenerFactory] = None,
    ):
        self._graph = graph
        self._log = log
        self._dispatch = dispatch or _call_now
        self._listener_factory = listener_factory or _pynput_listener
        self._lock = threading.Lock()
        self._listener: Optional[Any] = None
        self._node_id: Optional[str] = None
        self._pending: List[Tuple[str, str]] = []

    @property
    def is_capturing(self) -> bool:
        return self._listener is not None

    @property
    def target_node_id(self) -> Optional[str]:
        return self._node_id

    def start(self, node_id: str) -> bool:
        """Listen for the clicks `node_id` needs; False if nothing was started."""
        node = self._graph.find_node(node_id)
        fields = TARGET_FIELDS.get(node.type) if node is not None else None
        if not fields:
            self._log.error(f"Target capture needs a click or swipe node: {node_id}")
            return False

        with self._lock:
            if self._listener is not None:
                self._log.warn(f"Target capture already running for {self._node_id}")
                return False
            try:
                listener = self._listener_factory(self._handle_click)
                listener.start()
            except Exception as exc:
                self._log.error(f"Target capture failed: {exc}")
                return False
            self._listener = listener
            self._node_id = node_id
            self._pending = list(fields)

        self._log.info(f"Waiting for {len(fields)} click(s) on screen for {node_id}...")
        return True

    def cancel(self) -> None:
        with self._lock:
            if self._listener is None:
                return
            node_id = self._node_id
            self._stop_listener()
        self._log.info(f"Target capture cancelled for {node_id}")

    # Listener thread --------------------------------------------------

    def _handle_click(self, x: float, y: float, _button: Any, pressed: bool) -> bool:
        if not pressed:
            return True

        with self._lock:
            if self._listener is None or not self._pending:
                return False
            node_id = self._node_id
            x_key, y_key = self._pending.pop(0)
            done = not self._pending
            if done:
                self._stop_listener()

        px, py = screen_point(x, y)
        self._dispatch(lambda: self._apply(node_id, {x_key: px, y_key: py}, done))
        # Returning False stops the pynput listener.
        return not done

    # Helpers ----------------------------------------------------------

    def _apply(self, node_id: str, updates: Dict[str, int], done: bool) -> None:
        node = self._graph.find_node(node_id)
        if node is not None and node.type == NodeType.CLICK.value:
            updates = dict(updates, targetType="coordinates")
        if not self._graph.update_node_data(node_id, updates):
            return
        point = tuple(v for k, v in updates.items() if k != "targetType")
        self._log.info(f"Captured point {point} for {node_id}")
        if done:
            self._log.success(f"Target capture finished for {node_id}")

    def _stop_listener(self) -> None:
        listener = self._listener
        self._listener = None
        self._node_id = None
        self._pending = []
        if listener is not None:
            try:
                listener.stop()
            except Exception as exc:
                _log.debug("Listener stop failed: %s", exc)
