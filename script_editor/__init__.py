"""
Script editor package: the authoring model behind the flow-graph editor.

Key parts
---------
- node_types:   Registry of node types, default data and display metadata
- handles:      Source/target handle tables that govern valid edges
- templates:    Multi-node recipes expanded at a drop point
- graph_model:  Task / Node / Edge data classes and JSON helpers
- connections:  Edge construction and validation
- flow_graph:   Working set of the active task and the delete workflow
- node_factory: Node creation, chaining and template expansion
- task_manager: Task collection, switching, rename and visibility
- drag_drop:    Shared palette/canvas drag state
- console_log:  Bounded console the editor reports through
- editor:       ScriptEditor, which wires everything together
"""

from .console_log import ConsoleLog, LogEntry, LogLevel
from .editor import ScriptEditor
from .graph_model import Edge, Node, Position, Task

__all__ = [
    "ConsoleLog",
    "Edge",
    "LogEntry",
    "LogLevel",
    "Node",
    "Position",
    "ScriptEditor",
    "Task",
]
