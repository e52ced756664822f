"""
Task Manager - the collection of tasks in a script.

Exactly one task is active; its nodes/edges live in the FlowGraph while it
is active and are written back onto the task object on every switch.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .console_log import ConsoleLog
from .flow_graph import FlowGraph
from .graph_model import Task, skeleton_nodes
from .ids import IdProvider


class TaskManager:
    def __init__(
        self,
        graph: FlowGraph,
        id_provider: IdProvider,
        log: ConsoleLog,
        tasks: Iterable[Task],
    ):
        self._graph = graph
        self._id_provider = id_provider
        self._log = log
        self.tasks: List[Task] = list(tasks)
        if not self.tasks:
            raise ValueError("At least one task is required")
        for task in self.tasks:
            for note in task.repair():
                self._log.warn(f"Task {task.name}: {note}")
        self.current_task: Optional[Task] = None
        self.search = ""

        # Rename dialog state
        self.rename_target: Optional[Task] = None
        self.rename_value = ""

    @property
    def filtered_tasks(self) -> List[Task]:
        """Tasks whose name contains the search term, case-insensitively."""
        if not self.search:
            return self.tasks
        needle = self.search.lower()
        return [task for task in self.tasks if needle in task.name.lower()]

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def select_task(self, task: Task) -> None:
        """Save the working set onto the outgoing task, then load `task`."""
        if self.current_task is not None:
            self.flush()
        self.current_task = task
        self._graph.load(task.nodes, task.edges)
        self._log.info(f"Switched to task: {task.name}")

    def flush(self) -> None:
        """Copy the live working set back onto the active task."""
        if self.current_task is None:
            return
        self.current_task.nodes = list(self._graph.nodes)
        self.current_task.edges = list(self._graph.edges)

    async def create_task(self) -> Task:
        """Append a new task with a start/end skeleton and make it active."""
        new_id = await self._id_provider.generate_id()
        task = Task(
            id=new_id,
            name=f"New Task {len(self.tasks) + 1}",
            nodes=skeleton_nodes(),
        )
        self.tasks.append(task)
        self.select_task(task)
        return task

    def delete_task(self, task_id: str) -> bool:
        if len(self.tasks) <= 1:
            self._log.error("Cannot delete the last task")
            return False

        task = self.find_task(task_id)
        if task is None:
            return False

        self.tasks.remove(task)
        if self.current_task is task:
            # The removed task's edits are discarded, not flushed.
            self.current_task = None
            self.select_task(self.tasks[0])
        self._log.warn(f"Deleted task: {task.name}")
        return True

    def toggle_task_visibility(self, task: Task) -> None:
        task.hidden = not task.hidden
        state = "hidden" if task.hidden else "shown"
        self._log.info(f'Task "{task.name}" is now {state}')

    # Rename -----------------------------------------------------------

    @property
    def is_renaming(self) -> bool:
        return self.rename_target is not None

    def edit_task_name(self, task: Task) -> None:
        self.rename_target = task
        self.rename_value = task.name

    def confirm_rename(self) -> bool:
        """Apply the staged name; blank names silently cancel."""
        applied = False
        new_name = self.rename_value.strip()
        if self.rename_target is not None and new_name:
            self.rename_target.name = new_name
            self._log.info(f"Renamed task: {new_name}")
            applied = True
        self.cancel_rename()
        return applied

    def cancel_rename(self) -> None:
        self.rename_target = None
        self.rename_value = ""
