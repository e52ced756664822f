import asyncio
import itertools
from typing import List

import pytest

from script_editor.console_log import ConsoleLog
from script_editor.connections import ConnectionValidator
from script_editor.editor import ScriptEditor
from script_editor.flow_graph import FlowGraph
from script_editor.graph_model import Node, Position, Task, skeleton_nodes
from script_editor.ids import IdProvider
from script_editor.node_factory import NodeFactory


class SequentialIds(IdProvider):
    def __init__(self, prefix: str = "task") -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix
        self.calls = 0

    async def generate_id(self) -> str:
        self.calls += 1
        return f"{self._prefix}-{next(self._counter)}"


class FailingIds(IdProvider):
    async def generate_id(self) -> str:
        raise ConnectionError("id service unavailable")


def counter_ids(prefix: str = "n"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def make_task(task_id: str, name: str, extra: List[Node] = ()) -> Task:
    return Task(id=task_id, name=name, nodes=skeleton_nodes() + list(extra))


def levels(log: ConsoleLog) -> List[str]:
    return [entry.level for entry in log.entries]


@pytest.fixture
def log() -> ConsoleLog:
    return ConsoleLog(max_entries=100)


@pytest.fixture
def graph(log) -> FlowGraph:
    return FlowGraph(log, node_id_factory=counter_ids())


@pytest.fixture
def connections(graph, log) -> ConnectionValidator:
    return ConnectionValidator(graph, log)


@pytest.fixture
def factory(graph, connections, log) -> NodeFactory:
    return NodeFactory(graph, connections, log)


@pytest.fixture
def editor() -> ScriptEditor:
    tasks = [make_task("t1", "Login"), make_task("t2", "Sign In")]
    return ScriptEditor(tasks, SequentialIds(), node_id_factory=counter_ids())


@pytest.fixture
def run():
    return asyncio.run


def add_plain_nodes(graph: FlowGraph, *ids: str) -> None:
    for index, node_id in enumerate(ids):
        graph.add_node(Node(id=node_id, position=Position(0, index * 100), data={"type": "wait"}))
