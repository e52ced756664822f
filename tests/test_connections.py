import pytest

from conftest import add_plain_nodes, levels


def test_if_true_edge_takes_source_metadata(graph, connections):
    add_plain_nodes(graph, "a", "b")

    edge = connections.connect("a", "b", "ifTrue", "input")

    assert edge is not None
    assert edge.label == "是"
    assert edge.animated is True
    assert edge.id == "e-a-ifTrue-b-input"
    assert graph.edges == [edge]


def test_plain_output_into_loop_end_uses_target_metadata(graph, connections):
    add_plain_nodes(graph, "a", "b")

    edge = connections.connect("a", "b", "output", "loopEnd")

    assert edge.label == "循环结束"
    assert edge.animated is True


def test_plain_output_to_input_has_no_label(graph, connections):
    add_plain_nodes(graph, "a", "b")

    edge = connections.connect("a", "b", "output", "input")

    assert edge.label is None
    assert edge.animated is False


@pytest.mark.parametrize("handles", [("output", "input"), ("ifTrue", "loopEnd"), ("bogus", "nope")])
def test_self_loops_are_always_rejected(graph, connections, log, handles):
    add_plain_nodes(graph, "a")

    assert connections.connect("a", "a", *handles) is None
    assert graph.edges == []
    assert levels(log)[-1] == "error"


@pytest.mark.parametrize("source_handle, target_handle", [
    ("out", "input"),
    ("output", "in"),
    ("input", "output"),
    (None, "input"),
])
def test_unknown_handles_are_rejected_and_logged(graph, connections, log, source_handle, target_handle):
    add_plain_nodes(graph, "a", "b")

    assert connections.connect("a", "b", source_handle, target_handle) is None
    assert graph.edges == []
    last = log.entries[-1]
    assert last.level == "error"
    assert str(source_handle) in last.message
    assert str(target_handle) in last.message


def test_missing_endpoint_is_rejected(graph, connections, log):
    add_plain_nodes(graph, "a")

    assert connections.connect("a", "ghost", "output", "input") is None
    assert levels(log)[-1] == "error"


def test_duplicate_connection_is_rejected(graph, connections, log):
    add_plain_nodes(graph, "a", "b")
    connections.connect("a", "b", "output", "input")

    assert connections.connect("a", "b", "output", "input") is None
    assert len(graph.edges) == 1
    assert levels(log)[-1] == "warn"


def test_same_endpoints_with_other_handles_are_distinct(graph, connections):
    add_plain_nodes(graph, "a", "b")

    connections.connect("a", "b", "ifTrue", "input")
    connections.connect("a", "b", "ifFalse", "input")

    assert [e.label for e in graph.edges] == ["是", "否"]


def test_success_log_can_be_suppressed(graph, connections, log):
    add_plain_nodes(graph, "a", "b", "c")
    before = len(log)

    connections.connect("a", "b", "output", "input", show_log=False)
    assert len(log) == before

    connections.connect("b", "c", "output", "input")
    assert len(log) == before + 1
    assert log.entries[-1].level == "success"
