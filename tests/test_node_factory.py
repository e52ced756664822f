from script_editor.graph_model import Position
from script_editor.node_factory import DEFAULT_POSITION

from conftest import levels


def test_create_node_uses_registry_defaults(factory, graph, log):
    node = factory.create_node("wait", Position(10, 20))

    assert node.id == "n1"
    assert node.render_kind == "custom"
    assert node.data == {"type": "wait", "duration": 1000, "randomize": False}
    assert (node.position.x, node.position.y) == (10, 20)
    assert graph.nodes == [node]
    assert levels(log)[-1] == "info"


def test_create_node_prefers_explicit_data(factory):
    node = factory.create_node("click", Position(0, 0), {"type": "click", "label": "Tap"})

    assert node.data == {"type": "click", "label": "Tap"}
    assert node.label == "Tap"


def test_first_node_goes_to_default_point(factory):
    node = factory.add_node_to_canvas("click")

    assert (node.position.x, node.position.y) == (DEFAULT_POSITION.x, DEFAULT_POSITION.y)


def test_explicit_position_wins(factory, graph):
    first = factory.add_node_to_canvas("click")

    node = factory.add_node_to_canvas("wait", Position(5, 6))

    assert (node.position.x, node.position.y) == (5, 6)
    # no auto-connect when a position is given
    assert graph.edges == []
    assert graph.selected_node is node
    assert first is not node


def test_new_node_chains_below_selected_plain_output_node(factory, graph):
    first = factory.create_node("click", Position(100, 100))
    graph.select_node(first.id)

    second = factory.add_node_to_canvas("wait")

    assert (second.position.x, second.position.y) == (100, 220)
    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert (edge.source, edge.target) == (first.id, second.id)
    assert (edge.source_handle, edge.target_handle) == ("output", "input")
    assert graph.selected_node is second


def test_no_chain_from_condition_node(factory, graph):
    branch = factory.create_node("if", Position(0, 0))
    graph.select_node(branch.id)

    child = factory.add_node_to_canvas("click")

    assert (child.position.x, child.position.y) == (0, 120)
    assert graph.edges == []


def test_without_selection_node_goes_below_last_node(factory, graph):
    factory.create_node("click", Position(0, 0))
    factory.create_node("click", Position(40, 300))
    graph.clear_selection()

    node = factory.add_node_to_canvas("wait")

    assert (node.position.x, node.position.y) == (40, 420)
    assert graph.edges == []


def test_successive_palette_clicks_build_a_chain(factory, graph):
    a = factory.add_node_to_canvas("click")
    b = factory.add_node_to_canvas("wait")
    c = factory.add_node_to_canvas("swipe")

    assert [(e.source, e.target) for e in graph.edges] == [(a.id, b.id), (b.id, c.id)]


def test_template_1_expands_to_five_nodes_and_five_edges(factory, graph, log):
    result = factory.add_node_to_canvas("template_1", Position(0, 0))

    assert result is None
    assert [n.type for n in graph.nodes] == ["loop", "screenshot", "detect", "if", "click"]
    assert [n.position.y for n in graph.nodes] == [0, 100, 200, 300, 400]
    assert len(graph.edges) == 5

    loop_node = graph.nodes[0]
    back_edges = [e for e in graph.edges if e.target == loop_node.id]
    assert len(back_edges) == 1
    assert back_edges[0].target_handle == "loopEnd"
    assert back_edges[0].source_handle == "output"
    assert back_edges[0].animated is True
    assert back_edges[0].label == "循环结束"

    assert graph.edges[0].source_handle == "loopStart"
    assert graph.edges[3].label == "是"
    assert log.entries[-1].level == "success"
    assert "template_1" in log.entries[-1].message
    assert not any(e.level == "success" for e in log.entries[:-1])


def test_template_nodes_merge_defaults_with_label(factory, graph):
    factory.expand_template("template_1", Position(50, 50))

    loop_node = graph.nodes[0]
    assert loop_node.label == "循环"
    assert loop_node.data["count"] == 3
    assert loop_node.data["label"] == "循环"
    assert (graph.nodes[4].position.x, graph.nodes[4].position.y) == (50, 450)


def test_template_without_position_uses_default_point(factory, graph):
    factory.add_node_to_canvas("template_1")

    assert (graph.nodes[0].position.x, graph.nodes[0].position.y) == (200, 200)


def test_unknown_template_is_logged(factory, graph, log):
    assert factory.expand_template("template_99") == []
    assert graph.nodes == []
    assert levels(log)[-1] == "error"
