from script_editor.graph_model import Edge, Node, Task, edge_id, skeleton_nodes


def test_task_from_dict_skips_malformed_entries():
    task = Task.from_dict({
        "id": 7,
        "name": "Login",
        "nodes": [
            {"id": "1", "type": "custom", "label": "Start", "position": {"x": 200, "y": 50}, "data": {"type": "start"}},
            "garbage",
            {"id": "2", "data": {"type": "if", "target": "login_btn.png"}},
        ],
        "edges": [
            {"id": "e1-2", "source": "1", "target": "2", "sourceHandle": "output", "targetHandle": "input"},
            None,
        ],
        "uiData": {"zoom": 1.5},
    })

    assert task.id == "7"
    assert [n.id for n in task.nodes] == ["1", "2"]
    assert task.nodes[1].position.x == 0
    assert task.nodes[1].type == "if"
    assert task.edges[0].id == "e1-2"
    assert task.ui_data == {"zoom": 1.5}
    assert task.variables == {}
    assert task.hidden is False


def test_edge_from_dict_derives_missing_id_and_handles():
    edge = Edge.from_dict({"source": "a", "target": "b"})

    assert edge.source_handle == "output"
    assert edge.target_handle == "input"
    assert edge.id == edge_id("a", "output", "b", "input") == "e-a-output-b-input"


def test_task_to_dict_uses_host_keys():
    task = Task(id="t", name="T", nodes=[Node.from_dict({"id": "n", "data": {"type": "wait"}})])

    data = task.to_dict()

    assert set(data) == {"id", "name", "hidden", "nodes", "edges", "uiData", "variables"}
    assert data["nodes"][0]["type"] == "custom"
    assert Task.from_dict(data).nodes[0].data == {"type": "wait"}


def test_node_without_type_is_untyped():
    node = Node.from_dict({"id": "x"})

    assert node.type is None
    assert not node.is_start()
    assert not node.is_end()


def test_repair_seeds_skeleton_and_drops_dangling_entries():
    task = Task.from_dict({
        "id": "t",
        "name": "Broken",
        "nodes": [
            {"id": "x", "data": {"type": "click"}},
            {"id": "x", "data": {"type": "wait"}},
            {"id": "start-1", "data": {"type": "wait"}},
        ],
        "edges": [
            {"source": "x", "target": "ghost"},
            {"source": "x", "target": "start-1"},
        ],
    })

    notes = task.repair()

    assert [n.id for n in task.nodes] == ["start-2", "x", "start-1", "end-1"]
    assert task.nodes[0].type == "start"
    assert task.nodes[-1].type == "end"
    assert [(e.source, e.target) for e in task.edges] == [("x", "start-1")]
    assert len(notes) == 4


def test_repair_leaves_valid_task_alone():
    task = Task(id="t", name="T", nodes=skeleton_nodes())

    assert task.repair() == []
    assert [n.id for n in task.nodes] == ["start-1", "end-1"]
