import json
import sys

import main
from models import ScriptProject
from project_store import ProjectStore
from script_editor.console_log import LogLevel
from script_editor.editor import ScriptEditor
from script_editor.graph_model import Task, skeleton_nodes


def test_project_round_trip(tmp_path):
    store = ProjectStore(tmp_path / "script.json")
    project = ScriptProject(
        id="p1",
        name="Daily",
        tasks=[Task(id="t1", name="Login", nodes=skeleton_nodes(), variables={"retries": 2})],
    )

    store.save(project)
    loaded = store.load()

    assert loaded == project


def test_missing_or_corrupt_project(tmp_path):
    assert ProjectStore(tmp_path / "none.json").load() is None

    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    assert ProjectStore(bad).load() is None


def test_project_without_id_gets_one(tmp_path):
    path = tmp_path / "script.json"
    path.write_text(json.dumps({"name": "X", "tasks": []}), encoding="utf-8")

    project = ProjectStore(path).load()

    assert project.id
    assert project.tasks == []


def test_loaded_broken_task_is_repaired_with_warnings(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({
        "id": "p1",
        "name": "Broken",
        "tasks": [{
            "id": "t1",
            "name": "Main",
            "nodes": [
                {"id": "x", "data": {"type": "click"}},
                {"id": "x", "data": {"type": "wait"}},
            ],
            "edges": [{"source": "x", "target": "ghost"}],
        }],
    }), encoding="utf-8")

    project = ProjectStore(path).load()
    editor = ScriptEditor(project.tasks)

    ids = [n.id for n in editor.graph.nodes]
    assert ids == ["start-1", "x", "end-1"]
    assert len(set(ids)) == len(ids)
    assert sum(1 for n in editor.graph.nodes if n.is_start()) == 1
    assert sum(1 for n in editor.graph.nodes if n.is_end()) == 1
    assert editor.graph.edges == []
    warnings = [e.message for e in editor.console.entries if e.level == LogLevel.WARN]
    assert len(warnings) == 4
    assert all(w.startswith("Task Main:") for w in warnings)


def test_cli_creates_project_and_adds_nodes(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(main, "SettingsManager", lambda: _settings(tmp_path))
    path = tmp_path / "demo.json"
    monkeypatch.setattr(sys, "argv", ["main.py", str(path), "click", "template_1"])

    assert main.main() == 0

    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["tasks"]) == 1
    types = [n["data"]["type"] for n in data["tasks"][0]["nodes"]]
    assert types == ["start", "end", "click", "loop", "screenshot", "detect", "if", "click"]
    assert "Main Task" in capsys.readouterr().out
    settings = json.loads((tmp_path / "editor.json").read_text(encoding="utf-8"))
    assert settings["lastTaskId"] == data["tasks"][0]["id"]


def test_cli_reopens_last_active_task(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "SettingsManager", lambda: _settings(tmp_path))
    path = tmp_path / "demo.json"
    ProjectStore(path).save(ScriptProject(
        id="p1",
        tasks=[
            Task(id="t1", name="Login", nodes=skeleton_nodes()),
            Task(id="t2", name="Farm", nodes=skeleton_nodes()),
        ],
    ))
    (tmp_path / "editor.json").write_text(json.dumps({"lastTaskId": "t2"}), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["main.py", str(path), "wait"])

    assert main.main() == 0

    tasks = json.loads(path.read_text(encoding="utf-8"))["tasks"]
    assert len(tasks[0]["nodes"]) == 2
    assert [n["data"]["type"] for n in tasks[1]["nodes"]] == ["start", "end", "wait"]
    settings = json.loads((tmp_path / "editor.json").read_text(encoding="utf-8"))
    assert settings["lastTaskId"] == "t2"


def test_cli_requires_path(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["main.py"])

    assert main.main() == 2


def _settings(tmp_path):
    from settings_manager import SettingsManager

    return SettingsManager(tmp_path / "editor.json")
