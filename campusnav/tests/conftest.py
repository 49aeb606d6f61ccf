import json

import pytest

RAW_GRAPH = {
    "nodes": [
        {"id": "lobby", "x": 10.0, "y": 10.0, "name": "Main Lobby", "no_stairs": True, "indoor": True},
        {"id": "hall", "x": 20.0, "y": 10.0, "name": "East Hall", "no_stairs": True, "indoor": True, "elevator": True},
        {"id": "lab", "x": 30.0, "y": 10.0, "name": "Robotics Lab", "no_stairs": True, "indoor": True},
        {"id": "quad", "x": 20.0, "y": 30.0, "name": "Main Quad", "no_stairs": True, "indoor": False},
        {"id": "cafe", "x": 60.0, "y": 30.0, "name": "Corner Cafe", "no_stairs": True, "outside_campus": True},
        {"id": "attic", "x": 90.0, "y": 90.0, "name": "Attic", "no_stairs": False, "indoor": True},
    ],
    "edges": [
        {"id": "e1", "sourceId": "lobby", "targetId": "hall", "distance": 40.0, "no_stairs": True},
        {"id": "e2", "sourceId": "hall", "targetId": "lab", "distance": 40.0, "no_stairs": True},
        {"id": "e3", "sourceId": "lobby", "targetId": "quad", "distance": 15.0, "no_stairs": True},
        {"id": "e4", "sourceId": "quad", "targetId": "lab", "distance": 15.0, "no_stairs": True},
        {"id": "e5", "sourceId": "quad", "targetId": "cafe", "distance": 25.0, "no_stairs": True},
        {"id": "e6", "sourceId": "lab", "targetId": "attic", "distance": 5.0, "no_stairs": False},
        {"id": "e7", "sourceId": "lab", "targetId": "basement", "distance": 5.0, "no_stairs": True},
    ],
}


@pytest.fixture
def raw_graph():
    return json.loads(json.dumps(RAW_GRAPH))


@pytest.fixture
def graph_dir(tmp_path, raw_graph):
    (tmp_path / "upper.json").write_text(json.dumps(raw_graph), encoding="utf-8")
    (tmp_path / "upper.meta.json").write_text(json.dumps({"campus_name": "Upper Campus"}), encoding="utf-8")
    return tmp_path
