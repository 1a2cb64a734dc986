import pytest

from propdoc.adapters.react_adapter import adapt_react_components
from propdoc.utils.networkx_graph import build_graph_from_schema, components_extending, write_graph

RAW_COMPONENTS = [
    {
        "name": "Button",
        "filePath": "src/Button.tsx",
        "exportKind": "named",
        "props": [{"name": "label", "type": "string", "required": True}],
        "extends": ["ButtonHTMLAttributes<HTMLButtonElement>"],
    },
    {
        "name": "IconButton",
        "filePath": "src/IconButton.tsx",
        "exportKind": "default",
        "props": [
            {"name": "icon", "type": "string", "required": True},
            {"name": "size", "type": "number", "required": False, "defaultValue": "16"},
        ],
        "extends": ["ButtonHTMLAttributes<HTMLButtonElement>"],
        "deprecated": True,
    },
    {"name": "Card", "filePath": "src/Card.tsx", "exportKind": "named", "props": []},
]


@pytest.fixture(scope="module")
def adapted():
    return adapt_react_components(RAW_COMPONENTS)


def test_nodes_and_edges_structure(adapted):
    assert isinstance(adapted, dict)
    assert isinstance(adapted["nodes"], list)
    assert isinstance(adapted["edges"], list)


def test_component_nodes(adapted):
    by_id = {n["id"]: n for n in adapted["nodes"]}
    assert "src/Button.tsx::Button" in by_id
    icon = by_id["src/IconButton.tsx::IconButton"]
    assert icon["category"] == "component"
    assert icon["export_kind"] == "default"
    assert icon["props"] == ["icon", "size"]
    assert icon["required_props"] == ["icon"]


def test_external_types_are_shared(adapted):
    externals = [n for n in adapted["nodes"] if n["category"] == "external_type"]
    assert [n["id"] for n in externals] == ["external::ButtonHTMLAttributes<HTMLButtonElement>"]


def test_extends_edges(adapted):
    edges = {(e["from"], e["to"], e["relation"]) for e in adapted["edges"]}
    assert edges == {
        ("src/Button.tsx::Button", "external::ButtonHTMLAttributes<HTMLButtonElement>", "extends"),
        ("src/IconButton.tsx::IconButton", "external::ButtonHTMLAttributes<HTMLButtonElement>", "extends"),
    }


def test_graph_attributes_are_graphml_safe(adapted):
    G = build_graph_from_schema(adapted)
    assert G.number_of_nodes() == 4
    card = G.nodes["src/Card.tsx::Card"]
    assert card["props"] == "[]"
    assert card["description"] == ""
    assert G.nodes["src/IconButton.tsx::IconButton"]["deprecated"] is True
    assert card["deprecated"] is False
    assert card["deprecation_note"] == ""
    assert components_extending(G, "ButtonHTMLAttributes<HTMLButtonElement>") == [
        "src/Button.tsx::Button",
        "src/IconButton.tsx::IconButton",
    ]
    assert components_extending(G, "Missing") == []


def test_write_graph(adapted, tmp_path):
    G = build_graph_from_schema(adapted)
    graph_ml, graph_gp = write_graph(G, str(tmp_path / "graph"))
    assert graph_ml.endswith("components.graphml")
    assert graph_gp.endswith("components.gpickle")
    assert (tmp_path / "graph" / "components.graphml").exists()
    assert (tmp_path / "graph" / "components.gpickle").exists()
