import json
import os
import pickle

import networkx as nx


def build_graph_from_schema(schema):
    G = nx.DiGraph()

    for node in schema["nodes"]:
        nid = node["id"]
        attrs = {}
        for (k, v) in node.items():
            if k == "id":
                continue
            if v is None:
                attrs[k] = ""
            elif isinstance(v, (str, int, float, bool)):
                attrs[k] = v
            else:
                attrs[k] = json.dumps(v)
        G.add_node(nid, **attrs)

    for edge in schema["edges"]:
        src = edge["from"]
        dst = edge["to"]
        rel = edge.get("relation") or ""
        G.add_edge(src, dst, relation=rel)

    return G


def write_graph(G: nx.DiGraph, graph_dir: str):
    os.makedirs(graph_dir, exist_ok=True)
    graph_ml = os.path.join(graph_dir, "components.graphml")
    graph_gp = os.path.join(graph_dir, "components.gpickle")

    nx.write_graphml(G, graph_ml)
    with open(graph_gp, "wb") as f:
        pickle.dump(G, f)
    return graph_ml, graph_gp


def components_extending(G: nx.DiGraph, type_name: str):
    """Components whose props extend the unresolved ``type_name``."""
    target = f"external::{type_name}"
    if not G.has_node(target):
        return []
    return sorted(G.predecessors(target))
