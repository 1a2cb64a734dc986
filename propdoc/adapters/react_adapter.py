EXTERNAL_PREFIX = "external"


def make_node_id(comp):
    module = comp.get("filePath") or "unknown"
    if comp.get("name"):
        return f"{module}::{comp['name']}"
    return None


def _deprecation_note(deprecated):
    return deprecated if isinstance(deprecated, str) else None


def make_external_id(type_name: str) -> str:
    return f"{EXTERNAL_PREFIX}::{type_name}"


def adapt_react_components(raw_components):
    """Turn serialized ``ComponentMetadata`` dicts into a ``{"nodes", "edges"}`` schema."""
    nodes = []
    edges = []
    external_types = {}

    for comp in raw_components:
        node_id = make_node_id(comp)
        if node_id is None:
            continue
        props = comp.get("props", [])
        nodes.append({
            "id": node_id,
            "category": "component",
            "name": comp["name"],
            "file_path": comp.get("filePath"),
            "export_kind": comp.get("exportKind"),
            "props": [p["name"] for p in props],
            "required_props": [p["name"] for p in props if p.get("required")],
            "description": comp.get("description"),
            "deprecated": bool(comp.get("deprecated")),
            "deprecation_note": _deprecation_note(comp.get("deprecated")),
        })
        for type_name in comp.get("extends", []):
            target = make_external_id(type_name)
            if target not in external_types:
                external_types[target] = {
                    "id": target,
                    "category": "external_type",
                    "name": type_name,
                }
            edges.append({"from": node_id, "to": target, "relation": "extends"})

    nodes.extend(external_types.values())
    return {"nodes": nodes, "edges": edges}
