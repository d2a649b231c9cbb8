from typing import Any, Dict, List

from core.layout import DEFAULT_WIDTH, PositionedNode, format_key, layout_multiway_tree

H_SPACING = 100
V_SPACING = 60
TOP = 40


def compute_btree_positions(
    snapshot: Dict[str, Any],
    *,
    width: float = DEFAULT_WIDTH,
    h_spacing: float = H_SPACING,
    v_spacing: float = V_SPACING,
    top: float = TOP,
) -> List[PositionedNode]:
    """One positioned node per B-tree node, labelled with its keys ("10, 20")."""
    nodes = {node["id"]: node for node in snapshot["nodes"]}
    root_id = snapshot.get("root")
    if root_id is None or (nodes[root_id]["leaf"] and not nodes[root_id]["keys"]):
        return []

    return layout_multiway_tree(
        root_id,
        lambda node_id: nodes[node_id]["children"],
        lambda node_id: ", ".join(format_key(key) for key in nodes[node_id]["keys"]),
        width=width,
        h_spacing=h_spacing,
        v_spacing=v_spacing,
        top=top,
    )
