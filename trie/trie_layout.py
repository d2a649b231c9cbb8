from typing import Any, Dict, List

from core.layout import DEFAULT_WIDTH, PositionedNode, layout_multiway_tree

H_SPACING = 60
V_SPACING = 70
TOP = 40
ROOT_LABEL = "•"


def compute_trie_positions(
    snapshot: Dict[str, Any],
    *,
    width: float = DEFAULT_WIDTH,
    h_spacing: float = H_SPACING,
    v_spacing: float = V_SPACING,
    top: float = TOP,
) -> List[PositionedNode]:
    """Bottom-up layout of the trie; ``tag`` is True on nodes that end a word."""
    nodes = {node["id"]: node for node in snapshot["nodes"]}
    return layout_multiway_tree(
        snapshot.get("root"),
        lambda node_id: nodes[node_id]["children"],
        lambda node_id: nodes[node_id]["char"] or ROOT_LABEL,
        tag_of=lambda node_id: nodes[node_id]["end"],
        width=width,
        h_spacing=h_spacing,
        v_spacing=v_spacing,
        top=top,
    )
