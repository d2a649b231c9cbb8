from typing import Any, Dict, List

from core.layout import DEFAULT_WIDTH, PositionedNode, layout_binary_tree

H_SPACING = 60
V_SPACING = 50
TOP = 50


def compute_bst_positions(
    snapshot: Dict[str, Any],
    *,
    width: float = DEFAULT_WIDTH,
    h_spacing: float = H_SPACING,
    v_spacing: float = V_SPACING,
    top: float = TOP,
) -> List[PositionedNode]:
    return layout_binary_tree(
        snapshot, width=width, h_spacing=h_spacing, v_spacing=v_spacing, top=top
    )
