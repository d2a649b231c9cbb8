from typing import List, Sequence

from core.layout import DEFAULT_WIDTH, PositionedNode, format_key

V_SPACING = 70
TOP = 40


def compute_heap_positions(
    data: Sequence,
    *,
    width: float = DEFAULT_WIDTH,
    v_spacing: float = V_SPACING,
    top: float = TOP,
) -> List[PositionedNode]:
    """
    Level-by-level layout: level k holds indices 2**k - 1 .. 2**(k+1) - 2,
    spread evenly across ``width``. Node ids are array indices and the parent
    comes from the index formula.
    """
    nodes: List[PositionedNode] = []
    count = len(data)
    level = 0
    while 2 ** level <= count:
        start = 2 ** level - 1
        end = min(2 ** (level + 1) - 1, count)
        spacing = width / (end - start + 1)
        for index in range(start, end):
            nodes.append(
                PositionedNode(
                    node_id=index,
                    label=format_key(data[index]),
                    x=spacing * (index - start + 1),
                    y=level * v_spacing + top,
                    parent_id=None if index == 0 else (index - 1) // 2,
                )
            )
        level += 1
    return nodes
