"""
Pure layout helpers shared by every structure.

Each function turns a model snapshot into a flat list of ``PositionedNode``.
Coordinates are node centres in scene units; nothing is cached between calls.
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

DEFAULT_WIDTH = 1200


class PositionedNode(NamedTuple):
    node_id: int
    label: str
    x: float
    y: float
    parent_id: Optional[int]
    tag: Any = None


def format_key(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def layout_binary_tree(
    snapshot: Dict[str, Any],
    *,
    width: float = DEFAULT_WIDTH,
    h_spacing: float = 60,
    v_spacing: float = 50,
    top: float = 50,
    tag_field: Optional[str] = None,
) -> List[PositionedNode]:
    """
    In-order walk: the n-th visited node gets x = n * h_spacing, so the
    horizontal order equals the key order. The result is centred on ``width``.
    """
    root_id = snapshot.get("root")
    if root_id is None:
        return []

    tree = {node["id"]: node for node in snapshot["nodes"]}
    placed: List[PositionedNode] = []
    stack: List[Tuple[int, int, Optional[int]]] = []
    current: Optional[Tuple[int, int, Optional[int]]] = (root_id, 0, None)

    while stack or current is not None:
        while current is not None:
            stack.append(current)
            node_id, depth, _ = current
            left = tree[node_id]["left"]
            current = (left, depth + 1, node_id) if left is not None else None

        node_id, depth, parent_id = stack.pop()
        node = tree[node_id]
        placed.append(
            PositionedNode(
                node_id=node_id,
                label=format_key(node["value"]),
                x=len(placed) * h_spacing,
                y=depth * v_spacing + top,
                parent_id=parent_id,
                tag=node.get(tag_field) if tag_field else None,
            )
        )
        right = node["right"]
        current = (right, depth + 1, node_id) if right is not None else None

    xs = [p.x for p in placed]
    offset = (width - (max(xs) - min(xs))) / 2 - min(xs)
    return [p._replace(x=p.x + offset) for p in placed]


def layout_multiway_tree(
    root_id: Optional[int],
    children_of: Callable[[int], Sequence[int]],
    label_of: Callable[[int], str],
    *,
    tag_of: Optional[Callable[[int], Any]] = None,
    width: float = DEFAULT_WIDTH,
    h_spacing: float = 60,
    v_spacing: float = 60,
    top: float = 40,
) -> List[PositionedNode]:
    """
    Bottom-up layout for trees with any fan-out.

    Leaves take consecutive slots from left to right, an internal node sits
    midway between its first and last child, and the root ends up at
    ``width / 2``. Nodes are returned in pre-order.
    """
    if root_id is None:
        return []

    depth = {root_id: 0}
    parent: Dict[int, Optional[int]] = {root_id: None}
    order: List[int] = []
    stack = [root_id]
    while stack:
        node_id = stack.pop()
        order.append(node_id)
        children = list(children_of(node_id))
        for child in children:
            depth[child] = depth[node_id] + 1
            parent[child] = node_id
        stack.extend(reversed(children))

    # pre-order meets leaves left to right
    xs: Dict[int, float] = {}
    slot = 0
    for node_id in order:
        if not children_of(node_id):
            xs[node_id] = slot * h_spacing
            slot += 1

    # reversed pre-order visits children before their parent
    for node_id in reversed(order):
        children = children_of(node_id)
        if children:
            xs[node_id] = (xs[children[0]] + xs[children[-1]]) / 2

    offset = width / 2 - xs[root_id]
    return [
        PositionedNode(
            node_id=node_id,
            label=label_of(node_id),
            x=xs[node_id] + offset,
            y=depth[node_id] * v_spacing + top,
            parent_id=parent[node_id],
            tag=tag_of(node_id) if tag_of else None,
        )
        for node_id in order
    ]
