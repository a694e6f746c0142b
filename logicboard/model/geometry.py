from typing import Tuple

from logicboard.constants import NODE_HEIGHT, NODE_WIDTH

Position = Tuple[float, float]


def overlaps(a: Position, b: Position) -> bool:
    """True if the footprints anchored at ``a`` and ``b`` share interior area.

    Rectangles that only touch along an edge do not overlap.
    """
    ax, ay = a
    bx, by = b
    return (
        ax < bx + NODE_WIDTH
        and ax + NODE_WIDTH > bx
        and ay < by + NODE_HEIGHT
        and ay + NODE_HEIGHT > by
    )


def contains(anchor: Position, point: Position) -> bool:
    x, y = point
    ax, ay = anchor
    # inclusive on all four edges
    return ax <= x <= ax + NODE_WIDTH and ay <= y <= ay + NODE_HEIGHT
