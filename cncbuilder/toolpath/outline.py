"""
Piece outlines and tool-radius offsets.
"""

import math
from typing import List, Optional, Tuple

from cncbuilder.models import CutType, PositionedPiece, ToolConfig

Point = Tuple[float, float]


def tool_offset(cut_type: CutType, tool: Optional[ToolConfig]) -> float:
    """Signed outward offset of the tool centre from the piece edge."""
    if tool is None:
        return 0.0
    if cut_type == CutType.EXTERNAL:
        return tool.radius
    if cut_type == CutType.INTERNAL:
        return -tool.radius
    return 0.0


def outline_points(piece: PositionedPiece, tool: Optional[ToolConfig] = None) -> List[Point]:
    """
    Closed counter-clockwise tool path around the piece.

    Starts and ends at the bottom-left corner. An inward offset larger than
    half the piece collapses onto the centre line.
    """
    offset = tool_offset(piece.cut_type, tool)

    x0, x1 = piece.x - offset, piece.x + piece.width + offset
    y0, y1 = piece.y - offset, piece.y + piece.height + offset
    if x1 < x0:
        x0 = x1 = piece.x + piece.width / 2.0
    if y1 < y0:
        y0 = y1 = piece.y + piece.height / 2.0

    return [(x0, y0), (x1, y0), (x1, y1), (x0, y1), (x0, y0)]


def start_point(piece: PositionedPiece, tool: Optional[ToolConfig] = None) -> Point:
    return outline_points(piece, tool)[0]


def path_length(points: List[Point]) -> float:
    return sum(
        math.hypot(b[0] - a[0], b[1] - a[1])
        for a, b in zip(points, points[1:])
    )
