"""
Greedy bottom-left placement.

Candidate anchors are the region origin plus, for every placed footprint,
its bottom-right corner and its top-left corner. Anchors are scanned
bottom-to-top, then left-to-right, and each item goes to the first anchor
where its footprint stays inside the region and overlaps nothing already
placed. Placed items are never moved.
"""

import logging
from typing import List, Set, Tuple

from cncbuilder.geometry import Rect, EPS
from cncbuilder.nesting.items import PackItem, Positions

logger = logging.getLogger(__name__)


def pack_greedy(items: List[PackItem], region_width: float, region_height: float) -> Positions:
    region = Rect(0.0, 0.0, region_width, region_height)
    boxes: List[Rect] = []
    anchors: Set[Tuple[float, float]] = {(0.0, 0.0)}
    positions: Positions = {}

    for item in items:
        box = _first_fit(item, anchors, boxes, region)
        if box is None:
            logger.debug(f"Greedy: item {item.index} ({item.width}x{item.height}) has no free anchor")
            continue

        boxes.append(box)
        positions[item.index] = (box.x, box.y)

        # Anchors now covered by the new footprint can never host a piece
        anchors = {
            (ax, ay) for ax, ay in anchors
            if not (box.x - EPS <= ax < box.right - EPS and box.y - EPS <= ay < box.top - EPS)
        }
        anchors.add((box.right, box.y))
        anchors.add((box.x, box.top))

    return positions


def _first_fit(item: PackItem, anchors: Set[Tuple[float, float]], boxes: List[Rect], region: Rect):
    for ax, ay in sorted(anchors, key=lambda a: (a[1], a[0])):
        candidate = Rect(ax, ay, item.width, item.height)
        if not region.contains(candidate):
            continue
        if any(candidate.overlaps(b) for b in boxes):
            continue
        return candidate
    return None
