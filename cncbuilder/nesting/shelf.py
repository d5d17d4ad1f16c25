"""
Shelf (row) placement, next-fit.

Items go left to right on the current shelf, whose height is the tallest
item it holds. When an item does not fit the remaining width (or would grow
the shelf past the region top), a new shelf opens directly above the current
one. Earlier shelves are closed and never revisited.
"""

import logging
from typing import List

from cncbuilder.geometry import EPS
from cncbuilder.nesting.items import PackItem, Positions

logger = logging.getLogger(__name__)


def pack_shelf(items: List[PackItem], region_width: float, region_height: float) -> Positions:
    positions: Positions = {}
    shelf_y = 0.0
    shelf_height = 0.0
    cursor_x = 0.0

    for item in items:
        if item.width > region_width + EPS or item.height > region_height + EPS:
            continue

        fits_width = cursor_x + item.width <= region_width + EPS
        fits_height = shelf_y + max(shelf_height, item.height) <= region_height + EPS
        if fits_width and fits_height:
            positions[item.index] = (cursor_x, shelf_y)
            cursor_x += item.width
            shelf_height = max(shelf_height, item.height)
            continue

        next_y = shelf_y + shelf_height
        if next_y + item.height <= region_height + EPS:
            shelf_y = next_y
            shelf_height = item.height
            cursor_x = item.width
            positions[item.index] = (0.0, shelf_y)
            logger.debug(f"Shelf: new shelf at y={shelf_y:.3f}")
        else:
            logger.debug(f"Shelf: item {item.index} does not fit above y={next_y:.3f}")

    return positions
