"""
Guillotine placement on top of rectpack.

rectpack's GuillotineBafSas keeps the free sections in a flat list, starting
with one section covering the whole region. Each item takes the section with
the smallest leftover area (best area fit). The section is then cut along the
shorter leftover axis into a right and a top remainder, and adjacent
remainders are merged back when they line up.

rectpack works on integers, so sizes are scaled to a 0.05 mm grid: item
sizes round up and the region rounds down. Scaled placements therefore never
overlap and never leave the region. An item that spans the whole region on an
axis is clamped to the scaled region on that axis, so off-grid sheet sizes do
not reject it; nothing else can sit beside it on that axis.
"""

import math
import logging
from typing import List

import rectpack

from cncbuilder.geometry import EPS
from cncbuilder.nesting.items import PackItem, Positions

logger = logging.getLogger(__name__)

SCALE = 20  # 0.05 mm precision


def _scale_up(value: float) -> int:
    return int(math.ceil(value * SCALE - 1e-6))


def _scale_down(value: float) -> int:
    return int(math.floor(value * SCALE + 1e-6))


def _scale_item(size: float, region_size: float, bin_size: int) -> int:
    scaled = _scale_up(size)
    if size <= region_size + EPS:
        return min(scaled, bin_size)
    return scaled


def pack_guillotine(items: List[PackItem], region_width: float, region_height: float) -> Positions:
    bin_width = _scale_down(region_width)
    bin_height = _scale_down(region_height)
    if bin_width <= 0 or bin_height <= 0:
        return {}

    packer = rectpack.newPacker(
        mode=rectpack.PackingMode.Offline,
        bin_algo=rectpack.PackingBin.BFF,
        pack_algo=rectpack.GuillotineBafSas,
        sort_algo=rectpack.SORT_NONE,
        rotation=False
    )
    packer.add_bin(bin_width, bin_height)

    for item in items:
        packer.add_rect(
            _scale_item(item.width, region_width, bin_width),
            _scale_item(item.height, region_height, bin_height),
            rid=item.index
        )

    packer.pack()

    positions: Positions = {}
    for _, x, y, _, _, rid in packer.rect_list():
        positions[rid] = (x / SCALE, y / SCALE)

    logger.debug(f"Guillotine: {len(positions)}/{len(items)} items packed in {bin_width}x{bin_height} grid")
    return positions
