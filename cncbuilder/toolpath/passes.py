"""
Depth pass planning.
"""

import math
from typing import List

from cncbuilder.models import CutConfig, RampScope


def pass_count(depth: float, depth_per_pass: float) -> int:
    """Number of passes needed to reach depth: ceil(depth / depth_per_pass)."""
    if depth <= 0 or depth_per_pass <= 0:
        return 0
    return int(math.ceil(depth / depth_per_pass - 1e-9))


def depth_passes(depth: float, depth_per_pass: float) -> List[float]:
    """
    Cumulative pass depths (positive, mm below the stock top).

    Example:
        depth_passes(15, 4) -> [4, 8, 12, 15]
    """
    count = pass_count(depth, depth_per_pass)
    result = [min(depth_per_pass * (i + 1), depth) for i in range(count)]
    if result:
        result[-1] = depth
    return result


def pass_uses_ramp(index: int, cut: CutConfig) -> bool:
    """True when pass ``index`` (0-based) enters with a ramp instead of a plunge."""
    if not cut.use_ramp:
        return False
    return cut.ramp_scope == RampScope.ALL_PASSES or index == 0
