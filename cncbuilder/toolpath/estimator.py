"""
Toolpath Time Estimator - machining time from positioned pieces.

Simple kinematic model (no acceleration):
- cutting: outline perimeter 2*(w+h) per depth pass at feedrate
- plunging: depth_per_pass per pass at plungeRate, or the ramp path
  length when the pass enters with a ramp
- positioning: XY rapid tour origin -> piece starts -> origin plus two
  safe-height Z rapids per piece, at rapidsSpeed

Pieces are visited in list order, the same order the emitter writes them.
"""

import math
import logging
from typing import Iterable, Tuple

from cncbuilder.models import CutConfig, PositionedPiece, Sheet, TimeEstimate
from cncbuilder.toolpath.passes import depth_passes, pass_uses_ramp
from cncbuilder.toolpath.ramps import plan_ramp
from cncbuilder.toolpath.validation import validate_cut_parameters
from cncbuilder.units import mm_min_to_mm_s, format_time

logger = logging.getLogger(__name__)

ORIGIN = (0.0, 0.0)


def _distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def estimate(positioned_pieces: Iterable[PositionedPiece],
             sheet: Sheet,
             cut: CutConfig) -> TimeEstimate:
    """
    Estimate machining time.

    Args:
        positioned_pieces: Pieces in emission order
        sheet: Sheet (kept for the call contract, 2D model ignores thickness)
        cut: Cut configuration (depths, feeds, ramp)

    Returns:
        TimeEstimate in seconds (all zero for no pieces or invalid parameters)
    """
    pieces = list(positioned_pieces)
    if not pieces:
        return TimeEstimate()

    errors = validate_cut_parameters(cut)
    if errors:
        logger.warning(f"Time estimate skipped, invalid cut parameters: {'; '.join(errors)}")
        return TimeEstimate()

    feed = mm_min_to_mm_s(cut.feedrate)
    plunge = mm_min_to_mm_s(cut.plunge_rate)
    rapids = mm_min_to_mm_s(cut.rapids_speed)
    passes = depth_passes(cut.depth, cut.depth_per_pass)

    cutting = 0.0
    plunging = 0.0
    travel = 0.0
    position = ORIGIN

    for piece in pieces:
        start = (piece.x, piece.y)
        travel += _distance(position, start)
        position = start

        perimeter = 2.0 * (piece.width + piece.height)
        cutting += perimeter * len(passes) / feed

        previous = 0.0
        for index, depth in enumerate(passes):
            ramp = None
            if pass_uses_ramp(index, cut):
                ramp = plan_ramp(start, (piece.x + piece.width, piece.y), -previous, -depth, cut)
            if ramp is not None:
                plunging += ramp.length / plunge
                cutting += ramp.return_distance / feed
            else:
                plunging += cut.depth_per_pass / plunge
            previous = depth

    travel += _distance(position, ORIGIN)
    positioning = (travel + len(pieces) * 2.0 * cut.safe_height) / rapids

    result = TimeEstimate(cutting=cutting, plunging=plunging, positioning=positioning)
    logger.debug(f"Estimated {format_time(result.total)} for {len(pieces)} pieces, {len(passes)} passes each")
    return result


__all__ = ['estimate', 'format_time']
