"""
Ramp entry planning.

A ramp replaces the vertical plunge of a pass by a descent folded back and
forth along the first outline edge, starting at the piece start point.

- linear: each leg runs the whole edge, descending at the ramp angle
- zigzag: legs are zigZagPitch long, each descends by leg * tan(angle)
  capped by maxRampStepZ and zigZagAmplitude

zigZagAmplitude is the largest Z swing of one zigzag leg. The legs stay on
the cut line, so there is no sideways swing; the tighter of maxRampStepZ and
zigZagAmplitude bounds the step (maxRampStepZ with the default settings).

The last leg is shortened so the ramp ends exactly at the pass depth.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from cncbuilder.geometry import EPS
from cncbuilder.models import CutConfig, RampType

# Edges shorter than this get a straight plunge
MIN_RAMP_EDGE = 1.0  # mm

# Ramps that would need more legs than this get a straight plunge
MAX_RAMP_LEGS = 500


@dataclass(frozen=True)
class RampPlan:
    """Leg end points of one ramp entry."""
    points: List[Tuple[float, float, float]]
    length: float
    return_distance: float

    @property
    def end(self) -> Tuple[float, float]:
        return self.points[-1][0], self.points[-1][1]


def plan_ramp(start: Tuple[float, float],
              edge_end: Tuple[float, float],
              z_from: float,
              z_to: float,
              cut: CutConfig) -> Optional[RampPlan]:
    """
    Plan a ramp from z_from down to z_to along the edge start -> edge_end.

    Args:
        start: XY start point (tool is there at z_from)
        edge_end: XY end of the first outline edge
        z_from: Current Z (0 or the previous pass depth, negative down)
        z_to: Target Z of the pass
        cut: Cut configuration (ramp type, angle, zigzag parameters)

    Returns:
        RampPlan, or None when a straight plunge has to be used
    """
    descent = z_from - z_to
    if descent <= EPS:
        return None

    dx = edge_end[0] - start[0]
    dy = edge_end[1] - start[1]
    edge = math.hypot(dx, dy)
    if edge < MIN_RAMP_EDGE:
        return None

    slope = math.tan(math.radians(cut.ramp_angle))
    if slope <= 0:
        return None

    if cut.ramp_type == RampType.ZIGZAG:
        leg = min(cut.zigzag_pitch, edge)
        step = min(leg * slope, cut.max_ramp_step_z, cut.zigzag_amplitude)
    else:
        leg = edge
        step = leg * slope

    if leg <= 0 or step <= EPS:
        return None
    if math.ceil(descent / step - 1e-9) > MAX_RAMP_LEGS:
        return None

    ux, uy = dx / edge, dy / edge
    points = []
    length = 0.0
    position = 0.0
    z = z_from
    forward = True

    while z - z_to > EPS:
        remaining = z - z_to
        if remaining <= step + EPS:
            dz = remaining
            z = z_to
        else:
            dz = step
            z -= step
        run = leg * dz / step
        position = position + run if forward else position - run
        points.append((start[0] + ux * position, start[1] + uy * position, z))
        length += math.hypot(run, dz)
        forward = not forward

    return RampPlan(points=points, length=length, return_distance=abs(position))
