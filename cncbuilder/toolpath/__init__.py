"""
Toolpath - depth passes, ramps, outlines and time estimation.
"""

from cncbuilder.toolpath.validation import validate_cut_parameters, check_cut_parameters
from cncbuilder.toolpath.passes import pass_count, depth_passes, pass_uses_ramp
from cncbuilder.toolpath.ramps import RampPlan, plan_ramp
from cncbuilder.toolpath.outline import tool_offset, outline_points, start_point, path_length
from cncbuilder.toolpath.estimator import estimate, format_time

__all__ = [
    'validate_cut_parameters',
    'check_cut_parameters',
    'pass_count',
    'depth_passes',
    'pass_uses_ramp',
    'RampPlan',
    'plan_ramp',
    'tool_offset',
    'outline_points',
    'start_point',
    'path_length',
    'estimate',
    'format_time',
]
