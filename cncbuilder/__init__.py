"""
CncBuilder - nesting and G-code generation for CNC routers.

Rectangular pieces are nested on a single sheet (greedy, shelf or guillotine
placement), then turned into a multi-pass router program with optional ramp
entries, plus a machining time estimate.

Usage:
    from cncbuilder import place, emit, estimate, Piece, Sheet, CutConfig

    sheet = Sheet(width=1000, height=1000, thickness=15)
    cut = CutConfig(depth=15, depth_per_pass=5, spacing=10)
    result = place([Piece('a', 300, 200)], sheet.width, sheet.height, cut.spacing)
    program = emit(result.placed, sheet, cut)
    duration = estimate(result.placed, sheet, cut)
"""

from cncbuilder.core.exceptions import (
    CncBuilderError,
    ValidationError,
    InvalidCutParametersError,
    NestingError,
    ConfigurationError,
)
from cncbuilder.models import (
    CutType,
    NestingMethod,
    Piece,
    PositionedPiece,
    Sheet,
    NestingMetrics,
    NestingResult,
    RampType,
    RampScope,
    CutConfig,
    ToolConfig,
    TimeEstimate,
)
from cncbuilder.nesting import place
from cncbuilder.toolpath import estimate, format_time, validate_cut_parameters
from cncbuilder.gcode import emit, strip_comments
from cncbuilder.services import GCodeJobService

__version__ = "1.0.0"

__all__ = [
    # Errors
    'CncBuilderError',
    'ValidationError',
    'InvalidCutParametersError',
    'NestingError',
    'ConfigurationError',
    # Models
    'CutType',
    'NestingMethod',
    'Piece',
    'PositionedPiece',
    'Sheet',
    'NestingMetrics',
    'NestingResult',
    'RampType',
    'RampScope',
    'CutConfig',
    'ToolConfig',
    'TimeEstimate',
    # Core operations
    'place',
    'estimate',
    'format_time',
    'validate_cut_parameters',
    'emit',
    'strip_comments',
    # Services
    'GCodeJobService',
]
