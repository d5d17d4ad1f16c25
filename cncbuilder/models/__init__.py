"""
Data models for cncbuilder.
"""

from cncbuilder.models.layout import (
    CutType,
    NestingMethod,
    Piece,
    PositionedPiece,
    Sheet,
    NestingMetrics,
    NestingResult,
)
from cncbuilder.models.machining import (
    RampType,
    RampScope,
    CutConfig,
    ToolConfig,
    TimeEstimate,
)

__all__ = [
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
]
