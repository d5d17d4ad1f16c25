"""
G-code generation and post-processing.
"""

from cncbuilder.gcode.emitter import emit, error_program, sanitize_comment, ERROR_MARKER
from cncbuilder.gcode.stripper import strip_comments, strip_line

__all__ = [
    'emit',
    'error_program',
    'sanitize_comment',
    'ERROR_MARKER',
    'strip_comments',
    'strip_line',
]
