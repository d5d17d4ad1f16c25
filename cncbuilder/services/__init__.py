"""
Services - job pipelines built on the core.
"""

from cncbuilder.services.job_service import (
    GCodeJobService,
    JobRequest,
    JobResult,
    ValidationReport,
    describe_piece,
    is_error_program,
    STATUS_OK,
    STATUS_NOT_FITTED,
    STATUS_ERROR,
)

__all__ = [
    'GCodeJobService',
    'JobRequest',
    'JobResult',
    'ValidationReport',
    'describe_piece',
    'is_error_program',
    'STATUS_OK',
    'STATUS_NOT_FITTED',
    'STATUS_ERROR',
]
