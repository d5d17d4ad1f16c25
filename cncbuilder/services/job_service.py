"""
G-code Job Service - generate and validate pipelines.

Merges partial job input with the configured defaults, runs the nesting
engine, then the emitter and the time estimator, and assembles the
metadata returned to callers.

Usage:
    service = GCodeJobService()
    request = service.build_request(job_dict)
    result = service.generate(request)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cncbuilder.config import (
    load_config, merge_with_defaults, default_nesting_method, default_include_comments
)
from cncbuilder.config import settings
from cncbuilder.core.exceptions import InvalidFieldValueError, ValidationError
from cncbuilder.gcode import emit, strip_comments, ERROR_MARKER
from cncbuilder.models import (
    CutConfig, NestingMethod, NestingResult, Piece, Sheet, TimeEstimate, ToolConfig
)
from cncbuilder.nesting import place, resolve_method
from cncbuilder.toolpath import estimate, validate_cut_parameters

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_NOT_FITTED = "nao_couberam"
STATUS_ERROR = "erro"

# Below this efficiency validate() warns about material waste
LOW_EFFICIENCY_PERCENT = 50.0
NO_PIECES_MESSAGE = "Nenhuma peca informada"


@dataclass
class JobRequest:
    """Fully merged job input."""
    pieces: List[Piece]
    sheet: Sheet = field(default_factory=Sheet)
    cut: CutConfig = field(default_factory=CutConfig)
    tool: Optional[ToolConfig] = None
    method: NestingMethod = NestingMethod.GUILLOTINE
    include_comments: bool = True


@dataclass
class JobResult:
    """Outcome of generate()."""
    status: str
    nesting: NestingResult
    gcode: Optional[str] = None
    estimate: TimeEstimate = field(default_factory=TimeEstimate)
    metadata: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'status': self.status,
            'gcode': self.gcode,
            'metadata': self.metadata,
            'errors': self.errors,
        }
        if self.status == STATUS_NOT_FITTED:
            result['naoCouberam'] = [p.to_dict() for p in self.nesting.unplaced]
        return result


@dataclass
class ValidationReport:
    """Outcome of validate()."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    preview: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'valid': self.valid,
            'errors': self.errors,
            'warnings': self.warnings,
            'preview': self.preview
        }


def describe_piece(piece: Piece) -> str:
    label = piece.id
    if piece.name:
        label += f" ({piece.name})"
    return f"{label}: {piece.width:g} x {piece.height:g} mm"


class GCodeJobService:
    """
    Job pipeline around the nesting engine, emitter and estimator.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Args:
            config: Defaults dictionary (loaded from settings.CONFIG_PATH or
                the packaged default_config.json when None)
        """
        self.config = config if config is not None else load_config(settings.CONFIG_PATH)

    def build_request(self, data: Dict[str, Any]) -> JobRequest:
        """
        Build a JobRequest from the wire format.

        Args:
            data: {pecas, configChapa?, configCorte?, configFerramenta?,
                   metodoNesting?, incluirComentarios?}

        Returns:
            JobRequest with every missing value taken from the defaults
        """
        raw_pieces = data.get('pecas')
        if not isinstance(raw_pieces, list):
            raise ValidationError("Field 'pecas' must be a list", code="INVALID_JOB")

        pieces = []
        for raw in raw_pieces:
            try:
                pieces.append(Piece.from_dict(raw))
            except (AttributeError, TypeError, ValueError) as e:
                raise InvalidFieldValueError('pecas', raw, str(e)) from e

        tool = None
        try:
            sheet = Sheet.from_dict(merge_with_defaults(data.get('configChapa'), self.config.get('chapa', {})))
            cut = CutConfig.from_dict(merge_with_defaults(data.get('configCorte'), self.config.get('corte', {})))
            if data.get('configFerramenta'):
                tool = ToolConfig.from_dict(
                    merge_with_defaults(data['configFerramenta'], self.config.get('ferramenta', {}))
                )
        except (AttributeError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid sheet, cut or tool configuration: {e}", code="INVALID_JOB") from e

        method = data.get('metodoNesting') or settings.DEFAULT_NESTING_METHOD
        method = resolve_method(method) if method else default_nesting_method(self.config)

        include_comments = data.get('incluirComentarios')
        if include_comments is None:
            include_comments = default_include_comments(self.config)

        return JobRequest(
            pieces=pieces,
            sheet=sheet,
            cut=cut,
            tool=tool,
            method=method,
            include_comments=bool(include_comments)
        )

    def nest(self, request: JobRequest) -> NestingResult:
        return place(
            request.pieces,
            request.sheet.width,
            request.sheet.height,
            request.cut.spacing,
            request.method,
            request.cut.effective_edge_margin
        )

    def generate(self, request: JobRequest, minify: bool = False) -> JobResult:
        """
        Nest, emit and estimate a job.

        Args:
            request: Merged job input
            minify: Strip comments and blank lines from the program

        Returns:
            JobResult; status 'nao_couberam' when any piece is left over,
            'erro' when there are no pieces or the cut parameters are
            inconsistent
        """
        if not request.pieces:
            logger.info("Job rejected: no pieces")
            return JobResult(status=STATUS_ERROR, nesting=NestingResult(), errors=[NO_PIECES_MESSAGE])

        nesting = self.nest(request)

        if not nesting.all_placed:
            errors = [describe_piece(p) for p in nesting.unplaced]
            logger.info(f"Job rejected: {len(nesting.unplaced)} pieces do not fit the sheet")
            return JobResult(status=STATUS_NOT_FITTED, nesting=nesting, errors=errors)

        gcode = emit(
            nesting.placed, request.sheet, request.cut, request.tool,
            include_comments=request.include_comments
        )

        cut_errors = validate_cut_parameters(request.cut)
        if cut_errors:
            return JobResult(status=STATUS_ERROR, nesting=nesting, gcode=gcode, errors=cut_errors)

        if minify:
            gcode = strip_comments(gcode)

        time_estimate = estimate(nesting.placed, request.sheet, request.cut)
        metadata = self._build_metadata(request, nesting, gcode, time_estimate)

        logger.info(
            f"G-code generated: {metadata['linhas']} lines, {len(nesting.placed)} pieces, "
            f"{time_estimate.formatted}"
        )
        return JobResult(
            status=STATUS_OK,
            nesting=nesting,
            gcode=gcode,
            estimate=time_estimate,
            metadata=metadata
        )

    def validate(self, request: JobRequest) -> ValidationReport:
        """
        Check a job without generating the program.

        Returns:
            ValidationReport with errors, warnings and a nesting / time preview
        """
        errors = validate_cut_parameters(request.cut)
        warnings = []

        if not request.pieces:
            errors.append(NO_PIECES_MESSAGE)

        if request.cut.depth < request.sheet.thickness:
            warnings.append(
                f"Profundidade ({request.cut.depth:g} mm) menor que a espessura "
                f"da chapa ({request.sheet.thickness:g} mm)"
            )

        nesting = self.nest(request)
        if nesting.unplaced:
            warnings.append(f"{len(nesting.unplaced)} peca(s) nao couberam na chapa")
        if nesting.placed and nesting.metrics.efficiency < LOW_EFFICIENCY_PERCENT:
            warnings.append(f"Eficiencia baixa: {nesting.metrics.efficiency}%")

        time_estimate = estimate(nesting.placed, request.sheet, request.cut)

        return ValidationReport(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            preview={
                'tempoEstimado': time_estimate.to_dict(),
                'metricas': nesting.metrics.to_dict(),
                'pecasPosicionadas': len(nesting.placed),
                'pecasNaoCouberam': len(nesting.unplaced)
            }
        )

    def _build_metadata(self, request: JobRequest, nesting: NestingResult,
                        gcode: str, time_estimate: TimeEstimate) -> Dict[str, Any]:
        return {
            'linhas': len(gcode.splitlines()),
            'tamanhoBytes': len(gcode.encode('utf-8')),
            'tempoEstimado': time_estimate.to_dict(),
            'metricas': nesting.metrics.to_dict(),
            'configuracoes': {
                'chapa': request.sheet.to_dict(),
                'corte': request.cut.to_dict(),
                'ferramenta': request.tool.to_dict() if request.tool else None,
                'nesting': {
                    'metodo': request.method.value,
                    'pecasPosicionadas': len(nesting.placed),
                    'eficiencia': nesting.metrics.efficiency
                }
            }
        }


def is_error_program(gcode: str) -> bool:
    """True for the comment-only program written on invalid cut parameters."""
    return ERROR_MARKER in gcode and "M30" not in gcode
