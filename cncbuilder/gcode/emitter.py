"""
G-code Emitter - positioned pieces to a router program.

Single dialect (metric, absolute, XY plane). Per piece: rapid to the start
point, then for every depth pass a plunge (or ramp) followed by the outline
at feedrate, then retract. Comments are ``;`` lines and ``(...)`` notes
appended to commands; with comments disabled the same commands are written
without them, so stripping comments from a commented program gives the
uncommented one.
"""

import re
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from cncbuilder.core.exceptions import InvalidCutParametersError
from cncbuilder.models import CutConfig, PositionedPiece, Sheet, ToolConfig
from cncbuilder.toolpath.outline import outline_points
from cncbuilder.toolpath.passes import depth_passes, pass_uses_ramp
from cncbuilder.toolpath.ramps import plan_ramp
from cncbuilder.toolpath.validation import check_cut_parameters

logger = logging.getLogger(__name__)

ERROR_MARKER = "ERRO"

_UNSAFE_COMMENT_CHARS = re.compile(r"[;()\r\n]")


def fmt(value: float) -> str:
    """Coordinate with 3 decimals, never '-0.000'."""
    text = f"{value:.3f}"
    if text == "-0.000":
        return "0.000"
    return text


def fmt_rate(value: float) -> str:
    """Feed or spindle value without decimals."""
    return f"{value:.0f}"


def sanitize_comment(text) -> str:
    """Drop characters that would open or close a comment."""
    return _UNSAFE_COMMENT_CHARS.sub(" ", str(text)).strip()


class ProgramWriter:
    """Line buffer that writes or drops annotations."""

    def __init__(self, include_comments: bool = True):
        self.include_comments = include_comments
        self.lines: List[str] = []

    def comment(self, text: str):
        if self.include_comments:
            self.lines.append(f"; {sanitize_comment(text)}")

    def banner(self, text: str):
        if self.include_comments:
            self.lines.append("; " + "=" * 50)
            self.lines.append(f"; {sanitize_comment(text)}")
            self.lines.append("; " + "=" * 50)

    def command(self, code: str, note: str = None):
        if note and self.include_comments:
            self.lines.append(f"{code} ({sanitize_comment(note)})")
        else:
            self.lines.append(code)

    def rapid(self, x: float = None, y: float = None, z: float = None,
              feed: float = None, note: str = None):
        self.command(_motion("G0", x, y, z, feed), note)

    def linear(self, x: float = None, y: float = None, z: float = None,
               feed: float = None, note: str = None):
        self.command(_motion("G1", x, y, z, feed), note)

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"


def _motion(code: str, x, y, z, feed) -> str:
    words = [code]
    if x is not None:
        words.append(f"X{fmt(x)}")
    if y is not None:
        words.append(f"Y{fmt(y)}")
    if z is not None:
        words.append(f"Z{fmt(z)}")
    if feed is not None:
        words.append(f"F{fmt_rate(feed)}")
    return " ".join(words)


def error_program(errors: List[str]) -> str:
    """Comment-only program reporting invalid cut parameters."""
    lines = []
    for message in errors:
        lines.append(f"; {ERROR_MARKER}: {sanitize_comment(message)}")
        lines.append(f"({ERROR_MARKER}: {sanitize_comment(message)})")
    return "\n".join(lines) + "\n"


def emit(positioned_pieces: Iterable[PositionedPiece],
         sheet: Sheet,
         cut: CutConfig,
         tool: Optional[ToolConfig] = None,
         include_comments: bool = True,
         generated_at: datetime = None) -> str:
    """
    Generate the G-code program.

    Args:
        positioned_pieces: Pieces in cutting order
        sheet: Sheet (dimensions go into the header)
        cut: Cut configuration
        tool: Tool; enables the tool change and radius offset when given
        include_comments: Write ';' and '(...)' annotations
        generated_at: Timestamp for the header (default: now)

    Returns:
        Program text, or a comment-only error program containing 'ERRO'
        when the cut parameters are inconsistent
    """
    try:
        check_cut_parameters(cut)
    except InvalidCutParametersError as e:
        logger.warning(f"G-code not generated: {e}")
        return error_program(e.errors)

    pieces = list(positioned_pieces)
    passes = depth_passes(cut.depth, cut.depth_per_pass)
    out = ProgramWriter(include_comments)

    _write_header(out, pieces, sheet, cut, tool, passes, generated_at or datetime.now())

    for number, piece in enumerate(pieces, start=1):
        _write_piece(out, number, len(pieces), piece, cut, tool, passes)

    _write_footer(out)

    program = out.render()
    logger.debug(f"G-code: {len(out.lines)} lines for {len(pieces)} pieces")
    return program


def _write_header(out: ProgramWriter, pieces, sheet, cut, tool, passes, generated_at):
    out.banner("CNCBUILDER - Programa G-code")
    out.comment(f"Gerado em: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    out.comment(f"Chapa: {fmt(sheet.width)} x {fmt(sheet.height)} x {fmt(sheet.thickness)} mm")
    out.comment(f"Pecas: {len(pieces)}")
    out.comment(
        f"Profundidade: {fmt(cut.depth)} mm em {len(passes)} passada(s) "
        f"de ate {fmt(cut.depth_per_pass)} mm"
    )
    out.comment(f"Feedrate: {fmt_rate(cut.feedrate)} mm/min, Plunge: {fmt_rate(cut.plunge_rate)} mm/min")
    if tool is not None:
        out.comment(f"Ferramenta: T{tool.tool_number} diametro {fmt(tool.diameter)} mm")
    if cut.use_ramp:
        out.comment(f"Rampa: {cut.ramp_type.value} {cut.ramp_angle:g} graus em {cut.ramp_scope.value}")
    out.comment("=" * 50)

    out.command("G21", "unidades em milimetros")
    out.command("G90", "coordenadas absolutas")
    out.command("G17", "plano XY")
    out.rapid(z=cut.safe_height, note="altura segura")
    if tool is not None:
        out.command(f"T{tool.tool_number} M6", "troca de ferramenta")
    out.command(f"M3 S{fmt_rate(cut.spindle_speed)}", "liga spindle")


def _write_piece(out: ProgramWriter, number: int, total: int, piece: PositionedPiece,
                 cut: CutConfig, tool: Optional[ToolConfig], passes: List[float]):
    label = f"Peca {number}/{total}: {piece.id}"
    if piece.name:
        label += f" - {piece.name}"
    if piece.original_number is not None:
        label += f" - n. {piece.original_number}"
    out.comment(label)
    out.comment(
        f"Posicao X{fmt(piece.x)} Y{fmt(piece.y)}, {fmt(piece.width)} x {fmt(piece.height)} mm, "
        f"corte {piece.cut_type.value}"
    )

    path = outline_points(piece, tool)
    start = path[0]

    out.rapid(x=start[0], y=start[1], feed=cut.rapids_speed, note=f"inicio peca {piece.id}")
    out.rapid(z=0.0, note="superficie")

    previous = 0.0
    for index, depth in enumerate(passes):
        out.comment(f"Passada {index + 1} de {len(passes)} - Z{fmt(-depth)}")

        ramp = None
        if pass_uses_ramp(index, cut):
            ramp = plan_ramp(start, path[1], -previous, -depth, cut)

        if ramp is None:
            out.linear(z=-depth, feed=cut.plunge_rate, note=f"mergulho passada {index + 1}")
        else:
            for leg, (x, y, z) in enumerate(ramp.points):
                note = f"rampa {cut.ramp_type.value}" if leg == 0 else None
                out.linear(x=x, y=y, z=z, feed=cut.plunge_rate, note=note)
            if ramp.return_distance > 1e-6:
                out.linear(x=start[0], y=start[1], feed=cut.feedrate, note="retorno ao inicio")

        for corner, (x, y) in enumerate(path[1:]):
            out.linear(x=x, y=y, feed=cut.feedrate if corner == 0 else None)
        previous = depth

    out.rapid(z=cut.safe_height, note="recua")


def _write_footer(out: ProgramWriter):
    out.comment("Fim do programa")
    out.command("M5", "desliga spindle")
    out.rapid(x=0.0, y=0.0, note="retorno a origem")
    out.command("M30", "fim do programa")
