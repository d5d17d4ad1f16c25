"""
Nesting engine - places rectangular pieces on a single sheet.

Pieces are ordered by priority (higher first, pieces without priority last)
and then by input order. The margin-shrunk sheet is handed to one of the
placement strategies together with the spacing-inflated footprints. Pieces
the strategy cannot place are reported in ``unplaced``; that is a normal
outcome, not an error.
"""

import time
import logging
from typing import Dict, Iterable, List, Optional, Union

from cncbuilder.core.exceptions import NestingError, UnknownNestingMethodError
from cncbuilder.geometry import Rect
from cncbuilder.models import (
    NestingMethod, NestingMetrics, NestingResult, Piece, PositionedPiece
)
from cncbuilder.nesting.items import PackItem, Strategy
from cncbuilder.nesting.greedy import pack_greedy
from cncbuilder.nesting.shelf import pack_shelf
from cncbuilder.nesting.guillotine import pack_guillotine

logger = logging.getLogger(__name__)


STRATEGIES: Dict[NestingMethod, Strategy] = {
    NestingMethod.GREEDY: pack_greedy,
    NestingMethod.SHELF: pack_shelf,
    NestingMethod.GUILLOTINE: pack_guillotine,
}


def resolve_method(method: Union[NestingMethod, str, None]) -> NestingMethod:
    """Map a method tag ('greedy', 'shelf', 'guillotine') to the enum."""
    if method is None:
        return NestingMethod.GUILLOTINE
    if isinstance(method, NestingMethod):
        return method
    try:
        return NestingMethod(str(method).lower())
    except ValueError:
        raise UnknownNestingMethodError(method) from None


def order_pieces(pieces: Iterable[Piece]) -> List[Piece]:
    """Stable placement order: priority descending, then input order."""
    return sorted(
        pieces,
        key=lambda p: (0, -p.priority) if p.priority is not None else (1, 0)
    )


def place(pieces: Iterable[Piece],
          sheet_width: float,
          sheet_height: float,
          spacing: float,
          method: Union[NestingMethod, str] = NestingMethod.GUILLOTINE,
          edge_margin: Optional[float] = None) -> NestingResult:
    """
    Place pieces on the sheet.

    Args:
        pieces: Pieces to place (not modified)
        sheet_width: Sheet width [mm]
        sheet_height: Sheet height [mm]
        spacing: Minimum gap between pieces [mm]
        method: Placement heuristic
        edge_margin: Clearance to the sheet border [mm], defaults to spacing

    Returns:
        NestingResult with every piece either placed or unplaced
    """
    nesting_method = resolve_method(method)

    if spacing is None or spacing < 0:
        raise NestingError(f"Spacing must be >= 0, got {spacing}", details={"spacing": spacing})

    margin = spacing if edge_margin is None else edge_margin
    if margin < 0:
        raise NestingError(f"Edge margin must be >= 0, got {margin}", details={"edge_margin": margin})

    start = time.perf_counter()

    pieces = list(pieces)
    region = Rect(0.0, 0.0, sheet_width, sheet_height).shrink(margin)

    candidates: List[Piece] = []
    unplaced: List[Piece] = []
    for piece in order_pieces(pieces):
        if piece.width <= 0 or piece.height <= 0 or region.is_empty():
            unplaced.append(piece)
        else:
            candidates.append(piece)

    items = [
        PackItem(index=i, width=p.width + spacing, height=p.height + spacing)
        for i, p in enumerate(candidates)
    ]
    positions = STRATEGIES[nesting_method](items, region.width, region.height) if items else {}

    placed: List[PositionedPiece] = []
    for i, piece in enumerate(candidates):
        if i in positions:
            x, y = positions[i]
            placed.append(PositionedPiece(piece=piece, x=region.x + x, y=region.y + y))
        else:
            unplaced.append(piece)

    metrics = _compute_metrics(pieces, placed, sheet_width, sheet_height)
    metrics.elapsed_ms = round((time.perf_counter() - start) * 1000.0, 3)

    logger.debug(
        f"Nesting {nesting_method.value}: {len(placed)} placed, {len(unplaced)} unplaced, "
        f"efficiency {metrics.efficiency}% in {metrics.elapsed_ms}ms"
    )

    return NestingResult(placed=placed, unplaced=unplaced, metrics=metrics)


def _compute_metrics(pieces: List[Piece], placed: List[PositionedPiece],
                     sheet_width: float, sheet_height: float) -> NestingMetrics:
    total_area = sum(p.area for p in pieces)
    used_area = sum(p.piece.area for p in placed)

    sheet_area = Rect(0.0, 0.0, sheet_width, sheet_height).area
    efficiency = 0.0
    if sheet_area > 0:
        efficiency = round(min(100.0, used_area / sheet_area * 100.0), 2)

    return NestingMetrics(
        total_area=total_area,
        used_area=used_area,
        efficiency=efficiency
    )
