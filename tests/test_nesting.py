"""
Nesting Engine Tests
====================
Covers:
  - empty input, single piece efficiency, oversized pieces
  - placement invariants (bounds, no overlap of inflated boxes) per method
  - determinism and priority ordering
  - method-specific layouts (greedy anchors, shelf rows, guillotine origin)
  - misuse (negative spacing, unknown method)
"""

import pytest

from cncbuilder.core.exceptions import NestingError, UnknownNestingMethodError
from cncbuilder.geometry import Rect
from cncbuilder.models import NestingMethod, Piece
from cncbuilder.nesting import order_pieces, place, resolve_method

METHODS = ["greedy", "shelf", "guillotine"]


# ══════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════

def _piece(pid: str, w: float, h: float, **kwargs) -> Piece:
    return Piece(id=pid, width=w, height=h, **kwargs)


def _batch(count: int = 30):
    """Deterministic mix of piece sizes."""
    return [
        _piece(f"p{i}", 40 + (i * 37) % 180, 30 + (i * 53) % 140)
        for i in range(count)
    ]


def _inflated(placed, spacing):
    boxes = [p.bounds for p in placed]
    return [Rect(b.x, b.y, b.width + spacing, b.height + spacing) for b in boxes]


# ══════════════════════════════════════════════════════════════
# BASIC CONTRACT
# ══════════════════════════════════════════════════════════════

@pytest.mark.parametrize("method", METHODS)
def test_empty_input_gives_zero_metrics(method):
    result = place([], 1000, 1000, 10, method)

    assert result.placed == []
    assert result.unplaced == []
    assert result.metrics.total_area == 0
    assert result.metrics.used_area == 0
    assert result.metrics.efficiency == 0


@pytest.mark.parametrize("method", METHODS)
def test_single_piece_quarter_of_sheet(method):
    result = place([_piece("a", 500, 500)], 1000, 1000, 10, method)

    assert len(result.placed) == 1
    assert result.unplaced == []
    assert result.metrics.efficiency == pytest.approx(25.0)


@pytest.mark.parametrize("method", METHODS)
def test_oversized_piece_is_unplaced(method):
    result = place([_piece("big", 2000, 2000)], 1000, 1000, 10, method)

    assert result.placed == []
    assert [p.id for p in result.unplaced] == ["big"]
    assert result.metrics.total_area == 4_000_000
    assert result.metrics.used_area == 0


@pytest.mark.parametrize("method", METHODS)
def test_piece_exceeding_one_axis_is_unplaced(method):
    result = place([_piece("long", 1001, 10)], 1000, 1000, 0, method, edge_margin=0)

    assert result.placed == []
    assert len(result.unplaced) == 1


@pytest.mark.parametrize("method", METHODS)
def test_sheet_sized_piece_fits_without_margin(method):
    result = place([_piece("full", 1000, 1000)], 1000, 1000, 0, method, edge_margin=0)

    assert len(result.placed) == 1
    assert (result.placed[0].x, result.placed[0].y) == (0, 0)
    assert result.metrics.efficiency == pytest.approx(100.0)


@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("width,height", [(1000.01, 500.03), (333.33, 777.77)])
def test_sheet_sized_piece_fits_off_grid_sheet(method, width, height):
    result = place([_piece("full", width, height)], width, height, 0, method, edge_margin=0)

    assert [p.id for p in result.placed] == ["full"]
    assert result.unplaced == []
    assert (result.placed[0].x, result.placed[0].y) == (0, 0)
    assert result.metrics.efficiency == pytest.approx(100.0)


def test_guillotine_stacks_full_width_strips_on_off_grid_sheet():
    pieces = [_piece("a", 1000.01, 200), _piece("b", 1000.01, 200)]
    result = place(pieces, 1000.01, 500.03, 0, "guillotine", edge_margin=0)

    assert result.unplaced == []
    boxes = [p.bounds for p in result.placed]
    assert not boxes[0].overlaps(boxes[1])
    assert all(b.x == 0 for b in boxes)
    assert all(b.top <= 500.03 for b in boxes)


def test_two_pieces_on_default_sheet_guillotine():
    pieces = [_piece("1", 100, 100), _piece("2", 150, 150)]
    result = place(pieces, 2850, 1500, 50, "guillotine")

    assert len(result.placed) == 2
    assert len(result.unplaced) == 0
    assert result.metrics.efficiency > 0


@pytest.mark.parametrize("method", METHODS)
def test_every_piece_reported_exactly_once(method):
    pieces = _batch(60)
    result = place(pieces, 800, 600, 5, method)

    ids = [p.id for p in result.placed] + [p.id for p in result.unplaced]
    assert sorted(ids) == sorted(p.id for p in pieces)
    assert result.unplaced, "batch is larger than the sheet"


# ══════════════════════════════════════════════════════════════
# INVARIANTS
# ══════════════════════════════════════════════════════════════

@pytest.mark.parametrize("method", METHODS)
def test_placements_stay_inside_margin(method):
    spacing, margin = 8.0, 20.0
    result = place(_batch(), 1200, 900, spacing, method, edge_margin=margin)

    assert result.placed
    for p in result.placed:
        assert p.x >= margin - 1e-9
        assert p.y >= margin - 1e-9
        assert p.x + p.width + spacing <= 1200 - margin + 1e-9
        assert p.y + p.height + spacing <= 900 - margin + 1e-9


@pytest.mark.parametrize("method", METHODS)
def test_inflated_boxes_never_overlap(method):
    spacing = 7.5
    result = place(_batch(), 1200, 900, spacing, method)
    boxes = _inflated(result.placed, spacing)

    for i, a in enumerate(boxes):
        for b in boxes[i + 1:]:
            assert not a.overlaps(b)


@pytest.mark.parametrize("method", METHODS)
def test_identical_calls_give_identical_layouts(method):
    first = place(_batch(), 1200, 900, 5, method)
    second = place(_batch(), 1200, 900, 5, method)

    assert [p.to_dict() for p in first.placed] == [p.to_dict() for p in second.placed]
    assert [p.id for p in first.unplaced] == [p.id for p in second.unplaced]


@pytest.mark.parametrize("method", METHODS)
def test_metrics_cover_all_pieces(method):
    pieces = [_piece("a", 100, 100), _piece("b", 5000, 10)]
    result = place(pieces, 1000, 1000, 0, method)

    assert result.metrics.total_area == 100 * 100 + 5000 * 10
    assert result.metrics.used_area == 100 * 100
    assert result.metrics.efficiency == pytest.approx(1.0)
    assert result.metrics.elapsed_ms >= 0


@pytest.mark.parametrize("method", METHODS)
def test_invalid_dimensions_are_unplaced_not_raised(method):
    pieces = [_piece("zero", 0, 100), _piece("neg", -5, 10), _piece("ok", 10, 10)]
    result = place(pieces, 1000, 1000, 0, method)

    assert [p.id for p in result.placed] == ["ok"]
    assert {p.id for p in result.unplaced} == {"zero", "neg"}
    assert result.metrics.total_area == 100
    assert not result.all_placed


def test_empty_sheet_rejects_everything():
    result = place([_piece("a", 10, 10)], 0, 1000, 0)

    assert result.placed == []
    assert len(result.unplaced) == 1
    assert result.metrics.efficiency == 0


def test_margin_consuming_sheet_rejects_everything():
    result = place([_piece("a", 10, 10)], 100, 100, 60)

    assert result.placed == []
    assert len(result.unplaced) == 1


def test_optional_properties_carried_through():
    piece = _piece("7", 100, 80, name="Porta", ignored=True, original_number=3, priority=2)
    placed = place([piece], 1000, 1000, 10).placed[0]

    assert placed.piece is piece
    data = placed.to_dict()
    assert data["nome"] == "Porta"
    assert data["ignorada"] is True
    assert data["numeroOriginal"] == 3
    assert data["prioridade"] == 2
    assert (data["x"], data["y"]) == (10, 10)


# ══════════════════════════════════════════════════════════════
# ORDERING AND MARGINS
# ══════════════════════════════════════════════════════════════

def test_order_pieces_priority_then_input_order():
    pieces = [
        _piece("a", 10, 10),
        _piece("b", 10, 10, priority=5),
        _piece("c", 10, 10, priority=9),
        _piece("d", 10, 10, priority=5),
        _piece("e", 10, 10),
    ]

    assert [p.id for p in order_pieces(pieces)] == ["c", "b", "d", "a", "e"]


@pytest.mark.parametrize("method", METHODS)
def test_high_priority_piece_gets_first_position(method):
    pieces = [_piece("low", 100, 100), _piece("high", 100, 100, priority=10)]
    result = place(pieces, 1000, 1000, 10, method)

    assert result.placed[0].id == "high"
    assert (result.placed[0].x, result.placed[0].y) == (10, 10)


def test_edge_margin_independent_from_spacing():
    result = place([_piece("a", 100, 100)], 1000, 1000, 10, "greedy", edge_margin=0)

    assert (result.placed[0].x, result.placed[0].y) == (0, 0)


def test_edge_margin_defaults_to_spacing():
    result = place([_piece("a", 100, 100)], 1000, 1000, 25, "greedy")

    assert (result.placed[0].x, result.placed[0].y) == (25, 25)


# ══════════════════════════════════════════════════════════════
# METHOD LAYOUTS
# ══════════════════════════════════════════════════════════════

def _row_pieces():
    return [_piece("1", 400, 100), _piece("2", 400, 200), _piece("3", 400, 100)]


def test_greedy_uses_lowest_anchor_first():
    result = place(_row_pieces(), 1000, 1000, 0, "greedy", edge_margin=0)
    positions = {p.id: (p.x, p.y) for p in result.placed}

    assert positions == {"1": (0, 0), "2": (400, 0), "3": (0, 100)}


def test_shelf_opens_new_row_above_tallest_piece():
    result = place(_row_pieces(), 1000, 1000, 0, "shelf", edge_margin=0)
    positions = {p.id: (p.x, p.y) for p in result.placed}

    assert positions == {"1": (0, 0), "2": (400, 0), "3": (0, 200)}


def test_shelf_rejects_piece_taller_than_remaining_height():
    pieces = [_piece("1", 600, 600), _piece("2", 600, 600)]
    result = place(pieces, 1000, 1000, 0, "shelf", edge_margin=0)

    assert [p.id for p in result.placed] == ["1"]
    assert [p.id for p in result.unplaced] == ["2"]


def test_guillotine_fills_sheet_with_equal_tiles():
    pieces = [_piece(str(i), 250, 250) for i in range(16)]
    result = place(pieces, 1000, 1000, 0, "guillotine", edge_margin=0)

    assert len(result.placed) == 16
    assert result.metrics.efficiency == pytest.approx(100.0)
    assert (result.placed[0].x, result.placed[0].y) == (0, 0)


def test_guillotine_handles_fractional_sizes():
    pieces = [_piece("a", 333.3, 250.01), _piece("b", 333.3, 250.01), _piece("c", 333.3, 250.01)]
    result = place(pieces, 1000, 300, 0, "guillotine", edge_margin=0)

    assert len(result.placed) == 3
    boxes = _inflated(result.placed, 0)
    for i, a in enumerate(boxes):
        assert a.right <= 1000 + 1e-9
        for b in boxes[i + 1:]:
            assert not a.overlaps(b)


# ══════════════════════════════════════════════════════════════
# MISUSE
# ══════════════════════════════════════════════════════════════

def test_negative_spacing_raises():
    with pytest.raises(NestingError):
        place([_piece("a", 10, 10)], 100, 100, -1)


def test_negative_edge_margin_raises():
    with pytest.raises(NestingError):
        place([_piece("a", 10, 10)], 100, 100, 0, edge_margin=-5)


def test_unknown_method_raises():
    with pytest.raises(UnknownNestingMethodError):
        place([_piece("a", 10, 10)], 100, 100, 0, "spiral")


def test_resolve_method_accepts_tags_and_enums():
    assert resolve_method("shelf") is NestingMethod.SHELF
    assert resolve_method("GREEDY") is NestingMethod.GREEDY
    assert resolve_method(NestingMethod.GUILLOTINE) is NestingMethod.GUILLOTINE
    assert resolve_method(None) is NestingMethod.GUILLOTINE


def test_input_list_not_modified():
    pieces = [_piece("b", 10, 10), _piece("a", 10, 10, priority=3)]
    place(pieces, 100, 100, 0)

    assert [p.id for p in pieces] == ["b", "a"]
