"""
Tests for the placement calculator (packing.py).

Each piece type is tiled over the full slab on its own; the waste figure is
slab area minus the sum of those per-type tilings.
"""

import math

import pytest

from models import SlabSpec
from packing import compute, grid_fit, optimize_cutting
from validation import (
    InvalidPieceDimensions,
    InvalidSlabDimensions,
    PieceExceedsSlab,
    ValidationError,
)


class TestGridFit:

    def test_reference_layout(self, slab, make_piece):
        p = grid_fit(slab, make_piece(width=200, height=300))
        assert p.across == 5
        assert p.down == 6
        assert p.count == 30
        assert p.area == 1_800_000

    def test_floor_of_each_axis(self, make_piece):
        slab = SlabSpec(width=1000, height=700)
        p = grid_fit(slab, make_piece(width=300, height=250))
        assert (p.across, p.down, p.count) == (3, 2, 6)

    @pytest.mark.parametrize("sw,sh,w,h", [
        (1000, 2000, 1000, 2000),
        (999, 451, 1, 1),
        (1250, 2500, 333, 417),
        (10.5, 7.25, 2.5, 1.5),
    ])
    def test_count_matches_floor_formula(self, sw, sh, w, h, make_piece):
        p = grid_fit(SlabSpec(sw, sh), make_piece(width=w, height=h))
        assert p.count == math.floor(sw / w) * math.floor(sh / h)

    def test_no_rotation_is_tried(self, make_piece):
        # 300x100 would fit twice more if rotated; it is not
        slab = SlabSpec(width=350, height=600)
        p = grid_fit(slab, make_piece(width=300, height=100))
        assert (p.across, p.down) == (1, 6)


class TestOptimizeCutting:

    def test_reference_example(self, slab, make_piece):
        result = optimize_cutting(slab, [make_piece(width=200, height=300)])
        assert len(result.placements) == 1
        assert result.placements[0].count == 30
        assert result.used_area == 1_800_000
        assert result.waste_area == 200_000

    def test_empty_piece_list_wastes_whole_slab(self, slab):
        result = optimize_cutting(slab, [])
        assert result.placements == ()
        assert result.waste_area == slab.width * slab.height

    def test_placements_keep_input_order(self, slab, make_piece):
        pieces = [make_piece(name=n, width=100, height=100) for n in ("c", "a", "b")]
        result = optimize_cutting(slab, pieces)
        assert [p.spec.name for p in result.placements] == ["c", "a", "b"]

    def test_duplicate_names_are_allowed(self, slab, make_piece):
        pieces = [make_piece(name="Same"), make_piece(name="Same", width=100)]
        result = optimize_cutting(slab, pieces)
        assert len(result.placements) == 2

    @pytest.mark.parametrize("w,h", [(200, 300), (333, 777), (1000, 2000), (7, 13), (999, 1999)])
    def test_single_piece_waste_is_never_negative(self, slab, make_piece, w, h):
        result = optimize_cutting(slab, [make_piece(width=w, height=h)])
        assert result.waste_area >= 0

    def test_waste_sums_each_type_against_full_slab(self, make_piece):
        # per-type full-slab tiling overlay: both types cover the whole slab
        slab = SlabSpec(width=100, height=100)
        pieces = [make_piece(width=50, height=50), make_piece(width=25, height=100)]
        result = optimize_cutting(slab, pieces)
        assert [p.count for p in result.placements] == [4, 4]
        assert result.used_area == 20_000
        assert result.waste_area == 10_000 - 20_000

    def test_waste_identity(self, slab, make_piece):
        pieces = [make_piece(width=170, height=230), make_piece(width=410, height=90)]
        result = optimize_cutting(slab, pieces)
        expected = slab.area - sum(
            p.count * p.spec.width * p.spec.height for p in result.placements
        )
        assert result.waste_area == pytest.approx(expected)

    def test_inputs_are_not_mutated(self, slab, make_piece):
        pieces = [make_piece()]
        before = list(pieces)
        optimize_cutting(slab, pieces)
        assert pieces == before

    def test_result_is_independent_of_inputs(self, slab, make_piece):
        piece = make_piece(width=200, height=300)
        result = optimize_cutting(slab, [piece])
        piece.width = 10
        piece.name = "renamed"
        placement = result.placements[0]
        assert placement.spec.width == 200
        assert placement.spec.name == "Piece 1"
        assert placement.area == 1_800_000
        assert result.waste_area == slab.area - result.used_area

    def test_raises_validation_error(self, make_piece):
        with pytest.raises(PieceExceedsSlab):
            optimize_cutting(SlabSpec(100, 100), [make_piece(width=150, height=50)])


class TestCompute:

    def test_success_returns_result_only(self, slab, make_piece):
        result, err = compute(slab, [make_piece()])
        assert err is None
        assert result.waste_area == 200_000

    def test_piece_exceeding_slab(self, make_piece):
        result, err = compute(SlabSpec(100, 100), [make_piece(name="Big", width=150, height=50)])
        assert result is None
        assert isinstance(err, PieceExceedsSlab)
        assert err.piece_name == "Big"

    @pytest.mark.parametrize("pieces", [
        [],
        [{"width": 10, "height": 10}],
        [{"width": -1, "height": 10}],
        [{"width": 5000, "height": 10}],
    ])
    def test_zero_slab_fails_regardless_of_pieces(self, make_piece, pieces):
        specs = [make_piece(**kw) for kw in pieces]
        result, err = compute(SlabSpec(0, 100), specs)
        assert result is None
        assert isinstance(err, InvalidSlabDimensions)

    def test_negative_slab_height(self):
        _, err = compute(SlabSpec(100, -5), [])
        assert isinstance(err, InvalidSlabDimensions)

    def test_first_failing_piece_wins(self, make_piece):
        pieces = [
            make_piece(name="ok", width=10, height=10),
            make_piece(name="too big", width=500, height=10),
            make_piece(name="zero", width=0, height=10),
        ]
        _, err = compute(SlabSpec(100, 100), pieces)
        assert isinstance(err, PieceExceedsSlab)
        assert err.piece_name == "too big"

    def test_dimension_error_before_later_fit_error(self, make_piece):
        pieces = [
            make_piece(name="zero", width=10, height=0),
            make_piece(name="too big", width=500, height=10),
        ]
        _, err = compute(SlabSpec(100, 100), pieces)
        assert isinstance(err, InvalidPieceDimensions)
        assert err.piece_name == "zero"

    def test_errors_are_value_errors(self):
        _, err = compute(SlabSpec(0, 0), [])
        assert isinstance(err, ValidationError)
        assert isinstance(err, ValueError)


class TestNonFiniteInputs:

    @pytest.mark.parametrize("w,h", [
        (float("inf"), 100),
        (100, float("inf")),
        (float("nan"), 100),
        (100, float("-inf")),
    ])
    def test_non_finite_slab(self, make_piece, w, h):
        result, err = compute(SlabSpec(w, h), [make_piece(width=10, height=10)])
        assert result is None
        assert isinstance(err, InvalidSlabDimensions)

    @pytest.mark.parametrize("w,h", [(float("inf"), 10), (10, float("nan"))])
    def test_non_finite_piece(self, make_piece, w, h):
        result, err = compute(SlabSpec(100, 100), [make_piece(name="odd", width=w, height=h)])
        assert result is None
        assert isinstance(err, InvalidPieceDimensions)
        assert err.piece_name == "odd"
