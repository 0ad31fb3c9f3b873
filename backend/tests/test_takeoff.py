"""Tests for the fastener takeoff calculator."""

import pytest
from deckcalc.core.geometry.kernel import BoundingBox
from deckcalc.core.takeoff.calculator import (
    TakeoffParameters,
    apply_waste,
    board_rows_across,
    calculate_takeoff,
    deck_dimensions,
    joist_count,
    takeoff_for_outline,
)


class TestCounts:
    def test_board_rows(self):
        assert board_rows_across(10, 5.5, 0.25) == 20

    def test_joist_count(self):
        assert joist_count(8, 16) == 7

    def test_joist_at_exact_multiple(self):
        assert joist_count(4, 16) == 4  # 48 / 16 = 3 intervals + starting joist

    def test_waste(self):
        assert apply_waste(140, 1.05) == 147
        assert apply_waste(100, 1.001) == 101
        assert apply_waste(0, 1.1) == 0

    def test_module_clamped(self):
        assert board_rows_across(1, 0, 0) == 1200

    def test_spacing_clamped(self):
        assert joist_count(1, 0) == 1201
        assert joist_count(1, -5) == 1201

    def test_non_finite_does_not_raise(self):
        assert board_rows_across(float("nan"), 5.5, 0.25) == 0
        assert joist_count(10, float("nan")) == 1
        assert apply_waste(10, float("inf")) == 0


class TestCalculateTakeoff:
    def test_reference_scenario(self):
        # Rows across a 10 ft span, joists counted along an 8 ft span.
        params = TakeoffParameters(board_width_in=5.5, gap_in=0.25, joist_spacing_in=16, waste_factor=1.05)
        rows = board_rows_across(10, params.board_width_in, params.gap_in)
        joists = joist_count(8, params.joist_spacing_in)
        assert (rows, joists) == (20, 7)
        assert apply_waste(rows * joists, params.waste_factor) == 147

    def test_default_orientation(self):
        result = calculate_takeoff(20, 13, TakeoffParameters())
        assert result.board_run_ft == 20
        assert result.across_span_ft == 13
        assert result.joist_span_ft == 13
        assert result.board_rows == 27   # floor((156 + 0.25) / 5.75)
        assert result.joist_count == 10  # floor(156 / 16) + 1
        assert result.clips_no_waste == 270
        assert result.clips_with_waste == 284  # ceil(283.5)
        assert result.area_sq_ft == 260

    def test_rotated_swaps_roles(self):
        result = calculate_takeoff(20, 13, TakeoffParameters(joists_rotated=True))
        assert result.board_run_ft == 13
        assert result.across_span_ft == 20
        assert result.joist_span_ft == 20
        assert result.board_rows == 41   # floor((240 + 0.25) / 5.75)
        assert result.joist_count == 16  # floor(240 / 16) + 1

    @pytest.mark.parametrize("w,h", [(20, 13), (10, 8), (7.5, 31)])
    def test_rotation_symmetry(self, w, h):
        plain = calculate_takeoff(w, h, TakeoffParameters())
        rotated = calculate_takeoff(h, w, TakeoffParameters(joists_rotated=True))
        assert rotated.board_rows == plain.board_rows
        assert rotated.joist_count == plain.joist_count
        assert rotated.clips_with_waste == plain.clips_with_waste
        assert rotated.board_run_ft == plain.board_run_ft

    def test_sketch_area_overrides_rectangle(self):
        result = calculate_takeoff(20, 13, TakeoffParameters(), area_sq_ft=220)
        assert result.area_sq_ft == 220

    def test_to_dict_rounds_area(self):
        d = calculate_takeoff(1, 1, TakeoffParameters(), area_sq_ft=1 / 3).to_dict()
        assert d["area_sq_ft"] == 0.33
        assert set(d) >= {"board_rows", "joist_count", "clips_no_waste", "clips_with_waste", "board_run_ft"}


class TestTakeoffForOutline:
    def test_l_shape_counts_use_bounding_box(self):
        l_shape = [(0, 0), (20, 0), (20, 8), (12, 8), (12, 13), (0, 13)]
        result = takeoff_for_outline(l_shape, TakeoffParameters())
        rect = calculate_takeoff(20, 13, TakeoffParameters())
        assert result.board_rows == rect.board_rows
        assert result.joist_count == rect.joist_count
        assert result.area_sq_ft == pytest.approx(220)

    @pytest.mark.parametrize("pts", [[], [(3, 3)], [(0, 0), (8, 0)]])
    def test_open_outline_falls_back_to_default_deck(self, pts):
        result = takeoff_for_outline(pts, TakeoffParameters())
        assert result.deck_width_ft == 20
        assert result.deck_height_ft == 13
        assert result.area_sq_ft == 260

    def test_flat_outline_falls_back_per_dimension(self):
        result = takeoff_for_outline([(0, 0), (8, 0), (4, 0)], TakeoffParameters())
        assert result.deck_width_ft == 8
        assert result.deck_height_ft == 13
        assert result.area_sq_ft == 0

    def test_recomputed_not_cached(self):
        pts = [(0, 0), (10, 0), (10, 10), (0, 10)]
        a = takeoff_for_outline(pts, TakeoffParameters())
        b = takeoff_for_outline(pts, TakeoffParameters(joist_spacing_in=12))
        assert a.joist_count != b.joist_count


class TestDeckDimensions:
    def test_zero_box(self):
        assert deck_dimensions(BoundingBox()) == (20, 13)

    def test_custom_defaults(self):
        assert deck_dimensions(BoundingBox(0, 0, 5, 0), 30, 12) == (5, 12)
