"""
Tests for scales, chart frames and the brush selection engine.
Run: pytest tests/test_selection.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest

from film_explorer.chart import PALETTE, ChartLayout, build_chart_frame
from film_explorer.dataset import build_dataset
from film_explorer.filters import apply_filters
from film_explorer.models import BrushRect, FilmRecord, FilterParams
from film_explorer.scales import LinearScale, numeric_extent, tick_increment, widen_extent
from film_explorer.selection import compute_selection, displayed_rows, point_opacities

A = FilmRecord(title="A", year=1990, rating=7.5, director="X")
B = FilmRecord(title="B", year=1995, rating=8.1, director="Y")
C = FilmRecord(title="C", year=2000, rating=None, director="X")


@pytest.fixture
def view():
	ds = build_dataset([A, B, C])
	return apply_filters(ds, FilterParams(director="ALL", min_year=1980, max_year=2025, x_metric="rating")).view


@pytest.fixture
def frame(view):
	return build_chart_frame(view, "rating", ChartLayout())


def rect_around(x, y, pad=1.0):
	return BrushRect(x - pad, y - pad, x + pad, y + pad)


# --- scales ------------------------------------------------------------------

def test_linear_scale_maps_and_inverts_range():
	y = LinearScale((0, 10), (400, 0))
	assert y(0) == 400
	assert y(10) == 0
	assert y(2.5) == 300
	assert list(LinearScale((0, 10), (0, 100)).map_values([0, 5, 10])) == [0, 50, 100]


def test_nice_rounds_domain_outwards():
	assert LinearScale((0.2, 9.7), (0, 100)).nice().domain == (0, 10)
	assert LinearScale((1986, 2023), (0, 100)).nice().domain == (1985, 2025)
	assert LinearScale((7.5, 8.1), (0, 100)).nice().domain == pytest.approx((7.5, 8.1))


def test_tick_increment_signs():
	assert tick_increment(0, 100, 10) == 10
	assert tick_increment(0, 1, 10) == -10  # step of 1/10
	assert tick_increment(5, 5, 10) == 0


def test_degenerate_domain_is_rejected():
	with pytest.raises(ValueError):
		LinearScale((3, 3), (0, 100))


def test_extent_helpers():
	assert numeric_extent([3.0, None, 1.0, 2.0]) == (1.0, 3.0)
	assert numeric_extent([None, None]) is None
	assert numeric_extent([]) is None
	assert widen_extent((1.0, 2.0)) == (1.0, 2.0)
	assert widen_extent((0.0, 0.0)) == (-1.0, 1.0)
	assert widen_extent((100.0, 100.0)) == (95.0, 105.0)


# --- chart frame -------------------------------------------------------------

def test_chart_frame_scales_and_points(frame):
	layout = ChartLayout()
	assert frame.x_scale.range == (0, layout.inner_width)
	assert frame.y_scale.range == (layout.inner_height, 0)
	assert [p.record for p in frame.points] == [A, B]
	assert frame.colors == {"X": PALETTE[0], "Y": PALETTE[1]}
	for p in frame.points:
		assert 0 <= p.cx <= layout.inner_width
		assert 0 <= p.cy <= layout.inner_height


def test_chart_frame_nothing_to_draw():
	assert build_chart_frame((), "rating", ChartLayout()) is None
	no_gross = (A, B)
	assert build_chart_frame(no_gross, "gross", ChartLayout()) is None


def test_chart_frame_single_point_is_drawable():
	frame = build_chart_frame((A,), "rating", ChartLayout())
	assert frame is not None
	assert len(frame.points) == 1


def test_layout_for_unknown_container_width():
	assert ChartLayout.for_container(None).width == 960
	assert ChartLayout.for_container(0).width == 960
	assert ChartLayout.for_container(700).inner_width == 700 - 60 - 26


# --- selection ---------------------------------------------------------------

def test_brush_around_b_selects_b(view, frame):
	cx, cy = frame.x_scale(B.rating), frame.y_scale(B.rating)
	selection = compute_selection(view, rect_around(cx, cy), frame.x_scale, frame.y_scale, "rating")
	assert selection == (B,)


def test_brush_edges_are_inclusive(view, frame):
	cx, cy = frame.x_scale(A.rating), frame.y_scale(A.rating)
	selection = compute_selection(view, BrushRect(cx, cy, cx, cy), frame.x_scale, frame.y_scale, "rating")
	assert selection == (A,)


def test_no_brush_selects_nothing_and_is_idempotent(view, frame):
	first = compute_selection(view, None, frame.x_scale, frame.y_scale, "rating")
	second = compute_selection(view, None, frame.x_scale, frame.y_scale, "rating")
	assert first == second == ()
	# the table then falls back to the whole view
	assert displayed_rows(view, first) == (A, B)


def test_selection_is_subset_of_view(view, frame):
	layout = ChartLayout()
	everything = BrushRect(0, 0, layout.inner_width, layout.inner_height)
	selection = compute_selection(view, everything, frame.x_scale, frame.y_scale, "rating")
	assert selection == view
	assert displayed_rows(view, selection) == selection


def test_records_without_values_are_never_selected(frame):
	huge = BrushRect(-1e9, -1e9, 1e9, 1e9)
	assert compute_selection((A, C), huge, frame.x_scale, frame.y_scale, "rating") == (A,)


def test_point_opacities(view, frame):
	assert point_opacities(view, None, frame.x_scale, frame.y_scale, "rating") == [0.9, 0.9]
	cx, cy = frame.x_scale(B.rating), frame.y_scale(B.rating)
	assert point_opacities(view, rect_around(cx, cy), frame.x_scale, frame.y_scale, "rating") == [0.25, 0.95]


def test_brush_rect_ordering():
	assert BrushRect.from_corners(10, 20, 0, 5) == BrushRect(0, 5, 10, 20)
	with pytest.raises(ValueError):
		BrushRect(10, 0, 0, 5)


if __name__ == '__main__':
	sys.exit(pytest.main([__file__]))
