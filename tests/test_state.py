"""
Tests for dashboard state transitions and status reporting.
Run: pytest tests/test_state.py
"""

import sys
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest

from film_explorer.chart import ChartLayout
from film_explorer.dataset import build_dataset
from film_explorer.filters import metric_value
from film_explorer.models import BrushRect, FilmRecord, FilterParams
from film_explorer.state import default_params, initial_state, resize, set_brush, set_filter, status_message

A = FilmRecord(title="A", year=1990, rating=7.5, director="X", runtime=100.0, gross=2e6)
B = FilmRecord(title="B", year=1995, rating=8.1, director="Y", runtime=120.0, gross=5e6)
C = FilmRecord(title="C", year=2000, rating=None, director="X", runtime=90.0)


@pytest.fixture
def state():
	return initial_state(build_dataset([A, B, C]))


def brush_around(state, record):
	frame = state.frame
	cx = frame.x_scale(metric_value(record, frame.metric))
	cy = frame.y_scale(record.rating)
	return BrushRect(cx - 2, cy - 2, cx + 2, cy + 2)


def test_initial_state_is_seeded_from_dataset(state):
	assert state.params == FilterParams(director="ALL", min_year=1990, max_year=2000, x_metric="runtime")
	assert state.params == default_params(state.dataset)
	assert state.view == (A, B)
	assert state.brush is None
	assert state.selection == ()
	assert state.table_records == (A, B)


def test_brush_selects_and_table_follows(state):
	state = set_brush(state, brush_around(state, B))
	assert state.selection == (B,)
	assert state.table_records == (B,)
	assert set(state.selection) <= set(state.view)


def test_clearing_brush_restores_full_table(state):
	state = set_brush(state, brush_around(state, B))
	cleared = set_brush(state, None)
	assert cleared.brush is None
	assert cleared.selection == ()
	assert cleared.table_records == (A, B)
	assert set_brush(cleared, None) == cleared


def test_filter_change_resets_selection(state):
	state = set_brush(state, brush_around(state, B))
	state = set_filter(state, replace(state.params, director="X"))
	assert state.view == (A,)
	assert state.brush is None
	assert state.selection == ()


def test_metric_change_clears_brush(state):
	state = set_brush(state, brush_around(state, A))
	assert state.selection == (A,)
	state = set_filter(state, replace(state.params, x_metric="gross"))
	assert state.brush is None
	assert state.selection == ()
	assert state.frame.metric == "gross"


def test_same_params_still_recompute_and_reset(state):
	state = set_brush(state, brush_around(state, B))
	again = set_filter(state, state.params)
	assert again.selection == ()
	assert again.result == state.result


def test_inverted_years_echo_corrected_bounds(state):
	state = set_filter(state, replace(state.params, min_year=2000, max_year=1990))
	assert (state.result.min_year, state.result.max_year) == (1990, 2000)
	assert state.params.min_year == 2000  # user input kept as given


def test_resize_rebuilds_frame_and_drops_brush(state):
	state = set_brush(state, brush_around(state, B))
	resized = resize(state, ChartLayout(width=600))
	assert resized.frame.layout.width == 600
	assert resized.frame.x_scale.range == (0, 600 - 60 - 26)
	assert resized.brush is None
	assert resized.selection == ()


def test_empty_view_has_no_frame_and_reports_it(state):
	state = set_filter(state, replace(state.params, director="nobody"))
	assert state.frame is None
	message, is_error = status_message(state)
	assert is_error
	assert "No films match" in message
	# brushing without a frame selects nothing
	assert set_brush(state, BrushRect(0, 0, 10, 10)).selection == ()


def test_status_messages(state):
	message, is_error = status_message(state)
	assert not is_error
	assert "Showing 2 films" in message
	assert "Runtime" in message
	brushed = set_brush(state, brush_around(state, B))
	assert status_message(brushed) == ("Showing 2 films (selected: 1)", False)


if __name__ == '__main__':
	sys.exit(pytest.main([__file__]))
