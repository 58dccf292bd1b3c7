"""
Application state and its transitions.

The dashboard state is a single immutable value. It is created once the
dataset has loaded and is only replaced through the transition functions
below, each of which recomputes derived data from scratch.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .chart import ChartFrame, ChartLayout, build_chart_frame
from .config import ALL_DIRECTORS
from .filters import apply_filters, metric_key
from .models import BrushRect, Dataset, FilmRecord, FilterParams, FilterResult, Metric
from .selection import compute_selection, displayed_rows

from loguru import logger  # console logger


@dataclass(frozen=True)
class DashboardState:
	dataset: Dataset
	params: FilterParams  # as last set by the user, possibly inverted years
	result: FilterResult  # filtered view for params
	frame: Optional[ChartFrame]  # None when there is nothing to draw
	brush: Optional[BrushRect] = None
	selection: Tuple[FilmRecord, ...] = ()

	@property
	def view(self) -> Tuple[FilmRecord, ...]:
		return self.result.view

	@property
	def table_records(self):
		"""Records the results table shows: selection, or the whole view without one."""
		return displayed_rows(self.result.view, self.selection)


def default_params(dataset: Dataset) -> FilterParams:
	"""Controls seeded from the dataset: all directors, full year span, runtime on x."""
	lo, hi = dataset.year_bounds
	return FilterParams(director=ALL_DIRECTORS, min_year=lo, max_year=hi, x_metric=Metric.RUNTIME.value)


def initial_state(dataset: Dataset, layout: Optional[ChartLayout] = None) -> DashboardState:
	"""First state after load, with the initial filter pass applied."""
	params = default_params(dataset)
	return _filtered(dataset, params, layout or ChartLayout())


def _filtered(dataset: Dataset, params: FilterParams, layout: ChartLayout) -> DashboardState:
	result = apply_filters(dataset, params)
	frame = build_chart_frame(result.view, metric_key(params.x_metric), layout)
	return DashboardState(dataset=dataset, params=params, result=result, frame=frame)


def layout_of(state: DashboardState) -> ChartLayout:
	return state.frame.layout if state.frame is not None else ChartLayout()


def set_filter(state: DashboardState, params: FilterParams) -> DashboardState:
	"""
	Replace the filter parameters. The view is recomputed and the brush and
	selection are cleared, including when only the x metric changed.
	"""
	logger.debug(f"[State] set_filter {params}")
	return _filtered(state.dataset, params, layout_of(state))


def set_brush(state: DashboardState, rect: Optional[BrushRect]) -> DashboardState:
	"""Set or clear (None) the brush and recompute the selection against the current frame."""
	if rect is None or state.frame is None:
		return replace(state, brush=None, selection=())
	frame = state.frame
	selection = compute_selection(state.result.view, rect, frame.x_scale, frame.y_scale, frame.metric)
	return replace(state, brush=rect, selection=selection)


def resize(state: DashboardState, layout: ChartLayout) -> DashboardState:
	"""Rebuild the chart for a new size. The old brush geometry no longer applies."""
	frame = build_chart_frame(state.result.view, metric_key(state.params.x_metric), layout)
	return replace(state, frame=frame, brush=None, selection=())


def status_message(state: DashboardState) -> Tuple[str, bool]:
	"""Status line for the current state as (text, is_error)."""
	result = state.result
	if result.count == 0:
		return "No films match the current filters. Check the column names, values and year range.", True
	if state.brush is not None:
		return f"Showing {result.count} films (selected: {len(state.selection)})", False
	return f"Showing {result.count} films (y = rating, x = {result.metric_label})", False
