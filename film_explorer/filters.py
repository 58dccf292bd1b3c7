"""
Filter engine.
Turns (dataset, filter parameters) into the filtered view shown in the chart and table.
"""

from typing import Optional

from .config import ALL_DIRECTORS
from .models import Dataset, FilmRecord, FilterParams, FilterResult, Metric

from loguru import logger  # console logger


METRIC_LABELS = {
	Metric.RUNTIME.value: "Runtime (min)",
	Metric.GROSS.value: "Box office (USD)",
	Metric.YEAR.value: "Release year",
	Metric.RATING.value: "Rating (IMDb)",
}


def metric_key(key) -> str:
	"""Plain string form of a metric, accepting Metric members or raw strings."""
	return key.value if isinstance(key, Metric) else key


def metric_value(record: FilmRecord, key: str) -> Optional[float]:
	"""Value of the given metric for a record; unknown metrics give None."""
	key = metric_key(key)
	if key == Metric.RUNTIME.value:
		return record.runtime
	if key == Metric.GROSS.value:
		return record.gross
	if key == Metric.YEAR.value:
		return record.year
	if key == Metric.RATING.value:
		return record.rating
	return None


def metric_label(key: str) -> str:
	"""Axis label for a metric; unknown keys are shown as-is."""
	key = metric_key(key)
	return METRIC_LABELS.get(key, key)


def apply_filters(dataset: Dataset, params: FilterParams) -> FilterResult:
	"""
	Apply all filter predicates to the dataset and return a fresh view.

	A record is kept only if:
	  - both year and rating are present (they define the plotted axes),
	  - the director matches, unless the director filter is "ALL",
	  - its year lies within [min_year, max_year], bounds swapped if inverted,
	  - the selected x metric has a value.
	Source order is preserved. The corrected bounds are echoed back on the
	result and are the ones callers should display.
	"""
	min_year, max_year = params.min_year, params.max_year
	if min_year > max_year:  # normalize order
		min_year, max_year = max_year, min_year

	director = params.director
	x_key = metric_key(params.x_metric)

	view = tuple(
		r for r in dataset.records
		if r.year is not None and r.rating is not None
		and (director == ALL_DIRECTORS or r.director == director)
		and min_year <= r.year <= max_year
		and metric_value(r, x_key) is not None
	)

	logger.debug(
		f"[Filters] director={director} years={min_year}-{max_year} x={x_key} | kept {len(view)} of {len(dataset.records)}"
	)
	return FilterResult(
		view=view,
		count=len(view),
		metric_label=metric_label(x_key),
		min_year=min_year,
		max_year=max_year,
	)
