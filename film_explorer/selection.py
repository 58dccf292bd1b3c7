"""
Selection engine.
Resolves a brush rectangle (plot pixels) into the films whose points fall inside it.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from .config import OPACITY_DEFAULT, OPACITY_DIMMED, OPACITY_SELECTED
from .filters import metric_value
from .models import BrushRect, FilmRecord

from loguru import logger  # console logger

Scale = Callable[[float], float]  # forward mapping data value -> pixel


def project(record: FilmRecord, x_scale: Scale, y_scale: Scale, metric: str) -> Optional[Tuple[float, float]]:
	"""Pixel position of a record's point, or None if it has no x or y value."""
	x = metric_value(record, metric)
	if x is None or record.rating is None:
		return None
	return x_scale(x), y_scale(record.rating)


def compute_selection(
	view: Sequence[FilmRecord],
	rect: Optional[BrushRect],
	x_scale: Scale,
	y_scale: Scale,
	metric: str,
) -> Tuple[FilmRecord, ...]:
	"""
	Records of the view whose projected point lies inside the brush (edges inclusive).

	No brush means an empty selection. The scales are used as given, so they
	must be the ones the chart is currently drawn with.
	"""
	if rect is None:
		return ()

	selected = []
	for record in view:
		point = project(record, x_scale, y_scale, metric)
		if point is not None and rect.contains(*point):
			selected.append(record)

	logger.debug(f"[Selection] brush=({rect.x0:.1f},{rect.y0:.1f})-({rect.x1:.1f},{rect.y1:.1f}) | selected {len(selected)} of {len(view)}")
	return tuple(selected)


def point_opacities(
	view: Sequence[FilmRecord],
	rect: Optional[BrushRect],
	x_scale: Scale,
	y_scale: Scale,
	metric: str,
) -> List[float]:
	"""Highlight opacity per point: uniform without a brush, dimmed outside it."""
	if rect is None:
		return [OPACITY_DEFAULT] * len(view)
	opacities = []
	for record in view:
		point = project(record, x_scale, y_scale, metric)
		inside = point is not None and rect.contains(*point)
		opacities.append(OPACITY_SELECTED if inside else OPACITY_DIMMED)
	return opacities


def displayed_rows(view: Sequence[FilmRecord], selection: Sequence[FilmRecord]) -> Sequence[FilmRecord]:
	"""Rows for the results table: the selection if any, otherwise the whole view."""
	return selection if selection else view
