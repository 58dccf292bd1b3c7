"""
Chart frame construction.
Computes everything the renderer needs for one scatter plot pass: layout,
niced scales, axis labels, point positions and director colors.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .config import CHART_DEFAULT_WIDTH, CHART_HEIGHT, CHART_MARGINS
from .filters import metric_key, metric_label, metric_value
from .models import FilmRecord, Metric
from .scales import LinearScale, numeric_extent, widen_extent

from loguru import logger  # console logger


# Tableau10 followed by Set3, assigned to directors in order of appearance
PALETTE = (
	"#4e79a7", "#f28e2c", "#e15759", "#76b7b2", "#59a14f",
	"#edc949", "#af7aa1", "#ff9da7", "#9c755f", "#bab0ab",
	"#8dd3c7", "#ffffb3", "#bebada", "#fb8072", "#80b1d3", "#fdb462",
	"#b3de69", "#fccde5", "#d9d9d9", "#bc80bd", "#ccebc5", "#ffed6f",
)


@dataclass(frozen=True)
class ChartLayout:
	"""Outer chart size in pixels plus margins around the plot area."""
	width: int = CHART_DEFAULT_WIDTH
	height: int = CHART_HEIGHT
	margins: Dict[str, int] = field(default_factory=lambda: dict(CHART_MARGINS))

	@classmethod
	def for_container(cls, container_width: Optional[int]) -> 'ChartLayout':
		"""Layout for a container; unknown or zero width falls back to the default."""
		return cls(width=container_width or CHART_DEFAULT_WIDTH)

	@property
	def inner_width(self) -> int:
		return self.width - self.margins["left"] - self.margins["right"]

	@property
	def inner_height(self) -> int:
		return self.height - self.margins["top"] - self.margins["bottom"]


@dataclass(frozen=True)
class PlotPoint:
	record: FilmRecord
	cx: float
	cy: float
	color: str


@dataclass(frozen=True)
class ChartFrame:
	"""Scales and points for one render pass."""
	metric: str
	layout: ChartLayout
	x_scale: LinearScale
	y_scale: LinearScale
	x_label: str
	y_label: str
	points: Tuple[PlotPoint, ...]
	colors: Dict[Optional[str], str]


class DirectorColors:
	"""Ordinal color assignment; unseen keys get the next palette slot."""

	def __init__(self, directors: Sequence[str] = ()):
		self._colors: Dict[Optional[str], str] = {}
		for d in directors:
			self(d)

	def __call__(self, director: Optional[str]) -> str:
		if director not in self._colors:
			self._colors[director] = PALETTE[len(self._colors) % len(PALETTE)]
		return self._colors[director]

	def mapping(self) -> Dict[Optional[str], str]:
		return dict(self._colors)


def _first_appearance(names: Sequence[Optional[str]]) -> List[str]:
	seen: List[str] = []
	for n in names:
		if n and n not in seen:
			seen.append(n)
	return seen


def build_chart_frame(view: Sequence[FilmRecord], metric: str, layout: ChartLayout) -> Optional[ChartFrame]:
	"""
	Build the frame for a scatter of metric (x) against rating (y).
	Returns None when there is nothing to draw (no x or no y values).
	"""
	metric = metric_key(metric)
	x_extent = numeric_extent(metric_value(r, metric) for r in view)
	y_extent = numeric_extent(r.rating for r in view)
	if x_extent is None or y_extent is None:
		logger.debug(f"[Chart] Nothing to draw for metric={metric} ({len(view)} films)")
		return None

	x_scale = LinearScale(widen_extent(x_extent), (0, layout.inner_width)).nice()
	y_scale = LinearScale(widen_extent(y_extent), (layout.inner_height, 0)).nice()

	colors = DirectorColors(_first_appearance([r.director for r in view]))
	plotted = [r for r in view if metric_value(r, metric) is not None and r.rating is not None]
	xs = x_scale.map_values([metric_value(r, metric) for r in plotted])
	ys = y_scale.map_values([r.rating for r in plotted])
	points = [
		PlotPoint(record=r, cx=float(cx), cy=float(cy), color=colors(r.director))
		for r, cx, cy in zip(plotted, xs, ys)
	]

	return ChartFrame(
		metric=metric,
		layout=layout,
		x_scale=x_scale,
		y_scale=y_scale,
		x_label=metric_label(metric),
		y_label=metric_label(Metric.RATING),
		points=tuple(points),
		colors=colors.mapping(),
	)
