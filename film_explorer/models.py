"""
Data models for the Film Explorer.
Defines the core data structures shared by the loader, filters and selection.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
from enum import Enum  # closed set of plottable metrics
# Import typing helpers for precise and self-documenting types
from typing import Any, Mapping, Optional, Tuple  # mappings, optional values, fixed-size tuples


class Metric(str, Enum):
	"""Numeric fields selectable as the horizontal axis."""
	RUNTIME = "runtime"
	GROSS = "gross"
	YEAR = "year"
	RATING = "rating"


@dataclass(frozen=True)
class FilmRecord:
	"""
	One film in canonical shape. Every field may be missing (None);
	nothing is imputed.
	"""
	title: Optional[str] = None  # display title as found in the source
	year: Optional[int] = None  # release year
	director: Optional[str] = None  # director name, exact source spelling
	rating: Optional[float] = None  # rating (IMDb-like scale)
	runtime: Optional[float] = None  # running time in minutes
	gross: Optional[float] = None  # box office in USD
	# source row, kept only for display provenance
	raw: Optional[Mapping[str, Any]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Dataset:
	"""
	Immutable in-memory dataset built once at load time.
	"""
	records: Tuple[FilmRecord, ...]  # source order preserved
	year_bounds: Tuple[int, int]  # (min, max) year, or the configured fallback
	directors: Tuple[str, ...]  # collated unique director names


@dataclass(frozen=True)
class FilterParams:
	"""
	User-controlled filter parameters. Always replaced as a whole.
	"""
	director: str  # "ALL" or an exact director name
	min_year: int
	max_year: int
	x_metric: str = Metric.RUNTIME.value  # one of Metric values


@dataclass(frozen=True)
class FilterResult:
	"""Output of one filter pass over the dataset."""
	view: Tuple[FilmRecord, ...]  # filtered subsequence, source order
	count: int  # len(view)
	metric_label: str  # axis label of the active x metric
	min_year: int  # corrected (swapped if inverted) lower bound
	max_year: int  # corrected upper bound


@dataclass(frozen=True)
class BrushRect:
	"""Brush rectangle in plot pixel space with x0 <= x1 and y0 <= y1."""
	x0: float
	y0: float
	x1: float
	y1: float

	def __post_init__(self):
		if self.x0 > self.x1 or self.y0 > self.y1:
			raise ValueError(f"Brush corners out of order: {self}")

	@classmethod
	def from_corners(cls, xa: float, ya: float, xb: float, yb: float) -> 'BrushRect':
		"""Build a rectangle from two arbitrary corners of a drag gesture."""
		return cls(min(xa, xb), min(ya, yb), max(xa, xb), max(ya, yb))

	def contains(self, cx: float, cy: float) -> bool:
		return self.x0 <= cx <= self.x1 and self.y0 <= cy <= self.y1
