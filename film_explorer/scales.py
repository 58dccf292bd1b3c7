"""
Linear scales mapping data values to plot pixels.
Mirrors the d3 linear scale behaviour the chart relies on, including nice().
"""

import math
from typing import Iterable, Optional, Sequence, Tuple

# Import NumPy for vectorized extents and projections
import numpy as np  # numeric arrays

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
	"""
	Step between "nice" ticks for roughly `count` ticks over [start, stop].
	Positive results are the step itself; negative results -k mean a step of 1/k.
	"""
	step = (stop - start) / max(0, count)
	if step <= 0 or not math.isfinite(step):
		return 0.0
	power = math.floor(math.log10(step))
	error = step / 10 ** power
	if error >= _E10:
		factor = 10
	elif error >= _E5:
		factor = 5
	elif error >= _E2:
		factor = 2
	else:
		factor = 1
	if power >= 0:
		return factor * 10 ** power
	return -(10 ** -power) / factor


def numeric_extent(values: Iterable[Optional[float]]) -> Optional[Tuple[float, float]]:
	"""(min, max) over non-null values, or None when there are none."""
	arr = np.asarray([v for v in values if v is not None], dtype=float)
	arr = arr[np.isfinite(arr)]
	if arr.size == 0:
		return None
	return float(arr.min()), float(arr.max())


def widen_extent(extent: Tuple[float, float]) -> Tuple[float, float]:
	"""Pad a zero-width extent so a scale can be built from it."""
	lo, hi = extent
	if lo != hi:
		return extent
	pad = abs(lo) * 0.05 if lo != 0 else 1.0
	return lo - pad, hi + pad


class LinearScale:
	"""
	Continuous linear mapping from a numeric domain to a pixel range.
	The range may be inverted (e.g. [height, 0] for a y axis).
	"""

	def __init__(self, domain: Sequence[float], range_: Sequence[float]):
		d0, d1 = float(domain[0]), float(domain[1])
		if d0 == d1:
			raise ValueError(f"Degenerate scale domain: [{d0}, {d1}]")
		self.domain = (d0, d1)
		self.range = (float(range_[0]), float(range_[1]))

	def __call__(self, value: float) -> float:
		d0, d1 = self.domain
		r0, r1 = self.range
		return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

	def map_values(self, values: Sequence[float]) -> np.ndarray:
		"""Vectorized forward mapping."""
		d0, d1 = self.domain
		r0, r1 = self.range
		arr = np.asarray(values, dtype=float)
		return r0 + (arr - d0) / (d1 - d0) * (r1 - r0)

	def nice(self, count: int = 10) -> 'LinearScale':
		"""Extend the domain outwards to round tick values. Returns self."""
		d0, d1 = self.domain
		reversed_ = d1 < d0
		start, stop = (d1, d0) if reversed_ else (d0, d1)
		prestep = None
		for _ in range(10):  # d3 caps the refinement at ten rounds
			step = tick_increment(start, stop, count)
			if step == prestep:
				break
			if step > 0:
				start = math.floor(start / step) * step
				stop = math.ceil(stop / step) * step
			elif step < 0:
				start = math.ceil(start * step) / step
				stop = math.floor(stop * step) / step
			else:
				break
			prestep = step
		self.domain = (stop, start) if reversed_ else (start, stop)
		return self

	def __repr__(self):
		return f"LinearScale(domain={self.domain}, range={self.range})"
