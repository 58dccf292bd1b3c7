"""
Dataset construction: freezes normalized records and derives the facts
the controls are seeded from (year bounds, director list).
"""

import unicodedata  # collation key
from typing import Iterable, List, Tuple

from .config import DEFAULT_YEAR_BOUNDS
from .models import Dataset, FilmRecord

from loguru import logger  # console logger


def collation_key(name: str) -> Tuple[str, str]:
	"""Locale-style sort key: accents and case folded, exact string breaks ties."""
	folded = unicodedata.normalize('NFKD', name).casefold()
	return ''.join(c for c in folded if not unicodedata.combining(c)), name


def year_bounds(records: Iterable[FilmRecord]) -> Tuple[int, int]:
	years = [r.year for r in records if r.year is not None]
	if not years:
		return DEFAULT_YEAR_BOUNDS
	return min(years), max(years)


def distinct_directors(records: Iterable[FilmRecord]) -> List[str]:
	names = {r.director for r in records if r.director and r.director.strip()}
	return sorted(names, key=collation_key)


def build_dataset(records: Iterable[FilmRecord]) -> Dataset:
	"""Build the immutable dataset once, right after loading."""
	frozen = tuple(records)
	dataset = Dataset(
		records=frozen,
		year_bounds=year_bounds(frozen),
		directors=tuple(distinct_directors(frozen)),
	)
	logger.info(
		f"[Dataset] {len(frozen)} films | years={dataset.year_bounds[0]}-{dataset.year_bounds[1]} | directors={len(dataset.directors)}"
	)
	return dataset
