"""
Row normalization module.
Maps heterogeneous input rows (English, casing and Japanese column variants)
onto the canonical FilmRecord shape.
"""

import math  # finiteness checks
import re  # character stripping
from typing import Any, Mapping, Optional, Sequence

from .models import FilmRecord  # canonical record

# Console logging
from loguru import logger  # console logger


_SEPARATORS = re.compile(r"[, ]")  # thousands separators and spaces
_NON_NUMERIC = re.compile(r"[^\d.\-]")  # anything but digits, dot, minus


def coerce_number(value: Any) -> Optional[float]:
	"""
	Tolerant number parsing: "$1,234" -> 1234.0, "120 min" -> 120.0.
	Returns None for missing, empty or unparsable input. Never raises
	and never returns NaN or infinity.
	"""
	if value is None or isinstance(value, bool):
		return None
	if isinstance(value, (int, float)):
		return float(value) if math.isfinite(value) else None

	text = _NON_NUMERIC.sub("", _SEPARATORS.sub("", str(value)))
	if not text:
		return None
	try:
		number = float(text)
	except ValueError:  # e.g. "1.2.3" or a lone "-"
		return None
	return number if math.isfinite(number) else None


def pick(raw: Optional[Mapping[str, Any]], keys: Sequence[str]) -> Any:
	"""Return the value of the first key that is present and non-blank, else None."""
	if not raw:
		return None
	for key in keys:
		value = raw.get(key)
		if value is not None and str(value).strip() != "":
			return value
	return None


class RowNormalizer:
	"""
	Resolves each canonical field from an ordered list of accepted column names.
	"""

	# Candidate keys per canonical field, in priority order
	TITLE_KEYS = ("title", "Title", "name", "Name", "film", "Film", "タイトル", "作品名")
	YEAR_KEYS = ("year", "Year", "release_year", "ReleaseYear", "公開年", "年", "公開 年")
	DIRECTOR_KEYS = ("director", "Director", "dir", "Dir", "監督", "監督名")
	RATING_KEYS = (
		"imdb_rating", "IMDb", "imdb", "rating", "Rating", "score", "Score",
		"評価", "IMDb評価", "IMDB評価", "スコア",
	)
	RUNTIME_KEYS = (
		"runtime", "Runtime", "running_time", "RunningTime", "minutes", "Minutes", "duration", "Duration",
		"上映時間", "上映時間（分）", "上映時間(分)", "上映 分", "時間（分）", "時間(分)",
	)
	GROSS_KEYS = (
		"gross", "Gross", "box_office", "BoxOffice", "revenue", "Revenue",
		"興行収入", "興行収入（$）", "興行収入($)", "収入", "売上",
	)

	def normalize(self, raw: Mapping[str, Any]) -> FilmRecord:
		"""Convert one raw row into a FilmRecord. Missing fields stay None."""
		year = coerce_number(pick(raw, self.YEAR_KEYS))
		return FilmRecord(
			title=self._text(pick(raw, self.TITLE_KEYS)),
			year=int(year) if year is not None else None,  # whole years only
			director=self._text(pick(raw, self.DIRECTOR_KEYS)),
			rating=coerce_number(pick(raw, self.RATING_KEYS)),
			runtime=coerce_number(pick(raw, self.RUNTIME_KEYS)),
			gross=coerce_number(pick(raw, self.GROSS_KEYS)),
			raw=raw,
		)

	def normalize_all(self, rows: Sequence[Mapping[str, Any]]) -> list:
		"""Normalize every row, keeping source order."""
		records = [self.normalize(r) for r in rows]
		logger.debug(f"[Normalizer] Normalized {len(records)} rows")
		return records

	@staticmethod
	def _text(value: Any) -> Optional[str]:
		# pick() already rejected blanks
		return None if value is None else str(value).strip()


_DEFAULT_NORMALIZER = RowNormalizer()


def normalize_row(raw: Mapping[str, Any]) -> FilmRecord:
	"""Module-level shortcut around RowNormalizer.normalize."""
	return _DEFAULT_NORMALIZER.normalize(raw)
