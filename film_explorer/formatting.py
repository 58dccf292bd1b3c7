"""
Display formatting for the results table and point tooltips.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from .config import TABLE_ROW_LIMIT
from .models import FilmRecord

PLACEHOLDER = "—"  # shown for missing values

TABLE_COLUMNS = ("Title", "Year", "Director", "Rating", "Gross")


def format_money(value: Optional[float]) -> str:
	"""USD with B/M suffixes for large amounts: $1.23B, $4.5M, $12,345."""
	if value is None:
		return PLACEHOLDER
	if value >= 1e9:
		return f"${value / 1e9:.2f}B"
	if value >= 1e6:
		return f"${value / 1e6:.1f}M"
	return f"${math.floor(value + 0.5):,}"


def format_number(value: Optional[float], digits: int = 1) -> str:
	return PLACEHOLDER if value is None else f"{float(value):.{digits}f}"


def safe_text(value) -> str:
	return PLACEHOLDER if value is None else str(value)


def table_rows(records: Sequence[FilmRecord], limit: int = TABLE_ROW_LIMIT) -> List[Dict[str, str]]:
	"""First `limit` records as display rows keyed by TABLE_COLUMNS."""
	return [
		{
			"Title": safe_text(r.title),
			"Year": safe_text(r.year),
			"Director": safe_text(r.director),
			"Rating": format_number(r.rating, 1),
			"Gross": format_money(r.gross),
		}
		for r in records[:limit]
	]


def tooltip_rows(record: FilmRecord) -> Tuple[str, List[Tuple[str, str]]]:
	"""Tooltip heading and (label, value) rows for one film."""
	runtime = PLACEHOLDER if record.runtime is None else f"{math.floor(record.runtime + 0.5)} min"
	return safe_text(record.title), [
		("Year", safe_text(record.year)),
		("Director", safe_text(record.director)),
		("Rating", format_number(record.rating, 1)),
		("Runtime", runtime),
		("Gross", format_money(record.gross)),
	]
