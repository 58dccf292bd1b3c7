"""
Data loading module.
Reads the film table from CSV/TSV or JSONL and hands back raw rows with
opportunistic type inference, then normalized FilmRecords.
"""

# Standard libs for CSV/JSON parsing, typing, and paths
import csv  # delimited files
import json  # read JSON lines
import math  # finiteness checks for inferred numbers
import re  # numeric literal detection
from typing import Any, Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our record type and the normalizer
from .models import FilmRecord  # canonical film record
from .normalizer import RowNormalizer  # column-variant resolution

# Console logging
from loguru import logger  # console logger


class DatasetLoadError(RuntimeError):
	"""Raised when the input file exists but has no header or cannot be parsed."""


class DataLoader:
	"""
	Handles loading the film table and turning it into FilmRecords.
	"""

	# Plain numeric literals: optional sign, digits, optional fraction/exponent
	INT_LITERAL = re.compile(r"^[-+]?\d+$")
	NUMBER_LITERAL = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")

	def __init__(self, normalizer: Optional[RowNormalizer] = None):
		"""Initialize the loader with the row normalizer to apply."""
		self.normalizer = normalizer or RowNormalizer()  # candidate-key resolver

	def load_films(self, filepath) -> List[FilmRecord]:
		"""
		Load a file and return normalized FilmRecords in file order.
		"""
		rows = self.load_rows(filepath)  # raw key -> value mappings
		films = self.normalizer.normalize_all(rows)  # canonical shape
		logger.info(f"[DataLoader] Normalized {len(films)} films.")  # summary
		return films

	def load_rows(self, filepath) -> List[Dict[str, Any]]:
		"""
		Read raw rows; the format is chosen from the file extension
		(.jsonl -> JSON lines, .tsv -> tab separated, anything else -> CSV).
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Film data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading rows from {filepath}...")  # log action

		suffix = filepath.suffix.lower()
		try:
			if suffix == '.jsonl':
				rows = self._read_jsonl(filepath)
			else:
				rows = self._read_delimited(filepath, delimiter='\t' if suffix == '.tsv' else ',')
		except (OSError, UnicodeDecodeError, csv.Error) as e:
			raise DatasetLoadError(f"Could not read {filepath}: {e}") from e

		# No header (or no content at all) means nothing could be loaded;
		# a header with zero data rows is a valid, empty table
		if rows is None:
			raise DatasetLoadError(f"No header or content found in {filepath}")

		logger.info(f"[DataLoader] Successfully loaded {len(rows)} rows.")  # summary
		return rows

	def _read_delimited(self, filepath: Path, delimiter: str) -> Optional[List[Dict[str, Any]]]:
		# utf-8-sig drops a BOM left by spreadsheet exports
		with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
			reader = csv.DictReader(f, delimiter=delimiter)
			if not reader.fieldnames:
				return None  # empty file, no header
			return [
				{key.strip(): self._infer_type(value) for key, value in row.items() if key is not None}
				for row in reader
			]

	def _read_jsonl(self, filepath: Path) -> Optional[List[Dict[str, Any]]]:
		"""
		Parse one JSON object per line. Any malformed line fails the whole
		load; a partially read dataset is never returned.
		"""
		rows = []  # accumulator for parsed objects
		seen_content = False  # any non-blank line
		# Read line-by-line and keep track of line number for diagnostics
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):
				if not line.strip():
					continue  # blank line
				seen_content = True
				try:
					data = json.loads(line.strip())  # parse JSON object per line
				except json.JSONDecodeError as e:
					raise DatasetLoadError(f"Invalid JSON at line {line_num} of {filepath}: {e}") from e
				if not isinstance(data, dict):
					raise DatasetLoadError(f"Expected a JSON object at line {line_num} of {filepath}")
				rows.append(data)
		return rows if seen_content else None

	def _infer_type(self, value: Any) -> Any:
		"""
		Opportunistic typing: empty -> None, numeric literal -> int/float,
		anything else stays a string.
		"""
		if value is None:
			return None
		text = value.strip()
		if text == '':
			return None
		if self.INT_LITERAL.match(text):
			return int(text)
		if self.NUMBER_LITERAL.match(text):
			number = float(text)
			return number if math.isfinite(number) else value
		return value
