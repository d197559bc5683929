"""Lightweight streaming VCF reader.

This intentionally avoids external dependencies (pysam / cyvcf2): records are
kept as their raw text columns and only the pieces needed for annotation
(INFO, GT) are parsed. Header meta lines are retained verbatim so they can
be written back out.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Mapping, Optional, Union
import gzip
import sys

from ..config import STDIO_PATH
from ..exceptions import FormatError, InputError
from ..utils import update_info_field

__all__ = ["VariantRecord", "SimpleVCFReader"]


@dataclass(frozen=True)
class VariantRecord:
	"""A single VCF data line.

	Attributes
	----------
	chrom, pos, id, ref, alts : str
		Fixed columns, kept as text (POS is not cast).
	qual : str | None
		None when QUAL is '.'.
	filter, info : str
		Raw FILTER / INFO columns.
	format_keys : List[str]
		FORMAT keys in order (empty for sites-only VCFs).
	sample_fields : List[str]
		Raw colon-delimited field strings per sample.
	"""

	chrom: str
	pos: str
	id: str
	ref: str
	alts: str
	qual: Optional[str]
	filter: str
	info: str
	format_keys: List[str]
	sample_fields: List[str]

	@property
	def site(self) -> str:
		return f"{self.chrom}:{self.pos}"

	def extract_sample_value(self, sample_index: int, key: str) -> Optional[str]:
		"""Extract a value (e.g., DP, GT) for a given sample.

		Returns None if key not in FORMAT or value is '.'
		"""
		try:
			fi = self.format_keys.index(key)
		except ValueError:
			return None
		parts = self.sample_fields[sample_index].split(":")
		if fi >= len(parts):
			return None
		val = parts[fi]
		return None if val == "." else val

	def genotypes(self) -> List[Optional[str]]:
		"""Raw GT strings in sample order (None when absent)."""
		return [self.extract_sample_value(i, "GT") for i in range(len(self.sample_fields))]

	def with_info(self, values: Mapping[str, Union[int, float]], drop: Iterable[str] = ()) -> "VariantRecord":
		"""Copy with ``values`` written into INFO, ``drop`` keys removed first."""
		return replace(self, info=update_info_field(self.info, values, drop))

	def to_line(self) -> str:
		cols = [
			self.chrom, self.pos, self.id, self.ref, self.alts,
			self.qual if self.qual is not None else ".",
			self.filter, self.info,
		]
		if self.format_keys or self.sample_fields:
			cols.append(":".join(self.format_keys))
			cols.extend(self.sample_fields)
		return "\t".join(cols)


class SimpleVCFReader:
	"""Minimal streaming VCF reader.

	The header is read on ``open()`` (or on entering the context manager) so
	``samples`` and ``meta_lines`` are available before the first record.

	Parameters
	----------
	path : str
		Path to (optionally gzipped) VCF file, or ``-`` for stdin.
	max_records : int | None
		Optional limit for testing / faster prototyping.
	"""

	def __init__(self, path: str, max_records: Optional[int] = None):
		self.path = path
		self.max_records = max_records
		self.samples: List[str] = []
		self.meta_lines: List[str] = []
		self.header_line: Optional[str] = None
		self._fh = None

	# -- internal helpers -------------------------------------------------
	def _open(self):  # type: ignore[return-type]
		if self.path == STDIO_PATH:
			return sys.stdin
		try:
			if self.path.endswith(('.gz', '.bgz')):
				return gzip.open(self.path, 'rt', encoding='utf-8')
			return open(self.path, 'rt', encoding='utf-8')
		except OSError as exc:
			raise InputError(f"opening VCF {self.path}: {exc}") from exc

	def _read_header(self) -> None:
		try:
			for line in self._fh:
				line = line.rstrip('\r\n')
				if line.startswith('##'):
					self.meta_lines.append(line)
					continue
				if line.startswith('#CHROM'):
					self.header_line = line
					# VCF fixed columns then samples from index 9
					self.samples = line.split('\t')[9:]
					return
				raise FormatError(f"reading VCF {self.path}: data line before #CHROM header")
		except (OSError, UnicodeDecodeError) as exc:
			raise InputError(f"reading VCF {self.path}: {exc}") from exc
		raise FormatError(f"reading VCF {self.path}: no #CHROM header line")

	def _parse_line(self, line: str) -> VariantRecord:
		parts = line.split('\t')
		if len(parts) < 8:
			raise FormatError(f"reading VCF {self.path}: {len(parts)} columns in record {line[:60]!r}")
		if len(parts) > 8 and len(parts) != 9 + len(self.samples):
			raise FormatError(
				f"reading VCF {self.path}: {parts[0]}:{parts[1]} has {len(parts) - 9} sample "
				f"columns, header declares {len(self.samples)}"
			)
		chrom, pos, _id, ref, alts, qual, flt, info = parts[:8]
		format_keys = parts[8].split(':') if len(parts) > 8 and parts[8] else []
		return VariantRecord(
			chrom, pos, _id, ref, alts, qual if qual != '.' else None, flt, info,
			format_keys, parts[9:],
		)

	# -- public API --------------------------------------------------------
	def open(self) -> "SimpleVCFReader":
		if self._fh is None:
			self._fh = self._open()
			self._read_header()
		return self

	def close(self) -> None:
		if self._fh is not None and self._fh is not sys.stdin:
			self._fh.close()
		self._fh = None

	def __enter__(self) -> "SimpleVCFReader":
		return self.open()

	def __exit__(self, *exc) -> None:
		self.close()

	def __iter__(self) -> Iterator[VariantRecord]:
		return self.parse()

	def parse(self) -> Iterator[VariantRecord]:
		self.open()
		count = 0
		try:
			for line in self._fh:
				line = line.rstrip('\r\n')
				if not line:
					continue
				yield self._parse_line(line)
				count += 1
				if self.max_records and count >= self.max_records:
					break
		except (OSError, UnicodeDecodeError) as exc:
			raise InputError(f"reading VCF {self.path}: {exc}") from exc
