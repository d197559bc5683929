"""Plain-text VCF writer (stdout, plain file or gzip by suffix).

Output compressed with ``.gz`` is ordinary gzip, not BGZF; run ``bgzip``
on a plain output when an indexable file is needed.
"""

from __future__ import annotations

from typing import Optional, Sequence
import gzip
import sys

from ..config import STDIO_PATH
from ..exceptions import OutputError
from .vcf_reader import VariantRecord

__all__ = ["VCFWriter"]


class VCFWriter:
	"""Write a header then records; use as a context manager."""

	def __init__(self, path: str):
		self.path = path
		self.records_written = 0
		self._fh = None

	def _open(self):
		if self.path == STDIO_PATH:
			return sys.stdout
		try:
			if self.path.endswith('.gz'):
				return gzip.open(self.path, 'wt', encoding='utf-8')
			return open(self.path, 'wt', encoding='utf-8')
		except OSError as exc:
			raise OutputError(f"opening output {self.path}: {exc}") from exc

	def open(self) -> "VCFWriter":
		if self._fh is None:
			self._fh = self._open()
		return self

	def close(self) -> None:
		if self._fh is None:
			return
		try:
			if self._fh is sys.stdout:
				self._fh.flush()
			else:
				self._fh.close()
		except OSError as exc:
			raise OutputError(f"closing output {self.path}: {exc}") from exc
		finally:
			self._fh = None

	def __enter__(self) -> "VCFWriter":
		return self.open()

	def __exit__(self, *exc) -> None:
		self.close()

	def _write(self, text: str, what: str) -> None:
		try:
			self._fh.write(text)
		except OSError as exc:
			raise OutputError(f"writing {what} to {self.path}: {exc}") from exc

	def write_header(self, meta_lines: Sequence[str], header_line: Optional[str]) -> None:
		self.open()
		lines = list(meta_lines)
		if header_line:
			lines.append(header_line)
		self._write("".join(f"{ln}\n" for ln in lines), "header")

	def write(self, record: VariantRecord) -> None:
		self.open()
		self._write(record.to_line() + "\n", f"record {record.site}")
		self.records_written += 1
