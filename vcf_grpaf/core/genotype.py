"""Genotype call normalisation.

A raw call is at most two allele slots, each either a resolved allele index
or unresolved. It is normalised into one of:

	None          – no call at all (``.``, ``./.``, ``.|.``)
	(a,)          – hemizygous call with a single allele
	(a, b)        – diploid call; either slot may be ``None`` (``0/.``)

Partial missingness is kept as-is; deciding what a half call counts as is
the aggregator's job.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, List
import re

from ..exceptions import FormatError

__all__ = ["NormalizedGenotype", "parse_gt", "normalize_call", "normalize_gt"]

NormalizedGenotype = Optional[Tuple[Optional[int], ...]]

_GT_SEP = re.compile(r"[/|]")
_ALLELE = re.compile(r"[0-9]+")


def parse_gt(gt: Optional[str]) -> List[Optional[int]]:
	"""Split a VCF ``GT`` value into allele slots.

	Phasing is ignored. ``None``, an empty string or ``.`` yield an empty
	list (no slot observed).
	"""
	if gt is None or gt in ("", "."):
		return []
	slots: List[Optional[int]] = []
	for tok in _GT_SEP.split(gt):
		if tok == ".":
			slots.append(None)
		elif _ALLELE.fullmatch(tok):
			slots.append(int(tok))
		else:
			raise FormatError(f"malformed genotype call {gt!r}")
	return slots


def normalize_call(alleles: Sequence[Optional[int]]) -> NormalizedGenotype:
	"""Normalise up to two allele slots."""
	if len(alleles) > 2:
		raise FormatError(f"unsupported ploidy {len(alleles)} in call {tuple(alleles)!r}")
	for a in alleles:
		if a is not None and a < 0:
			raise FormatError(f"negative allele index {a} in call {tuple(alleles)!r}")
	if all(a is None for a in alleles):
		return None
	return tuple(alleles)


def normalize_gt(gt: Optional[str]) -> NormalizedGenotype:
	"""Normalise a raw ``GT`` string, e.g. ``'0|1'`` -> ``(0, 1)``."""
	return normalize_call(parse_gt(gt))
