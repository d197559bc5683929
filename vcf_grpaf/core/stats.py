"""Per-group allele statistics.

The aggregator folds the normalised calls of one group at one variant into
an ``AfStats``. The count model has exactly two allele slots (REF, ALT), so
an allele index >= 2 is rejected; split multi-allelic records beforehand
(``bcftools norm -m-``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..exceptions import FormatError
from .genotype import NormalizedGenotype

__all__ = ["AfStats", "aggregate_calls"]


@dataclass
class AfStats:
	"""Counts and frequencies for one (variant, group) pair.

	``exc_het`` and ``hwe`` stay ``None`` unless the HWE step ran.
	"""

	ac: List[int] = field(default_factory=lambda: [0, 0])
	an: int = 0
	n_hemi: int = 0
	n_homref: int = 0
	n_het: int = 0
	n_homalt: int = 0
	n_miss: int = 0
	af: float = 0.0
	maf: float = 0.0
	mac: int = 0
	exc_het: Optional[int] = None
	hwe: Optional[float] = None

	@property
	def n_samples(self) -> int:
		return self.n_hemi + self.n_homref + self.n_het + self.n_homalt + self.n_miss


def _check_allele(a: int, call: NormalizedGenotype) -> None:
	if a > 1:
		raise FormatError(
			f"allele index {a} in call {call!r} is outside the REF/ALT model; "
			"split multi-allelic sites first (e.g. bcftools norm -m-)"
		)


def aggregate_calls(calls: Iterable[NormalizedGenotype]) -> AfStats:
	"""Fold normalised calls into an ``AfStats``.

	Classification:
		None                 -> n_miss
		(a,)                 -> n_hemi, one allele counted
		(a, b) both present  -> n_homref / n_homalt / n_het, two alleles counted
		(a, None), (None, b) -> n_hemi, one allele counted
		(None, None)         -> n_miss

	The result does not depend on the order of ``calls``.
	"""
	st = AfStats()
	for call in calls:
		if call is None:
			st.n_miss += 1
			continue
		present = [a for a in call if a is not None]
		for a in present:
			_check_allele(a, call)
		if not present:
			st.n_miss += 1
			continue
		for a in present:
			st.an += 1
			st.ac[a] += 1
		if len(present) == 1:
			# true haploid or half-called diploid
			st.n_hemi += 1
		elif present[0] != present[1]:
			st.n_het += 1
		elif present[0] == 0:
			st.n_homref += 1
		else:
			st.n_homalt += 1

	if st.an > 0:
		st.af = st.ac[1] / st.an
		st.mac = min(st.ac[0], st.ac[1])
		st.maf = st.mac / st.an
	return st
