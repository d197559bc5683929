"""Approximate Hardy-Weinberg deviation.

``p = exp(-0.5 * chi_sq)`` is a rough stand-in for a significance value,
not the survival function of a chi-square distribution and not the exact
test of Wigginton et al. Downstream users should treat ``HWE`` as a
ranking signal only.
"""

from __future__ import annotations

from typing import Tuple
import math

from ..config import EXC_HET_P_THRESHOLD
from .stats import AfStats

__all__ = ["approximate_hwe", "apply_hwe"]


def approximate_hwe(ref_count: int, alt_count: int, n_het: int) -> Tuple[int, float]:
	"""Return ``(exc_het, hwe)`` from REF/ALT allele counts and heterozygotes.

	``exc_het`` is 1 when no excess heterozygosity is flagged, 0 when the
	approximate p-value falls below ``EXC_HET_P_THRESHOLD``.
	"""
	n_homref = (ref_count - n_het) / 2
	n_homalt = (alt_count - n_het) / 2
	n = n_homref + n_het + n_homalt
	if n == 0:
		return 0, 0.0
	exp_het = 2 * ref_count * alt_count / (2 * n)
	chi_sq = (n_het - exp_het) ** 2 / max(exp_het, 1)
	p = math.exp(-0.5 * chi_sq)
	exc_het = 0 if p < EXC_HET_P_THRESHOLD else 1
	return exc_het, p


def apply_hwe(stats: AfStats) -> AfStats:
	"""Fill ``exc_het`` / ``hwe`` on ``stats`` and return it."""
	stats.exc_het, stats.hwe = approximate_hwe(stats.ac[0], stats.ac[1], stats.n_het)
	return stats
