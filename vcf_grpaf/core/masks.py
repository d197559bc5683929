"""Group masks over the VCF sample order.

A mask is a read-only boolean numpy vector aligned index-for-index with the
VCF header samples; ``mask[i]`` is True iff sample ``i`` is labelled with
the group. Masks are built once per run.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence
import logging

import numpy as np
import pandas as pd

from ..exceptions import ConsistencyError

__all__ = [
	"GroupMembership",
	"GroupMask",
	"build_group_masks",
	"missing_label_samples",
	"check_label_consistency",
]

GroupMembership = Dict[str, List[str]]
GroupMask = Dict[str, np.ndarray]

logger = logging.getLogger(__name__)


def build_group_masks(samples: Sequence[str], membership: GroupMembership) -> GroupMask:
	"""Return ``{group: bool array}`` in sorted group order."""
	vcf_samples = pd.Series(list(samples), dtype=object)
	masks: GroupMask = {}
	for grp in sorted(membership):
		mask = vcf_samples.isin(set(membership[grp])).to_numpy(dtype=bool)
		mask.setflags(write=False)
		masks[grp] = mask
	return masks


def missing_label_samples(samples: Sequence[str], membership: GroupMembership) -> pd.DataFrame:
	"""Label rows whose sample is not in ``samples``.

	Columns: sample, group (one row per offending label assignment).
	"""
	present = set(samples)
	rows = [
		{"sample": s, "group": grp}
		for grp in sorted(membership)
		for s in membership[grp]
		if s not in present
	]
	return pd.DataFrame(rows, columns=["sample", "group"])


def check_label_consistency(
	samples: Sequence[str],
	membership: GroupMembership,
	*,
	strict: bool = False,
	log: Optional[logging.Logger] = None,
) -> pd.DataFrame:
	"""Compare label samples against the VCF sample order.

	In strict mode any absent sample raises ``ConsistencyError``; otherwise
	a warning is logged and the offending rows are returned.
	"""
	log = log or logger
	absent = missing_label_samples(samples, membership)
	if absent.empty:
		return absent
	if strict:
		raise ConsistencyError(
			f"building masks: {len(absent)} labelled sample(s) not in VCF header:\n"
			f"{absent.to_string(index=False)}"
		)
	log.warning("%d labelled sample(s) not in VCF header; they are ignored", len(absent))
	log.debug("Absent samples:\n%s", absent.to_string(index=False))
	return absent
