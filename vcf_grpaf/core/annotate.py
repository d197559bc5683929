"""Per-variant annotation.

``GroupAnnotator`` owns everything fixed for a run (sample order, masks,
descriptors) and turns one variant's genotype calls into the typed
``<TAG>_<GROUP>`` values:

	normalise -> aggregate per group -> (HWE) -> emit

Nothing is kept between variants. Values for a variant are all computed
before any are returned, so a failing group leaves the record untouched.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple, Union, TYPE_CHECKING
import logging
import re

import numpy as np

from ..config import PROGRESS_INTERVAL
from ..exceptions import ConfigError, FormatError
from .genotype import NormalizedGenotype, normalize_call, normalize_gt
from .hwe import apply_hwe
from .masks import GroupMembership, build_group_masks
from .stats import AfStats, aggregate_calls
from .tags import StatTag, TagDescriptor, TagValue, build_descriptors, requires_hwe, tag_values

if TYPE_CHECKING:  # pragma: no cover
	from ..io.vcf_reader import VariantRecord

__all__ = ["GroupAnnotator", "annotate_header", "annotate_records"]

RawCall = Union[None, str, Sequence[Optional[int]]]

_INFO_ID = re.compile(r"^##INFO=<ID=([^,>]+)")


class GroupAnnotator:
	"""Annotate variants with per-group statistics.

	Parameters
	----------
	samples : sequence of str
		VCF sample order; every genotype vector passed to ``annotate`` is
		aligned to it.
	membership : dict
		Group -> labelled samples.
	tags : sequence of StatTag
		Statistics to emit.
	logger : logging.Logger | None
		Where to report; defaults to this module's logger.
	"""

	def __init__(
		self,
		samples: Sequence[str],
		membership: GroupMembership,
		tags: Sequence[StatTag],
		*,
		logger: Optional[logging.Logger] = None,
	):
		self.log = logger or logging.getLogger(__name__)
		if not tags:
			raise ConfigError("no tags selected")
		self.samples: Tuple[str, ...] = tuple(samples)
		self.groups: Tuple[str, ...] = tuple(sorted(membership))
		self.tags: Tuple[StatTag, ...] = tuple(tags)
		self.compute_hwe = requires_hwe(self.tags)
		self.masks = build_group_masks(self.samples, membership)
		self._indices = {grp: np.flatnonzero(mask) for grp, mask in self.masks.items()}
		self.descriptors: Tuple[TagDescriptor, ...] = build_descriptors(self.tags, membership)
		for grp in self.groups:
			self.log.debug(
				"Group %s: %d labelled, %d present in VCF",
				grp, len(membership[grp]), len(self._indices[grp]),
			)

	@property
	def tag_ids(self) -> FrozenSet[str]:
		return frozenset(d.id for d in self.descriptors)

	def normalize(self, genotypes: Sequence[RawCall], site: str = "") -> List[NormalizedGenotype]:
		if len(genotypes) != len(self.samples):
			raise FormatError(
				f"annotating {site}: {len(genotypes)} genotype calls for {len(self.samples)} samples"
			)
		out: List[NormalizedGenotype] = []
		for sample, gt in zip(self.samples, genotypes):
			try:
				if gt is None or isinstance(gt, str):
					out.append(normalize_gt(gt))
				else:
					out.append(normalize_call(gt))
			except FormatError as exc:
				raise FormatError(f"annotating {site} sample {sample}: {exc}") from exc
		return out

	def group_stats(self, genotypes: Sequence[RawCall], site: str = "") -> Dict[str, AfStats]:
		"""``{group: AfStats}`` for one variant."""
		calls = self.normalize(genotypes, site)
		result: Dict[str, AfStats] = {}
		for grp in self.groups:
			try:
				stats = aggregate_calls(calls[i] for i in self._indices[grp])
			except FormatError as exc:
				raise FormatError(f"annotating {site} group {grp}: {exc}") from exc
			if self.compute_hwe:
				apply_hwe(stats)
			result[grp] = stats
		return result

	def annotate(self, genotypes: Sequence[RawCall], site: str = "") -> Dict[str, TagValue]:
		"""Typed ``{<TAG>_<GROUP>: value}`` for one variant, groups in sorted order."""
		values: Dict[str, TagValue] = {}
		for grp, stats in self.group_stats(genotypes, site).items():
			values.update(tag_values(stats, grp, self.tags))
		return values


def annotate_header(
	meta_lines: Sequence[str],
	descriptors: Sequence[TagDescriptor],
	*,
	log: Optional[logging.Logger] = None,
) -> List[str]:
	"""Append descriptor lines to the ``##`` meta lines.

	Existing ``##INFO`` definitions with the same id are dropped.
	"""
	log = log or logging.getLogger(__name__)
	ids = {d.id for d in descriptors}
	kept: List[str] = []
	replaced: List[str] = []
	for line in meta_lines:
		m = _INFO_ID.match(line)
		if m and m.group(1) in ids:
			replaced.append(m.group(1))
			continue
		kept.append(line)
	if replaced:
		log.warning("Replacing %d existing INFO definition(s): %s", len(replaced), ", ".join(replaced))
	return kept + [d.header_line() for d in descriptors]


def annotate_records(
	records: Iterable["VariantRecord"],
	annotator: GroupAnnotator,
	*,
	progress_interval: int = PROGRESS_INTERVAL,
	log: Optional[logging.Logger] = None,
) -> Iterator["VariantRecord"]:
	"""Yield each record with its group INFO fields written (or replaced).

	Records with more than one ALT allele are rejected: ``AC``/``MAC`` are
	``Number=A`` and only one value is computed per group.
	"""
	log = log or annotator.log
	drop = annotator.tag_ids
	for n, rec in enumerate(records, 1):
		if "," in rec.alts:
			raise FormatError(
				f"annotating {rec.site}: ALT {rec.alts!r} is outside the REF/ALT model; "
				"split multi-allelic sites first (e.g. bcftools norm -m-)"
			)
		values = annotator.annotate(rec.genotypes(), site=rec.site)
		yield rec.with_info(values, drop=drop)
		if progress_interval and n % progress_interval == 0:
			log.info("Processed %s variants", f"{n:,}")
