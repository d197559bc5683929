"""Output tag synthesis.

Each statistic is a ``StatTag`` member carrying its VCF type, Number and
description template, paired with a pure ``AfStats -> value`` extractor.
Field ids are ``<TAG>_<GROUP>``. Header declarations are collected once by
``HeaderBuilder``; per-record values come from ``tag_values``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import ALL_TAGS_SENTINEL
from ..exceptions import ConfigError
from .stats import AfStats

__all__ = [
	"StatTag",
	"TagDescriptor",
	"HeaderBuilder",
	"parse_tag_selection",
	"requires_hwe",
	"tag_id",
	"build_descriptors",
	"tag_values",
]

TagValue = Union[int, float]


class StatTag(Enum):
	"""One statistic written per group: (label, VCF type, VCF Number, description)."""

	AF = ("AF", "Float", "1", "Allele Frequency on {count} {grp} samples")
	MAF = ("MAF", "Float", "1", "Minor Allele Frequency on {count} {grp} samples")
	MAC = ("MAC", "Integer", "A", "Minor Allele Count on {count} {grp} samples")
	AC = ("AC", "Integer", "A", "Allele Count on {count} {grp} samples")
	AN = ("AN", "Integer", "1", "Total number of alleles in called genotypes on {count} {grp} samples")
	N_HEMI = ("N_HEMI", "Integer", "1", "Number of hemizygous or half-called genotypes on {count} {grp} samples")
	N_MISS = ("N_MISS", "Integer", "1", "Number of missing genotypes on {count} {grp} samples")
	N_HOMREF = ("N_HOMREF", "Integer", "1", "Number of homozygous reference genotypes on {count} {grp} samples")
	N_HET = ("N_HET", "Integer", "1", "Number of heterozygous genotypes on {count} {grp} samples")
	N_HOMALT = ("N_HOMALT", "Integer", "1", "Number of homozygous alternate genotypes on {count} {grp} samples")
	ExcHet = ("ExcHet", "Integer", "1", "Approximate excess heterozygosity flag on {count} {grp} samples; 1=good, 0=bad")
	HWE = ("HWE", "Float", "1", "Approximate HWE deviation p-value on {count} {grp} samples; 1=good, 0=bad")

	def __init__(self, label: str, vcf_type: str, number: str, template: str):
		self.label = label
		self.vcf_type = vcf_type
		self.number = number
		self.template = template

	@classmethod
	def from_label(cls, label: str) -> "StatTag":
		for tag in cls:
			if tag.label == label:
				return tag
		raise ConfigError(
			f"unknown tag {label!r}; use '{ALL_TAGS_SENTINEL}' or {','.join(t.label for t in cls)}"
		)

	def coerce(self, value: TagValue) -> TagValue:
		return int(value) if self.vcf_type == "Integer" else float(value)

	def extract(self, stats: AfStats) -> TagValue:
		value = _EXTRACTORS[self](stats)
		if value is None:
			raise ValueError(f"{self.label} requested but HWE was not computed")
		return self.coerce(value)


_EXTRACTORS: Dict[StatTag, Callable[[AfStats], Optional[TagValue]]] = {
	StatTag.AF: lambda st: st.af,
	StatTag.MAF: lambda st: st.maf,
	StatTag.MAC: lambda st: st.mac,
	StatTag.AC: lambda st: st.ac[1],
	StatTag.AN: lambda st: st.an,
	StatTag.N_HEMI: lambda st: st.n_hemi,
	StatTag.N_MISS: lambda st: st.n_miss,
	StatTag.N_HOMREF: lambda st: st.n_homref,
	StatTag.N_HET: lambda st: st.n_het,
	StatTag.N_HOMALT: lambda st: st.n_homalt,
	StatTag.ExcHet: lambda st: st.exc_het,
	StatTag.HWE: lambda st: st.hwe,
}


def parse_tag_selection(selection: Union[str, Sequence[str]]) -> Tuple[StatTag, ...]:
	"""Resolve ``'all'`` or ``'AF,AN,...'`` into tags in canonical order."""
	if isinstance(selection, str):
		if selection.strip() == ALL_TAGS_SENTINEL:
			return tuple(StatTag)
		labels = [s.strip() for s in selection.split(",") if s.strip()]
	else:
		labels = list(selection)
	if not labels:
		raise ConfigError("empty tag selection")
	chosen = {StatTag.from_label(lab) for lab in labels}
	return tuple(t for t in StatTag if t in chosen)


def requires_hwe(tags: Iterable[StatTag]) -> bool:
	return any(t in (StatTag.ExcHet, StatTag.HWE) for t in tags)


def tag_id(tag: StatTag, group: str) -> str:
	return f"{tag.label}_{group}"


@dataclass(frozen=True)
class TagDescriptor:
	"""Header declaration of one ``<TAG>_<GROUP>`` INFO field."""

	tag: StatTag
	group: str
	id: str
	number: str
	type: str
	description: str

	def header_line(self) -> str:
		return (
			f'##INFO=<ID={self.id},Number={self.number},Type={self.type},'
			f'Description="{self.description}">'
		)


class HeaderBuilder:
	"""Collect descriptors, then freeze them with ``finalize``."""

	def __init__(self):
		self._descriptors: List[TagDescriptor] = []
		self._final: Optional[Tuple[TagDescriptor, ...]] = None

	def add(self, tag: StatTag, group: str, count: int) -> TagDescriptor:
		if self._final is not None:
			raise RuntimeError("header already finalized")
		desc = TagDescriptor(
			tag=tag,
			group=group,
			id=tag_id(tag, group),
			number=tag.number,
			type=tag.vcf_type,
			description=tag.template.format(count=count, grp=group),
		)
		self._descriptors.append(desc)
		return desc

	def finalize(self) -> Tuple[TagDescriptor, ...]:
		if self._final is None:
			self._final = tuple(self._descriptors)
		return self._final


def build_descriptors(tags: Sequence[StatTag], membership: Dict[str, List[str]]) -> Tuple[TagDescriptor, ...]:
	"""Descriptors for every (group, tag); groups sorted, tags in given order.

	The description counts label rows of the group, including samples the
	VCF does not carry.
	"""
	builder = HeaderBuilder()
	for grp in sorted(membership):
		for tag in tags:
			builder.add(tag, grp, len(membership[grp]))
	return builder.finalize()


def tag_values(stats: AfStats, group: str, tags: Sequence[StatTag]) -> Dict[str, TagValue]:
	"""Typed ``{<TAG>_<GROUP>: value}`` for one group's statistics."""
	return {tag_id(tag, group): tag.extract(stats) for tag in tags}
