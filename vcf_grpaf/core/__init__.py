"""Core statistics: genotype normalisation, per-group aggregation, HWE
approximation, tag synthesis and the per-variant orchestrator.

Nothing in this subpackage touches files or configures logging.
"""

from .genotype import NormalizedGenotype, parse_gt, normalize_call, normalize_gt  # noqa: F401
from .stats import AfStats, aggregate_calls  # noqa: F401
from .hwe import approximate_hwe, apply_hwe  # noqa: F401
from .masks import build_group_masks, check_label_consistency, missing_label_samples  # noqa: F401
from .tags import (  # noqa: F401
	StatTag,
	TagDescriptor,
	HeaderBuilder,
	build_descriptors,
	parse_tag_selection,
	requires_hwe,
	tag_id,
	tag_values,
)
from .annotate import GroupAnnotator, annotate_header, annotate_records  # noqa: F401

__all__ = [
	"NormalizedGenotype",
	"parse_gt",
	"normalize_call",
	"normalize_gt",
	"AfStats",
	"aggregate_calls",
	"approximate_hwe",
	"apply_hwe",
	"build_group_masks",
	"check_label_consistency",
	"missing_label_samples",
	"StatTag",
	"TagDescriptor",
	"HeaderBuilder",
	"build_descriptors",
	"parse_tag_selection",
	"requires_hwe",
	"tag_id",
	"tag_values",
	"GroupAnnotator",
	"annotate_header",
	"annotate_records",
]
