"""vcf_grpaf – per-group allele frequency annotation for VCFs.

Subpackages:
	core      – genotype normalisation, per-group statistics, HWE, tag synthesis
	io        – streaming VCF reader / writer and label loading
	metrics   – per-group tables built from annotated VCFs
	plot      – per-group visualisations

The annotation API is re-exported at the top level so users can simply::

	from vcf_grpaf import GroupAnnotator, StatTag
"""

from .core import GroupAnnotator, StatTag, AfStats, aggregate_calls, approximate_hwe  # noqa: F401
from .exceptions import (  # noqa: F401
	GrpafError,
	InputError,
	FormatError,
	ConsistencyError,
	OutputError,
	ConfigError,
)

__version__ = "0.1.0"
__author__ = "Zihao Huang"
__email__ = "zh384@cam.ac.uk"
__affiliation__ = "Department of Genetics, University of Cambridge"
__all__ = [
	"GroupAnnotator",
	"StatTag",
	"AfStats",
	"aggregate_calls",
	"approximate_hwe",
	"GrpafError",
	"InputError",
	"FormatError",
	"ConsistencyError",
	"OutputError",
	"ConfigError",
	"__version__",
	"__author__",
	"__email__",
	"__affiliation__",
]
