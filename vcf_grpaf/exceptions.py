"""Exception hierarchy for vcf_grpaf.

Every error raised on purpose by the package derives from ``GrpafError`` so
the command line can report it and exit non-zero without a traceback. The
message always names the failing stage (loading labels, building masks,
annotating a site/group, writing output).
"""

__all__ = [
    "GrpafError",
    "InputError",
    "FormatError",
    "ConsistencyError",
    "OutputError",
    "ConfigError",
]


class GrpafError(Exception):
    """Base class for all vcf_grpaf errors."""


class InputError(GrpafError):
    """A label file or VCF source could not be opened or read."""


class FormatError(GrpafError):
    """Malformed label row, VCF line or genotype call.

    Also raised for calls the REF/ALT allele model cannot represent
    (allele index >= 2, ploidy > 2).
    """


class ConsistencyError(GrpafError):
    """Label file references samples absent from the VCF (strict mode only)."""


class OutputError(GrpafError):
    """Writing the output header or a record failed."""


class ConfigError(GrpafError):
    """Invalid run configuration, e.g. an unknown tag selection."""
