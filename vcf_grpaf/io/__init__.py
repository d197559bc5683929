"""I/O subpackage.

Exposes the streaming VCF reader / writer and the label loader.
"""

from .vcf_reader import SimpleVCFReader, VariantRecord  # noqa: F401
from .vcf_writer import VCFWriter  # noqa: F401
from .labels import load_labels, read_labels  # noqa: F401

__all__ = ["SimpleVCFReader", "VariantRecord", "VCFWriter", "load_labels", "read_labels"]
