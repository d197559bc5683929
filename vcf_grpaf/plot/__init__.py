"""Plotting API for the vcf_grpaf package.

	base        – style and save helpers
	group_plots – per-group frequency and genotype composition plots

Import convenience: ``from vcf_grpaf.plot import plot_af_distribution_by_group``.
"""

from .group_plots import *  # noqa: F401,F403
from .group_plots import __all__ as _group_all

__all__ = list(_group_all)
