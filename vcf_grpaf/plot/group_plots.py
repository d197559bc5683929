"""Group-level plotting functions.

Implements:
 - AF distribution per group
 - MAF distribution per group
 - Genotype category composition per group (stacked bars)
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .base import set_plot_style, save_figure, grouped_hist_plot

__all__ = [
	"plot_af_distribution_by_group",
	"plot_maf_distribution_by_group",
	"plot_genotype_composition",
]

# Stacking order and colours for genotype categories.
_CATEGORY_COLOURS = {
	"N_HOMREF": "#1565C0",
	"N_HET": "#2E7D32",
	"N_HOMALT": "#C62828",
	"N_HEMI": "#F9A825",
	"N_MISS": "#9E9E9E",
}


def plot_af_distribution_by_group(
	site_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Allele frequency (AF) distribution by group",
	bins: int = 50,
) -> Optional[plt.Figure]:
	"""Histogram of per-group AF over all sites. Requires columns Group, AF."""
	if "AF" not in site_df.columns:
		raise ValueError("DataFrame must contain 'AF' column")
	return grouped_hist_plot(
		site_df, "AF", output_path=output_path, title=title, xlabel="AF",
		bins=bins, binrange=(0.0, 1.0),
	)


def plot_maf_distribution_by_group(
	site_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Minor allele frequency (MAF) distribution by group",
	bins: int = 50,
	min_value: float = 0.0,
) -> Optional[plt.Figure]:
	"""Histogram of per-group MAF; ``min_value`` > 0 hides monomorphic sites."""
	if "MAF" not in site_df.columns:
		raise ValueError("DataFrame must contain 'MAF' column")
	return grouped_hist_plot(
		site_df, "MAF", output_path=output_path, title=title, xlabel="MAF",
		bins=bins, binrange=(0.0, 0.5), min_value=min_value if min_value > 0 else None,
	)


def plot_genotype_composition(
	summary_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Genotype composition by group",
) -> Optional[plt.Figure]:
	"""Stacked bars of genotype category fractions per group.

	Uses the totals from ``summarize_groups``; categories missing from the
	table are skipped.
	"""
	cats = [c for c in _CATEGORY_COLOURS if c in summary_df.columns]
	if not cats or "Group" not in summary_df.columns:
		raise ValueError("summary must contain Group and at least one N_* column")
	counts = summary_df.set_index("Group")[cats].astype(float)
	totals = counts.sum(axis=1)
	fractions = counts.div(totals.where(totals > 0, 1), axis=0)
	set_plot_style()
	fig, ax = plt.subplots(figsize=(max(5, 1.2 * len(fractions) + 3), 5))
	labels = [str(g) for g in fractions.index]
	bottom = np.zeros(len(fractions))
	for cat in cats:
		heights = fractions[cat].to_numpy()
		ax.bar(labels, heights, bottom=bottom, color=_CATEGORY_COLOURS[cat], label=cat.replace("N_", ""))
		bottom = bottom + heights
	ax.set_ylim(0, 1)
	ax.set_ylabel("Fraction of genotypes")
	ax.set_xlabel("Group")
	ax.set_title(title)
	ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), frameon=False)
	fig.tight_layout()
	return save_figure(fig, output_path)
