"""Base plotting utilities shared by the group plots.

Centralises style configuration and the save-or-return convention: each
helper returns a matplotlib Figure when ``output_path`` is not provided;
otherwise the figure is saved and closed and ``None`` is returned.
"""

from __future__ import annotations

from typing import Optional, Tuple

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

__all__ = [
	"set_plot_style",
	"save_figure",
	"grouped_hist_plot",
]


def set_plot_style() -> None:
	"""Apply a unified visual style."""
	sns.set_theme(style="whitegrid")
	plt.rcParams.update({
		"axes.titlesize": 13,
		"axes.labelsize": 11,
		"font.size": 10,
		"figure.dpi": 100,
	})


def save_figure(fig: plt.Figure, output_path: Optional[str]) -> Optional[plt.Figure]:
	"""Save figure if ``output_path`` provided else return it.

	Parameters
	----------
	fig : matplotlib.figure.Figure
		Figure to save or return.
	output_path : str | None
		Path to save. If None the figure is returned and *not* closed.
	"""
	if output_path:
		fig.savefig(output_path, bbox_inches="tight")
		plt.close(fig)
		return None
	return fig


def grouped_hist_plot(
	data: pd.DataFrame,
	value: str,
	group: str = "Group",
	*,
	output_path: Optional[str] = None,
	title: str = "",
	xlabel: str = "",
	bins: int = 50,
	binrange: Optional[Tuple[float, float]] = None,
	figsize: Tuple[int, int] = (8, 5),
	min_value: Optional[float] = None,
) -> Optional[plt.Figure]:
	"""Overlaid step histograms of ``value``, one colour per ``group``.

	NaNs are dropped; ``min_value`` removes values below it first (e.g.
	monomorphic sites with MAF 0).
	"""
	set_plot_style()
	df = data[[group, value]].dropna()
	if min_value is not None:
		df = df[df[value] >= min_value]
	fig, ax = plt.subplots(figsize=figsize)
	if df.empty:
		ax.text(0.5, 0.5, "no data", ha="center", va="center", transform=ax.transAxes)
	else:
		sns.histplot(
			data=df, x=value, hue=group, bins=bins, binrange=binrange,
			element="step", fill=False, common_norm=False, stat="density", ax=ax,
		)
	n_groups = df[group].nunique() if not df.empty else 0
	ax.set_title(f"{title}\n{len(df):,} values across {n_groups} group(s)" if title else title)
	ax.set_xlabel(xlabel or value)
	ax.set_ylabel("Density")
	fig.tight_layout()
	return save_figure(fig, output_path)
