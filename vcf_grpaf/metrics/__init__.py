"""Metric computation subpackage."""

from .group_metrics import group_site_table, summarize_groups  # noqa: F401

__all__ = ["group_site_table", "summarize_groups"]
