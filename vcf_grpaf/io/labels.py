"""Sample -> group label loading.

The label file has two tab-separated columns and no header::

    NA12878<TAB>EUR
    NA19240<TAB>AFR

Every row is an independent assignment; duplicates are retained.
"""
from __future__ import annotations

from typing import Dict, List
import logging

import pandas as pd

from ..exceptions import FormatError, InputError

__all__ = ["read_labels", "load_labels"]

logger = logging.getLogger(__name__)


def read_labels(path: str) -> pd.DataFrame:
    """Read the label file into a DataFrame with columns ``sample, group``."""
    try:
        df = pd.read_csv(
            path,
            sep="\t",
            header=None,
            dtype=str,
            keep_default_na=False,
            na_values=[],
            skip_blank_lines=True,
        )
    except FileNotFoundError as exc:
        raise InputError(f"loading labels: {path} not found") from exc
    except pd.errors.EmptyDataError as exc:
        raise FormatError(f"loading labels: {path} has no rows") from exc
    except pd.errors.ParserError as exc:
        raise FormatError(f"loading labels: malformed row in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"loading labels: cannot read {path}: {exc}") from exc

    if df.shape[1] != 2:
        raise FormatError(f"loading labels: {path} has {df.shape[1]} columns, expected 2 (sample, group)")
    df.columns = ["sample", "group"]
    bad = df.isna().any(axis=1) | (df["sample"].str.strip() == "") | (df["group"].str.strip() == "")
    if bad.any():
        first = int(bad.to_numpy().nonzero()[0][0])
        raise FormatError(f"loading labels: empty sample or group in {path} (row {first + 1})")
    return df


def load_labels(path: str) -> Dict[str, List[str]]:
    """Return ``{group: [sample, ...]}`` with groups sorted, rows in file order."""
    df = read_labels(path)
    membership = {str(grp): vals["sample"].tolist() for grp, vals in df.groupby("group", sort=True)}
    logger.info("Loaded %d groups (%d label rows) from %s", len(membership), len(df), path)
    return membership
