"""Per-group metric tables from an annotated VCF.

Reads the ``<TAG>_<GROUP>`` INFO fields written by ``annotate`` back into a
long DataFrame (one row per site x group) and offers a per-group summary.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence
import logging

import numpy as np
import pandas as pd

from ..core.tags import StatTag, tag_id
from ..io import SimpleVCFReader
from ..utils import parse_info_field

__all__ = ["group_site_table", "summarize_groups"]

logger = logging.getLogger(__name__)

GENOTYPE_COLUMNS = ["N_HOMREF", "N_HET", "N_HOMALT", "N_HEMI", "N_MISS"]


def _to_number(raw: Optional[str]) -> float:
    if raw is None or raw == ".":
        return np.nan
    # Number=A fields: one value per ALT, the REF/ALT model writes one
    return float(raw.split(",")[0])


def group_site_table(
    reader: SimpleVCFReader,
    groups: Sequence[str],
) -> pd.DataFrame:
    """Return DataFrame with columns Chrom, Pos, Group and one column per tag found.

    Tags absent from a record are left as NaN; tags never seen at all are
    dropped. Use the reader's ``max_records`` to cap the number of sites.
    """
    rows: List[Dict[str, object]] = []
    for rec in reader.parse():
        info = parse_info_field(rec.info)
        for grp in groups:
            row: Dict[str, object] = {"Chrom": rec.chrom, "Pos": int(rec.pos), "Group": grp}
            for tag in StatTag:
                key = tag_id(tag, grp)
                if key in info:
                    row[tag.label] = _to_number(info[key])
            rows.append(row)
    df = pd.DataFrame(rows, columns=["Chrom", "Pos", "Group"] + [t.label for t in StatTag])
    df = df.dropna(axis=1, how="all") if not df.empty else df
    for col in df.columns.difference(["Chrom", "Pos", "Group"]):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    if not df.empty and len(df.columns) == 3:
        logger.warning("No group annotations found for groups: %s", ", ".join(groups))
    return df


def summarize_groups(df: pd.DataFrame) -> pd.DataFrame:
    """One row per group with site counts, frequency summaries and genotype totals.

    Columns (when the source tags exist): Group, Sites, MeanAF, MedianMAF,
    PolymorphicSites, ExcHetFlagged, N_HOMREF..N_MISS totals, MissingRate.
    """
    if df.empty:
        return pd.DataFrame(columns=["Group", "Sites"])
    grouped = df.groupby("Group", sort=True)
    out = grouped.size().rename("Sites").to_frame()
    if "AF" in df.columns:
        out["MeanAF"] = grouped["AF"].mean()
    if "MAF" in df.columns:
        out["MedianMAF"] = grouped["MAF"].median()
    if "MAC" in df.columns:
        out["PolymorphicSites"] = grouped["MAC"].apply(lambda s: int((s > 0).sum()))
    if "ExcHet" in df.columns:
        out["ExcHetFlagged"] = grouped["ExcHet"].apply(lambda s: int((s == 0).sum()))
    present = [c for c in GENOTYPE_COLUMNS if c in df.columns]
    for col in present:
        out[col] = grouped[col].sum().astype(int)
    if len(present) == len(GENOTYPE_COLUMNS):
        total = out[GENOTYPE_COLUMNS].sum(axis=1)
        out["MissingRate"] = np.where(total > 0, out["N_MISS"] / total.where(total > 0, 1), 0.0)
    return out.reset_index()
