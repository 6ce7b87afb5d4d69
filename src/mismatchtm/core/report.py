"""
Tab-separated reports.

The scan report has one row per configuration observed in the genome:

    seq       cation_conc_0.008   cation_conc_0.08
    aaa,tat   -24.1               -23.6

Missing values are written as NA so column N always belongs to
concentration N. The compact layout drops missing values instead, which
shifts later values to the left; it exists only to reproduce older output.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from mismatchtm.core.models import ContextResult
from mismatchtm.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)

NA_REP = "NA"


def concentration_label(conc: float, prefix: str = "cation_conc_") -> str:
    """Column name for a concentration; repr keeps distinct floats distinct."""
    return f"{prefix}{float(conc)!r}"


def report_columns(cation_concs: Sequence[float], include_max: bool = False) -> list[str]:
    columns = ["seq"] + [concentration_label(c) for c in cation_concs]
    if include_max:
        columns += [concentration_label(c, "max_cation_conc_") for c in cation_concs]
    return columns


def build_report_frame(
    results: Sequence[ContextResult],
    cation_concs: Sequence[float],
    include_max: bool = False,
) -> pd.DataFrame:
    """
    Results as a DataFrame sorted by configuration key.

    Configurations without any value are left out.
    """
    columns = report_columns(cation_concs, include_max)
    rows = []
    for result in sorted(results, key=lambda r: r.key):
        if not result.has_values:
            continue
        row = [result.key, *result.min_deltas]
        if include_max:
            row += list(result.max_deltas)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def write_report(
    results: Sequence[ContextResult],
    cation_concs: Sequence[float],
    path: Path | str,
    aligned: bool = True,
    include_max: bool = False,
) -> Result[Path, str]:
    """
    Write the scan report.

    Args:
        results: Evaluated configurations
        cation_concs: Concentrations in input order (column order)
        path: Output TSV path
        aligned: Keep columns aligned with NA placeholders
        include_max: Add max delta columns (aligned layout only)

    Returns:
        Ok(path) on success, Err(message) on failure
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if aligned:
            df = build_report_frame(results, cation_concs, include_max)
            df.to_csv(path, sep="\t", index=False, na_rep=NA_REP, lineterminator="\n")
            n_rows = len(df)
        else:
            if include_max:
                logger.warning("Max columns are not written in the compact layout")
            n_rows = _write_compact(results, cation_concs, path)
    except OSError as e:
        return Err(f"Failed to write report: {e}")

    logger.info(f"Wrote {n_rows} configurations to {path}")
    return Ok(path)


def _write_compact(
    results: Sequence[ContextResult],
    cation_concs: Sequence[float],
    path: Path,
) -> int:
    n_rows = 0
    with open(path, "w") as f:
        f.write("\t".join(report_columns(cation_concs)) + "\n")
        for result in sorted(results, key=lambda r: r.key):
            values = result.compact_deltas()
            if not values:
                continue
            f.write("\t".join([result.key, *(repr(v) for v in values)]) + "\n")
            n_rows += 1
    return n_rows


def write_configuration_table(rows: Sequence[dict], path: Path | str) -> Result[Path, str]:
    """Write configuration parameters (see configuration_table) as TSV."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(list(rows)).to_csv(path, sep="\t", index=False, lineterminator="\n")
    except OSError as e:
        return Err(f"Failed to write configuration table: {e}")
    return Ok(path)


def read_report(path: Path | str) -> pd.DataFrame:
    """Read an aligned report back, with NA parsed as NaN."""
    return pd.read_csv(path, sep="\t", na_values=[NA_REP], keep_default_na=False)
