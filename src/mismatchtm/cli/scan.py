"""
Scan and export commands.

  scan      - Tm deltas of every observed mismatch context
  contexts  - Match/mismatch parameters of all configurations
"""

from pathlib import Path
from typing import Optional

import click

from mismatchtm.cli.utils import (
    echo_success,
    echo_error,
    echo_warning,
    echo_info,
    format_duration,
)


@click.command()
@click.option(
    "-f", "--fasta",
    type=click.Path(path_type=Path),
    help="Genome FASTA file (one or more records).",
)
@click.option(
    "-l", "--primer-length",
    type=int,
    help="Primer length; the k-mer size used to index the genome (default: 20).",
)
@click.option(
    "--template-conc",
    type=float,
    help="Template concentration in M (default: 1e-17).",
)
@click.option(
    "--primer-conc",
    type=float,
    help="Primer concentration in M (default: 6e-10).",
)
@click.option(
    "-c", "--cation-concs",
    type=str,
    help="Comma-separated cation concentrations in M, e.g. '0.008,0.08'.",
)
@click.option(
    "-o", "--output",
    type=click.Path(path_type=Path),
    help="Output TSV file.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="YAML file with scan parameters; command-line options take precedence.",
)
@click.option(
    "-t", "--threads",
    type=int,
    help="Number of worker processes (default: 1).",
)
@click.option(
    "--entropy",
    type=click.Choice(["legacy", "corrected"]),
    help="Mismatch entropy: 'legacy' reproduces historical output (default), "
         "'corrected' sums the entropies of both stacks.",
)
@click.option(
    "--columns",
    type=click.Choice(["aligned", "compact"]),
    help="'aligned' writes NA for missing values (default); "
         "'compact' drops them and shifts later values left.",
)
@click.option(
    "--report-max",
    is_flag=True,
    default=False,
    help="Also write the maximum delta per concentration.",
)
@click.pass_context
def scan(
    ctx: click.Context,
    fasta: Optional[Path],
    primer_length: Optional[int],
    template_conc: Optional[float],
    primer_conc: Optional[float],
    cation_concs: Optional[str],
    output: Optional[Path],
    config_path: Optional[Path],
    threads: Optional[int],
    entropy: Optional[str],
    columns: Optional[str],
    report_max: bool,
) -> None:
    """
    Scan a genome for mismatch-induced Tm shifts.

    Every trinucleotide with a middle mismatch is looked up in all
    primer-length k-mers of the genome; for each cation concentration the
    minimum Tm(mismatch) - Tm(match) over those k-mers is reported.

    \b
    Output columns:
      seq                  configuration, e.g. aag,tct
      cation_conc_<value>  minimum Tm delta (K) at that concentration

    \b
    Example:
      mismatchtm scan -f genome.fa -l 20 --template-conc 1e-17 \\
          --primer-conc 6e-10 -c 0.008,0.08 -o mismatch_tm.tsv
    """
    from mismatchtm.core.config import ScanConfig, load_config, parse_concentrations
    from mismatchtm.pipeline.runner import run_scan

    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    quiet = ctx.obj.get("quiet", False) if ctx.obj else False

    config = ScanConfig()
    if config_path is not None:
        loaded = load_config(config_path).and_then(ScanConfig.from_dict)
        if loaded.is_err():
            echo_error(loaded.unwrap_err())
            raise SystemExit(1)
        config = loaded.unwrap()

    concs = None
    if cation_concs is not None:
        try:
            concs = parse_concentrations(cation_concs)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--cation-concs")

    config = config.merge({
        "fasta_path": fasta,
        "output_path": output,
        "primer_length": primer_length,
        "template_conc": template_conc,
        "primer_conc": primer_conc,
        "cation_concs": concs,
        "threads": threads,
        "legacy_entropy": None if entropy is None else entropy == "legacy",
        "aligned_columns": None if columns is None else columns == "aligned",
        "include_max": True if report_max else None,
    })

    if not quiet:
        echo_info(f"Scanning {config.fasta_path}")
        echo_info(f"Primer length: {config.primer_length}, cations: {config.cation_concs}")

    result = run_scan(config, verbose=verbose)

    if result.is_err():
        echo_error(f"Scan failed: {result.unwrap_err()}")
        raise SystemExit(1)

    if quiet:
        return

    stats = result.unwrap()
    if stats["observed_count"] == 0:
        echo_warning("No mismatch configuration occurs in the genome; report has a header only")
    echo_success(
        f"{stats['observed_count']}/{stats['configuration_count']} configurations written to "
        f"{stats['output_file']} ({format_duration(stats['elapsed_seconds'])})"
    )


@click.command()
@click.option(
    "-o", "--output",
    required=True,
    type=click.Path(path_type=Path),
    help="Output TSV file.",
)
@click.option(
    "--entropy",
    type=click.Choice(["legacy", "corrected"]),
    default="legacy",
    show_default=True,
    help="Mismatch entropy variant (see 'scan --help').",
)
def contexts(output: Path, entropy: str) -> None:
    """
    Export all mismatch configurations.

    Writes one row per configuration with the match and mismatch ΔH/ΔS
    used by the scan. Does not need a genome.
    """
    from mismatchtm.pipeline.runner import export_configurations

    result = export_configurations(output, legacy_entropy=entropy == "legacy")

    if result.is_err():
        echo_error(f"Export failed: {result.unwrap_err()}")
        raise SystemExit(1)

    stats = result.unwrap()
    echo_success(f"Wrote {stats['configuration_count']} configurations to {stats['output_file']}")
