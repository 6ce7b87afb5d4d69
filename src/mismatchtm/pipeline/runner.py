"""
Genome-wide mismatch Tm scan.

Runs the stages in order and stops at the first failure:
    1. read genome FASTA
    2. count primer-length k-mers
    3. build trinucleotide configurations
    4. evaluate Tm deltas per configuration and cation concentration
    5. write the report
"""

import logging
import time
from pathlib import Path
from typing import Dict, Any

from mismatchtm.core.config import ScanConfig
from mismatchtm.core.fasta import read_fasta, get_sequence_lengths
from mismatchtm.core.report import write_report, write_configuration_table
from mismatchtm.core.result import Result, Ok, Err
from mismatchtm.thermo.configurations import build_configurations, configuration_table
from mismatchtm.thermo.kmers import index_kmers
from mismatchtm.thermo.melting import Conditions, evaluate_configurations

logger = logging.getLogger(__name__)


def run_scan(config: ScanConfig, verbose: bool = False) -> Result[Dict[str, Any], str]:
    """
    Scan a genome for mismatch Tm shifts.

    Args:
        config: Scan parameters
        verbose: Log run parameters at INFO instead of DEBUG

    Returns:
        Result containing run statistics
    """
    validated = config.validate()
    if validated.is_err():
        return Err(f"Invalid configuration: {validated.unwrap_err()}")

    detail = logging.INFO if verbose else logging.DEBUG
    started = time.time()
    logger.info(f"Starting scan of {config.fasta_path}")
    logger.log(
        detail,
        f"Primer length: {config.primer_length}, template: {config.template_conc:g} M, "
        f"primer: {config.primer_conc:g} M, cations: {config.cation_concs}"
    )

    fasta_result = read_fasta(config.fasta_path)
    if fasta_result.is_err():
        return Err(f"Failed to read FASTA: {fasta_result.unwrap_err()}")

    records = fasta_result.unwrap()
    lengths = get_sequence_lengths(records)
    logger.info(f"Loaded {len(records)} sequences ({sum(lengths.values())} bp)")

    index = index_kmers(records.values(), config.primer_length)
    logger.info(f"Indexed {len(index)} distinct {config.primer_length}-mers")

    try:
        config_set = build_configurations(legacy_entropy=config.legacy_entropy)
    except KeyError as e:
        return Err(f"Configuration build failed: {e}")
    logger.info(f"Built {len(config_set)} mismatch configurations")

    conditions = Conditions(
        primer_length=config.primer_length,
        template_conc=config.template_conc,
        primer_conc=config.primer_conc,
        cation_concs=tuple(config.cation_concs),
    )
    results = evaluate_configurations(config_set, index, conditions, threads=config.threads)
    observed = sum(1 for r in results if r.has_values)
    logger.info(f"{observed}/{len(results)} configurations observed in the genome")

    write_result = write_report(
        results,
        config.cation_concs,
        config.output_path,
        aligned=config.aligned_columns,
        include_max=config.include_max,
    )
    if write_result.is_err():
        return Err(write_result.unwrap_err())

    stats = {
        "sequence_count": len(records),
        "total_length": sum(lengths.values()),
        "kmer_count": len(index),
        "configuration_count": len(config_set),
        "observed_count": observed,
        "output_file": str(write_result.unwrap()),
        "elapsed_seconds": time.time() - started,
    }
    return Ok(stats)


def export_configurations(
    output_path: Path,
    legacy_entropy: bool = True,
) -> Result[Dict[str, Any], str]:
    """
    Write the match/mismatch parameters of every configuration.

    Args:
        output_path: Output TSV path
        legacy_entropy: See build_configurations

    Returns:
        Result containing the row count and output path
    """
    try:
        config_set = build_configurations(legacy_entropy=legacy_entropy)
    except KeyError as e:
        return Err(f"Configuration build failed: {e}")

    rows = configuration_table(config_set)
    return write_configuration_table(rows, output_path).map(
        lambda path: {"configuration_count": len(rows), "output_file": str(path)}
    )
