"""
Nearest-neighbor thermodynamics of single-mismatch trinucleotide contexts.

Available components:
- tables: match and internal-mismatch stack parameters
- kmers: genome k-mer counting
- configurations: enumeration of the 192 mismatch configurations
- melting: Tm deltas per configuration and cation concentration

All functions are pure; the only shared state is the read-only tables.
"""

from mismatchtm.thermo.tables import (
    MATCH_TABLE,
    MISMATCH_TABLE,
    COMPLEMENT,
    complement,
    match_params,
    mismatch_params,
)
from mismatchtm.thermo.kmers import index_kmers, kmers_containing
from mismatchtm.thermo.configurations import (
    build_configurations,
    configuration_key,
    configuration_table,
)
from mismatchtm.thermo.melting import (
    Conditions,
    evaluate_configuration,
    evaluate_configurations,
    kmer_thermo,
    melting_temperature,
    salt_scaled_entropy,
)

__all__ = [
    # Tables
    "MATCH_TABLE",
    "MISMATCH_TABLE",
    "COMPLEMENT",
    "complement",
    "match_params",
    "mismatch_params",
    # K-mers
    "index_kmers",
    "kmers_containing",
    # Configurations
    "build_configurations",
    "configuration_key",
    "configuration_table",
    # Evaluation
    "Conditions",
    "evaluate_configuration",
    "evaluate_configurations",
    "kmer_thermo",
    "melting_temperature",
    "salt_scaled_entropy",
]
