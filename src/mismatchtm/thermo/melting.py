"""
Melting temperature shifts caused by a single internal mismatch.

For a configuration with match strand F, every genome k-mer containing F is
treated as a primer/template duplex. Its matched Tm comes from the summed
nearest-neighbor stacks of the k-mer; its mismatched Tm adds the
configuration's ΔΔH and salt-scaled ΔΔS:

    ΔΔH   = ΔH(mismatch) - ΔH(match)
    ΔΔS   = S(ΔS(mismatch), [cation]) - S(ΔS(match), [cation])
    S(x, c) = x * 0.368 * ln(c)

    Tm    = 1000 * ΔH / (ΔS + R * k * ln((C_template + C_primer) / 2))

The reported value per cation concentration is the minimum of
Tm(mismatch) - Tm(match) over all such k-mers.

The salt term scales the raw entropy of the trinucleotide; it is not an
additive correction on top of it.
"""

from __future__ import annotations
import logging
import math
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from mismatchtm.core.models import ConfigurationSet, ContextResult, ThermoParams
from mismatchtm.thermo.tables import R_GAS, SALT_COEFFICIENT, match_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conditions:
    """Oligo and salt concentrations of a scan (all molar)."""
    primer_length: int
    template_conc: float
    primer_conc: float
    cation_concs: Tuple[float, ...]

    def __post_init__(self) -> None:
        if self.primer_length <= 0:
            raise ValueError(f"primer_length must be positive, got {self.primer_length}")
        if self.template_conc <= 0 or self.primer_conc <= 0:
            raise ValueError("template and primer concentrations must be positive")
        if any(c <= 0 for c in self.cation_concs):
            raise ValueError(f"cation concentrations must be positive: {self.cation_concs}")
        object.__setattr__(self, "cation_concs", tuple(self.cation_concs))

    @property
    def strand_term(self) -> float:
        return concentration_term(self.primer_length, self.template_conc, self.primer_conc)


@dataclass(frozen=True)
class KmerThermo:
    """Summed stacks of the genome k-mers that contain one trinucleotide."""
    kmers: Tuple[str, ...]
    enthalpy: np.ndarray
    entropy: np.ndarray

    def __len__(self) -> int:
        return len(self.kmers)


def concentration_term(primer_length: int, template_conc: float, primer_conc: float) -> float:
    """R * k * ln((C_template + C_primer) / 2), in cal/(K·mol)."""
    return R_GAS * primer_length * math.log((template_conc + primer_conc) / 2)


def salt_scaled_entropy(entropy: float, cation_conc: float) -> float:
    if cation_conc <= 0:
        raise ValueError(f"cation concentration must be positive, got {cation_conc}")
    return entropy * SALT_COEFFICIENT * math.log(cation_conc)


def melting_temperature(enthalpy, entropy, strand_term: float):
    """
    Two-state Tm in Kelvin.

    Works on floats and on numpy arrays of k-mer enthalpies/entropies.
    """
    return 1000 * enthalpy / (entropy + strand_term)


def kmer_thermo(kmer: str) -> Tuple[ThermoParams, int]:
    """
    Sum nearest-neighbor stacks over all overlapping dinucleotides.

    Returns:
        (summed parameters, number of skipped dinucleotides)

    Note:
        Dinucleotides with ambiguous bases have no parameters and are left
        out of the sum, so such k-mers are only partially scored.
    """
    enthalpy = 0.0
    entropy = 0.0
    skipped = 0
    for i in range(len(kmer) - 1):
        params = match_params(kmer[i:i + 2])
        if params is None:
            skipped += 1
            continue
        enthalpy += params.enthalpy
        entropy += params.entropy
    return ThermoParams(enthalpy, entropy), skipped


def build_kmer_thermo_index(
    index: Dict[str, int],
    fragments: Iterable[str],
) -> Dict[str, KmerThermo]:
    """
    Group genome k-mers by the trinucleotides they contain.

    Each k-mer is scored once and then shared by every fragment it contains.

    Args:
        index: k-mer counts
        fragments: Match trinucleotides of interest

    Returns:
        fragment -> KmerThermo; fragments absent from the genome are omitted
    """
    wanted = set(fragments)
    sizes = {len(f) for f in wanted}
    groups: Dict[str, List[str]] = defaultdict(list)
    thermo: Dict[str, ThermoParams] = {}
    partial = 0

    for kmer in sorted(index):
        found = {
            kmer[i:i + size]
            for size in sizes
            for i in range(len(kmer) - size + 1)
        } & wanted
        if not found:
            continue

        params, skipped = kmer_thermo(kmer)
        if skipped:
            partial += 1
            logger.debug(f"k-mer {kmer}: skipped {skipped} unknown dinucleotide(s)")
        thermo[kmer] = params
        for fragment in found:
            groups[fragment].append(kmer)

    if partial:
        logger.warning(
            f"{partial} k-mers contain unknown dinucleotides; "
            "their ΔH/ΔS sums omit those steps"
        )

    return {
        fragment: KmerThermo(
            kmers=tuple(kmers),
            enthalpy=np.array([thermo[k].enthalpy for k in kmers], dtype=float),
            entropy=np.array([thermo[k].entropy for k in kmers], dtype=float),
        )
        for fragment, kmers in groups.items()
    }


def evaluate_configuration(
    key: str,
    config_set: ConfigurationSet,
    kmer_index: Dict[str, KmerThermo],
    conditions: Conditions,
) -> ContextResult:
    """
    Minimum and maximum Tm delta of one configuration per cation concentration.

    Args:
        key: Configuration key, e.g. "aag,tct"
        config_set: Built configurations
        kmer_index: Output of build_kmer_thermo_index
        conditions: Concentrations and primer length

    Returns:
        ContextResult with NaN for concentrations without a finite delta
    """
    n_concs = len(conditions.cation_concs)
    match_strand = config_set.match_strand(key)
    hits = kmer_index.get(match_strand)

    if hits is None or len(hits) == 0:
        missing = (math.nan,) * n_concs
        return ContextResult(key=key, min_deltas=missing, max_deltas=missing, kmer_count=0)

    match = config_set.matches[match_strand]
    mismatch = config_set.mismatches[key]
    strand_term = conditions.strand_term
    delta_h = mismatch.enthalpy - match.enthalpy

    min_deltas = []
    max_deltas = []
    with np.errstate(divide="ignore", invalid="ignore"):
        tm_match = melting_temperature(hits.enthalpy, hits.entropy, strand_term)

        for conc in conditions.cation_concs:
            delta_s = (
                salt_scaled_entropy(mismatch.entropy, conc)
                - salt_scaled_entropy(match.entropy, conc)
            )
            tm_mismatch = melting_temperature(
                hits.enthalpy + delta_h,
                hits.entropy + delta_s,
                strand_term,
            )
            deltas = tm_mismatch - tm_match
            deltas = deltas[np.isfinite(deltas)]

            if deltas.size == 0:
                min_deltas.append(math.nan)
                max_deltas.append(math.nan)
            else:
                min_deltas.append(float(deltas.min()))
                max_deltas.append(float(deltas.max()))

    return ContextResult(
        key=key,
        min_deltas=tuple(min_deltas),
        max_deltas=tuple(max_deltas),
        kmer_count=len(hits),
    )


def _evaluate_batch(
    keys: Sequence[str],
    config_set: ConfigurationSet,
    kmer_index: Dict[str, KmerThermo],
    conditions: Conditions,
) -> List[ContextResult]:
    """
    Evaluate a batch of configurations.

    This function is designed to be called by ProcessPoolExecutor.
    """
    return [evaluate_configuration(key, config_set, kmer_index, conditions) for key in keys]


def evaluate_configurations(
    config_set: ConfigurationSet,
    index: Dict[str, int],
    conditions: Conditions,
    threads: int = 1,
) -> List[ContextResult]:
    """
    Evaluate every configuration against the genome k-mer index.

    Args:
        config_set: Built configurations
        index: Genome k-mer counts
        conditions: Concentrations and primer length
        threads: Worker processes; 1 evaluates serially

    Returns:
        One ContextResult per configuration, sorted by key. Results are the
        same for any number of threads.
    """
    kmer_index = build_kmer_thermo_index(index, config_set.matches.keys())
    logger.info(
        f"{len(kmer_index)}/{len(config_set.matches)} match trinucleotides "
        f"occur in {len(index)} distinct k-mers"
    )

    keys = config_set.keys()

    if threads > 1 and len(keys) > 1:
        batch_size = max(1, len(keys) // (threads * 4))
        batches = [keys[i:i + batch_size] for i in range(0, len(keys), batch_size)]

        logger.info(f"Evaluating {len(batches)} batches with {threads} workers")

        results: List[ContextResult] = []
        with ProcessPoolExecutor(max_workers=threads) as executor:
            futures = [
                executor.submit(_evaluate_batch, batch, config_set, kmer_index, conditions)
                for batch in batches
            ]
            for future in as_completed(futures):
                results.extend(future.result())

        results.sort(key=lambda r: r.key)
    else:
        results = _evaluate_batch(keys, config_set, kmer_index, conditions)

    return results
