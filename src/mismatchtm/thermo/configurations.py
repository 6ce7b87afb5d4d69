"""
Trinucleotide match/mismatch configurations.

A configuration is a three-base window on each strand with a single
mismatch in the middle:

    5'- n1 n2 n5 -3'      match strand
    3'- n3 n4 n6 -5'      n3 = c(n1), n6 = c(n5), n4 != c(n2)

Its thermodynamics are the sum of the two overlapping nearest-neighbor
stacks that span the mismatch. The second stack is read from the bottom
strand, which turns "n2 n5 / n4 n6" into "c(n5) n4 / n5 n2".

Keys look like "aag,tct" (match strand, comma, opposite strand).
"""

from __future__ import annotations
import logging
from itertools import product

from mismatchtm.core.models import ConfigurationSet, ThermoParams
from mismatchtm.thermo.tables import (
    BASES,
    MISMATCH_TABLE,
    complement,
    match_params,
    mismatch_params,
)

logger = logging.getLogger(__name__)


def configuration_key(n1: str, n2: str, n4: str, n5: str) -> str:
    """Key "n1n2n5,n3n4n6" for a middle mismatch n2/n4."""
    return f"{n1}{n2}{n5},{complement(n1)}{n4}{complement(n5)}"


def _mismatch_thermo(n1: str, n2: str, n4: str, n5: str, legacy_entropy: bool) -> ThermoParams:
    left_top, left_bottom = n1 + n2, complement(n1) + n4
    right_top, right_bottom = complement(n5) + n4, n5 + n2

    left = mismatch_params(left_top, left_bottom)
    right = mismatch_params(right_top, right_bottom)

    enthalpy = left.enthalpy + right.enthalpy
    if legacy_entropy:
        # Historical output used the enthalpy of the right-hand stack here
        entropy = left.entropy + right.enthalpy
    else:
        entropy = left.entropy + right.entropy
    return ThermoParams(enthalpy, entropy)


def _match_thermo(n1: str, n2: str, n5: str) -> ThermoParams:
    left = match_params(n1 + n2)
    right = match_params(complement(n5) + complement(n2))
    if left is None or right is None:
        raise KeyError(f"No match parameters for {n1}{n2}{n5}")
    return left + right


def build_configurations(legacy_entropy: bool = True) -> ConfigurationSet:
    """
    Enumerate every single-mismatch trinucleotide configuration.

    Args:
        legacy_entropy: Reproduce the historical mismatch entropy, which adds
            the right-hand stack's ΔH instead of its ΔS. Set False for the
            corrected sum of entropies.

    Returns:
        ConfigurationSet with 192 mismatch configurations and 64 match
        trinucleotides

    Raises:
        KeyError: if a required mismatch stack is missing from the table

    Note:
        Keys are deduplicated; when two enumeration paths produce the same
        key the first computed value is kept.
    """
    mismatches: dict[str, ThermoParams] = {}
    matches: dict[str, ThermoParams] = {}

    for n1, n2, n4 in product(BASES, repeat=3):
        if n4 == complement(n2):
            continue
        for n5 in BASES:
            key = configuration_key(n1, n2, n4, n5)
            if key in mismatches:
                continue

            mismatches[key] = _mismatch_thermo(n1, n2, n4, n5, legacy_entropy)

            match_strand = n1 + n2 + n5
            if match_strand not in matches:
                matches[match_strand] = _match_thermo(n1, n2, n5)

    logger.debug(
        f"Built {len(mismatches)} configurations over {len(matches)} match "
        f"trinucleotides from {len(MISMATCH_TABLE)} mismatch stacks "
        f"(legacy_entropy={legacy_entropy})"
    )
    return ConfigurationSet(mismatches=mismatches, matches=matches)


def configuration_table(config_set: ConfigurationSet) -> list[dict]:
    """One row per configuration with match and mismatch parameters."""
    rows = []
    for key in config_set.keys():
        match = config_set.match_for(key)
        mismatch = config_set.mismatches[key]
        rows.append({
            "seq": key,
            "match_strand": config_set.match_strand(key),
            "match_dH": match.enthalpy,
            "match_dS": match.entropy,
            "mismatch_dH": mismatch.enthalpy,
            "mismatch_dS": mismatch.entropy,
            "ddH": mismatch.enthalpy - match.enthalpy,
        })
    return rows
