"""
Core data models for mismatchTm.

Immutable containers passed between the configuration builder, the Tm
evaluator and the report emitter.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping
import math


@dataclass(frozen=True, slots=True)
class ThermoParams:
    """
    Nearest-neighbor enthalpy/entropy pair.

    Attributes:
        enthalpy: ΔH° in kcal/mol
        entropy: ΔS° in cal/(K·mol)
    """
    enthalpy: float
    entropy: float

    def __add__(self, other: ThermoParams) -> ThermoParams:
        return ThermoParams(
            enthalpy=self.enthalpy + other.enthalpy,
            entropy=self.entropy + other.entropy,
        )


@dataclass(frozen=True)
class ConfigurationSet:
    """
    All trinucleotide match/mismatch configurations.

    Configuration keys have the form "n1n2n5,n3n4n6": the first strand is
    the matched trinucleotide (5'->3'), the second is the opposite strand
    written 3'->5' with a mismatch only in the middle position.

    Attributes:
        mismatches: configuration key -> mismatch ΔH/ΔS
        matches: match trinucleotide -> match ΔH/ΔS
    """
    mismatches: Mapping[str, ThermoParams]
    matches: Mapping[str, ThermoParams]

    def __post_init__(self) -> None:
        # Freeze the mappings so workers and callers share read-only views
        object.__setattr__(self, "mismatches", MappingProxyType(dict(self.mismatches)))
        object.__setattr__(self, "matches", MappingProxyType(dict(self.matches)))

    def __len__(self) -> int:
        return len(self.mismatches)

    def __reduce__(self):
        # MappingProxyType cannot be pickled; rebuild from plain dicts
        return (ConfigurationSet, (dict(self.mismatches), dict(self.matches)))

    def keys(self) -> list[str]:
        """Configuration keys in lexicographic order."""
        return sorted(self.mismatches)

    @staticmethod
    def match_strand(key: str) -> str:
        """Matched trinucleotide of a configuration key (before the comma)."""
        return key.split(",", 1)[0]

    def match_for(self, key: str) -> ThermoParams:
        return self.matches[self.match_strand(key)]


@dataclass(frozen=True, slots=True)
class ContextResult:
    """
    Tm deltas of one configuration across cation concentrations.

    Values are aligned with the input concentration order; a concentration
    without any matching genome k-mer holds NaN.

    Attributes:
        key: Configuration key
        min_deltas: Minimum Tm(mismatch) - Tm(match) per concentration
        max_deltas: Maximum delta per concentration (diagnostic)
        kmer_count: Distinct genome k-mers containing the matched strand
    """
    key: str
    min_deltas: tuple[float, ...]
    max_deltas: tuple[float, ...]
    kmer_count: int = 0

    @property
    def has_values(self) -> bool:
        return any(not math.isnan(v) for v in self.min_deltas)

    def compact_deltas(self) -> list[float]:
        """Minimum deltas with missing concentrations dropped."""
        return [v for v in self.min_deltas if not math.isnan(v)]
