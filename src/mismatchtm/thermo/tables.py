"""
Nearest-neighbor thermodynamic tables.

Watson-Crick stacks come from Allawi & SantaLucia (1997) and internal single
mismatches from Allawi & SantaLucia (1997-1998) and Peyret et al. (1999),
as distributed with Biopython (``MeltingTemp.DNA_NN3`` and
``MeltingTemp.DNA_IMM1``).

References:
    Allawi HT, SantaLucia J Jr. (1997) Thermodynamics and NMR of internal
    G.T mismatches in DNA. Biochemistry 36:10581-10594.
    Peyret N, Seneviratne PA, Allawi HT, SantaLucia J Jr. (1999)
    Nearest-neighbor thermodynamics and NMR of DNA sequences with internal
    A.A, C.C, G.G, and T.T mismatches. Biochemistry 38:3468-3477.

Units:
    ΔH° in kcal/mol, ΔS° in cal/(K·mol)

Key formats:
    Match table:    "xy"     top strand dinucleotide, 5'->3'
    Mismatch table: "xy,wz"  top strand 5'->3' over bottom strand 3'->5';
                             w pairs with x, z is mismatched against y
"""

from __future__ import annotations
import re
from types import MappingProxyType
from typing import Mapping, Optional

from Bio.SeqUtils import MeltingTemp as Tm

from mismatchtm.core.models import ThermoParams

BASES = "acgt"

COMPLEMENT: Mapping[str, str] = MappingProxyType({"a": "t", "t": "a", "c": "g", "g": "c"})

# Molar gas constant, cal/(K·mol)
R_GAS = 1.987

# Salt term: ΔS is scaled by SALT_COEFFICIENT * ln([cation])
SALT_COEFFICIENT = 0.368

_PAIR_KEY = re.compile(r"^[ACGT]{2}/[ACGT]{2}$")


def complement(base: str) -> str:
    return COMPLEMENT[base.lower()]


def _is_pair(top: str, bottom: str) -> bool:
    return COMPLEMENT.get(top) == bottom


def _build_match_table(nn_table: dict) -> Mapping[str, ThermoParams]:
    """
    Expand an "XY/X'Y'" stack table to all 16 dinucleotides.

    Each stack is listed once; reading it from the other strand gives the
    reverse complement dinucleotide with the same parameters.
    """
    table: dict[str, ThermoParams] = {}
    for key, (delta_h, delta_s) in nn_table.items():
        key = key.strip()
        if not _PAIR_KEY.match(key):
            continue  # init, sym and terminal corrections
        top = key[:2].lower()
        params = ThermoParams(float(delta_h), float(delta_s))
        table.setdefault(top, params)
        table.setdefault(complement(top[1]) + complement(top[0]), params)
    return MappingProxyType(table)


def _build_mismatch_table(imm_table: dict) -> Mapping[str, ThermoParams]:
    """
    Normalize an internal mismatch table so the mismatch is always second.

    Entries with the mismatch in the first position are read from the other
    strand. Double mismatches and inosine entries are dropped.
    """
    table: dict[str, ThermoParams] = {}
    for key, (delta_h, delta_s) in imm_table.items():
        key = key.strip()
        if not _PAIR_KEY.match(key):
            continue
        top, bottom = key.lower().split("/")
        first_paired = _is_pair(top[0], bottom[0])
        second_paired = _is_pair(top[1], bottom[1])
        if first_paired and not second_paired:
            norm_key = f"{top},{bottom}"
        elif second_paired and not first_paired:
            norm_key = f"{bottom[1]}{bottom[0]},{top[1]}{top[0]}"
        else:
            continue
        table.setdefault(norm_key, ThermoParams(float(delta_h), float(delta_s)))
    return MappingProxyType(table)


MATCH_TABLE: Mapping[str, ThermoParams] = _build_match_table(Tm.DNA_NN3)
MISMATCH_TABLE: Mapping[str, ThermoParams] = _build_mismatch_table(Tm.DNA_IMM1)


def match_params(dinucleotide: str) -> Optional[ThermoParams]:
    """
    Look up a Watson-Crick stack.

    Returns None for dinucleotides containing anything but a/c/g/t; callers
    skip such steps.
    """
    return MATCH_TABLE.get(dinucleotide.lower())


def mismatch_params(top: str, bottom: str) -> ThermoParams:
    """
    Look up a single internal mismatch stack.

    Args:
        top: Top strand dinucleotide, 5'->3'
        bottom: Bottom strand dinucleotide, 3'->5', first base paired

    Raises:
        KeyError: if the pair is not a single second-position mismatch
    """
    key = f"{top.lower()},{bottom.lower()}"
    try:
        return MISMATCH_TABLE[key]
    except KeyError:
        raise KeyError(f"No mismatch parameters for {key}") from None
