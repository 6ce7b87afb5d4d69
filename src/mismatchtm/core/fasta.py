"""
FASTA file operations.

Reads genome records with Biopython and reports residues that the
nearest-neighbor tables cannot score.
"""

from __future__ import annotations
import logging
from collections import Counter, OrderedDict
from pathlib import Path

from Bio import SeqIO

from mismatchtm.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)

# Type alias for FASTA dictionary
FastaDict = OrderedDict[str, str]

VALID_RESIDUES = frozenset("acgt")


def read_fasta(path: Path | str) -> Result[FastaDict, str]:
    """
    Read FASTA file into ordered dictionary.

    Args:
        path: Path to FASTA file

    Returns:
        Ok(FastaDict) mapping record IDs to lowercase sequences
        Err(message) on failure

    Example:
        >>> genome = read_fasta("genome.fa").unwrap()
        >>> genome["chr1"][:10]
        'acgtacgtac'

    Note:
        Records with residues outside a/c/g/t are kept; a warning names the
        offending residues. Dinucleotides containing them are skipped when
        k-mer enthalpy/entropy are summed.
    """
    path = Path(path)
    if not path.exists():
        return Err(f"FASTA file not found: {path}")

    fasta_dict: FastaDict = OrderedDict()

    try:
        for record in SeqIO.parse(path, "fasta"):
            sequence = "".join(str(record.seq).split()).lower()
            record_id = _unique_id(record.id, fasta_dict)
            if record_id != record.id:
                logger.warning(f"Duplicate record ID {record.id}, stored as {record_id}")
            fasta_dict[record_id] = sequence
            _warn_invalid_residues(record_id, sequence)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        return Err(f"Failed to read FASTA file: {e}")

    if not fasta_dict:
        return Err(f"No sequences found in FASTA file: {path}")

    return Ok(fasta_dict)


def _unique_id(record_id: str, taken: FastaDict) -> str:
    """First of record_id, record_id_2, record_id_3, ... not already in taken."""
    candidate = record_id
    suffix = 1
    while candidate in taken:
        suffix += 1
        candidate = f"{record_id}_{suffix}"
    return candidate


def _warn_invalid_residues(record_id: str, sequence: str) -> None:
    invalid = Counter(base for base in sequence if base not in VALID_RESIDUES)
    if invalid:
        summary = ", ".join(f"{base}:{n}" for base, n in sorted(invalid.items()))
        logger.warning(
            f"Record {record_id} contains non-ACGT residues ({summary}); "
            "affected dinucleotides will be skipped"
        )


def get_sequence_lengths(fasta_dict: FastaDict) -> dict[str, int]:
    return {seq_id: len(seq) for seq_id, seq in fasta_dict.items()}
