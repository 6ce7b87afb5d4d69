"""
K-mer counting over genome records.

Each record is scanned independently, so no k-mer spans the boundary
between two records; counts from all records share one index.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


def index_kmers(sequences: Iterable[str], k: int) -> Dict[str, int]:
    """
    Count every substring of length k.

    Args:
        sequences: Nucleotide sequences (any case, may contain whitespace)
        k: Window length (primer length)

    Returns:
        Mapping of lowercase k-mer to occurrence count

    Raises:
        ValueError: if k is not positive

    Example:
        >>> index_kmers(["aaaa"], 2)
        {'aa': 3}
    """
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    counts: Dict[str, int] = defaultdict(int)

    for sequence in sequences:
        sequence = "".join(sequence.split()).lower()
        for i in range(len(sequence) - k + 1):
            counts[sequence[i:i + k]] += 1

    logger.debug(f"Indexed {len(counts)} distinct {k}-mers")
    return dict(counts)


def kmers_containing(index: Dict[str, int], fragment: str) -> List[str]:
    """Sorted k-mers of the index that contain fragment."""
    fragment = fragment.lower()
    return sorted(kmer for kmer in index if fragment in kmer)
