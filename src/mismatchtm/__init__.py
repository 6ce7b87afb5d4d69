"""
mismatchTm: melting temperature shifts caused by single-base mismatches.

For every trinucleotide context around an internal mismatch, predicts how
much the duplex melting temperature drops at a range of cation
concentrations, restricted to contexts that occur in k-mers of a genome.

Main stages:
- K-mer indexing of the input genome
- Enumeration of match/mismatch trinucleotide configurations
- Nearest-neighbor Tm evaluation with salt-scaled entropy
"""

__version__ = "1.0.0"

from mismatchtm.core.result import Result, Ok, Err

__all__ = [
    "__version__",
    "Result",
    "Ok",
    "Err",
]
