"""
Core module for mismatchTm.

Contains result types, data models, run configuration and file I/O.
"""

from mismatchtm.core.result import Result, Ok, Err
from mismatchtm.core.models import ThermoParams, ConfigurationSet, ContextResult
from mismatchtm.core.config import ScanConfig, load_config, parse_concentrations
from mismatchtm.core.fasta import read_fasta, FastaDict

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ThermoParams",
    "ConfigurationSet",
    "ContextResult",
    "ScanConfig",
    "load_config",
    "parse_concentrations",
    "read_fasta",
    "FastaDict",
]
