"""
Command-line interface for mismatchTm.

Entry point: mismatchtm (see mismatchtm.cli.main:cli)
"""

from mismatchtm.cli.main import cli

__all__ = ["cli"]
