"""
Pipeline runner package.

Runs a complete genome scan from a ScanConfig.
"""

from mismatchtm.pipeline.runner import run_scan, export_configurations

__all__ = [
    "run_scan",
    "export_configurations",
]
