"""
Run configuration for mismatch Tm scans.

Parameters can come from a YAML file, from CLI options, or both (CLI values
override file values). Validation collects every problem so the user sees
them all at once.

Example YAML:

    fasta_path: genome.fa
    output_path: results/mismatch_tm.tsv
    primer_length: 20
    template_conc: 1.0e-17
    primer_conc: 6.0e-10
    cation_concs: [0.008, 0.08]
    threads: 4
    legacy_entropy: true
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

import yaml

from mismatchtm.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """Parameters of a genome-wide mismatch Tm scan."""
    fasta_path: Optional[Path] = None
    output_path: Optional[Path] = None
    primer_length: int = 20
    template_conc: float = 1e-17  # M
    primer_conc: float = 6e-10  # M
    cation_concs: List[float] = field(default_factory=list)  # M
    threads: int = 1
    legacy_entropy: bool = True  # reuse ΔH for the second mismatch entropy term
    aligned_columns: bool = True  # NA placeholders instead of shifted values
    include_max: bool = False  # emit max delta columns

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Result[ScanConfig, str]:
        """
        Build a config from a plain dictionary (e.g. parsed YAML).

        Unknown keys are rejected so typos do not silently fall back to
        defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            return Err(f"Unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        try:
            for key in ("fasta_path", "output_path"):
                if values.get(key) is not None:
                    values[key] = Path(values[key])
            if "cation_concs" in values:
                concs = values["cation_concs"]
                if isinstance(concs, str):
                    values["cation_concs"] = parse_concentrations(concs)
                else:
                    values["cation_concs"] = [float(c) for c in concs]
            for key in ("template_conc", "primer_conc"):
                if key in values:
                    values[key] = float(values[key])
            for key in ("primer_length", "threads"):
                if key in values:
                    values[key] = _as_int(key, values[key])
            for key in ("legacy_entropy", "aligned_columns", "include_max"):
                if key in values and not isinstance(values[key], bool):
                    raise TypeError(f"{key} must be true or false, got {values[key]!r}")
        except (TypeError, ValueError) as e:
            return Err(f"Invalid config value: {e}")

        return Ok(cls(**values))

    def merge(self, overrides: Dict[str, Any]) -> ScanConfig:
        """Return a copy with non-None overrides applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        return ScanConfig(**values)

    def validate(self) -> Result[ScanConfig, str]:
        errors = []

        if self.fasta_path is None:
            errors.append("fasta_path is required")
        if self.output_path is None:
            errors.append("output_path is required")
        if self.primer_length <= 0:
            errors.append(f"primer_length must be positive, got {self.primer_length}")
        if self.template_conc <= 0:
            errors.append(f"template_conc must be positive, got {self.template_conc}")
        if self.primer_conc <= 0:
            errors.append(f"primer_conc must be positive, got {self.primer_conc}")
        if not self.cation_concs:
            errors.append("at least one cation concentration is required")
        for conc in self.cation_concs:
            if conc <= 0:
                errors.append(f"cation concentration must be positive, got {conc}")
        if len(set(self.cation_concs)) != len(self.cation_concs):
            errors.append(f"cation concentrations must be distinct, got {self.cation_concs}")
        if self.threads < 1:
            errors.append(f"threads must be >= 1, got {self.threads}")

        if errors:
            return Err("; ".join(errors))

        if self.primer_length < 3:
            logger.warning(
                f"primer_length {self.primer_length} is shorter than a trinucleotide; "
                "no configuration can be observed"
            )

        return Ok(self)


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def parse_concentrations(text: str) -> List[float]:
    """
    Parse a comma-separated list of molar concentrations.

    Args:
        text: e.g. "0.008,0.08,0.8"

    Returns:
        List of floats in input order

    Raises:
        ValueError: on empty items, non-numeric items or values <= 0
    """
    concs = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            raise ValueError(f"Empty concentration in list: '{text}'")
        try:
            value = float(item)
        except ValueError:
            raise ValueError(f"Not a number: '{item}'") from None
        if value <= 0:
            raise ValueError(f"Concentration must be positive: '{item}'")
        concs.append(value)
    return concs


def load_config(config_path: Union[Path, str]) -> Result[Dict[str, Any], str]:
    """
    Load scan parameters from a YAML file.

    Args:
        config_path: Path to YAML config

    Returns:
        Result containing the parsed mapping
    """
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        return Err(f"Failed to load config: {e}")

    if config is None:
        return Ok({})
    if not isinstance(config, dict):
        return Err(f"Config must be a mapping, got {type(config).__name__}")
    return Ok(config)
