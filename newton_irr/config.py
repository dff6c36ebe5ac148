# newton_irr/config.py
from __future__ import annotations

import io
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml


@dataclass(frozen=True)
class SolverConfig:
    """
    Read-only solver settings.
      max_iterations    : hard cap on Newton steps (the only runtime bound)
      tolerance         : |P(r)| at or below this counts as a root
      reject_non_finite : turn a NaN/inf or out-of-bounds final iterate into IrrCalculationError
    """

    max_iterations: int = 50000
    tolerance: float = 1e-8
    reject_non_finite: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError(f"max_iterations must be an int, got {self.max_iterations!r}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        tol = float(self.tolerance)
        if not math.isfinite(tol) or tol <= 0.0:
            raise ValueError(f"tolerance must be a positive finite number, got {self.tolerance!r}")
        object.__setattr__(self, "tolerance", tol)


DEFAULT_CONFIG = SolverConfig()

_KEYS = ("max_iterations", "tolerance", "reject_non_finite")
_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _as_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, int) and v in (0, 1):
        return bool(v)
    if isinstance(v, str) and v.strip().lower() in _TRUE + _FALSE:
        return v.strip().lower() in _TRUE
    raise ValueError(f"reject_non_finite must be a boolean, got {v!r}")


def _scan_key_values(text: str) -> Dict[str, Any]:
    """Line-by-line `key: scalar` reader for files PyYAML cannot parse as a whole."""
    data: Dict[str, Any] = {}
    for raw in text.splitlines():
        key, sep, value = raw.split("#", 1)[0].strip().partition(":")
        if not sep or not key.strip():
            continue
        try:
            data[key.strip()] = yaml.safe_load(value) if value.strip() else None
        except yaml.YAMLError:
            data[key.strip()] = value.strip()
    return data


def _solver_settings(doc: Dict[str, Any]) -> Dict[str, Any]:
    # a `solver:` block supplies defaults; top-level keys win
    block = doc.get("solver")
    settings: Dict[str, Any] = dict(block) if isinstance(block, dict) else {}
    settings.update({k: doc[k] for k in _KEYS if k in doc})
    return settings


def config_from_mapping(data: Dict[str, Any], base: SolverConfig = DEFAULT_CONFIG) -> SolverConfig:
    """Overlay the known solver keys of `data` on `base`; unknown keys are ignored."""
    values: Dict[str, Any] = {k: getattr(base, k) for k in _KEYS}
    if data.get("max_iterations") is not None:
        values["max_iterations"] = int(data["max_iterations"])
    if data.get("tolerance") is not None:
        values["tolerance"] = float(data["tolerance"])
    if data.get("reject_non_finite") is not None:
        values["reject_non_finite"] = _as_bool(data["reject_non_finite"])
    return SolverConfig(**values)


def load_solver_config(
    source: str | os.PathLike | io.StringIO,
) -> Tuple[SolverConfig, Optional[List[float]]]:
    """
    Read solver settings and an optional `cashflows` list from YAML
    (a path or a text stream). Returns (solver_config, cashflows or None).
    """
    text = str(source.read()) if hasattr(source, "read") else Path(source).read_text(encoding="utf-8")

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError:
        doc = _scan_key_values(text)
    if not isinstance(doc, dict):
        doc = {}

    flows = doc.get("cashflows")
    cashflows = [float(x) for x in flows] if isinstance(flows, list) else None
    return config_from_mapping(_solver_settings(doc)), cashflows


__all__ = ["SolverConfig", "DEFAULT_CONFIG", "config_from_mapping", "load_solver_config"]
