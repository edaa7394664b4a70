from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

FALLBACK_MODES = ("current", "original")


@dataclass(frozen=True)
class SolverConfig:
    """Knobs for the fallback corrector.

    max_retries: cap on fallback rounds; None means one round per cell (y*x).
    fallback: "current" toggles the cells locked right now on each round,
        "original" re-toggles the cells locked in the first snapshot.
    """

    max_retries: Optional[int] = None
    fallback: str = "current"

    def __post_init__(self):
        if self.fallback not in FALLBACK_MODES:
            raise ValueError(
                f"Unknown fallback mode {self.fallback!r}, expected one of {FALLBACK_MODES}"
            )
        if self.max_retries is not None:
            if isinstance(self.max_retries, bool) or not isinstance(
                self.max_retries, int
            ):
                raise ValueError(
                    f"max_retries must be an integer, got {self.max_retries!r}"
                )
            if self.max_retries < 0:
                raise ValueError(
                    f"max_retries must be >= 0, got {self.max_retries}"
                )

    def retry_limit(self, n: int) -> int:
        return n if self.max_retries is None else self.max_retries

    def override(self, **kwargs) -> "SolverConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def load_config(path: str | Path) -> SolverConfig:
    """Read a SolverConfig from the `solver:` mapping of a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    section = cfg.get("solver") or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path}: 'solver' must be a mapping")

    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"{path}: unknown solver options {unknown}")
    return SolverConfig(**section)
