"""
Tuneable parameters for the conformer double check.

Values can be set programmatically, via CLI flags, or loaded from the
pipeline config file (INI format). The ``[double_check]`` section holds the
current keys; the ``[optimized]`` section's ``preThreshold`` /
``postThreshold`` entries are honoured for the pre- and post-optimization
stages.
"""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Tuple

from kybnmr.core.domain.errors import InvalidThreshold
from kybnmr.core.domain.implementations import POLICIES

_SECTION = "double_check"
_LEGACY_SECTION = "optimized"
_STAGE_KEYS = {"pre": "preThreshold", "post": "postThreshold"}


def _strip_inline_comment(value: str) -> str:
    """Strip ``  # ...`` or ``\\t# ...`` inline comments (pipeline convention)."""
    if value is None:
        return value
    idx = value.find("  #")
    if idx == -1:
        idx = value.find("\t#")
    if idx != -1:
        value = value[:idx]
    return value.strip()


def _cfg_get(config: ConfigParser, section: str, key: str, fallback=None) -> Optional[str]:
    if section in config and key in config[section]:
        return _strip_inline_comment(config[section][key])
    return fallback


def parse_threshold_pair(value: str) -> Tuple[float, Optional[float]]:
    """Parse ``"<energy>, <distance>"`` or a lone ``"<energy>"``."""
    parts = [p.strip() for p in value.split(",") if p.strip()]
    if not parts or len(parts) > 2:
        raise ValueError(f"Expected '<energy>[, <distance>]', got {value!r}")
    energy = float(parts[0])
    distance = float(parts[1]) if len(parts) == 2 else None
    return energy, distance


@dataclass
class DoubleCheckConfig:
    """All parameters for one double check run."""

    energy_threshold: float = 0.25         # kcal/mol
    distance_threshold: float = 0.1        # Å, max fingerprint deviation
    policy: str = "first"                  # first | closest
    max_workers: int = 1                   # fingerprint precompute processes
    show_progress: bool = False

    def validate(self) -> "DoubleCheckConfig":
        """Raise on values the double check would reject; returns self."""
        for name in ("energy_threshold", "distance_threshold"):
            value = getattr(self, name)
            if not value >= 0:
                raise InvalidThreshold(f"{name} must be >= 0, got {value}")
        if self.policy.lower() not in POLICIES:
            raise ValueError(
                f"Unknown policy '{self.policy}'. Choose from: {', '.join(POLICIES)}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_config_file(
        cls, path: str | Path, stage: Optional[str] = None
    ) -> "DoubleCheckConfig":
        """Load from a pipeline INI config.

        Args:
            path: INI file
            stage: ``"pre"`` or ``"post"`` to apply the matching
                ``[optimized]`` threshold entry
        """
        cp = ConfigParser()
        # Keys such as preThreshold are camel case in pipeline configs
        cp.optionxform = str
        with open(path, "r", encoding="utf-8-sig") as fh:
            cp.read_file(fh)

        def _int(key, fb):
            v = _cfg_get(cp, _SECTION, key, None)
            return int(v) if v is not None else fb

        def _float(key, fb):
            v = _cfg_get(cp, _SECTION, key, None)
            return float(v) if v is not None else fb

        def _bool(key, fb):
            v = _cfg_get(cp, _SECTION, key, None)
            if v is None:
                return fb
            return v.lower() in {"1", "true", "yes", "on"}

        def _str(key, fb):
            v = _cfg_get(cp, _SECTION, key, None)
            return v if v is not None else fb

        cfg = cls(
            energy_threshold=_float("EnergyThreshold", cls.energy_threshold),
            distance_threshold=_float("DistanceThreshold", cls.distance_threshold),
            policy=_str("Policy", cls.policy),
            max_workers=_int("MaxWorkers", cls.max_workers),
            show_progress=_bool("ShowProgress", cls.show_progress),
        )

        if stage is not None:
            if stage not in _STAGE_KEYS:
                raise ValueError(f"Unknown stage '{stage}'. Choose from: pre, post")
            raw = _cfg_get(cp, _LEGACY_SECTION, _STAGE_KEYS[stage], None)
            if raw:
                energy, distance = parse_threshold_pair(raw)
                cfg.energy_threshold = energy
                if distance is not None:
                    cfg.distance_threshold = distance
        return cfg
