# src/erlangkit/config.py
from __future__ import annotations

from dataclasses import dataclass


# -----------------------------
# Search policy
# -----------------------------
@dataclass(frozen=True)
class SolverConfig:
    # smallest step of the traffic intensity refinement, also the
    # "close enough to 100%" service level cutoff
    accuracy: float = 0.00001
    # refinement passes allowed in looping_traffic
    max_loops: int = 100
    # largest count tried by trunk / nb_agents scans
    max_iterate: int = 65535
    # blocking threshold used by number_trunks / servers
    trunk_blocking: float = 0.001
    # utilisation substituted when intensity >= agents
    utilisation_cap: float = 0.99
    # agent scans stop after seed * scan_factor tries
    scan_factor: int = 100

    def __post_init__(self) -> None:
        if self.accuracy <= 0:
            raise ValueError("accuracy must be > 0")
        if self.max_loops <= 0 or self.max_iterate <= 0 or self.scan_factor <= 0:
            raise ValueError("iteration bounds must be > 0")
        if not (0.0 < self.trunk_blocking < 1.0):
            raise ValueError("trunk_blocking must be in (0, 1)")
        if not (0.0 < self.utilisation_cap < 1.0):
            raise ValueError("utilisation_cap must be in (0, 1)")


DEFAULT_CONFIG = SolverConfig()


__all__ = ["SolverConfig", "DEFAULT_CONFIG"]
