# src/erlangkit/plan.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG, SolverConfig
from .erlang import offered_load_erlangs
from .metrics import abandon, asa, queued, sla, trunks, utilisation
from .staffing import TargetType, agents, agents_asa, fractional_agents
from .validation import validate_interval_df

logger = logging.getLogger(__name__)


# -----------------------------
# Targets
# -----------------------------
@dataclass(frozen=True)
class PlanTargets:
    target_type: TargetType = "service_level"
    service_level_target: float = 0.80
    service_level_time_seconds: float = 20.0
    asa_target_seconds: float = 30.0
    abandon_time_seconds: float = 60.0

    def __post_init__(self) -> None:
        if self.target_type == "service_level":
            if not (0.0 < self.service_level_target <= 1.0):
                raise ValueError("service_level_target must be in (0, 1]")
            if self.service_level_time_seconds < 0:
                raise ValueError("service_level_time_seconds must be >= 0")
        elif self.target_type == "asa":
            if self.asa_target_seconds <= 0:
                raise ValueError("asa_target_seconds must be > 0")
        else:
            raise ValueError(f"Unsupported target_type: {self.target_type}")
        if self.abandon_time_seconds < 0:
            raise ValueError("abandon_time_seconds must be >= 0")


_CLOSED_ROW: Dict[str, Any] = {
    "erlangs": 0.0,
    "agents": 0,
    "fractional_agents": 0.0,
    "service_level": 1.0,
    "asa_seconds": 0,
    "abandon_rate": 0.0,
    "utilisation": 0.0,
    "queued": 0.0,
    "trunks": 0,
}


# -----------------------------
# One interval
# -----------------------------
def _staff_interval(
    *,
    calls_per_hour: float,
    aht_seconds: float,
    is_open: bool,
    targets: PlanTargets,
    cfg: SolverConfig,
) -> Dict[str, Any]:
    if not is_open or calls_per_hour <= 0.0 or aht_seconds <= 0.0:
        return dict(_CLOSED_ROW)

    sl_target = targets.service_level_target
    sl_time = targets.service_level_time_seconds

    if targets.target_type == "service_level":
        n = agents(sl_target, sl_time, calls_per_hour, aht_seconds, cfg=cfg)
        frac = fractional_agents(sl_target, sl_time, calls_per_hour, aht_seconds, cfg=cfg)
    else:
        n = agents_asa(targets.asa_target_seconds, calls_per_hour, aht_seconds, cfg=cfg)
        frac = float(n)

    return {
        "erlangs": offered_load_erlangs(calls_per_hour, aht_seconds),
        "agents": int(n),
        "fractional_agents": float(frac),
        "service_level": sla(n, sl_time, calls_per_hour, aht_seconds),
        "asa_seconds": asa(n, calls_per_hour, aht_seconds, cfg=cfg),
        "abandon_rate": abandon(n, targets.abandon_time_seconds, calls_per_hour, aht_seconds),
        "utilisation": utilisation(n, calls_per_hour, aht_seconds),
        "queued": queued(n, calls_per_hour, aht_seconds),
        "trunks": trunks(n, calls_per_hour, aht_seconds, cfg=cfg),
    }


# -----------------------------
# Public API
# -----------------------------
def staff_intervals(
    interval_df: pd.DataFrame,
    targets: PlanTargets = PlanTargets(),
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Staff every interval of a forecast table.

    Volumes are per interval; they are turned into hourly rates
    (volume * 60 / interval_minutes) before the Erlang calculations.
    Closed or empty intervals get zero staffing and a service level of 1.
    """
    validate_interval_df(interval_df)

    df = interval_df.copy()
    df["interval_start"] = pd.to_datetime(df["interval_start"], errors="coerce")
    df["interval_minutes"] = pd.to_numeric(df["interval_minutes"], errors="coerce").astype(int)
    df["volume"] = pd.to_numeric(df["volume"], errors="coerce").astype(float)
    df["aht_seconds"] = pd.to_numeric(df["aht_seconds"], errors="coerce").astype(float)
    df["is_open"] = df["is_open"].astype(bool)

    rates = df["volume"].to_numpy(dtype=float) * 60.0 / df["interval_minutes"].to_numpy(dtype=float)
    df["calls_per_hour"] = np.clip(rates, 0.0, None)

    rows: list[Dict[str, Any]] = []
    for _, r in df.iterrows():
        rows.append(
            _staff_interval(
                calls_per_hour=float(r["calls_per_hour"]),
                aht_seconds=float(r["aht_seconds"]),
                is_open=bool(r["is_open"]),
                targets=targets,
                cfg=cfg,
            )
        )

    out = pd.concat([df.reset_index(drop=True), pd.DataFrame(rows)], axis=1)
    logger.debug(f"staff_intervals: {len(out)} intervals, peak agents {int(out['agents'].max())}")
    return out


__all__ = ["PlanTargets", "staff_intervals"]
