from __future__ import annotations

from typing import IO, Optional, Union

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype


REQUIRED_COLUMNS = ["interval_start", "interval_minutes", "aht_seconds"]
TRUTHY = ["1", "true", "t", "yes", "y", "open"]


def read_interval_csv(file: Union[str, IO[str]]) -> pd.DataFrame:
    """
    Reads an interval forecast CSV.

    Required columns:
      interval_start   (datetime parsable)
      interval_minutes (int)
      aht_seconds      (float)
    plus one of:
      volume           calls offered in the interval
      calls_per_hour   hourly rate, converted to volume for the interval
    Optional:
      is_open          (0/1, true/false, yes/no); every row open when absent

    Returns a normalized DataFrame sorted by interval_start.
    """
    df = pd.read_csv(file)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if "volume" not in df.columns and "calls_per_hour" not in df.columns:
        missing.append("volume|calls_per_hour")
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Required: {REQUIRED_COLUMNS} + volume or calls_per_hour")

    df = df.copy()
    df["interval_start"] = pd.to_datetime(df["interval_start"])
    minutes = pd.to_numeric(df["interval_minutes"])
    if (minutes % 1 != 0).any():
        raise ValueError("interval_minutes must be whole minutes")
    df["interval_minutes"] = minutes.astype(int)
    df["aht_seconds"] = df["aht_seconds"].astype(float)

    if "volume" not in df.columns:
        rate = df.pop("calls_per_hour").astype(float).to_numpy()
        df["volume"] = rate * df["interval_minutes"].to_numpy() / 60.0
    df["volume"] = df["volume"].astype(float)

    if "is_open" not in df.columns:
        df["is_open"] = True
    elif is_bool_dtype(df["is_open"]) or is_numeric_dtype(df["is_open"]):
        df["is_open"] = df["is_open"].astype(int).astype(bool)
    else:
        df["is_open"] = df["is_open"].astype(str).str.strip().str.lower().isin(TRUTHY)

    return df.sort_values("interval_start").reset_index(drop=True)


def write_plan_csv(plan: pd.DataFrame, target: Optional[Union[str, IO[str]]] = None) -> Optional[str]:
    """
    Writes a staffed interval table. Probabilities keep 4 decimals,
    fractional agents 2; returns the CSV text when no target is given.
    """
    out = plan.copy()
    for col in ("service_level", "abandon_rate", "utilisation", "queued"):
        if col in out.columns:
            out[col] = np.round(out[col].astype(float), 4)
    for col in ("erlangs", "fractional_agents", "calls_per_hour"):
        if col in out.columns:
            out[col] = np.round(out[col].astype(float), 2)
    return out.to_csv(target, index=False)
