# src/erlangkit/__init__.py
from __future__ import annotations

# -----------------------------
# Erlang B / C core
# -----------------------------
from .erlang import (
    offered_load_erlangs,
    completion_rate,
    erlang_b,
    erlang_c,
)

# -----------------------------
# Trunk / traffic solvers
# -----------------------------
from .trunking import (
    nb_trunks,
    number_trunks,
    servers,
    traffic,
    looping_traffic,
)

# -----------------------------
# Staffing solvers
# -----------------------------
from .staffing import (
    TargetType,
    agents,
    fractional_agents,
    agents_asa,
    nb_agents,
    call_capacity,
    fractional_call_capacity,
    service_time,
)

# -----------------------------
# Queue metrics
# -----------------------------
from .metrics import (
    utilisation,
    queued,
    sla,
    abandon,
    queue_size,
    fractional_queue_size,
    queue_time,
    asa,
    trunks,
)

# -----------------------------
# Support
# -----------------------------
from .config import SolverConfig, DEFAULT_CONFIG
from .outcome import Outcome, Status
from .numeric import secs, min_max, int_ceiling
from .plan import PlanTargets, staff_intervals

__all__ = [
    # Erlang B / C
    "offered_load_erlangs",
    "completion_rate",
    "erlang_b",
    "erlang_c",
    # Trunks
    "nb_trunks",
    "number_trunks",
    "servers",
    "traffic",
    "looping_traffic",
    # Staffing
    "TargetType",
    "agents",
    "fractional_agents",
    "agents_asa",
    "nb_agents",
    "call_capacity",
    "fractional_call_capacity",
    "service_time",
    # Metrics
    "utilisation",
    "queued",
    "sla",
    "abandon",
    "queue_size",
    "fractional_queue_size",
    "queue_time",
    "asa",
    "trunks",
    # Support
    "SolverConfig",
    "DEFAULT_CONFIG",
    "Outcome",
    "Status",
    "secs",
    "min_max",
    "int_ceiling",
    "PlanTargets",
    "staff_intervals",
]
