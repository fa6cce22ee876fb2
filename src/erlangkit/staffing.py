# src/erlangkit/staffing.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, TypeAlias

from .config import DEFAULT_CONFIG, SolverConfig
from .erlang import SECONDS_PER_HOUR, completion_rate, erlang_c
from .metrics import asa as average_speed_of_answer
from .numeric import int_ceiling, scaled_exp
from .outcome import Outcome, numeric_boundary

logger = logging.getLogger(__name__)

TargetType: TypeAlias = Literal["service_level", "asa"]


# -----------------------------
# Internal helpers
# -----------------------------
@dataclass(frozen=True)
class _Load:
    death_rate: float  # calls completed per agent per hour
    traffic_rate: float  # offered load in Erlangs


def _load(calls_per_hour: float, aht_seconds: float) -> _Load:
    death_rate = completion_rate(aht_seconds)
    return _Load(death_rate=death_rate, traffic_rate=float(calls_per_hour) / death_rate)


def _seed_agents(calls_per_hour: float, aht_seconds: float, traffic_rate: float) -> int:
    """
    Start at the head count for 100% utilisation (at least 1), then add
    agents until the queue is stable (utilisation < 1).
    """
    erlangs = math.floor(calls_per_hour * aht_seconds / SECONDS_PER_HOUR + 0.5)
    n = 1 if erlangs < 1 else int(erlangs)
    while traffic_rate / n >= 1:
        n += 1
    return n


def _service_level(n: int, traffic_rate: float, service_time: float, aht_seconds: float) -> float:
    c = erlang_c(n, traffic_rate)
    return 1.0 - scaled_exp(c, (traffic_rate - n) * service_time / aht_seconds)


def _rejects(calls_per_hour: float, aht_seconds: float) -> bool:
    return aht_seconds <= 0 or calls_per_hour < 0


# -----------------------------
# Agents for a service level
# -----------------------------
@numeric_boundary
def agents(
    sla: float,
    service_time: float,
    calls_per_hour: float,
    aht: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Agents needed to answer `sla` of the calls within `service_time` seconds.

    sla            : e.g. 0.80 (80%), capped at 1
    service_time   : target answer time in seconds, e.g. 20
    calls_per_hour : calls offered in one hour
    aht            : handle time incl. after call work, seconds, e.g. 180

    Linear scan upward from the first stable head count. If the scan runs out
    the last count tried is returned, with status "exhausted".
    """
    if _rejects(calls_per_hour, aht):
        return Outcome.invalid("calls_per_hour must be >= 0 and aht > 0")

    target = min(float(sla), 1.0)
    load = _load(calls_per_hour, aht)
    n = _seed_agents(calls_per_hour, aht, load.traffic_rate)

    max_iterate = n * cfg.scan_factor
    for count in range(1, max_iterate + 1):
        achieved = max(_service_level(n, load.traffic_rate, service_time, aht), 0.0)
        if achieved >= target or achieved > 1 - cfg.accuracy:
            return Outcome.found(n)
        if count != max_iterate:
            n += 1

    logger.debug(f"agents: sla={sla} not reached for {calls_per_hour} calls/h, last tried {n}")
    return Outcome.exhausted(f"service level {sla} not reached", value=n)


@numeric_boundary
def fractional_agents(
    sla: float,
    service_time: float,
    calls_per_hour: float,
    aht: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Same scan as `agents`, but when the winning head count overshoots the
    target the result is interpolated linearly between the last two counts:

      (sla - SL(n-1)) / (SL(n) - SL(n-1)) + (n - 1)

    Useful for FTE planning where part-time agents fill the gap.
    """
    if _rejects(calls_per_hour, aht):
        return Outcome.invalid("calls_per_hour must be >= 0 and aht > 0")

    target = min(float(sla), 1.0)
    load = _load(calls_per_hour, aht)
    n = _seed_agents(calls_per_hour, aht, load.traffic_rate)

    achieved = 0.0
    previous = 0.0
    reached = False
    max_iterate = n * cfg.scan_factor
    for count in range(1, max_iterate + 1):
        previous = achieved
        achieved = min(max(_service_level(n, load.traffic_rate, service_time, aht), 0.0), 1.0)
        if achieved >= target or achieved > 1 - cfg.accuracy:
            reached = True
            break
        if count != max_iterate:
            n += 1

    if achieved > target and achieved > previous:
        return Outcome.found((target - previous) / (achieved - previous) + (n - 1))
    if not reached:
        logger.debug(f"fractional_agents: sla={sla} not reached for {calls_per_hour} calls/h, last tried {n}")
        return Outcome.exhausted(f"service level {sla} not reached", value=float(n))
    return Outcome.found(float(n))


# -----------------------------
# Agents for an ASA
# -----------------------------
@numeric_boundary
def agents_asa(asa: float, calls_per_hour: float, aht: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Agents needed so the average speed of answer is <= `asa` seconds.
    A negative target is read as 1 second.
    """
    if _rejects(calls_per_hour, aht):
        return Outcome.invalid("calls_per_hour must be >= 0 and aht > 0")

    target = 1.0 if asa < 0 else float(asa)
    load = _load(calls_per_hour, aht)
    n = _seed_agents(calls_per_hour, aht, load.traffic_rate)

    max_iterate = n * cfg.scan_factor
    for count in range(1, max_iterate + 1):
        utilisation = load.traffic_rate / n
        c = erlang_c(n, load.traffic_rate)
        answer_time = c / (n * load.death_rate * (1 - utilisation))
        if answer_time * SECONDS_PER_HOUR <= target:
            return Outcome.found(n)
        if count != max_iterate:
            n += 1

    logger.debug(f"agents_asa: asa={asa}s not reached for {calls_per_hour} calls/h, last tried {n}")
    return Outcome.exhausted(f"ASA {asa}s not reached", value=n)


@numeric_boundary
def nb_agents(calls_per_hour: float, asa: float, aht: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """First head count from 1 upward whose rounded ASA is <= `asa` seconds; 0 if none."""
    if calls_per_hour <= 0 or asa <= 0 or aht <= 0:
        return Outcome.invalid("calls_per_hour, asa and aht must be > 0")

    for count in range(1, cfg.max_iterate + 1):
        if average_speed_of_answer(count, calls_per_hour, aht, cfg=cfg) <= asa:
            return Outcome.found(count)

    logger.debug(f"nb_agents: asa={asa}s not reached within {cfg.max_iterate} agents")
    return Outcome.exhausted(f"ASA {asa}s not reached within {cfg.max_iterate} agents")


# -----------------------------
# Call capacity
# -----------------------------
@numeric_boundary
def call_capacity(
    no_agents: float,
    sla: float,
    service_time: float,
    aht: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Most calls per hour `no_agents` (whole agents) can take while meeting the
    service level. Starts at the volume for 100% utilisation and walks down.
    """
    if aht <= 0 or no_agents < 0:
        return Outcome.invalid("aht must be > 0 and no_agents >= 0")

    head_count = int(math.floor(no_agents))
    calls = int_ceiling(SECONDS_PER_HOUR / aht) * head_count
    while calls > 0 and agents(sla, service_time, calls, aht, cfg=cfg) > head_count:
        calls -= 1

    return Outcome.found(calls)


@numeric_boundary
def fractional_call_capacity(
    no_agents: float,
    sla: float,
    service_time: float,
    aht: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """`call_capacity` for a fractional head count, checked with `fractional_agents`."""
    if aht <= 0 or no_agents < 0:
        return Outcome.invalid("aht must be > 0 and no_agents >= 0")

    calls = int_ceiling(SECONDS_PER_HOUR / aht * no_agents)
    while calls > 0 and fractional_agents(sla, service_time, calls, aht, cfg=cfg) > no_agents:
        calls -= 1

    return Outcome.found(calls)


# -----------------------------
# Answer time threshold
# -----------------------------
@numeric_boundary
def service_time(
    no_agents: float,
    sla: float,
    calls_per_hour: float,
    aht: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Answer time threshold (whole seconds) that `no_agents` meet for `sla`:

      service_time = queue_time * (1 - (1 - sla) / C)

    Returns 0 when fewer than (1 - sla) of the calls queue at all.
    The result is checked by solving `agents` for it; a disagreement adds one
    second and is recorded in the outcome note.
    """
    if _rejects(calls_per_hour, aht) or no_agents <= 0:
        return Outcome.invalid("no_agents and aht must be > 0, calls_per_hour >= 0")

    load = _load(calls_per_hour, aht)
    c = erlang_c(no_agents, load.traffic_rate)
    if c <= 0 or c < 1 - sla:
        return Outcome.undefined("none will be queued")

    utilisation = load.traffic_rate / no_agents
    if utilisation >= 1:
        utilisation = cfg.utilisation_cap
    queue_time = SECONDS_PER_HOUR / (no_agents * load.death_rate * (1 - utilisation))
    seconds = queue_time * (1 - (1 - sla) / c)

    if agents(sla, math.floor(seconds), calls_per_hour, aht, cfg=cfg) != no_agents:
        return Outcome.found(int(math.floor(seconds + 1)), note="adjusted by one second")
    return Outcome.found(int(math.floor(seconds)))


__all__ = [
    "TargetType",
    "agents",
    "fractional_agents",
    "agents_asa",
    "nb_agents",
    "call_capacity",
    "fractional_call_capacity",
    "service_time",
]
