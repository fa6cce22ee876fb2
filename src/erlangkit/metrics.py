# src/erlangkit/metrics.py
from __future__ import annotations

from typing import Optional

from .config import DEFAULT_CONFIG, SolverConfig
from .erlang import SECONDS_PER_HOUR, completion_rate, erlang_c
from .numeric import clamp_probability, round_half_up, scaled_exp, secs
from .outcome import Outcome, numeric_boundary
from .trunking import number_trunks


def _check(agents: float, calls_per_hour: float, aht: float) -> Optional[Outcome]:
    if aht <= 0 or calls_per_hour < 0 or agents < 0:
        return Outcome.invalid("aht must be > 0, agents and calls_per_hour >= 0")
    if agents == 0:
        return Outcome.undefined("no agents to share the load")
    return None


def _traffic_rate(calls_per_hour: float, aht: float) -> float:
    return float(calls_per_hour) / completion_rate(aht)


def _capped_utilisation(agents: float, traffic_rate: float, cfg: SolverConfig) -> float:
    u = traffic_rate / agents
    return cfg.utilisation_cap if u >= 1 else u


def _queue_time_hours(agents: float, calls_per_hour: float, aht: float, cfg: SolverConfig) -> float:
    u = _capped_utilisation(agents, _traffic_rate(calls_per_hour, aht), cfg)
    return 1.0 / (agents * completion_rate(aht) * (1 - u))


# -----------------------------
# Probabilities
# -----------------------------
@numeric_boundary
def utilisation(agents: float, calls_per_hour: float, aht: float) -> Outcome:
    """Offered load per agent, clamped to [0, 1]."""
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    return Outcome.found(clamp_probability(_traffic_rate(calls_per_hour, aht) / agents))


@numeric_boundary
def queued(agents: float, calls_per_hour: float, aht: float) -> Outcome:
    """Probability a call has to queue (Erlang C)."""
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    return Outcome.found(clamp_probability(erlang_c(agents, _traffic_rate(calls_per_hour, aht))))


@numeric_boundary
def sla(agents: float, service_time: float, calls_per_hour: float, aht: float) -> Outcome:
    """
    Service level achieved: share of calls answered within `service_time` seconds.

    SL(T) = 1 - C * exp((A - N) * T / AHT)
    """
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    a = _traffic_rate(calls_per_hour, aht)
    c = erlang_c(agents, a)
    return Outcome.found(clamp_probability(1.0 - scaled_exp(c, (a - agents) * service_time / aht)))


@numeric_boundary
def abandon(agents: float, abandon_time: float, calls_per_hour: float, aht: float) -> Outcome:
    """Share of callers still waiting after `abandon_time` seconds, i.e. likely to hang up."""
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    a = _traffic_rate(calls_per_hour, aht)
    c = erlang_c(agents, a)
    return Outcome.found(clamp_probability(scaled_exp(c, (a - agents) * (abandon_time / aht))))


# -----------------------------
# Queue length / waiting time
# -----------------------------
def _queue_size(agents: float, calls_per_hour: float, aht: float) -> float:
    a = _traffic_rate(calls_per_hour, aht)
    u = a / agents
    if u >= 1:
        # saturated: the whole hour's calls pile up
        return float(calls_per_hour)
    return u * erlang_c(agents, a) / (1 - u)


@numeric_boundary
def queue_size(agents: float, calls_per_hour: float, aht: float) -> Outcome:
    """Average number of calls waiting, whole calls."""
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    return Outcome.found(int(round_half_up(_queue_size(agents, calls_per_hour, aht))))


@numeric_boundary
def fractional_queue_size(agents: float, calls_per_hour: float, aht: float) -> Outcome:
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    return Outcome.found(round_half_up(_queue_size(agents, calls_per_hour, aht), 1))


@numeric_boundary
def queue_time(agents: float, calls_per_hour: float, aht: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Mean wait of a call that queues, in hours: 1 / (N * mu * (1 - u)).
    Utilisation >= 1 is replaced by cfg.utilisation_cap.
    """
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    return Outcome.found(_queue_time_hours(agents, calls_per_hour, aht, cfg))


@numeric_boundary
def asa(agents: float, calls_per_hour: float, aht: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """Average speed of answer over all calls, whole seconds: secs(C * queue_time)."""
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected
    c = erlang_c(agents, _traffic_rate(calls_per_hour, aht))
    return Outcome.found(secs(c * _queue_time_hours(agents, calls_per_hour, aht, cfg)))


# -----------------------------
# Lines
# -----------------------------
@numeric_boundary
def trunks(agents: float, calls_per_hour: float, aht: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Telephone lines needed to carry the calls plus the time they spend queueing.

    Each call holds a line for AHT + its average answer time; the resulting
    load is sized with number_trunks, starting from the agent count.
    """
    rejected = _check(agents, calls_per_hour, aht)
    if rejected is not None:
        return rejected

    a = _traffic_rate(calls_per_hour, aht)
    c = erlang_c(agents, a)
    answer_seconds = c * _queue_time_hours(agents, calls_per_hour, aht, cfg) * SECONDS_PER_HOUR
    line_load = float(calls_per_hour) / (SECONDS_PER_HOUR / (aht + answer_seconds))

    found = number_trunks.outcome(line_load, start=agents, cfg=cfg)
    if not found.ok:
        return found
    if found.value < 1 and a > 0:
        return Outcome.found(1)
    return found


__all__ = [
    "utilisation",
    "queued",
    "sla",
    "abandon",
    "queue_size",
    "fractional_queue_size",
    "queue_time",
    "asa",
    "trunks",
]
