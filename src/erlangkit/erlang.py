# src/erlangkit/erlang.py
from __future__ import annotations

import math

from .numeric import clamp_probability
from .outcome import Outcome, numeric_boundary


SECONDS_PER_HOUR = 3600.0


def offered_load_erlangs(volume: float, aht_seconds: float, interval_seconds: float = SECONDS_PER_HOUR) -> float:
    """
    Offered load a (Erlangs) = arrival_rate * AHT.
    With arrivals measured as count per interval:
      arrival_rate = volume / interval_seconds
      => a = volume * aht_seconds / interval_seconds

    The default interval is one hour, so `volume` is calls per hour.
    """
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be > 0")
    if volume < 0:
        raise ValueError("volume must be >= 0")
    if aht_seconds <= 0 and volume > 0:
        raise ValueError("aht_seconds must be > 0 when volume > 0")
    if volume == 0:
        return 0.0
    return float(volume) * float(aht_seconds) / float(interval_seconds)


def completion_rate(aht_seconds: float) -> float:
    """Calls one agent completes per hour (the "death rate" of the queue)."""
    return SECONDS_PER_HOUR / float(aht_seconds)


@numeric_boundary
def erlang_b(servers: float, intensity: float) -> Outcome:
    """
    Erlang B probability that an arriving call is blocked (all lines busy).

    Forward recurrence from B(0) = 1:

      B(k) = a * B(k-1) / (k + a * B(k-1)),   k = 1 .. floor(servers)

    Every term stays in [0, 1], so no factorials and no overflow.
    A fractional part of `servers` does not refine the result.
    """
    if servers < 0 or intensity < 0:
        return Outcome.invalid("servers and intensity must be >= 0")

    a = float(intensity)
    b = 1.0  # zero servers: everything is blocked
    for k in range(1, int(math.floor(servers)) + 1):
        b = (a * b) / (k + a * b)

    return Outcome.found(clamp_probability(b))


@numeric_boundary
def erlang_c(servers: float, intensity: float) -> Outcome:
    """
    Erlang C probability of wait (Pw), from Erlang B:

      C = B / (rho * B + (1 - rho)),   rho = intensity / servers

    Overloaded queues (rho >= 1) clamp to 1.
    """
    if servers < 0 or intensity < 0:
        return Outcome.invalid("servers and intensity must be >= 0")
    if servers == 0:
        return Outcome.undefined("probability of wait needs at least one server")

    b = erlang_b(servers, intensity)
    rho = float(intensity) / float(servers)
    denom = rho * b + (1.0 - rho)
    if denom <= 0:
        # carried load equals capacity: every arrival waits
        return Outcome.found(1.0)

    return Outcome.found(clamp_probability(b / denom))


__all__ = [
    "SECONDS_PER_HOUR",
    "offered_load_erlangs",
    "completion_rate",
    "erlang_b",
    "erlang_c",
]
