# src/erlangkit/trunking.py
from __future__ import annotations

import logging
import math
from typing import Optional

from .config import DEFAULT_CONFIG, SolverConfig
from .erlang import erlang_b
from .outcome import Outcome, numeric_boundary

logger = logging.getLogger(__name__)


# -----------------------------
# Integer searches
# -----------------------------
@numeric_boundary
def nb_trunks(intensity: float, blocking: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Smallest number of trunks whose Erlang B blocking is <= `blocking`.

    Scans upward from ceil(intensity). Returns 0 when no count up to
    cfg.max_iterate is good enough.
    """
    if intensity <= 0 or blocking <= 0:
        return Outcome.invalid("intensity and blocking must be > 0")

    for count in range(int(math.ceil(intensity)), cfg.max_iterate + 1):
        if erlang_b(count, intensity) <= blocking:
            return Outcome.found(count)

    logger.debug(f"nb_trunks: no trunk count <= {cfg.max_iterate} reaches blocking={blocking} at intensity={intensity}")
    return Outcome.exhausted(f"blocking {blocking} not reached within {cfg.max_iterate} trunks")


@numeric_boundary
def number_trunks(
    intensity: float,
    blocking: Optional[float] = None,
    *,
    start: Optional[float] = None,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Lines needed so that blocking falls strictly below a fixed threshold.

    blocking : threshold, cfg.trunk_blocking (0.001) when omitted
    start    : first count tried; ceil(intensity) when omitted.
               `trunks` starts from the agent count, since every agent
               needs at least one line.
    """
    threshold = cfg.trunk_blocking if blocking is None else float(blocking)
    first = intensity if start is None else start
    if intensity < 0 or first < 0 or threshold <= 0:
        return Outcome.invalid("intensity, start and blocking must be >= 0")

    for count in range(int(math.ceil(first)), cfg.max_iterate + 1):
        if erlang_b(count, intensity) < threshold:
            return Outcome.found(count)

    logger.debug(f"number_trunks: blocking stays >= {threshold} up to {cfg.max_iterate} trunks (intensity={intensity})")
    return Outcome.exhausted(f"blocking {threshold} not reached within {cfg.max_iterate} trunks")


@numeric_boundary
def servers(blocking: float, intensity: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Number of servers for a target blocking, running the Erlang B recurrence
    and the search in a single pass.

    Stops at the first count where blocking <= target or <= cfg.trunk_blocking.
    """
    if blocking < 0 or intensity < 0:
        return Outcome.invalid("blocking and intensity must be >= 0")

    a = float(intensity)
    b = 1.0
    count = 0
    while b > blocking and b > cfg.trunk_blocking:
        if count >= cfg.max_iterate:
            logger.debug(f"servers: blocking={b} after {count} servers (intensity={intensity})")
            return Outcome.exhausted(f"blocking {blocking} not reached within {cfg.max_iterate} servers")
        count += 1
        b = (a * b) / (count + a * b)

    return Outcome.found(count)


# -----------------------------
# Continuous search
# -----------------------------
@numeric_boundary
def traffic(servers: float, blocking: float, *, cfg: SolverConfig = DEFAULT_CONFIG) -> Outcome:
    """
    Offered traffic (Erlangs) that a fixed number of lines carries at the
    given blocking probability: the inverse of erlang_b in its intensity.

    1) bracket: double an estimate (starting at the line count) until the
       blocking it produces reaches the target
    2) refine with looping_traffic, coarse steps first
    """
    lines = int(math.floor(servers))
    if servers < 1 or blocking < 0:
        return Outcome.invalid("servers must be >= 1 and blocking >= 0")
    if blocking >= 1:
        # erlang_b < 1 for every finite load once there is a line
        return Outcome.undefined("no finite traffic is blocked with probability 1")

    max_i = float(lines)
    doublings = 0
    while erlang_b(servers, max_i) < blocking:
        if doublings >= cfg.max_loops:
            logger.debug(f"traffic: bracket {max_i} still below blocking={blocking}")
            return Outcome.exhausted(f"no bracket found after {cfg.max_loops} doublings")
        max_i *= 2
        doublings += 1

    incr = 1.0
    while incr <= max_i / 100:
        incr *= 10

    return looping_traffic.outcome(lines, blocking, incr, max_i, 0.0, cfg=cfg)


@numeric_boundary
def looping_traffic(
    trunks: float,
    blocking: float,
    increment: float,
    max_intensity: float,
    min_intensity: float,
    *,
    cfg: SolverConfig = DEFAULT_CONFIG,
) -> Outcome:
    """
    Step the intensity up by `increment` from `min_intensity`; whenever the
    blocking overshoots, fall back to the last good intensity and divide the
    step by 10. Ends when the step is below cfg.accuracy or after
    cfg.max_loops passes, returning the last good intensity.

    Assumes erlang_b is non-decreasing in intensity. `max_intensity` is the
    upper end of the bracket; the search never needs to pass it.
    """
    min_i = float(min_intensity)
    if erlang_b(trunks, min_i) == blocking:
        return Outcome.found(min_i)

    incr = float(increment)
    intensity = min_i
    loop_no = 0
    while incr >= cfg.accuracy and loop_no < cfg.max_loops:
        if intensity > max_intensity or erlang_b(trunks, intensity) > blocking:
            incr /= 10
            intensity = min_i
        min_i = intensity
        intensity += incr
        loop_no += 1

    if incr >= cfg.accuracy:
        logger.debug(f"looping_traffic: stopped after {loop_no} passes with step {incr}")
    return Outcome.found(min_i)


__all__ = [
    "nb_trunks",
    "number_trunks",
    "servers",
    "traffic",
    "looping_traffic",
]
