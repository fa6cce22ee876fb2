# src/erlangkit/outcome.py
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, TypeAlias

Status: TypeAlias = Literal["ok", "invalid", "undefined", "exhausted"]


@dataclass(frozen=True)
class Outcome:
    """
    Result of one calculation.

    value  : the number handed to callers of the public function
    status : "ok"        -> value was computed / found
             "invalid"   -> negative or non-positive inputs, value is 0
             "undefined" -> a division had no meaning (e.g. zero agents), value is 0
             "exhausted" -> a search hit its bound; value is the search's sentinel
    note   : short human readable reason (empty for "ok")
    """

    value: float
    status: Status = "ok"
    note: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def found(cls, value: float, note: str = "") -> Outcome:
        return cls(value=value, status="ok", note=note)

    @classmethod
    def invalid(cls, note: str) -> Outcome:
        return cls(value=0, status="invalid", note=note)

    @classmethod
    def undefined(cls, note: str) -> Outcome:
        return cls(value=0, status="undefined", note=note)

    @classmethod
    def exhausted(cls, note: str, value: float = 0) -> Outcome:
        return cls(value=value, status="exhausted", note=note)


def numeric_boundary(fn: Callable[..., Outcome]) -> Callable[..., Any]:
    """
    Turn an Outcome-returning calculation into a plain-number function.

    The wrapped function returns Outcome.value, so callers always get a number.
    The tagged calculation stays reachable as `<function>.outcome(...)`.
    Rejected inputs are logged at DEBUG on the calculation's module logger.
    """
    logger = logging.getLogger(fn.__module__)

    @functools.wraps(fn)
    def tagged(*args: Any, **kwargs: Any) -> Outcome:
        out = fn(*args, **kwargs)
        if out.status == "invalid":
            logger.debug(f"{fn.__name__}{args}: {out.note}")
        return out

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return tagged(*args, **kwargs).value

    wrapper.outcome = tagged  # type: ignore[attr-defined]
    return wrapper


__all__ = ["Status", "Outcome", "numeric_boundary"]
