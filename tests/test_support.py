import math

import pytest

from erlangkit.config import DEFAULT_CONFIG, SolverConfig
from erlangkit.numeric import int_ceiling, min_max, round_half_up, scaled_exp, secs
from erlangkit.outcome import Outcome, numeric_boundary


def test_default_config():
    assert DEFAULT_CONFIG.accuracy == 0.00001
    assert DEFAULT_CONFIG.max_loops == 100
    assert DEFAULT_CONFIG.max_iterate == 65535
    assert DEFAULT_CONFIG.trunk_blocking == 0.001
    assert DEFAULT_CONFIG.utilisation_cap == 0.99


@pytest.mark.parametrize(
    "kwargs",
    [
        {"accuracy": 0},
        {"max_loops": 0},
        {"trunk_blocking": 1.0},
        {"utilisation_cap": 1.0},
    ],
)
def test_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        SolverConfig(**kwargs)


def test_secs():
    assert secs(0.5) == 1800
    assert secs(1 / 3600) == 1
    assert secs(0.0) == 0


def test_min_max_and_rounding():
    assert min_max(5, 0, 1) == 1
    assert min_max(-5, 0, 1) == 0
    assert min_max(0.3, 0, 1) == 0.3
    assert round_half_up(2.5) == 3
    assert round_half_up(2.25, 1) == pytest.approx(2.3)


def test_int_ceiling():
    assert int_ceiling(2.1) == 3
    assert int_ceiling(2.00001) == 2
    assert int_ceiling(2.0) == 2
    assert int_ceiling(-2.1) == -4


def test_scaled_exp():
    assert scaled_exp(0.0, 5000) == 0.0
    assert scaled_exp(2.0, 5000) == math.inf
    assert scaled_exp(2.0, 0.0) == 2.0


def test_numeric_boundary_exposes_outcome():
    @numeric_boundary
    def halve(x: float) -> Outcome:
        if x < 0:
            return Outcome.invalid("negative")
        return Outcome.found(x / 2)

    assert halve(4) == 2
    assert halve(-4) == 0
    assert halve.outcome(-4) == Outcome(value=0, status="invalid", note="negative")
    assert halve.outcome(4).ok
    assert halve.__name__ == "halve"


def test_exhausted_keeps_value():
    out = Outcome.exhausted("ran out", value=11)
    assert out.value == 11
    assert out.status == "exhausted"
    assert not out.ok
