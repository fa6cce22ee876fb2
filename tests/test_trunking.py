import pytest

from erlangkit.config import SolverConfig
from erlangkit.erlang import erlang_b
from erlangkit.trunking import looping_traffic, nb_trunks, number_trunks, servers, traffic


def test_nb_trunks_finds_first_count_under_target():
    n = nb_trunks(5.0, 0.01)
    assert n == 11
    assert erlang_b(n, 5.0) <= 0.01
    assert erlang_b(n - 1, 5.0) > 0.01


def test_nb_trunks_invalid_inputs():
    assert nb_trunks(0, 0.01) == 0
    assert nb_trunks(5.0, 0) == 0
    assert nb_trunks.outcome(-2, 0.01).status == "invalid"


def test_nb_trunks_exhausted_returns_zero():
    cfg = SolverConfig(max_iterate=20)
    out = nb_trunks.outcome(5.0, 1e-300, cfg=cfg)
    assert out.status == "exhausted"
    assert out.value == 0


def test_number_trunks_uses_fixed_threshold():
    assert number_trunks(5.0) == 14
    assert erlang_b(13, 5.0) >= 0.001
    # looser explicit threshold
    assert number_trunks(5.0, 0.01) == 11


def test_number_trunks_starts_from_given_count():
    assert number_trunks(5.0, start=20) == 20
    assert number_trunks(0.0, start=3) == 3


def test_servers_fused_search():
    assert servers(0.01, 5.0) == 11
    # never searches past the 0.001 floor
    assert servers(0.0001, 5.0) == 14
    assert servers(-0.1, 5.0) == 0


@pytest.mark.parametrize(
    "lines, intensity",
    [
        (1, 0.3),
        (5, 2.5),
        (10, 5.0),
        (20, 12.34),
    ],
)
def test_traffic_inverts_erlang_b(lines, intensity):
    blocking = erlang_b(lines, intensity)
    assert traffic(lines, blocking) == pytest.approx(intensity, abs=2e-5)


def test_traffic_brackets_by_doubling():
    # 2 lines at 50% blocking carry well over 2 Erlangs
    a = traffic(2, 0.5)
    assert a > 2
    assert erlang_b(2, a) == pytest.approx(0.5, abs=1e-4)


def test_traffic_edge_cases():
    assert traffic(0.5, 0.1) == 0
    assert traffic(5, -0.1) == 0
    assert traffic(5, 0.0) == 0.0
    out = traffic.outcome(5, 1.0)
    assert out.status == "undefined"
    assert out.value == 0


def test_looping_traffic_returns_exact_start():
    assert looping_traffic(1, 0.5, 1.0, 2.0, 1.0) == 1.0


def test_looping_traffic_respects_loop_cap():
    cfg = SolverConfig(max_loops=3)
    # three unit steps from 0 with a target that is never overshot early
    assert looping_traffic(10, erlang_b(10, 5.0), 1.0, 10.0, 0.0, cfg=cfg) == 2.0


@pytest.mark.parametrize(
    "fn, args, cfg",
    [
        # 14 trunks are needed for 5 Erlangs at 0.001
        (number_trunks, (5.0,), SolverConfig(max_iterate=10)),
        (servers, (0.0001, 5.0), SolverConfig(max_iterate=5)),
        # one doubling (2 -> 4 Erlangs) still blocks far less than 99.9%
        (traffic, (2, 0.999), SolverConfig(max_loops=1)),
    ],
)
def test_exhausted_searches_return_zero(fn, args, cfg):
    out = fn.outcome(*args, cfg=cfg)
    assert out.status == "exhausted"
    assert out.value == 0
    assert fn(*args, cfg=cfg) == 0
