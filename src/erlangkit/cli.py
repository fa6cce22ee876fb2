# src/erlangkit/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, Optional, Sequence

from .config import SolverConfig
from .io import read_interval_csv, write_plan_csv
from .metrics import asa, sla, trunks
from .plan import PlanTargets, staff_intervals
from .staffing import agents, agents_asa, call_capacity, fractional_agents
from .trunking import traffic
from .validation import FLAG_COLUMNS, flag_intervals

logger = logging.getLogger(__name__)


# -----------------------------
# Subcommands
# -----------------------------
def _cmd_agents(args: argparse.Namespace, cfg: SolverConfig) -> str:
    if args.asa is not None:
        return str(agents_asa(args.asa, args.calls, args.aht, cfg=cfg))
    if args.fractional:
        return f"{fractional_agents(args.sla, args.service_time, args.calls, args.aht, cfg=cfg):.2f}"
    return str(agents(args.sla, args.service_time, args.calls, args.aht, cfg=cfg))


def _cmd_sla(args: argparse.Namespace, cfg: SolverConfig) -> str:
    return f"{sla(args.agents, args.service_time, args.calls, args.aht):.4f}"


def _cmd_asa(args: argparse.Namespace, cfg: SolverConfig) -> str:
    return str(asa(args.agents, args.calls, args.aht, cfg=cfg))


def _cmd_trunks(args: argparse.Namespace, cfg: SolverConfig) -> str:
    return str(trunks(args.agents, args.calls, args.aht, cfg=cfg))


def _cmd_traffic(args: argparse.Namespace, cfg: SolverConfig) -> str:
    return f"{traffic(args.servers, args.blocking, cfg=cfg):.5f}"


def _cmd_capacity(args: argparse.Namespace, cfg: SolverConfig) -> str:
    return str(call_capacity(args.agents, args.sla, args.service_time, args.aht, cfg=cfg))


def _cmd_plan(args: argparse.Namespace, cfg: SolverConfig) -> str:
    df = read_interval_csv(args.csv)

    flagged = flag_intervals(df)[FLAG_COLUMNS].any(axis=1)
    if flagged.any():
        logger.warning(f"{int(flagged.sum())} interval(s) look suspicious: rows {flagged[flagged].index.tolist()[:10]}")

    targets = PlanTargets(
        target_type="asa" if args.asa is not None else "service_level",
        service_level_target=args.sla,
        service_level_time_seconds=args.service_time,
        asa_target_seconds=args.asa if args.asa is not None else 30.0,
        abandon_time_seconds=args.abandon_time,
    )
    out = staff_intervals(df, targets, cfg=cfg)

    if args.output:
        write_plan_csv(out, args.output)
        return f"wrote {len(out)} intervals to {args.output}"
    return write_plan_csv(out) or ""


COMMANDS: Dict[str, Callable[[argparse.Namespace, SolverConfig], str]] = {
    "agents": _cmd_agents,
    "sla": _cmd_sla,
    "asa": _cmd_asa,
    "trunks": _cmd_trunks,
    "traffic": _cmd_traffic,
    "capacity": _cmd_capacity,
    "plan": _cmd_plan,
}


# -----------------------------
# Parser
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="erlangkit", description="Erlang B/C staffing calculations")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--accuracy", type=float, default=SolverConfig.accuracy)
    ap.add_argument("--trunk-blocking", type=float, default=SolverConfig.trunk_blocking)
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("agents", help="agents needed for a service level or ASA")
    p.add_argument("--calls", type=float, required=True, help="calls per hour")
    p.add_argument("--aht", type=float, required=True, help="average handle time (s)")
    p.add_argument("--sla", type=float, default=0.80)
    p.add_argument("--service-time", type=float, default=20.0, help="answer time target (s)")
    p.add_argument("--asa", type=float, default=None, help="size for an ASA target (s) instead")
    p.add_argument("--fractional", action="store_true")

    p = sub.add_parser("sla", help="service level achieved by N agents")
    p.add_argument("--agents", type=float, required=True)
    p.add_argument("--calls", type=float, required=True)
    p.add_argument("--aht", type=float, required=True)
    p.add_argument("--service-time", type=float, default=20.0)

    for name, text in (("asa", "average speed of answer (s)"), ("trunks", "lines needed")):
        p = sub.add_parser(name, help=text)
        p.add_argument("--agents", type=float, required=True)
        p.add_argument("--calls", type=float, required=True)
        p.add_argument("--aht", type=float, required=True)

    p = sub.add_parser("traffic", help="Erlangs carried by N lines at a blocking probability")
    p.add_argument("--servers", type=float, required=True)
    p.add_argument("--blocking", type=float, required=True)

    p = sub.add_parser("capacity", help="calls per hour N agents can take")
    p.add_argument("--agents", type=float, required=True)
    p.add_argument("--aht", type=float, required=True)
    p.add_argument("--sla", type=float, default=0.80)
    p.add_argument("--service-time", type=float, default=20.0)

    p = sub.add_parser("plan", help="staff every interval of a forecast CSV")
    p.add_argument("csv")
    p.add_argument("-o", "--output", default=None)
    p.add_argument("--sla", type=float, default=0.80)
    p.add_argument("--service-time", type=float, default=20.0)
    p.add_argument("--asa", type=float, default=None)
    p.add_argument("--abandon-time", type=float, default=60.0)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = SolverConfig(accuracy=args.accuracy, trunk_blocking=args.trunk_blocking)
        print(COMMANDS[args.command](args, cfg))
    except ValueError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
