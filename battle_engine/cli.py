"""
Command-line interface for the battle resolution engine.

Usage:
    python -m battle_engine.cli [--log-level LEVEL] command [options]

Commands:
    roll        Grade a pair of strengths (roll value and victory tier).
    odds        Print the victory-tier distribution for a pair of strengths.
    simulate    Run a YAML scenario's battle plan and print the outcome.
    info        Print default parameters.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .analysis.metrics import summary_statistics
from .analysis.odds import sample_victory_probabilities, victory_probabilities
from .config import load_scenario
from .core.params import BattleParams
from .core.roll import roll, tier_from_roll
from .simulation.sequencer import simulate_battle

logger = logging.getLogger("battle_engine.cli")


def _build_subparsers(parser: argparse.ArgumentParser) -> None:
    """Register all sub-commands on the root parser."""
    sub = parser.add_subparsers(dest="command", required=True)

    # ----------------------------------------------------------------- roll --
    roll_p = sub.add_parser("roll", help="Grade defending vs attacking strength")
    roll_p.add_argument("defending", type=float, help="Defender strength")
    roll_p.add_argument("attacking", type=float, help="Attacker strength")

    # ----------------------------------------------------------------- odds --
    odds_p = sub.add_parser("odds", help="Victory-tier probabilities")
    odds_p.add_argument("defending", type=float, help="Defender strength")
    odds_p.add_argument("attacking", type=float, help="Attacker strength")
    odds_p.add_argument(
        "--monte-carlo", action="store_true",
        help="Use the sampling estimator instead of the closed form"
    )
    odds_p.add_argument(
        "--samples", type=int, default=1000, metavar="N",
        help="Monte-Carlo sample count (default: 1000)"
    )
    odds_p.add_argument(
        "--seed", type=int, default=None, metavar="SEED",
        help="Random seed for the Monte-Carlo estimator"
    )

    # ------------------------------------------------------------- simulate --
    sim_p = sub.add_parser("simulate", help="Run a scenario file")
    sim_p.add_argument("config", type=str, help="Path to scenario YAML")
    sim_p.add_argument(
        "--output", type=str, default=None,
        help="Save the full report as JSON to this path"
    )
    sim_p.add_argument(
        "--json", action="store_true",
        help="Print summary statistics as JSON"
    )

    # ----------------------------------------------------------------- info --
    sub.add_parser("info", help="Print default parameters")


def _cmd_roll(args: argparse.Namespace) -> None:
    value = roll(args.defending, args.attacking)
    tier = tier_from_roll(value)
    print(f"Roll: {value:.4f}")
    print(f"Victory: {int(tier)} ({tier.label})")


def _cmd_odds(args: argparse.Namespace) -> None:
    if args.monte_carlo:
        rng = np.random.default_rng(args.seed)
        probs = sample_victory_probabilities(
            args.defending, args.attacking, rng=rng, n_samples=args.samples
        )
    else:
        probs = victory_probabilities(args.defending, args.attacking)
    for level, p in probs.items():
        print(f"  {level.label:<17s} {p * 100:6.2f}%")


def _cmd_simulate(args: argparse.Namespace) -> None:
    scenario = load_scenario(args.config)
    logger.info("Loaded scenario %s (%d attacks)", scenario.name, len(scenario.plan))
    report = simulate_battle(
        scenario.attacker, scenario.defender, scenario.plan, scenario.params
    )
    stats = summary_statistics(list(report.results))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(report.to_dict(), f, indent=2)

    if args.json:
        print(json.dumps(stats, indent=2))
        return

    print(f"Scenario: {scenario.name}")
    for i, result in enumerate(report.results, start=1):
        print(
            f"  {i:2d}. {result.attack_type.value:<6s} {result.victory_type.label:<17s}"
            f" roll={result.roll:.3f} loot={result.loot:,.0f}"
            f" infra={result.infra_destroyed:.2f}"
        )
    if report.skipped:
        print(f"  Skipped attacks (action points): {report.skipped}")
    print(f"  Total loot:           {stats['total_loot']:,.0f}")
    print(f"  Infra destroyed:      {stats['total_infra_destroyed']:.2f}")
    print(f"  Attacker AP left:     {report.attacker.action_points}")
    if args.output:
        print(f"  Report saved to {args.output}")


def _cmd_info(_args: argparse.Namespace) -> None:
    print("Battle resolution engine")
    print("Default BattleParams:")
    for name, value in BattleParams().to_dict().items():
        print(f"  {name}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="battle_engine",
        description="Battle resolution engine CLI",
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    _build_subparsers(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    commands = {
        "roll": _cmd_roll,
        "odds": _cmd_odds,
        "simulate": _cmd_simulate,
        "info": _cmd_info,
    }
    try:
        commands[args.command](args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
