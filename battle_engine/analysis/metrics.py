"""
Battle metrics.

Summary statistics over a sequence of BattleResult objects.  All functions
are pure and accept an empty list.
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np

from ..core.state import BattleResult, VictoryType

_LOSS_FIELDS = ("soldiers", "tanks", "aircraft", "ships", "munitions", "gasoline")


def victory_distribution(results: List[BattleResult]) -> Dict[VictoryType, float]:
    """Fraction of results at each victory tier.

    Returns:
        Dictionary mapping each VictoryType to its frequency in [0, 1].
    """
    if not results:
        return {level: 0.0 for level in VictoryType}
    n = len(results)
    counts: Dict[VictoryType, int] = {level: 0 for level in VictoryType}
    for result in results:
        counts[result.victory_type] += 1
    return {level: count / n for level, count in counts.items()}


def total_losses(results: List[BattleResult], side: str) -> Dict[str, float]:
    """Sum of losses for 'attacker' or 'defender' across results."""
    if side not in ("attacker", "defender"):
        raise ValueError(f"side must be 'attacker' or 'defender', got {side!r}")
    totals = {name: 0.0 for name in _LOSS_FIELDS}
    for result in results:
        losses = result.attacker_losses if side == "attacker" else result.defender_losses
        for name in _LOSS_FIELDS:
            totals[name] += getattr(losses, name)
    return totals


def mean_roll(results: List[BattleResult]) -> float:
    if not results:
        return 0.0
    return float(np.mean([r.roll for r in results]))


def summary_statistics(results: List[BattleResult]) -> Dict[str, float]:
    """Flat dictionary of headline numbers for a sequence of attacks."""
    rolls = np.array([r.roll for r in results], dtype=np.float64)
    dist = victory_distribution(results)
    att = total_losses(results, "attacker")
    dfn = total_losses(results, "defender")
    return {
        "n_attacks": float(len(results)),
        "mean_roll": float(rolls.mean()) if rolls.size else 0.0,
        "max_roll": float(rolls.max()) if rolls.size else 0.0,
        "success_fraction": 1.0 - dist[VictoryType.UTTERLY_FAILS] if results else 0.0,
        "immense_triumph_fraction": dist[VictoryType.IMMENSE_TRIUMPH],
        "total_loot": float(sum(r.loot for r in results)),
        "total_infra_destroyed": float(sum(r.infra_destroyed for r in results)),
        "attacker_soldiers_lost": att["soldiers"],
        "attacker_tanks_lost": att["tanks"],
        "attacker_aircraft_lost": att["aircraft"],
        "attacker_ships_lost": att["ships"],
        "defender_soldiers_lost": dfn["soldiers"],
        "defender_tanks_lost": dfn["tanks"],
        "defender_aircraft_lost": dfn["aircraft"],
        "defender_ships_lost": dfn["ships"],
        "attacker_munitions_used": att["munitions"],
        "attacker_gasoline_used": att["gasoline"],
    }
