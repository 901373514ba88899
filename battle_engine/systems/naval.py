"""
Naval attack resolution.

Ships fight ships with no per-city cap.  Losses are linear in the opposing
fleet; a fortified defender raises the attacker's losses.  Successful attacks
shell infrastructure but never loot.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.params import BattleParams, DEFAULT_PARAMS
from ..core.roll import consumption_scale, round_half_up, roll, tier_from_roll
from ..core.state import (
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
    no_op_result,
)
from ..core.strength import fortify_factor

logger = logging.getLogger("battle_engine.systems.naval")

_SHIP_LOSS_RATE = 0.441666
_ROLL_WEIGHT = 0.7
_GASOLINE_PER_SHIP = 2.0
_MUNITIONS_PER_SHIP = 3.0
_INFRA_PER_SHIP = 2.625
_EFFICIENCY = 0.95
_INFRA_CAP_RATIO = 0.5
_INFRA_CAP_BASE = 25.0


def ship_loss(
    opponent_ships: float,
    fortify: float = 1.0,
    params: Optional[BattleParams] = None,
) -> int:
    """Ships lost against an opposing fleet.

    'current' model: 0.441666 · fortify · 12 · (opp · 0.7) / 35
    'legacy' model:  (opp · 0.7 + 1) / 375, fortification ignored
    """
    p = params if params is not None else DEFAULT_PARAMS
    if p.loss_model == "legacy":
        return round_half_up((opponent_ships * _ROLL_WEIGHT + 1) / 375)
    return round_half_up(_SHIP_LOSS_RATE * fortify * 12 * (opponent_ships * _ROLL_WEIGHT) / 35)


def calculate_naval_attack(
    attacker: BattleUnit,
    defender: BattleUnit,
    attack_ships: float,
    params: Optional[BattleParams] = None,
) -> BattleResult:
    """Resolve one naval attack.

    Args:
        attacker:     Attacking force snapshot.
        defender:     Defending force snapshot.
        attack_ships: Ships committed.
        params:       Constant pack (defaults to BattleParams()).
    """
    p = params if params is not None else DEFAULT_PARAMS

    if attack_ships == 0:
        logger.debug("Naval attack with no ships committed; no battle")
        return no_op_result(AttackType.NAVAL)

    def_ships = defender.ships
    battle_roll = roll(def_ships, attack_ships, p)
    victory = tier_from_roll(battle_roll, p)

    scale = consumption_scale(victory, p)

    infra = 0.0
    if victory > VictoryType.UTTERLY_FAILS:
        raw = (attack_ships - def_ships * 0.5) * _INFRA_PER_SHIP * _EFFICIENCY * (battle_roll / 3)
        cap = defender.avg_infra * _INFRA_CAP_RATIO + _INFRA_CAP_BASE
        infra = max(0.0, min(raw, cap))

    logger.debug(
        "Naval attack: att_ships=%s def_ships=%s roll=%.3f -> %s",
        attack_ships, def_ships, battle_roll, victory.name,
    )

    return BattleResult(
        attack_type=AttackType.NAVAL,
        victory_type=victory,
        roll=battle_roll,
        attacker_losses=UnitLosses(
            ships=ship_loss(def_ships, fortify_factor(defender.is_fortified, p), p),
            munitions=_MUNITIONS_PER_SHIP * attack_ships * scale,
            gasoline=_GASOLINE_PER_SHIP * attack_ships * scale,
        ),
        defender_losses=UnitLosses(
            ships=ship_loss(attack_ships, 1.0, p),
            munitions=_MUNITIONS_PER_SHIP * def_ships * scale,
            gasoline=_GASOLINE_PER_SHIP * def_ships * scale,
        ),
        loot=0.0,
        infra_destroyed=infra,
    )
