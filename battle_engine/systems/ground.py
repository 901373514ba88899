"""
Ground attack resolution.

Soldiers and tanks attack the defender's soldiers and capped tank force.
Losses on both sides are driven by the opponent's strength, with a roll-
dependent divisor for tank attrition:

    att_factor = (1680 · (3 − roll) + 1800 · roll) / 3
    def_factor = 1680 + (1800 − att_factor)

A fortified defender multiplies the attacker's soldier and tank losses by
1.25; its own losses are unaffected.  Successful attacks (tier > 0) loot
money and destroy infrastructure in proportion to the tier.  Unlike air and
naval attacks, committing no units still fights: the roll is 0 and the
attacker takes losses from the defender's full strength.
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
)
from ..core.strength import (
    fortify_factor,
    ground_attack_strength,
    max_tank_strength,
)

logger = logging.getLogger("battle_engine.systems.ground")

# Loss coefficients.
_TANK_FACTOR_LOW = 1680.0
_TANK_FACTOR_HIGH = 1800.0
_SOLDIER_TANK_DIVISOR = 2250.0
_TANK_LOSS_SCALE = 1.33
_SOLDIER_DIVISOR = 22.0
_TANK_VS_SOLDIER_DIVISOR = 7.33
_SOLDIER_LOSS_SCALE = 0.3125
_ROLL_WEIGHT = 0.7

# Resource consumption per unit committed.
_MUNITIONS_PER_SOLDIER = 0.0002
_MUNITIONS_PER_TANK = 0.01
_GASOLINE_PER_TANK = 0.01

# Loot / infrastructure.
_LOOT_PER_SOLDIER = 0.99
_LOOT_PER_TANK = 22.625
_INFRA_PER_SOLDIER = 0.000606061
_INFRA_PER_TANK = 0.01
_INFRA_EFFICIENCY = 0.95
_INFRA_CAP_RATIO = 0.2
_INFRA_CAP_BASE = 25.0


def calculate_ground_attack(
    attacker: BattleUnit,
    defender: BattleUnit,
    attack_soldiers: float,
    attack_tanks: float,
    use_munitions: bool = True,
    params: Optional[BattleParams] = None,
) -> BattleResult:
    """Resolve one ground attack.

    Args:
        attacker:        Attacking force snapshot (not read by the formulas;
                         the committed units are passed explicitly).
        defender:        Defending force snapshot.
        attack_soldiers: Soldiers committed to the attack.
        attack_tanks:    Tanks committed to the attack.
        use_munitions:   Whether the attacking soldiers fight armed (×1.75).
        params:          Constant pack (defaults to BattleParams()).

    Returns:
        BattleResult with raw loss magnitudes; the caller clamps stocks.
    """
    p = params if params is not None else DEFAULT_PARAMS

    # ── Strength ──────────────────────────────────────────────────────── #
    att_sold_str = ground_attack_strength(attack_soldiers, 0, use_munitions, p)
    att_tank_str = attack_tanks * p.tank_strength
    att_str = att_sold_str + att_tank_str

    def_tanks = max_tank_strength(defender.tanks, defender.cities, p)
    def_tank_str = def_tanks * p.tank_strength
    armed = p.armed_soldier_multiplier if defender.munitions > 0 else 1.0
    def_sold_str = max(p.min_defender_soldier_strength, defender.soldiers * armed)
    def_str = def_sold_str + def_tank_str

    battle_roll = roll(def_str, att_str, p)
    victory = tier_from_roll(battle_roll, p)

    # ── Unit losses ───────────────────────────────────────────────────── #
    att_factor = (
        _TANK_FACTOR_LOW * (p.max_tier - battle_roll) + _TANK_FACTOR_HIGH * battle_roll
    ) / p.max_tier
    def_factor = _TANK_FACTOR_LOW + (_TANK_FACTOR_HIGH - att_factor)
    fortify = fortify_factor(defender.is_fortified, p)

    att_tank_w = att_tank_str * _ROLL_WEIGHT + 1
    att_sold_w = att_sold_str * _ROLL_WEIGHT + 1
    def_tank_w = def_tank_str * _ROLL_WEIGHT + 1
    def_sold_w = def_sold_str * _ROLL_WEIGHT + 1

    def_tank_loss = (att_tank_w / def_factor + att_sold_w / _SOLDIER_TANK_DIVISOR) * _TANK_LOSS_SCALE
    att_tank_loss = (
        (def_tank_w / att_factor + def_sold_w / _SOLDIER_TANK_DIVISOR) * fortify * _TANK_LOSS_SCALE
    )
    att_sold_loss = (
        (def_sold_w / _SOLDIER_DIVISOR + def_tank_w / _TANK_VS_SOLDIER_DIVISOR)
        * fortify * _SOLDIER_LOSS_SCALE
    )
    # Only the tank term is scaled for the defender's soldier losses.
    def_sold_loss = (
        att_sold_w / _SOLDIER_DIVISOR + att_tank_w / _TANK_VS_SOLDIER_DIVISOR * _SOLDIER_LOSS_SCALE
    )

    # ── Resource consumption ──────────────────────────────────────────── #
    scale = consumption_scale(victory, p)
    att_muni = (_MUNITIONS_PER_SOLDIER * attack_soldiers + _MUNITIONS_PER_TANK * attack_tanks) * scale
    att_gas = _GASOLINE_PER_TANK * attack_tanks * scale
    def_muni = (
        _MUNITIONS_PER_TANK * def_tanks
        + (_MUNITIONS_PER_SOLDIER * defender.soldiers if defender.munitions > 0 else 0.0)
    ) * scale
    def_gas = _GASOLINE_PER_TANK * def_tanks * scale

    # ── Loot / infrastructure ─────────────────────────────────────────── #
    loot = 0.0
    infra = 0.0
    if victory > VictoryType.UTTERLY_FAILS:
        loot = ground_loot(attack_soldiers, attack_tanks, victory, defender, p)
        infra = ground_infra_destroyed(attack_soldiers, attack_tanks, victory, defender)

    logger.debug(
        "Ground attack: att_str=%.1f def_str=%.1f roll=%.3f -> %s",
        att_str, def_str, battle_roll, victory.name,
    )

    return BattleResult(
        attack_type=AttackType.GROUND,
        victory_type=victory,
        roll=battle_roll,
        attacker_losses=UnitLosses(
            soldiers=round_half_up(att_sold_loss),
            tanks=round_half_up(att_tank_loss),
            munitions=att_muni,
            gasoline=att_gas,
        ),
        defender_losses=UnitLosses(
            soldiers=round_half_up(def_sold_loss),
            tanks=round_half_up(def_tank_loss),
            munitions=def_muni,
            gasoline=def_gas,
        ),
        loot=loot,
        infra_destroyed=infra,
    )


def ground_loot(
    attack_soldiers: float,
    attack_tanks: float,
    victory: VictoryType,
    defender: BattleUnit,
    params: Optional[BattleParams] = None,
) -> float:
    """Money taken from the defender.

    Bounded by 75% of the defender's treasury and by what remains above the
    protected 50,000 per city; never negative.
    """
    p = params if params is not None else DEFAULT_PARAMS
    raw = (attack_soldiers * _LOOT_PER_SOLDIER + attack_tanks * _LOOT_PER_TANK) * int(victory)
    cap = min(
        defender.money * p.loot_treasury_fraction,
        defender.money - p.protected_money_per_city * defender.cities,
    )
    return max(0.0, min(raw, cap))


def ground_infra_destroyed(
    attack_soldiers: float,
    attack_tanks: float,
    victory: VictoryType,
    defender: BattleUnit,
) -> float:
    """Infrastructure removed, capped at 20% of average infra plus 25."""
    raw = (
        (attack_soldiers - defender.soldiers * 0.5) * _INFRA_PER_SOLDIER
        + (attack_tanks - defender.tanks * 0.5) * _INFRA_PER_TANK
    ) * _INFRA_EFFICIENCY * (int(victory) / 3)
    cap = defender.avg_infra * _INFRA_CAP_RATIO + _INFRA_CAP_BASE
    return max(0.0, min(raw, cap))
