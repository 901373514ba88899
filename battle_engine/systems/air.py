"""
Air attack resolution.

Committed aircraft fight the defender's air force (capped at 15 per city).
Both sides lose aircraft in proportion to the opposing strength.  A
successful strike additionally damages the chosen target (soldiers, tanks or
ships) and always knocks out some infrastructure at a third of the direct
rate.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.params import BattleParams, DEFAULT_PARAMS
from ..core.roll import consumption_scale, round_half_up, roll, tier_from_roll
from ..core.state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
    coerce_air_target,
    no_op_result,
)
from ..core.strength import air_defense_strength

logger = logging.getLogger("battle_engine.systems.air")

_ROLL_WEIGHT = 0.7
_EFFICIENCY = 0.95
_RESOURCE_PER_AIRCRAFT = 0.25

# Target damage: (coefficient, share of stock exposed, flat buffer, kills per excess aircraft)
TARGET_DAMAGE = {
    AirTarget.SOLDIERS: (0.58139534883720930232558139534884, 0.75, 1000.0, 50.0),
    AirTarget.TANKS: (0.32558139534883720930232558139535, 0.75, 10.0, 2.5),
    AirTarget.SHIPS: (0.82926829268292682926829268292683, 0.5, 4.0, 0.0285),
}

_INFRA_PER_AIRCRAFT = 0.35353535
_INFRA_CAP_RATIO = 0.5
_INFRA_CAP_BASE = 100.0
_SIDE_INFRA_DIVISOR = 3.0


def aircraft_loss(opponent_strength: float, params: Optional[BattleParams] = None) -> int:
    """Aircraft lost against an opponent of the given air strength.

    'current' model: opp · 0.7 / 54 · 9
    'legacy' model:  (opp · 0.7 + 1) / 140
    """
    p = params if params is not None else DEFAULT_PARAMS
    if p.loss_model == "legacy":
        return round_half_up((opponent_strength * _ROLL_WEIGHT + 1) / 140)
    return round_half_up(opponent_strength * _ROLL_WEIGHT / 54 * 9)


def calculate_air_attack(
    attacker: BattleUnit,
    defender: BattleUnit,
    attack_aircraft: float,
    target: Union[AirTarget, str] = AirTarget.AIR,
    params: Optional[BattleParams] = None,
) -> BattleResult:
    """Resolve one air attack.

    Args:
        attacker:        Attacking force snapshot.
        defender:        Defending force snapshot.
        attack_aircraft: Aircraft committed.
        target:          'air', 'soldiers', 'tanks', 'ships' or 'infra'.
        params:          Constant pack (defaults to BattleParams()).

    Returns:
        BattleResult; only the targeted defender unit type takes strike
        damage, the others report 0.
    """
    p = params if params is not None else DEFAULT_PARAMS
    target = coerce_air_target(target)

    if attack_aircraft == 0:
        logger.debug("Air attack with no aircraft committed; no battle")
        return no_op_result(AttackType.AIR)

    def_str = air_defense_strength(defender, p)
    att_str = attack_aircraft

    battle_roll = roll(def_str, att_str, p)
    victory = tier_from_roll(battle_roll, p)

    scale = consumption_scale(victory, p)
    att_resource = _RESOURCE_PER_AIRCRAFT * attack_aircraft * scale
    def_resource = _RESOURCE_PER_AIRCRAFT * def_str * scale

    strike = {AirTarget.SOLDIERS: 0, AirTarget.TANKS: 0, AirTarget.SHIPS: 0}
    infra = 0.0
    if victory > VictoryType.UTTERLY_FAILS:
        excess = attack_aircraft - def_str * 0.5
        raw_infra = excess * _INFRA_PER_AIRCRAFT * _EFFICIENCY * (battle_roll / 3)
        cap = defender.avg_infra * _INFRA_CAP_RATIO + _INFRA_CAP_BASE
        infra = max(0.0, min(raw_infra, cap)) / _SIDE_INFRA_DIVISOR

        if target in TARGET_DAMAGE:
            stock = {
                AirTarget.SOLDIERS: defender.soldiers,
                AirTarget.TANKS: defender.tanks,
                AirTarget.SHIPS: defender.ships,
            }[target]
            strike[target] = strike_damage(target, stock, excess, battle_roll)

    logger.debug(
        "Air attack (%s): att_str=%.1f def_str=%.1f roll=%.3f -> %s",
        target.value, att_str, def_str, battle_roll, victory.name,
    )

    return BattleResult(
        attack_type=AttackType.AIR,
        victory_type=victory,
        roll=battle_roll,
        attacker_losses=UnitLosses(
            aircraft=aircraft_loss(def_str, p),
            munitions=att_resource,
            gasoline=att_resource,
        ),
        defender_losses=UnitLosses(
            soldiers=strike[AirTarget.SOLDIERS],
            tanks=strike[AirTarget.TANKS],
            aircraft=aircraft_loss(att_str, p),
            ships=strike[AirTarget.SHIPS],
            munitions=def_resource,
            gasoline=def_resource,
        ),
        loot=0.0,
        infra_destroyed=infra,
    )


def strike_damage(target: AirTarget, stock: float, excess: float, battle_roll: float) -> int:
    """Units of the targeted type destroyed by a successful strike.

    The kill count is capped by the stock on hand, by a fraction of that
    stock plus a buffer, and by the excess attack strength; it is then
    weighted by roll / 3 and the target's coefficient.
    """
    coefficient, exposed, buffer, kill_rate = TARGET_DAMAGE[target]
    capped = max(min(stock, min(stock * exposed + buffer, excess * kill_rate * _EFFICIENCY)), 0)
    return round_half_up(coefficient * (battle_roll * round_half_up(capped) / 3))
