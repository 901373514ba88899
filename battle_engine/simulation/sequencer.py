"""
Battle plan sequencer.

Runs a plan of ground, air and naval attacks from one attacker against one
defender, carrying the state forward between attacks the way a game server
would: action points are spent, losses are applied with stocks clamped at
zero, loot changes hands, infrastructure falls, and control flags move.

Usage:
    from battle_engine.core.state import BattleUnit
    from battle_engine.simulation.sequencer import BattlePlan, simulate_battle

    plan = BattlePlan.from_dict({
        "ground": [{"soldiers": 100000, "tanks": 5000}],
        "air":    [{"aircraft": 2000, "target": "soldiers"}],
    })
    report = simulate_battle(attacker, defender, plan)

The input units are never mutated; the report carries the final copies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..core.params import BattleParams, DEFAULT_PARAMS
from ..core.state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
    coerce_air_target,
    validate_unit,
)
from ..systems.air import calculate_air_attack
from ..systems.ground import calculate_ground_attack
from ..systems.naval import calculate_naval_attack

logger = logging.getLogger("battle_engine.simulation.sequencer")

ResultHook = Callable[[BattleResult], None]


# --------------------------------------------------------------------------- #
# Plan                                                                         #
# --------------------------------------------------------------------------- #


def _check_counts(order: Any, *names: str) -> None:
    for name in names:
        value = getattr(order, name)
        if value < 0:
            raise ValueError(f"{type(order).__name__}.{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class GroundOrder:
    soldiers: int = 0
    tanks: int = 0
    use_munitions: bool = True

    def __post_init__(self) -> None:
        _check_counts(self, "soldiers", "tanks")


@dataclass(frozen=True)
class AirOrder:
    aircraft: int = 0
    target: AirTarget = AirTarget.AIR

    def __post_init__(self) -> None:
        _check_counts(self, "aircraft")
        object.__setattr__(self, "target", coerce_air_target(self.target))


@dataclass(frozen=True)
class NavalOrder:
    ships: int = 0

    def __post_init__(self) -> None:
        _check_counts(self, "ships")


@dataclass(frozen=True)
class BattlePlan:
    """Ordered attacks; all ground attacks run first, then air, then naval."""

    ground: Tuple[GroundOrder, ...] = ()
    air: Tuple[AirOrder, ...] = ()
    naval: Tuple[NavalOrder, ...] = ()

    def __len__(self) -> int:
        return len(self.ground) + len(self.air) + len(self.naval)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BattlePlan":
        """Build a plan from {'ground': [...], 'air': [...], 'naval': [...]}."""
        unknown = set(data) - {"ground", "air", "naval"}
        if unknown:
            raise ValueError(f"Unknown plan sections: {sorted(unknown)}")
        return cls(
            ground=tuple(GroundOrder(**o) for o in data.get("ground") or ()),
            air=tuple(AirOrder(**o) for o in data.get("air") or ()),
            naval=tuple(NavalOrder(**o) for o in data.get("naval") or ()),
        )


@dataclass(frozen=True)
class BattleReport:
    """Everything a plan produced.

    Attributes:
        results:  One BattleResult per executed attack, in order.
        attacker: Attacker after all attacks.
        defender: Defender after all attacks.
        skipped:  Attacks not executed for lack of action points.
    """

    results: Tuple[BattleResult, ...]
    attacker: BattleUnit
    defender: BattleUnit
    skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "attacker": self.attacker.to_dict(),
            "defender": self.defender.to_dict(),
            "skipped": self.skipped,
        }


# --------------------------------------------------------------------------- #
# Applying outcomes                                                            #
# --------------------------------------------------------------------------- #


def apply_losses(unit: BattleUnit, losses: UnitLosses) -> BattleUnit:
    """Subtract losses from a unit, clamping every stock at zero."""
    return unit.copy_with(
        soldiers=max(0, unit.soldiers - losses.soldiers),
        tanks=max(0, unit.tanks - losses.tanks),
        aircraft=max(0, unit.aircraft - losses.aircraft),
        ships=max(0, unit.ships - losses.ships),
        munitions=max(0.0, unit.munitions - losses.munitions),
        gasoline=max(0.0, unit.gasoline - losses.gasoline),
    )


def apply_result(
    attacker: BattleUnit,
    defender: BattleUnit,
    result: BattleResult,
    params: Optional[BattleParams] = None,
) -> Tuple[BattleUnit, BattleUnit]:
    """Carry one result onto both sides.

    Spends the attacker's action points, applies losses on both sides, moves
    loot, lowers the defender's average infrastructure, and updates ground /
    air control: any success strips the defender's control of that domain and
    an immense triumph hands it to the attacker.
    """
    p = params if params is not None else DEFAULT_PARAMS

    att = apply_losses(attacker, result.attacker_losses)
    dfn = apply_losses(defender, result.defender_losses)

    loot = min(result.loot, dfn.money)
    att = att.copy_with(
        money=att.money + loot,
        action_points=att.action_points - p.action_cost(result.attack_type),
    )
    dfn = dfn.copy_with(
        money=max(0.0, dfn.money - loot),
        avg_infra=max(0.0, dfn.avg_infra - result.infra_destroyed / dfn.cities),
    )

    flag = {
        AttackType.GROUND: "is_ground_control",
        AttackType.AIR: "is_air_control",
    }.get(result.attack_type)
    if flag is not None:
        if result.victory_type > VictoryType.UTTERLY_FAILS:
            dfn = dfn.copy_with(**{flag: False})
        if result.victory_type == VictoryType.IMMENSE_TRIUMPH:
            att = att.copy_with(**{flag: True})

    return att, dfn


# --------------------------------------------------------------------------- #
# Runner                                                                       #
# --------------------------------------------------------------------------- #

Order = Union[GroundOrder, AirOrder, NavalOrder]


def _resolve(
    attacker: BattleUnit,
    defender: BattleUnit,
    order: Order,
    params: BattleParams,
) -> BattleResult:
    """Resolve one order, committing no more units than the attacker holds."""
    if isinstance(order, GroundOrder):
        return calculate_ground_attack(
            attacker, defender,
            min(order.soldiers, attacker.soldiers),
            min(order.tanks, attacker.tanks),
            order.use_munitions and attacker.munitions > 0,
            params,
        )
    if isinstance(order, AirOrder):
        return calculate_air_attack(
            attacker, defender, min(order.aircraft, attacker.aircraft), order.target, params
        )
    return calculate_naval_attack(attacker, defender, min(order.ships, attacker.ships), params)


def _order_type(order: Order) -> AttackType:
    if isinstance(order, GroundOrder):
        return AttackType.GROUND
    if isinstance(order, AirOrder):
        return AttackType.AIR
    return AttackType.NAVAL


def simulate_battle(
    attacker: BattleUnit,
    defender: BattleUnit,
    plan: BattlePlan,
    params: Optional[BattleParams] = None,
    on_result: Optional[ResultHook] = None,
) -> BattleReport:
    """Execute a battle plan.

    Args:
        attacker:  Attacking nation snapshot.
        defender:  Defending nation snapshot.
        plan:      Attacks to attempt.
        params:    Constant pack (defaults to BattleParams()).
        on_result: Optional callback invoked with every BattleResult.

    Returns:
        BattleReport with the results and final unit copies.

    Raises:
        ValueError: if either unit fails validate_unit().
    """
    p = params if params is not None else DEFAULT_PARAMS
    validate_unit(attacker)
    validate_unit(defender)

    orders: List[Order] = [*plan.ground, *plan.air, *plan.naval]
    results: List[BattleResult] = []
    skipped = 0
    att, dfn = attacker, defender

    for order in orders:
        attack_type = _order_type(order)
        cost = p.action_cost(attack_type)
        if att.action_points < cost:
            logger.warning(
                "Skipping %s attack: %d action points left, %d needed",
                attack_type.value, att.action_points, cost,
            )
            skipped += 1
            continue

        result = _resolve(att, dfn, order, p)
        att, dfn = apply_result(att, dfn, result, p)
        results.append(result)
        logger.info(
            "%s attack: %s (roll %.3f), loot %.2f, infra %.2f",
            attack_type.value.capitalize(), result.victory_type.label,
            result.roll, result.loot, result.infra_destroyed,
        )
        if on_result is not None:
            on_result(result)

    return BattleReport(results=tuple(results), attacker=att, defender=dfn, skipped=skipped)
