"""
Army strength helpers.

Strength ("army value") is the only input the roll sees.  Each attack type
weights the units it involves and caps what a defender can field per city.
"""

from __future__ import annotations

import math
from typing import Optional

from .params import BattleParams, DEFAULT_PARAMS
from .state import BattleUnit


def _p(params: Optional[BattleParams]) -> BattleParams:
    return params if params is not None else DEFAULT_PARAMS


def max_tank_strength(tanks: float, cities: int, params: Optional[BattleParams] = None) -> float:
    """Number of tanks that can defend: min(tanks, cities · 250)."""
    return min(tanks, cities * _p(params).tanks_per_city)


def max_air_strength(aircraft: float, cities: int, params: Optional[BattleParams] = None) -> float:
    """Number of aircraft that can defend: min(aircraft, cities · 15)."""
    return min(aircraft, cities * _p(params).aircraft_per_city)


def fortify_factor(is_fortified: bool, params: Optional[BattleParams] = None) -> float:
    return _p(params).fortify_multiplier if is_fortified else 1.0


def assured_victory_requirement(defense_strength: float, params: Optional[BattleParams] = None) -> int:
    """Attack strength at which the roll is pinned at an immense triumph."""
    return int(math.ceil(defense_strength * _p(params).assured_victory_ratio))


def ground_attack_strength(
    attack_soldiers: float,
    attack_tanks: float,
    use_munitions: bool = True,
    params: Optional[BattleParams] = None,
) -> float:
    """Attacking ground strength: soldiers (×1.75 armed) plus tanks × 40."""
    p = _p(params)
    soldiers = attack_soldiers * (p.armed_soldier_multiplier if use_munitions else 1.0)
    return soldiers + attack_tanks * p.tank_strength


def ground_defense_strength(defender: BattleUnit, params: Optional[BattleParams] = None) -> float:
    """Defending ground strength.

    Soldiers fight armed whenever the defender holds any munitions, and never
    count for less than 50.  Tanks beyond the per-city cap sit out.
    """
    p = _p(params)
    tanks = max_tank_strength(defender.tanks, defender.cities, p) * p.tank_strength
    armed = p.armed_soldier_multiplier if defender.munitions > 0 else 1.0
    soldiers = max(p.min_defender_soldier_strength, defender.soldiers * armed)
    return soldiers + tanks


def air_defense_strength(defender: BattleUnit, params: Optional[BattleParams] = None) -> float:
    return max_air_strength(defender.aircraft, defender.cities, params)
