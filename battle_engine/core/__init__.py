"""Core types, constants, roll function and strength helpers."""
from .params import BattleParams, DEFAULT_PARAMS
from .state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
    coerce_air_target,
    coerce_attack_type,
    validate_unit,
)
from .roll import (
    consumption_scale,
    get_victory_type,
    roll,
    round_half_up,
    tier_from_roll,
)
from .strength import (
    air_defense_strength,
    assured_victory_requirement,
    fortify_factor,
    ground_attack_strength,
    ground_defense_strength,
    max_air_strength,
    max_tank_strength,
)

__all__ = [
    "BattleParams",
    "DEFAULT_PARAMS",
    "AirTarget",
    "AttackType",
    "BattleResult",
    "BattleUnit",
    "UnitLosses",
    "VictoryType",
    "coerce_air_target",
    "coerce_attack_type",
    "validate_unit",
    "consumption_scale",
    "get_victory_type",
    "roll",
    "round_half_up",
    "tier_from_roll",
    "air_defense_strength",
    "assured_victory_requirement",
    "fortify_factor",
    "ground_attack_strength",
    "ground_defense_strength",
    "max_air_strength",
    "max_tank_strength",
]
