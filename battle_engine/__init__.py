"""
Battle resolution engine.

Deterministic formulas that grade an attack between two nations' forces and
compute its consequences: a four-tier victory grade, unit losses on both
sides, munitions and gasoline burned, loot and infrastructure destroyed.

Quick start
-----------
    from battle_engine import BattleUnit, calculate_ground_attack

    attacker = BattleUnit(soldiers=100000, tanks=5000, munitions=10000)
    defender = BattleUnit(soldiers=50000, tanks=1000, munitions=5000,
                          money=5_000_000, avg_infra=1000, cities=5)
    result = calculate_ground_attack(attacker, defender, 100000, 5000, True)
    result.victory_type.label            # 'Immense Triumph'

Public API
----------
    roll, get_victory_type          — strength → roll / tier
    calculate_ground_attack         — soldiers + tanks
    calculate_air_attack            — aircraft vs air force, optional strike target
    calculate_naval_attack          — ships vs ships
    victory_probabilities           — closed-form tier odds
    sample_victory_probabilities    — Monte-Carlo tier odds
    analyze_attack                  — pre-attack report
    simulate_battle                 — run a plan of attacks
    BattleParams, BattleUnit, BattleResult, UnitLosses, VictoryType
"""

from __future__ import annotations

from .core.params import BattleParams
from .core.state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
    validate_unit,
)
from .core.roll import get_victory_type, roll
from .core.strength import (
    assured_victory_requirement,
    fortify_factor,
    max_air_strength,
    max_tank_strength,
)
from .systems.ground import calculate_ground_attack
from .systems.air import calculate_air_attack
from .systems.naval import calculate_naval_attack
from .analysis.odds import (
    analyze_attack,
    sample_victory_probabilities,
    victory_probabilities,
)
from .analysis.history import BattleHistory
from .simulation.sequencer import BattlePlan, BattleReport, simulate_battle

__version__ = "1.0.0"

__all__ = [
    "BattleParams",
    "AirTarget",
    "AttackType",
    "BattleResult",
    "BattleUnit",
    "UnitLosses",
    "VictoryType",
    "validate_unit",
    "get_victory_type",
    "roll",
    "assured_victory_requirement",
    "fortify_factor",
    "max_air_strength",
    "max_tank_strength",
    "calculate_ground_attack",
    "calculate_air_attack",
    "calculate_naval_attack",
    "analyze_attack",
    "sample_victory_probabilities",
    "victory_probabilities",
    "BattleHistory",
    "BattlePlan",
    "BattleReport",
    "simulate_battle",
]
