"""Simulation: sequencing a plan of attacks between two nations."""
from .sequencer import (
    AirOrder,
    BattlePlan,
    BattleReport,
    GroundOrder,
    NavalOrder,
    apply_losses,
    apply_result,
    simulate_battle,
)

__all__ = [
    "AirOrder",
    "BattlePlan",
    "BattleReport",
    "GroundOrder",
    "NavalOrder",
    "apply_losses",
    "apply_result",
    "simulate_battle",
]
