"""Systems: ground, air and naval attack calculators."""
from .ground import calculate_ground_attack, ground_infra_destroyed, ground_loot
from .air import TARGET_DAMAGE, aircraft_loss, calculate_air_attack, strike_damage
from .naval import calculate_naval_attack, ship_loss

__all__ = [
    "calculate_ground_attack",
    "ground_infra_destroyed",
    "ground_loot",
    "TARGET_DAMAGE",
    "aircraft_loss",
    "calculate_air_attack",
    "strike_damage",
    "calculate_naval_attack",
    "ship_loss",
]
